from fastapi import APIRouter, Depends, HTTPException, Request

from schemas.triage import TriageRequest
from services.triage import TriageSession

router = APIRouter(prefix="/api/triage", tags=["triage"])


def get_session(request: Request) -> TriageSession:
    return request.app.state.session


@router.post("/analyze", response_model=dict)
async def analyze(body: TriageRequest, session: TriageSession = Depends(get_session)):
    """
    Run a new analysis: changesets and rates always; lock requests (with pricing
    diffs) and, if hasLoanService is set, the loan itself when losLoanId is given.
    """
    if not body.bearer_token.strip():
        raise HTTPException(status_code=400, detail="Bearer token is required")
    snapshot = await session.analyze(
        environment=body.environment,
        token=body.bearer_token,
        los_loan_id=body.los_loan_id,
        has_loan_service=body.has_loan_service,
    )
    return snapshot.model_dump(by_alias=True)


@router.get("", response_model=dict)
async def get_state(session: TriageSession = Depends(get_session)):
    return session.snapshot().model_dump(by_alias=True)


@router.post("/reset", response_model=dict)
async def reset(session: TriageSession = Depends(get_session)):
    session.reset()
    return session.snapshot().model_dump(by_alias=True)


@router.get("/log", response_model=list[dict])
async def call_log(session: TriageSession = Depends(get_session)):
    return [entry.model_dump(by_alias=True) for entry in session.recorder.entries()]
