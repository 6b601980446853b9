from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field

from schemas.base import CamelModel
from schemas.changeset import ChangesetPage
from schemas.loan import Loan
from schemas.lock_request import LockRequest
from schemas.pricing import PricingChange, PricingScenario
from schemas.rates import RateSetPage

RunStatus = Literal["idle", "running", "succeeded", "failed"]


class TriageRequest(CamelModel):
    """Form input for one analysis run."""

    bearer_token: str = Field(..., description="Passed through to upstream services as a Bearer token")
    environment: str = Field("stage", description="prod or stage; unknown names use stage")
    los_loan_id: Optional[str] = None
    has_loan_service: bool = False


class WorkflowState(CamelModel):
    status: RunStatus = "idle"
    attempted: bool = False
    error: Optional[dict[str, Any]] = None


class ChangesetsState(WorkflowState):
    raw: Any = None
    page: Optional[ChangesetPage] = None
    rates_by_changeset_id: dict[str, RateSetPage] = Field(default_factory=dict)
    rates_error: Optional[dict[str, Any]] = None


class LoanState(WorkflowState):
    loan: Optional[Loan] = None


class LockRequestsState(WorkflowState):
    locks: list[LockRequest] = Field(default_factory=list)
    pricing_by_pe_request_id: dict[str, Optional[PricingScenario]] = Field(default_factory=dict)
    # parallel to locks (display order); None where there is nothing to compare
    diffs: list[Optional[list[PricingChange]]] = Field(default_factory=list)


class TriageSnapshot(CamelModel):
    changesets: ChangesetsState
    loan: LoanState
    lock_requests: LockRequestsState
