"""
One operator session: the shared HTTP client, the call log and the three workflows.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from config import Settings, settings as default_settings
from schemas.triage import TriageSnapshot
from services.call_log import CallRecorder, get_call_recorder
from services.changesets import ChangesetsOrchestrator
from services.loan import LoanOrchestrator
from services.lock_requests import LockRequestsOrchestrator
from services.transport import Transport

logger = logging.getLogger(__name__)


class TriageSession:
    def __init__(self, transport: Transport, settings: Optional[Settings] = None) -> None:
        self.transport = transport
        self.settings = settings or default_settings
        self.changesets = ChangesetsOrchestrator(transport, self.settings)
        self.loan = LoanOrchestrator(transport, self.settings)
        self.lock_requests = LockRequestsOrchestrator(transport, self.settings)

    @classmethod
    def create(
        cls,
        settings: Optional[Settings] = None,
        recorder: Optional[CallRecorder] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> "TriageSession":
        settings = settings or default_settings
        if client is None:
            client = httpx.AsyncClient(timeout=settings.request_timeout_seconds)
        return cls(Transport(client, recorder or get_call_recorder()), settings)

    @property
    def recorder(self) -> CallRecorder:
        return self.transport.recorder

    def reset(self) -> None:
        self.changesets.reset()
        self.loan.reset()
        self.lock_requests.reset()

    async def analyze(
        self,
        environment: str,
        token: str,
        los_loan_id: Optional[str] = None,
        has_loan_service: bool = False,
    ) -> TriageSnapshot:
        """
        Start a new analysis run. Every workflow is reset first, including ones
        this run does not select, so nothing from a previous run stays visible.
        Changesets always run; lock requests run when a loan id is given, and the
        loan itself only when the loan service is enabled.
        """
        self.reset()
        loan_id = (los_loan_id or "").strip()
        runs = [self.changesets.run(environment, token)]
        if loan_id:
            runs.append(self.lock_requests.run(environment, token, loan_id))
            if has_loan_service:
                runs.append(self.loan.run(environment, token, loan_id))
        logger.info("Starting analysis on %s (%d workflow(s))", environment, len(runs))
        await asyncio.gather(*runs)
        return self.snapshot()

    def snapshot(self) -> TriageSnapshot:
        return TriageSnapshot(
            changesets=self.changesets.snapshot(),
            loan=self.loan.snapshot(),
            lock_requests=self.lock_requests.snapshot(),
        )

    async def aclose(self) -> None:
        await self.transport.client.aclose()
