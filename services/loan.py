from __future__ import annotations

import logging
from typing import Optional

from schemas.loan import Loan
from schemas.triage import LoanState
from services.errors import TriageError
from services.normalizers import parse_loan
from services.orchestrator import Orchestrator

logger = logging.getLogger(__name__)


class LoanOrchestrator(Orchestrator):
    name = "loan"

    def _clear(self) -> None:
        self.loan: Optional[Loan] = None

    async def run(self, environment: str, token: str, loan_id: str) -> None:
        run_token = self._begin()
        client = self._client(environment, token)
        logger.info("Fetching loan %s", loan_id)
        try:
            raw = await client.fetch_loan(loan_id)
        except TriageError as exc:
            self._fail(run_token, exc)
            return
        except Exception as exc:
            self._fail(run_token, TriageError(str(exc)))
            raise
        if not self.is_current(run_token):
            return
        self.loan = parse_loan(raw)
        self._succeed(run_token)

    def snapshot(self) -> LoanState:
        return LoanState(
            status=self.status,
            attempted=self.attempted,
            error=self.error_payload(),
            loan=self.loan,
        )
