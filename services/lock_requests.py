from __future__ import annotations

import asyncio
import logging
from typing import Optional

from schemas.lock_request import LockRequest
from schemas.pricing import PricingScenario
from schemas.triage import LockRequestsState
from services.errors import TriageError
from services.normalizers import parse_lock_requests, parse_pricing_scenario
from services.orchestrator import Orchestrator
from services.pricing_diff import pricing_diffs_from_previous
from services.triage_client import TriageClient

logger = logging.getLogger(__name__)


def unique_pe_request_ids(locks: list[LockRequest]) -> list[str]:
    """Non-empty peRequestIds in first-seen order, without duplicates."""
    return list(dict.fromkeys(lock.buy_side.pe_request_id for lock in locks if lock.buy_side.pe_request_id))


class LockRequestsOrchestrator(Orchestrator):
    """
    Lock requests of a loan plus the pricing scenario behind each one.
    Every pricing fetch is isolated: a failure maps that peRequestId to None
    and leaves the others untouched.
    """

    name = "lock_requests"

    def _clear(self) -> None:
        self.locks: list[LockRequest] = []
        self.pricing_by_pe_request_id: dict[str, Optional[PricingScenario]] = {}

    async def run(self, environment: str, token: str, loan_id: str) -> None:
        run_token = self._begin()
        client = self._client(environment, token)
        logger.info("Fetching lock requests for loan %s", loan_id)
        try:
            raw = await client.fetch_lock_requests(loan_id)
        except TriageError as exc:
            self._fail(run_token, exc)
            return
        except Exception as exc:
            self._fail(run_token, TriageError(str(exc)))
            raise
        if not self.is_current(run_token):
            return

        self.locks = parse_lock_requests(raw).items

        pe_request_ids = unique_pe_request_ids(self.locks)
        if pe_request_ids:
            try:
                results = await asyncio.gather(
                    *(self._fetch_pricing(client, pe_request_id) for pe_request_id in pe_request_ids)
                )
            except Exception as exc:
                self._fail(run_token, TriageError(str(exc)))
                raise
            if not self.is_current(run_token):
                return
            self.pricing_by_pe_request_id = dict(zip(pe_request_ids, results))
        self._succeed(run_token)

    async def _fetch_pricing(self, client: TriageClient, pe_request_id: str) -> Optional[PricingScenario]:
        try:
            raw = await client.fetch_pricing_scenario(pe_request_id)
        except TriageError as exc:
            logger.warning("Pricing scenario %s unavailable: %s", pe_request_id, exc.message)
            return None
        return parse_pricing_scenario(raw)

    def diffs(self):
        return pricing_diffs_from_previous(self.locks, self.pricing_by_pe_request_id)

    def snapshot(self) -> LockRequestsState:
        return LockRequestsState(
            status=self.status,
            attempted=self.attempted,
            error=self.error_payload(),
            locks=list(self.locks),
            pricing_by_pe_request_id=dict(self.pricing_by_pe_request_id),
            diffs=self.diffs(),
        )
