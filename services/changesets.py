from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from schemas.changeset import ChangesetPage
from schemas.rates import RateSetPage
from schemas.triage import ChangesetsState
from services.errors import TriageError
from services.normalizers import parse_changesets, parse_pe_rates
from services.orchestrator import Orchestrator

logger = logging.getLogger(__name__)


class ChangesetsOrchestrator(Orchestrator):
    """
    Latest changesets plus the PE rate sets of each one.
    Rates are all-or-nothing: one failed rate fetch empties the whole mapping
    and sets rates_error, but the changeset page itself stays valid.
    """

    name = "changesets"

    def _clear(self) -> None:
        self.raw: Any = None
        self.page: Optional[ChangesetPage] = None
        self.rates_by_changeset_id: dict[str, RateSetPage] = {}
        self.rates_error: Optional[TriageError] = None

    async def run(self, environment: str, token: str) -> None:
        run_token = self._begin()
        client = self._client(environment, token)
        logger.info("Fetching changesets from %s", client.base_url)
        try:
            raw = await client.fetch_changesets()
        except TriageError as exc:
            self._fail(run_token, exc)
            return
        except Exception as exc:
            self._fail(run_token, TriageError(str(exc)))
            raise
        if not self.is_current(run_token):
            return

        page = parse_changesets(raw)
        self.raw = raw
        self.page = page

        ids = [cs.id for cs in page.changesets]
        if ids:
            results = await asyncio.gather(
                *(client.fetch_pe_rates(changeset_id) for changeset_id in ids),
                return_exceptions=True,
            )
            if not self.is_current(run_token):
                return
            failure = next((r for r in results if isinstance(r, BaseException)), None)
            if failure is None:
                self.rates_by_changeset_id = {
                    changeset_id: parse_pe_rates(raw_rates) for changeset_id, raw_rates in zip(ids, results)
                }
            elif isinstance(failure, TriageError):
                logger.warning("Rates unavailable for %d changeset(s): %s", len(ids), failure.message)
                self.rates_error = failure
                self.rates_by_changeset_id = {}
            else:
                self._fail(run_token, TriageError(str(failure)))
                raise failure
        self._succeed(run_token)

    def snapshot(self) -> ChangesetsState:
        return ChangesetsState(
            status=self.status,
            attempted=self.attempted,
            error=self.error_payload(),
            raw=self.raw,
            page=self.page,
            rates_by_changeset_id=dict(self.rates_by_changeset_id),
            rates_error=self.rates_error.to_dict() if self.rates_error is not None else None,
        )
