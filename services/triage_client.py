from __future__ import annotations

from typing import Any, Optional
from urllib.parse import quote

import httpx

from config import Settings, settings as default_settings
from services.errors import HttpError, TransportError, TriageError
from services.transport import Transport

UNKNOWN_ERROR_BODY = {"message": "Unknown error"}


def _escape(value: str) -> str:
    """Escape a path or query component the way encodeURIComponent does."""
    return quote(str(value), safe="!~*'()")


class TriageClient:
    """Typed GET fetches against one environment, authenticated with a bearer token."""

    def __init__(
        self,
        transport: Transport,
        environment: str,
        token: str,
        settings: Optional[Settings] = None,
    ) -> None:
        self.transport = transport
        self.settings = settings or default_settings
        self.environment = environment
        self.base_url = self.settings.base_url_for(environment)
        self._token = token

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self._token}",
            "Content-Type": "application/json",
        }

    async def _get_json(self, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self.transport.call(url, headers=self._headers())
        except httpx.HTTPError as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
        if not response.is_success:
            raise HttpError(
                status=response.status_code,
                status_text=response.reason_phrase,
                data=_error_body(response),
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TriageError(f"Response from {url} is not valid JSON") from exc

    async def fetch_changesets(self) -> Any:
        return await self._get_json(f"/api/v2/changesets/?pageSize={self.settings.changesets_page_size}")

    async def fetch_pe_rates(self, changeset_id: str) -> Any:
        return await self._get_json(f"/api/v2/pe/rates/?changesetId={_escape(changeset_id)}")

    async def fetch_loan(self, loan_id: str) -> Any:
        return await self._get_json(f"/api/v2/loans/{_escape(loan_id)}/")

    async def fetch_lock_requests(self, loan_id: str) -> Any:
        return await self._get_json(f"/api/v2/pe/loans/{_escape(loan_id)}/lock-requests/")

    async def fetch_pricing_scenario(self, pe_request_id: str) -> Any:
        return await self._get_json(f"/api/v2/pe/pricing-scenarios/{_escape(pe_request_id)}/")


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return dict(UNKNOWN_ERROR_BODY)
