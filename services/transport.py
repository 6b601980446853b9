from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Optional

import httpx

from services.call_log import CallRecorder

logger = logging.getLogger(__name__)


class Transport:
    """Sends requests through a shared httpx client and records each attempt exactly once."""

    def __init__(self, client: httpx.AsyncClient, recorder: CallRecorder) -> None:
        self.client = client
        self.recorder = recorder

    async def call(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Optional[dict[str, str]] = None,
    ) -> httpx.Response:
        method = (method or "GET").upper()
        start = time.perf_counter()
        try:
            response = await self.client.request(method, url, headers=headers)
        except Exception as exc:
            duration_ms = _elapsed_ms(start)
            message = str(exc) or exc.__class__.__name__
            self.recorder.append(
                method=method,
                url=url,
                status="error",
                duration_ms=duration_ms,
                timestamp=_now_iso(),
                error=message,
            )
            logger.warning("%s %s failed after %dms: %s", method, url, duration_ms, message)
            raise
        duration_ms = _elapsed_ms(start)
        self.recorder.append(
            method=method,
            url=url,
            status=response.status_code,
            duration_ms=duration_ms,
            timestamp=_now_iso(),
        )
        logger.debug("%s %s -> %d (%dms)", method, url, response.status_code, duration_ms)
        return response


def _elapsed_ms(start: float) -> int:
    return int(round((time.perf_counter() - start) * 1000))


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
