"""
Failures surfaced by upstream fetches.
HttpError carries the upstream status and parsed error body; everything else
(connection problems, undecodable success bodies) only has a message.
"""
from __future__ import annotations

from typing import Any


class TriageError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message}


class TransportError(TriageError):
    """Network-level failure; no HTTP status is available."""


class HttpError(TriageError):
    """Non-2xx response from an upstream service."""

    def __init__(self, status: int, status_text: str, data: Any) -> None:
        super().__init__(f"{status} {status_text}".strip())
        self.status = status
        self.status_text = status_text
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "statusText": self.status_text, "data": self.data}
