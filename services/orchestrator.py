"""
Run state shared by the aggregation workflows.

Each workflow moves idle -> running -> succeeded | failed. Starting a run resets
everything synchronously and takes a fresh run token; results that arrive for
an older token (a run overtaken by a reset or a newer run) are discarded.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from pydantic import BaseModel

from config import Settings, settings as default_settings
from schemas.triage import RunStatus
from services.errors import TriageError
from services.transport import Transport
from services.triage_client import TriageClient

logger = logging.getLogger(__name__)


class Orchestrator(ABC):
    name = "workflow"

    def __init__(self, transport: Transport, settings: Optional[Settings] = None) -> None:
        self.transport = transport
        self.settings = settings or default_settings
        self._run_token = 0
        self.status: RunStatus = "idle"
        self.attempted = False
        self.error: Optional[TriageError] = None
        self._clear()

    def _clear(self) -> None:
        """Drop workflow-specific data."""

    def reset(self) -> None:
        self._run_token += 1
        self.status = "idle"
        self.attempted = False
        self.error = None
        self._clear()

    def _begin(self) -> int:
        self.reset()
        self.status = "running"
        self.attempted = True
        return self._run_token

    def is_current(self, token: int) -> bool:
        return token == self._run_token

    def _client(self, environment: str, token: str) -> TriageClient:
        return TriageClient(self.transport, environment, token, self.settings)

    def _succeed(self, run_token: int) -> None:
        if self.is_current(run_token):
            self.status = "succeeded"
            logger.info("%s run succeeded", self.name)

    def _fail(self, run_token: int, error: TriageError) -> None:
        if not self.is_current(run_token):
            logger.info("%s: discarding failure from a superseded run", self.name)
            return
        self.status = "failed"
        self.error = error
        logger.warning("%s run failed: %s", self.name, error.message)

    def error_payload(self) -> Optional[dict[str, Any]]:
        return self.error.to_dict() if self.error is not None else None

    @abstractmethod
    def snapshot(self) -> BaseModel:
        """State model for display."""
