"""
Append-only log of every outbound call made by the Transport.

One recorder lives for the whole process (see get_call_recorder) and is shared by
every workflow; tests construct their own CallRecorder instances instead.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Optional, Union

from schemas.call_log import LogEntry

logger = logging.getLogger(__name__)

Subscriber = Callable[[list[LogEntry]], None]


class CallRecorder:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: tuple[LogEntry, ...] = ()
        self._next_id = 1
        self._subscribers: list[Subscriber] = []

    def entries(self) -> list[LogEntry]:
        """Snapshot of all entries, oldest first."""
        return list(self._entries)

    def append(
        self,
        *,
        url: str,
        status: Union[int, str],
        duration_ms: int,
        timestamp: str,
        method: str = "GET",
        error: Optional[str] = None,
    ) -> LogEntry:
        with self._lock:
            entry = LogEntry(
                id=self._next_id,
                method=method or "GET",
                url=url,
                status=status,
                duration_ms=duration_ms,
                timestamp=timestamp,
                error=error,
            )
            self._next_id += 1
            # copy-on-write; snapshots taken earlier keep the old tuple
            self._entries = self._entries + (entry,)
            snapshot = list(self._entries)
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(list(snapshot))
            except Exception:
                logger.exception("Call log subscriber %r failed", callback)
        return entry

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback for every append; returns an unsubscribe function."""
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe


_default_recorder: Optional[CallRecorder] = None
_default_lock = threading.Lock()


def get_call_recorder() -> CallRecorder:
    """Process-wide recorder, created on first use and never torn down."""
    global _default_recorder
    with _default_lock:
        if _default_recorder is None:
            _default_recorder = CallRecorder()
        return _default_recorder
