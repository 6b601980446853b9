from typing import Literal, Optional, Union

from pydantic import ConfigDict

from schemas.base import CamelModel


class LogEntry(CamelModel):
    """One recorded outbound call."""

    model_config = ConfigDict(frozen=True)

    id: int
    method: str = "GET"
    url: str
    status: Union[int, Literal["error"]]
    duration_ms: int
    timestamp: str
    error: Optional[str] = None
