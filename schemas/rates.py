from __future__ import annotations

from pydantic import Field

from schemas.base import PayloadModel
from utils.coerce import LooseCount, LooseOptionalBool, LooseOptionalStr, LooseStr


class RateSetItem(PayloadModel):
    """PE rate set linked to a changeset by changeset_id."""

    id: LooseStr = ""
    changeset_id: LooseStr = ""
    base_rate_set_id: LooseOptionalStr = None
    created_on: LooseOptionalStr = None
    is_published: LooseOptionalBool = None


class RateSetPage(PayloadModel):
    items: list[RateSetItem] = Field(default_factory=list)
    total: LooseCount = 0
