from __future__ import annotations

from typing import Annotated, Any

from pydantic import BeforeValidator, Field, computed_field, model_validator

from schemas.base import PayloadModel
from utils.coerce import LooseBool, LooseCount, LooseInt, LooseStr, as_mapping


class BuySide(PayloadModel):
    """Buy-side pricing terms captured when the lock was requested."""

    changeset_id: LooseStr = ""
    channel: LooseStr = ""
    policy_id: LooseStr = ""
    pe_request_id: LooseStr = ""
    investor: LooseStr = ""
    investor_id: LooseInt = None
    rate_sheet_id: LooseStr = ""
    product_name: LooseStr = ""
    product_code: LooseStr = ""
    rate: LooseStr = ""
    lock_period: LooseInt = None
    expiration_date: LooseStr = ""
    lock_confirmed_date: LooseStr = ""
    base_price: LooseStr = ""
    net_price: LooseStr = ""


class LockRequest(PayloadModel):
    id: LooseCount = 0
    requested_on: LooseStr = ""
    requested_by: LooseStr = ""
    requested_by_username: LooseStr = ""
    is_auto_triggered: LooseBool = False
    write_back_status: LooseStr = ""
    action: LooseStr = ""
    decision: LooseStr = ""
    approval_mode: LooseStr = ""
    buy_side: Annotated[BuySide, BeforeValidator(as_mapping)] = Field(default_factory=BuySide)
    has_sell_side: LooseBool = False

    @model_validator(mode="before")
    @classmethod
    def _derive_sell_side(cls, data: Any) -> Any:
        # Only the presence of sell-side terms is kept, not the terms themselves.
        if isinstance(data, dict):
            data = {k: v for k, v in data.items() if k != "has_sell_side"}
            data["hasSellSide"] = bool(as_mapping(data.get("sellSide")))
        return data

    @computed_field
    @property
    def is_auto_approved(self) -> bool:
        return self.approval_mode == "AUTO_APPROVAL" or self.decision == "AUTO_APPROVED"


class LockRequestList(PayloadModel):
    items: list[LockRequest] = Field(default_factory=list)
