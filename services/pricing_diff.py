"""
Diffs pricing inputs between successive lock requests of one loan.

Only PRICING_INPUT_SECTIONS are compared; other top-level scenario fields
(ids, timestamps) always differ between requests and are ignored. "Previous" is
always the chronologically earlier lock (requestedOn, then id), whatever order
the locks arrive in, and results are handed back in that arrival order.
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import BaseModel

from schemas.lock_request import LockRequest
from schemas.pricing import PricingChange, PricingScenario
from utils.coerce import as_str

PRICING_INPUT_SECTIONS = (
    "borrower",
    "loan",
    "property",
    "search",
    "customValues",
)

EMPTY_DISPLAY = "—"
EMPTY_VALUE_DISPLAY = "(empty)"

PricingInput = Union[PricingScenario, Mapping[str, Any]]


def format_for_display(value: Any) -> str:
    if value is None:
        return EMPTY_DISPLAY
    if isinstance(value, (list, tuple)):
        return ", ".join(as_str(x) for x in value) if value else EMPTY_VALUE_DISPLAY
    if isinstance(value, Mapping):
        if not value:
            return EMPTY_VALUE_DISPLAY
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)
    text = as_str(value)
    return text if text != "" else EMPTY_VALUE_DISPLAY


def flatten_section(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested mappings to {dot.path: leaf}.
    Arrays are leaves, joined into one comma-separated string.
    """
    if not isinstance(obj, Mapping):
        return {}
    out: dict[str, Any] = {}
    for key, value in obj.items():
        path = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            out.update(flatten_section(value, path))
        elif isinstance(value, (list, tuple)):
            out[path] = ", ".join("" if x is None else as_str(x) for x in value)
        else:
            # null leaves read as empty so they differ from a path missing on one side
            out[path] = "" if value is None else value
    return out


def _as_mapping(pricing: PricingInput) -> Mapping[str, Any]:
    if isinstance(pricing, BaseModel):
        return pricing.model_dump(by_alias=True)
    return pricing


def diff_pricing(
    prev_pricing: Optional[PricingInput],
    curr_pricing: Optional[PricingInput],
) -> list[PricingChange]:
    """Changed leaves across the input sections, in section order then first-seen path order."""
    if prev_pricing is None or curr_pricing is None:
        return []
    prev = _as_mapping(prev_pricing)
    curr = _as_mapping(curr_pricing)
    changes: list[PricingChange] = []
    for section in PRICING_INPUT_SECTIONS:
        prev_flat = flatten_section(prev.get(section), section)
        curr_flat = flatten_section(curr.get(section), section)
        # a path missing on one side renders as EMPTY_DISPLAY
        paths = list(dict.fromkeys([*prev_flat, *curr_flat]))
        for path in paths:
            previous = format_for_display(prev_flat.get(path))
            current = format_for_display(curr_flat.get(path))
            if previous != current:
                changes.append(PricingChange(path=path, previous=previous, current=current))
    return changes


def chronological(locks: Sequence[LockRequest]) -> list[LockRequest]:
    """Oldest first; ties on requestedOn broken by id. Does not touch the input."""
    return sorted(locks, key=lambda lock: (lock.requested_on or "", lock.id))


def pricing_diffs_from_previous(
    locks: Sequence[LockRequest],
    pricing_by_pe_request_id: Mapping[str, Optional[PricingInput]],
) -> list[Optional[list[PricingChange]]]:
    """
    For each lock (in the given order), the pricing changes since its
    chronological predecessor. The oldest lock gets None, as does any lock
    whose own or predecessor pricing is missing.
    """
    if not locks:
        return []
    ordered = chronological(locks)

    def pricing_for(lock: LockRequest) -> Optional[PricingInput]:
        pe_request_id = lock.buy_side.pe_request_id
        return pricing_by_pe_request_id.get(pe_request_id) if pe_request_id else None

    chrono_diffs: list[Optional[list[PricingChange]]] = [None]
    for previous_lock, lock in zip(ordered, ordered[1:]):
        prev = pricing_for(previous_lock)
        curr = pricing_for(lock)
        chrono_diffs.append(diff_pricing(prev, curr) if prev is not None and curr is not None else None)

    index_by_lock_id = {lock.id: idx for idx, lock in enumerate(ordered)}
    return [chrono_diffs[index_by_lock_id[lock.id]] for lock in locks]
