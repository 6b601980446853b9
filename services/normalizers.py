"""
Turns raw upstream payloads into the fixed records in schemas/.

Every parser is total: malformed input (None, wrong types, missing keys, not an
object at all) degrades to typed defaults and never raises. Field-level coercion
lives in the schema types; the envelope checks live here.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from pydantic import BaseModel, ValidationError

from schemas.changeset import ChangesetPage
from schemas.loan import Loan
from schemas.lock_request import LockRequestList
from schemas.pricing import PricingScenario
from schemas.rates import RateSetPage
from utils.coerce import as_mapping

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _validate(model: type[ModelT], data: dict[str, Any], fallback: Callable[[], ModelT]) -> ModelT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        logger.warning("Falling back to empty %s: %s", model.__name__, exc)
        return fallback()


def _objects(value: Any) -> list[dict[str, Any]]:
    """Items of a list that are objects; anything else is dropped."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def parse_changesets(raw: Any) -> ChangesetPage:
    """Changesets envelope -> page sorted by publishedAt, most recent first."""
    if not isinstance(raw, dict) or "changesets" not in raw:
        return ChangesetPage()
    page = _validate(
        ChangesetPage,
        {
            "total": raw.get("total"),
            "changesets": _objects(raw.get("changesets")),
            "nextPage": raw.get("nextPage"),
            "previousPage": raw.get("previousPage"),
        },
        ChangesetPage,
    )
    # ISO-8601 text sorts chronologically; sorted() is stable with reverse=True
    ordered = sorted(page.changesets, key=lambda cs: cs.details.published_at, reverse=True)
    return page.model_copy(update={"changesets": ordered})


def parse_pe_rates(raw: Any) -> RateSetPage:
    if not isinstance(raw, dict) or "data" not in raw:
        return RateSetPage()
    data = as_mapping(raw["data"])
    return _validate(
        RateSetPage,
        {"items": _objects(data.get("items")), "total": data.get("total")},
        RateSetPage,
    )


def parse_loan(raw: Any) -> Loan:
    return _validate(Loan, as_mapping(raw), Loan)


def parse_lock_requests(raw: Any) -> LockRequestList:
    """The lock-requests endpoint returns a bare JSON array."""
    if not isinstance(raw, list):
        return LockRequestList()
    return _validate(LockRequestList, {"items": _objects(raw)}, LockRequestList)


def parse_pricing_scenario(raw: Any) -> PricingScenario:
    return _validate(PricingScenario, as_mapping(raw), PricingScenario)
