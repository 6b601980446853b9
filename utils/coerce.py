"""
Lenient coercion for loosely-typed upstream payloads.
Every helper accepts any value and returns a usable default instead of raising;
the Loose* aliases plug them into pydantic fields as BeforeValidators.
"""
from __future__ import annotations

import json
import math
import re
from typing import Annotated, Any, Optional, Union

from pydantic import BeforeValidator

# plain decimal text with optional sign and exponent; no "1_000", "inf" or "nan"
_NUMERIC_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def as_mapping(value: Any) -> dict[str, Any]:
    """Return value if it is a dict, else an empty dict."""
    return value if isinstance(value, dict) else {}


def as_str(value: Any) -> str:
    """Display string for a scalar; None becomes ''."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


def as_optional_str(value: Any) -> Optional[str]:
    return None if value is None else as_str(value)


def as_number(value: Any) -> Optional[Union[int, float]]:
    """Permissive numeric coercion; anything non-numeric (including NaN) becomes None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not _NUMERIC_TEXT.fullmatch(text):
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def as_int(value: Any) -> Optional[int]:
    number = as_number(value)
    if number is None:
        return None
    if isinstance(number, float):
        return int(number) if number.is_integer() else None
    return number


def as_count(value: Any) -> int:
    """Integer count; anything unusable becomes 0."""
    number = as_int(value)
    return 0 if number is None else number


def as_optional_bool(value: Any) -> Optional[bool]:
    """Only a real boolean survives; everything else is treated as absent."""
    return value if isinstance(value, bool) else None


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    return False


def as_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [as_str(item) for item in value]


LooseStr = Annotated[str, BeforeValidator(as_str)]
LooseOptionalStr = Annotated[Optional[str], BeforeValidator(as_optional_str)]
LooseNumber = Annotated[Optional[Union[int, float]], BeforeValidator(as_number)]
LooseInt = Annotated[Optional[int], BeforeValidator(as_int)]
LooseBool = Annotated[bool, BeforeValidator(as_bool)]
LooseOptionalBool = Annotated[Optional[bool], BeforeValidator(as_optional_bool)]
LooseCount = Annotated[int, BeforeValidator(as_count)]
LooseStrList = Annotated[list[str], BeforeValidator(as_str_list)]
LooseMapping = Annotated[dict[str, Any], BeforeValidator(as_mapping)]
