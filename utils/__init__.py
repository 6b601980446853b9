"""Shared utilities for the backend."""
from utils.coerce import (
    as_bool,
    as_count,
    as_int,
    as_mapping,
    as_number,
    as_optional_bool,
    as_optional_str,
    as_str,
    as_str_list,
)

__all__ = [
    "as_bool",
    "as_count",
    "as_int",
    "as_mapping",
    "as_number",
    "as_optional_bool",
    "as_optional_str",
    "as_str",
    "as_str_list",
]
