from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from claims_timeline.shared.models import NOT_AVAILABLE

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def is_missing(value: Any) -> bool:
    """Absent, null and blank strings all count as missing."""
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def get_path(obj: Any, path: str) -> Any:
    """Resolve a dot-notation path (``"data.rxTba"``) through nested objects."""
    current = obj
    for key in path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return None
        current = current[key]
    return current


def first_present(record: Mapping[str, Any], *keys: str) -> Any:
    """First non-missing value among *keys*, else None."""
    for key in keys:
        value = record.get(key)
        if not is_missing(value):
            return value
    return None


def first_text(record: Mapping[str, Any], *keys: str) -> str | None:
    value = first_present(record, *keys)
    if value is None:
        return None
    return str(value).strip()


def text_or_na(value: Any) -> str:
    if is_missing(value):
        return NOT_AVAILABLE
    return str(value).strip()


def scalar_or_na(value: Any) -> str | int | float:
    """Keep numbers as numbers (amounts, quantities); everything else as text."""
    if is_missing(value):
        return NOT_AVAILABLE
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return str(value).strip()


def parse_leading_int(value: Any) -> int | None:
    """
    Integer prefix of *value*: ``30`` -> 30, ``"30 days"`` -> 30, ``"12.9"`` -> 12.
    Returns None when there is no leading integer.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    return int(match.group(1))


def source_fields(record: Mapping[str, Any]) -> dict[str, Any]:
    """Shallow copy of every source field, aliases and raw dates included, in source order."""
    return dict(record)
