"""
Step 1: Date parsing (tiered fallback chain).

Tier 1: strict parse against the configured format.
Tier 2: strict parse against each of FALLBACK_DATE_FORMATS, in order.
Tier 3: lenient parse (dateutil) for anything a general date parser accepts.
Failure at every tier raises UnparseableDateError with the original value.
"""
from __future__ import annotations

import logging
import re
from datetime import date, datetime
from functools import lru_cache

from dateutil import parser as dateutil_parser

from claims_timeline.shared.errors import UnparseableDateError
from claims_timeline.shared.utils.field_utils import is_missing

logger = logging.getLogger(__name__)

# Parts a lenient parse cannot find are taken from here, never from today.
_LENIENT_DEFAULT = datetime(1900, 1, 1)

# Trial order matters: "01/02/2024" is valid as both MM/DD/YYYY and DD/MM/YYYY.
FALLBACK_DATE_FORMATS: tuple[str, ...] = (
    "YYYY-MM-DD",
    "MM/DD/YYYY",
    "DD-MM-YYYY",
    "YYYY/MM/DD",
    "DD/MM/YYYY",
)

# ── Format compilation ───────────────────────────────────────────────────

_TOKENS: dict[str, tuple[str, str]] = {
    "YYYY": ("year", r"\d{4}"),
    "MM": ("month", r"\d{2}"),
    "DD": ("day", r"\d{2}"),
    "M": ("month", r"\d{1,2}"),
    "D": ("day", r"\d{1,2}"),
}
_TOKEN_SPLIT = re.compile(r"(YYYY|MM|DD|M|D)")


@lru_cache(maxsize=64)
def compile_format(fmt: str) -> re.Pattern[str]:
    """
    Compile a moment-style format (``YYYY-MM-DD``) into an anchored regex.
    Raises ValueError for formats without a year or with repeated tokens.
    """
    parts: list[str] = []
    seen: set[str] = set()
    for piece in _TOKEN_SPLIT.split(fmt):
        if not piece:
            continue
        if piece in _TOKENS:
            field, digits = _TOKENS[piece]
            if field in seen:
                raise ValueError(f"Date format repeats a field: {fmt}")
            seen.add(field)
            parts.append(f"(?P<{field}>{digits})")
        else:
            parts.append(re.escape(piece))
    if "year" not in seen:
        raise ValueError(f"Date format has no year: {fmt}")
    return re.compile("^" + "".join(parts) + "$")


# ── Parsing tiers ────────────────────────────────────────────────────────


def parse_with_format(value: str, fmt: str) -> date | None:
    """Strict parse: the whole string must match *fmt* and be a real calendar date."""
    try:
        pattern = compile_format(fmt)
    except ValueError:
        logger.debug(f"Unusable date format '{fmt}'")
        return None
    m = pattern.match(value.strip())
    if not m:
        return None
    groups = m.groupdict()
    try:
        return date(
            int(groups["year"]),
            int(groups.get("month") or 1),
            int(groups.get("day") or 1),
        )
    except ValueError:
        return None


def parse_lenient(value: str) -> date | None:
    try:
        return dateutil_parser.parse(value, default=_LENIENT_DEFAULT).date()
    except (ValueError, OverflowError, TypeError):
        return None


def parse_date(value: object, preferred_format: str = "YYYY-MM-DD") -> date:
    """Parse a raw date value through the full fallback chain."""
    if is_missing(value):
        raise UnparseableDateError(value)
    text = str(value).strip()

    formats = [preferred_format] + [f for f in FALLBACK_DATE_FORMATS if f != preferred_format]
    for fmt in formats:
        parsed = parse_with_format(text, fmt)
        if parsed is not None:
            return parsed

    parsed = parse_lenient(text)
    if parsed is not None:
        logger.debug(f"Date '{text}' parsed leniently as {parsed.isoformat()}")
        return parsed

    raise UnparseableDateError(value)
