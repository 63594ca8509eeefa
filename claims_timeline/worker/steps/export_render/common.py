"""
Display formatters shared by the HTML renderer and the CLI summaries.
"""
from __future__ import annotations

import math
from datetime import date
from typing import Any

from claims_timeline.shared.models import ClaimKind

_KIND_LABELS: dict[str, str] = {
    ClaimKind.PRESCRIPTION_PENDING.value: "Prescription (TBA)",
    ClaimKind.PRESCRIPTION_HISTORY.value: "Prescription History",
    ClaimKind.MEDICAL_SERVICE.value: "Medical History",
}

_DATE_LAYOUTS: dict[str, str] = {
    "YYYY-MM-DD": "{y}-{m}-{d}",
    "MM/DD/YYYY": "{m}/{d}/{y}",
    "DD-MM-YYYY": "{d}-{m}-{y}",
    "YYYY/MM/DD": "{y}/{m}/{d}",
    "DD/MM/YYYY": "{d}/{m}/{y}",
    "MM-DD-YYYY": "{m}-{d}-{y}",
}


def format_claim_kind(kind: ClaimKind | str) -> str:
    key = kind.value if isinstance(kind, ClaimKind) else str(kind)
    return _KIND_LABELS.get(key, key)


def format_date(value: date, fmt: str = "YYYY-MM-DD") -> str:
    layout = _DATE_LAYOUTS.get(fmt, _DATE_LAYOUTS["YYYY-MM-DD"])
    return layout.format(y=f"{value.year:04d}", m=f"{value.month:02d}", d=f"{value.day:02d}")


def format_file_size(num_bytes: int) -> str:
    units = ["B", "KB", "MB", "GB"]
    size = float(num_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1
    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    return f"{size:.1f} {units[unit_index]}"


def format_duration(milliseconds: float) -> str:
    if milliseconds < 1000:
        return f"{int(milliseconds)}ms"
    seconds = milliseconds / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {int(seconds % 60)}s"


def _to_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).replace(",", "").replace("$", "").strip())
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def format_currency(value: Any) -> str:
    """``1234.5`` -> ``$1,234.50``; non-numeric values are returned unchanged."""
    number = _to_number(value)
    if number is None:
        return str(value)
    sign = "-" if number < 0 else ""
    return f"{sign}${abs(number):,.2f}"


def format_number(value: Any) -> str:
    number = _to_number(value)
    if number is None:
        return str(value)
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,}"
