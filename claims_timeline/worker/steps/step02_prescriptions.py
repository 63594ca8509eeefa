"""
Step 2: Prescription claims (rxTba and rxHistory).

One ClaimItem per element. The interval runs from the date of service for
``days supply`` calendar days (30 when the supply is missing or not an integer).
Elements whose date cannot be parsed are skipped with a warning.
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from claims_timeline.shared.errors import UnparseableDateError
from claims_timeline.shared.models import (
    ClaimItem,
    ClaimKind,
    Interval,
    NormalizationConfig,
    PrescriptionAttributes,
    Warning,
    WarningCode,
)
from claims_timeline.shared.utils.field_utils import (
    first_present,
    first_text,
    parse_leading_int,
    source_fields,
    scalar_or_na,
    text_or_na,
)
from claims_timeline.worker.steps.step01_dates import parse_date

logger = logging.getLogger(__name__)

DEFAULT_DAYS_SUPPLY = 30

_DATE_FIELDS = ("dos", "dateOfService")
_SUPPLY_FIELDS = ("dayssupply", "daysSupply")
_NAME_FIELDS = ("medication", "drugName", "displayName")


def resolve_days_supply(claim: dict[str, Any]) -> int:
    parsed = parse_leading_int(first_present(claim, *_SUPPLY_FIELDS))
    return DEFAULT_DAYS_SUPPLY if parsed is None else parsed


def prescription_label(claim: dict[str, Any], kind: ClaimKind, index: int) -> str:
    return first_text(claim, *_NAME_FIELDS) or f"{kind.value} Claim {index + 1}"


def _build_item(
    claim: dict[str, Any],
    kind: ClaimKind,
    index: int,
    config: NormalizationConfig,
) -> ClaimItem:
    start = parse_date(first_present(claim, *_DATE_FIELDS), config.date_format)
    days_supply = resolve_days_supply(claim)
    end = start + timedelta(days=days_supply)
    label = prescription_label(claim, kind, index)

    return ClaimItem(
        id=first_text(claim, "id") or f"{kind.value}-{index + 1}",
        kind=kind,
        label=label,
        color_tag=config.color_for(kind),
        interval=Interval(start=start, end=end),
        attributes=PrescriptionAttributes(
            days_supply=days_supply,
            medication=label,
            dosage=text_or_na(claim.get("dosage")),
            prescriber=text_or_na(claim.get("prescriber")),
            pharmacy=text_or_na(claim.get("pharmacy")),
            ndc=text_or_na(claim.get("ndc")),
            quantity=scalar_or_na(claim.get("quantity")),
            copay=scalar_or_na(claim.get("copay")),
            extra=source_fields(claim),
        ),
    )


def extract_prescription_items(
    records: list[Any],
    kind: ClaimKind,
    config: NormalizationConfig,
) -> tuple[list[ClaimItem], list[Warning]]:
    """
    Convert a prescription section into claim items.
    Returns (items, warnings).
    """
    items: list[ClaimItem] = []
    warnings: list[Warning] = []

    for index, claim in enumerate(records):
        source = f"{kind.value}[{index}]"
        if not isinstance(claim, dict):
            msg = f"Skipping invalid {kind.value} claim at index {index}: expected an object"
            logger.warning(msg)
            warnings.append(Warning(code=WarningCode.INVALID_ELEMENT.value, message=msg, source=source))
            continue

        try:
            items.append(_build_item(claim, kind, index, config))
        except UnparseableDateError as exc:
            msg = f"Skipping invalid {kind.value} claim at index {index}: {exc}"
            logger.warning(msg)
            warnings.append(Warning(code=WarningCode.UNPARSEABLE_DATE.value, message=msg, source=source))
        except OverflowError as exc:
            msg = f"Skipping invalid {kind.value} claim at index {index}: date out of range ({exc})"
            logger.warning(msg)
            warnings.append(Warning(code=WarningCode.UNPARSEABLE_DATE.value, message=msg, source=source))

    return items, warnings
