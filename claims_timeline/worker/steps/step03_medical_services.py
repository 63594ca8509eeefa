"""
Step 3: Medical service claims (medHistory).

The section is either a list of claims or an object wrapping a ``claims`` list.
Each claim carries ``lines``; one ClaimItem is produced per line. Claims with
no lines list, and lines with unparseable dates, are skipped with a warning.
"""
from __future__ import annotations

import logging
from typing import Any

from claims_timeline.shared.errors import MalformedSectionError, UnparseableDateError
from claims_timeline.shared.models import (
    ClaimItem,
    ClaimKind,
    Interval,
    MedicalServiceAttributes,
    NormalizationConfig,
    Warning,
    WarningCode,
)
from claims_timeline.shared.utils.field_utils import (
    first_present,
    first_text,
    source_fields,
    scalar_or_na,
    text_or_na,
)
from claims_timeline.worker.steps.step00_validate import medical_claims_list
from claims_timeline.worker.steps.step01_dates import parse_date

logger = logging.getLogger(__name__)

_KIND = ClaimKind.MEDICAL_SERVICE

_START_FIELDS = ("srvcStart", "serviceStart")
_END_FIELDS = ("srvcEnd", "serviceEnd")


def _claims_of(section: Any) -> list[Any]:
    claims = medical_claims_list(section)
    if claims is None:
        raise MalformedSectionError(f"{_KIND.value} data must contain a claims array")
    return claims


def service_label(line: dict[str, Any], claim: dict[str, Any], claim_index: int, line_index: int) -> str:
    return (
        first_text(line, "description", "serviceType")
        or first_text(claim, "provider")
        or f"Medical Service {claim_index + 1}-{line_index + 1}"
    )


def _build_item(
    line: dict[str, Any],
    claim: dict[str, Any],
    claim_index: int,
    line_index: int,
    config: NormalizationConfig,
) -> ClaimItem:
    start = parse_date(first_present(line, *_START_FIELDS), config.date_format)
    raw_end = first_present(line, *_END_FIELDS)
    end = parse_date(raw_end, config.date_format) if raw_end is not None else start

    return ClaimItem(
        id=first_text(line, "lineId") or f"med-{claim_index + 1}-{line_index + 1}",
        kind=_KIND,
        label=service_label(line, claim, claim_index, line_index),
        color_tag=config.color_for(_KIND),
        interval=Interval(start=start, end=end),
        attributes=MedicalServiceAttributes(
            claim_id=text_or_na(claim.get("claimId")),
            provider=text_or_na(claim.get("provider")),
            service_type=text_or_na(first_present(line, "serviceType", "description")),
            charged_amount=scalar_or_na(line.get("chargedAmount")),
            allowed_amount=scalar_or_na(line.get("allowedAmount")),
            paid_amount=scalar_or_na(line.get("paidAmount")),
            procedure_code=text_or_na(line.get("procedureCode")),
            extra=source_fields(line),
        ),
    )


def extract_medical_service_items(
    section: Any,
    config: NormalizationConfig,
) -> tuple[list[ClaimItem], list[Warning]]:
    """
    Convert the medical service section into claim items, one per service line.
    Returns (items, warnings). A malformed section yields no items and one warning.
    """
    items: list[ClaimItem] = []
    warnings: list[Warning] = []

    try:
        claims = _claims_of(section)
    except MalformedSectionError as exc:
        logger.warning(f"Skipping {_KIND.value} section: {exc}")
        warnings.append(Warning(
            code=WarningCode.MALFORMED_SECTION.value,
            message=str(exc),
            source=_KIND.value,
        ))
        return items, warnings

    for claim_index, claim in enumerate(claims):
        lines = claim.get("lines") if isinstance(claim, dict) else None
        if not isinstance(lines, list):
            msg = f"{_KIND.value} claim {claim_index} has no lines array"
            logger.warning(msg)
            warnings.append(Warning(
                code=WarningCode.MISSING_LINES.value,
                message=msg,
                source=f"{_KIND.value}[{claim_index}]",
            ))
            continue

        for line_index, line in enumerate(lines):
            source = f"{_KIND.value}[{claim_index}].lines[{line_index}]"
            if not isinstance(line, dict):
                msg = f"Skipping invalid {_KIND.value} line {claim_index}-{line_index}: expected an object"
                logger.warning(msg)
                warnings.append(Warning(code=WarningCode.INVALID_ELEMENT.value, message=msg, source=source))
                continue
            try:
                items.append(_build_item(line, claim, claim_index, line_index, config))
            except UnparseableDateError as exc:
                msg = f"Skipping invalid {_KIND.value} line {claim_index}-{line_index}: {exc}"
                logger.warning(msg)
                warnings.append(Warning(code=WarningCode.UNPARSEABLE_DATE.value, message=msg, source=source))

    return items, warnings
