"""
Step 0: Structural check.
Decide whether a parsed JSON document looks like claims data and estimate its
item count from shape alone, without normalizing anything.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from claims_timeline.shared.models import ClaimKind, NormalizationConfig
from claims_timeline.shared.utils.field_utils import get_path

_RX_KINDS = (ClaimKind.PRESCRIPTION_PENDING, ClaimKind.PRESCRIPTION_HISTORY)


@dataclass
class StructureCheck:
    is_valid: bool
    claims_count: int = 0
    kinds: list[ClaimKind] = field(default_factory=list)
    missing_sections: list[str] = field(default_factory=list)
    error: str | None = None


def medical_claims_list(section: Any) -> list | None:
    """The claims list of a medical section: the section itself or its ``claims`` key."""
    if isinstance(section, list):
        return section
    if isinstance(section, dict) and isinstance(section.get("claims"), list):
        return section["claims"]
    return None


def _medical_line_count(claims: list) -> int:
    total = 0
    for claim in claims:
        lines = claim.get("lines") if isinstance(claim, dict) else None
        total += len(lines) if isinstance(lines, list) else 1
    return total


def classify_structure(data: Any, config: NormalizationConfig) -> StructureCheck:
    """
    Check which claims sections are present with the right shape.
    Returns a StructureCheck; ``is_valid`` is True when at least one section is usable.
    """
    if not isinstance(data, dict):
        return StructureCheck(
            is_valid=False,
            error=f"Expected a JSON object but found {type(data).__name__}",
        )

    check = StructureCheck(is_valid=False)

    for kind in _RX_KINDS:
        path = config.section_path(kind)
        section = get_path(data, path)
        if isinstance(section, list):
            check.claims_count += len(section)
            check.kinds.append(kind)
        else:
            check.missing_sections.append(path)

    med_path = config.section_path(ClaimKind.MEDICAL_SERVICE)
    med_claims = medical_claims_list(get_path(data, med_path))
    if med_claims is not None:
        check.claims_count += _medical_line_count(med_claims)
        check.kinds.append(ClaimKind.MEDICAL_SERVICE)
    else:
        check.missing_sections.append(med_path)

    check.is_valid = bool(check.kinds)
    if not check.is_valid:
        check.error = (
            "No claims sections found (expected one of: "
            + ", ".join(check.missing_sections)
            + ")"
        )
    return check
