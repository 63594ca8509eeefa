"""
Normalizer: runs the claims steps over one parsed document.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from claims_timeline.shared.config import DEFAULT_CONFIG
from claims_timeline.shared.errors import InvalidDocumentError
from claims_timeline.shared.models import (
    ClaimItem,
    ClaimKind,
    NormalizationConfig,
    TimelineDocument,
    Warning,
)
from claims_timeline.shared.storage import decode_json, read_text
from claims_timeline.shared.utils.field_utils import get_path
from claims_timeline.worker.steps.step02_prescriptions import extract_prescription_items
from claims_timeline.worker.steps.step03_medical_services import extract_medical_service_items
from claims_timeline.worker.steps.step04_timeline import build_timeline

logger = logging.getLogger(__name__)


def normalize(document: Any, config: NormalizationConfig | None = None) -> TimelineDocument:
    """
    Normalize a parsed claims document into a TimelineDocument.

    Raises InvalidDocumentError when *document* is not a JSON object and
    NoClaimsFoundError when no section produced any item.
    """
    config = config or DEFAULT_CONFIG
    if not isinstance(document, dict):
        raise InvalidDocumentError("Invalid data: Expected JSON object")

    items: list[ClaimItem] = []
    all_warnings: list[Warning] = []

    # ── Steps 2a/2b: prescription sections ───────────────────────────────
    for kind in (ClaimKind.PRESCRIPTION_PENDING, ClaimKind.PRESCRIPTION_HISTORY):
        section = get_path(document, config.section_path(kind))
        if not isinstance(section, list):
            continue
        section_items, step_warnings = extract_prescription_items(section, kind, config)
        items.extend(section_items)
        all_warnings.extend(step_warnings)
        logger.debug(f"{kind.value}: {len(section_items)} items from {len(section)} records")

    # ── Step 3: medical service section ──────────────────────────────────
    med_section = get_path(document, config.section_path(ClaimKind.MEDICAL_SERVICE))
    # null, false, 0 and "" mean "no section"; empty containers are still checked
    if med_section or isinstance(med_section, (list, dict)):
        section_items, step_warnings = extract_medical_service_items(med_section, config)
        items.extend(section_items)
        all_warnings.extend(step_warnings)
        logger.debug(f"{ClaimKind.MEDICAL_SERVICE.value}: {len(section_items)} items")

    # ── Step 4: ordering, span, summary ──────────────────────────────────
    timeline = build_timeline(items, all_warnings)
    if all_warnings:
        logger.info(f"Normalized {len(items)} claims ({len(all_warnings)} skipped or flagged)")
    return timeline


def normalize_buffer(raw: bytes | str, config: NormalizationConfig | None = None, source: str = "<buffer>") -> TimelineDocument:
    """Decode a raw JSON buffer and normalize it."""
    return normalize(decode_json(raw, source=source), config)


def normalize_file(path: str | Path, config: NormalizationConfig | None = None) -> TimelineDocument:
    """Read a claims JSON file and normalize it."""
    return normalize_buffer(read_text(path), config, source=str(path))
