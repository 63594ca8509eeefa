"""
Pre-flight checks for CLI arguments: input/output paths and render options.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from claims_timeline.shared.artifacts import INPUT_EXTENSION, VALID_OUTPUT_EXTENSIONS, is_valid_output_name
from claims_timeline.shared.errors import ConfigError, FileIOError
from claims_timeline.shared.models import RenderOptions
from claims_timeline.shared.storage import read_json

logger = logging.getLogger(__name__)

LARGE_FILE_BYTES = 100 * 1024 * 1024


def validate_json_file(path: str | Path) -> None:
    """Input must exist, be readable, end in .json and contain valid JSON."""
    p = Path(path)
    if not p.exists():
        raise FileIOError(f"File not found: {p}")
    if not p.is_file() or not os.access(p, os.R_OK):
        raise FileIOError(f"File is not readable: {p}")
    if p.suffix.lower() != INPUT_EXTENSION:
        raise FileIOError(f"Invalid file type: {p.suffix or '(none)'}. Expected .json file")

    read_json(p)

    size = p.stat().st_size
    if size > LARGE_FILE_BYTES:
        logger.warning(f"Large file detected ({size / (1024 * 1024):.1f}MB). Processing may take some time.")


def validate_output_path(path: str | Path) -> None:
    """Output must be an .html/.htm file in a writable (creatable) directory."""
    p = Path(path)
    if not is_valid_output_name(p.name):
        raise FileIOError(
            f"Invalid output file type: {p.suffix or '(none)'}. "
            f"Expected {' or '.join(VALID_OUTPUT_EXTENSIONS)} file"
        )

    out_dir = p.parent
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FileIOError(f"Cannot create output directory: {out_dir}") from exc
    if not os.access(out_dir, os.W_OK):
        raise FileIOError(f"Output directory is not writable: {out_dir}")

    if p.exists():
        logger.warning(f"Output file already exists and will be overwritten: {p}")


def build_render_options(**values: Any) -> RenderOptions:
    """RenderOptions from CLI values; None values fall back to defaults."""
    try:
        return RenderOptions(**{k: v for k, v in values.items() if v is not None})
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        raise ConfigError("Invalid render options", problems) from exc
