"""
Artifact naming shared by the CLI and the batch processor.
"""
from __future__ import annotations

from pathlib import PurePath

TIMELINE_SUFFIX = "-timeline"
TIMELINE_EXTENSION = ".html"

VALID_OUTPUT_EXTENSIONS: tuple[str, ...] = (".html", ".htm")
INPUT_EXTENSION = ".json"

DEFAULT_OUTPUT_NAME = "timeline.html"


def is_json_file_name(name: str) -> bool:
    return name.lower().endswith(INPUT_EXTENSION)


def is_valid_output_name(name: str) -> bool:
    return PurePath(name).suffix.lower() in VALID_OUTPUT_EXTENSIONS


def timeline_artifact_name(input_name: str) -> str:
    """``claims.json`` becomes ``claims-timeline.html``."""
    stem = PurePath(input_name).name
    if is_json_file_name(stem):
        stem = stem[: -len(INPUT_EXTENSION)]
    return f"{stem}{TIMELINE_SUFFIX}{TIMELINE_EXTENSION}"
