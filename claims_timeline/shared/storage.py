"""
Local disk helpers for claims input files and rendered timeline artifacts.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from claims_timeline.shared.artifacts import timeline_artifact_name
from claims_timeline.shared.errors import FileIOError, InvalidDocumentError


def read_text(path: str | Path) -> str:
    """Read a UTF-8 text file. Raises FileIOError on any read/decode failure."""
    p = Path(path)
    try:
        return p.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileIOError(f"File not found: {p}") from None
    except UnicodeDecodeError as exc:
        raise FileIOError(f"File is not valid UTF-8: {p}. {exc}") from exc
    except OSError as exc:
        raise FileIOError(f"Cannot read file: {p}. {exc.strerror or exc}") from exc


def decode_json(raw: bytes | str, source: str = "<buffer>") -> Any:
    """Decode a raw buffer as JSON. Raises InvalidDocumentError on syntax errors."""
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidDocumentError(f"Invalid UTF-8 in {source}. {exc}") from exc
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidDocumentError(f"Invalid JSON in file: {source}. {exc}") from exc


def read_json(path: str | Path) -> Any:
    """Read and decode a JSON file."""
    return decode_json(read_text(path), source=str(path))


def write_text(path: str | Path, text: str) -> Path:
    """Write *text* to *path*, creating parent directories. Returns the path."""
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise FileIOError(f"Cannot write file: {p}. {exc.strerror or exc}") from exc
    return p


def batch_output_path(input_name: str, output_dir: str | Path) -> Path:
    """Where the batch processor writes the artifact for *input_name*."""
    return Path(output_dir) / timeline_artifact_name(input_name)
