"""
Validate normalization config JSON against the bundled config schema.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema

_SCHEMA_PATH = Path(__file__).resolve().parent / "schemas" / "normalization-config.schema.json"
_schema_cache: dict | None = None


def _load_schema() -> dict:
    global _schema_cache
    if _schema_cache is None:
        with open(_SCHEMA_PATH, "r", encoding="utf-8") as f:
            _schema_cache = json.load(f)
    return _schema_cache


def supported_date_formats() -> list[str]:
    """Date formats a config file may name, as listed in the schema."""
    return list(_load_schema()["properties"]["dateFormat"]["enum"])


def validate_config_data(data: Any) -> tuple[bool, list[str]]:
    """
    Validate *data* against the normalization config schema.
    Returns (is_valid, list_of_error_messages).
    """
    schema = _load_schema()
    validator = jsonschema.Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    messages = []
    for e in errors:
        location = "→".join(str(p) for p in e.absolute_path) or "<root>"
        messages.append(f"{location}: {e.message}")
    return (len(messages) == 0, messages)
