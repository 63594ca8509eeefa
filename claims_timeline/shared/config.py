"""
Normalization config: immutable defaults merged with user overrides.

Overrides come from an optional JSON file (original camelCase keys) and from
CLI flags. Top-level keys replace defaults; ``colors`` is merged key by key.
Unknown keys are ignored.
"""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from claims_timeline.shared.errors import ConfigError, FileIOError
from claims_timeline.shared.models import NormalizationConfig
from claims_timeline.shared.schema_validator import validate_config_data
from claims_timeline.shared.storage import read_text, write_text

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = NormalizationConfig()

# field name -> JSON key, so either spelling is accepted in overrides
_KEY_ALIASES: dict[str, str] = {
    name: (field.alias or name) for name, field in NormalizationConfig.model_fields.items()
}
_JSON_KEYS = frozenset(_KEY_ALIASES.values())


def config_to_dict(config: NormalizationConfig) -> dict[str, Any]:
    """Serialize using the JSON file keys."""
    return config.model_dump(by_alias=True)


def merge_config(
    overrides: Mapping[str, Any] | None,
    base: NormalizationConfig = DEFAULT_CONFIG,
) -> NormalizationConfig:
    """Return a new config with *overrides* applied on top of *base*."""
    merged = config_to_dict(base)
    overrides = dict(overrides or {})
    colors = overrides.pop("colors", None)

    for key, value in overrides.items():
        key = _KEY_ALIASES.get(key, key)
        if key not in _JSON_KEYS:
            logger.debug(f"Ignoring unknown config key: {key}")
            continue
        if value is None:
            continue
        merged[key] = value

    if isinstance(colors, Mapping):
        merged["colors"] = {**merged["colors"], **colors}

    try:
        return NormalizationConfig.model_validate(merged)
    except ValidationError as exc:
        problems = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        ]
        raise ConfigError("Invalid configuration", problems) from exc


def load_config(path: str | Path, base: NormalizationConfig = DEFAULT_CONFIG) -> NormalizationConfig:
    """Load a JSON config file, validate it and merge it over *base*."""
    try:
        content = read_text(path)
    except FileIOError as exc:
        if not Path(path).exists():
            raise ConfigError(f"Configuration file not found: {path}") from exc
        raise ConfigError(str(exc)) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {path}. {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration file must contain a JSON object: {path}")

    ok, problems = validate_config_data(data)
    if not ok:
        raise ConfigError(f"Invalid configuration file: {path}", problems)

    logger.info(f"Loaded configuration from {path}")
    return merge_config(data, base=base)


def apply_cli_overrides(config: NormalizationConfig, date_format: str | None = None) -> NormalizationConfig:
    if not date_format:
        return config
    updated = merge_config({"dateFormat": date_format}, base=config)
    problems = validate_config(updated)
    if problems:
        raise ConfigError(f"Unsupported date format: {date_format}", problems)
    return updated


def validate_config(config: NormalizationConfig) -> list[str]:
    """Human-readable problems with *config*; empty when it is usable."""
    _, problems = validate_config_data(config_to_dict(config))
    return problems


def write_sample_config(path: str | Path) -> Path:
    """Write the default configuration as a starting point for users."""
    text = json.dumps(config_to_dict(DEFAULT_CONFIG), indent=2) + "\n"
    return write_text(path, text)
