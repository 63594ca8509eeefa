"""
Unit tests for config merging, loading and schema validation.
"""
import json
import pytest

from claims_timeline.shared.config import (
    DEFAULT_CONFIG,
    apply_cli_overrides,
    config_to_dict,
    load_config,
    merge_config,
    validate_config,
    write_sample_config,
)
from claims_timeline.shared.errors import ConfigError
from claims_timeline.shared.models import ClaimKind, DEFAULT_COLORS
from claims_timeline.shared.schema_validator import supported_date_formats, validate_config_data
from claims_timeline.worker.steps.export_render.common import format_date
from claims_timeline.worker.steps.step01_dates import FALLBACK_DATE_FORMATS, compile_format


def _write(tmp_path, content, name="config.json"):
    path = tmp_path / name
    path.write_text(content if isinstance(content, str) else json.dumps(content), encoding="utf-8")
    return path


# ── Defaults and merging ─────────────────────────────────────────────────


class TestMergeConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.section_path(ClaimKind.PRESCRIPTION_PENDING) == "rxTba"
        assert DEFAULT_CONFIG.section_path(ClaimKind.MEDICAL_SERVICE) == "medHistory"
        assert DEFAULT_CONFIG.date_format == "YYYY-MM-DD"
        assert DEFAULT_CONFIG.colors == DEFAULT_COLORS

    def test_top_level_override(self):
        config = merge_config({"dateFormat": "MM/DD/YYYY", "rxHistoryPath": "history"})
        assert config.date_format == "MM/DD/YYYY"
        assert config.rx_history_path == "history"
        assert config.rx_tba_path == "rxTba"

    def test_field_names_accepted(self):
        assert merge_config({"date_format": "DD/MM/YYYY"}).date_format == "DD/MM/YYYY"

    def test_colors_merge_key_wise(self):
        config = merge_config({"colors": {"rxTba": "#000000"}})
        assert config.colors["rxTba"] == "#000000"
        assert config.colors["rxHistory"] == DEFAULT_COLORS["rxHistory"]
        assert config.colors["medHistory"] == DEFAULT_COLORS["medHistory"]

    def test_defaults_not_mutated(self):
        merge_config({"colors": {"rxTba": "#000000"}, "dateFormat": "MM/DD/YYYY"})
        assert DEFAULT_CONFIG.colors["rxTba"] == "#FF6B6B"
        assert DEFAULT_CONFIG.date_format == "YYYY-MM-DD"

    def test_unknown_and_null_keys_ignored(self):
        config = merge_config({"theme": "dark", "rxTbaPath": None})
        assert config == DEFAULT_CONFIG

    def test_merge_over_custom_base(self):
        base = merge_config({"dateFormat": "MM/DD/YYYY"})
        config = merge_config({"rxTbaPath": "pending"}, base=base)
        assert config.date_format == "MM/DD/YYYY"
        assert config.rx_tba_path == "pending"

    def test_wrong_type_raises(self):
        with pytest.raises(ConfigError, match="Invalid configuration"):
            merge_config({"rxTbaPath": 5})

    def test_to_dict_uses_file_keys(self):
        data = config_to_dict(DEFAULT_CONFIG)
        assert set(data) == {"rxTbaPath", "rxHistoryPath", "medHistoryPath", "dateFormat", "colors"}


# ── Loading ──────────────────────────────────────────────────────────────


class TestLoadConfig:
    def test_load_and_merge(self, tmp_path):
        path = _write(tmp_path, {"dateFormat": "DD-MM-YYYY", "colors": {"medHistory": "#abc"}})
        config = load_config(path)
        assert config.date_format == "DD-MM-YYYY"
        assert config.colors["medHistory"] == "#abc"
        assert config.colors["rxTba"] == "#FF6B6B"

    def test_unknown_keys_allowed(self, tmp_path):
        path = _write(tmp_path, {"comment": "team defaults"})
        assert load_config(path) == DEFAULT_CONFIG

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Configuration file not found"):
            load_config(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(_write(tmp_path, "{oops"))

    def test_non_object(self, tmp_path):
        with pytest.raises(ConfigError, match="must contain a JSON object"):
            load_config(_write(tmp_path, [1, 2]))

    def test_unsupported_date_format(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(_write(tmp_path, {"dateFormat": "YYYYMMDD"}))
        assert any(p.startswith("dateFormat:") for p in exc_info.value.problems)

    def test_bad_color(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            load_config(_write(tmp_path, {"colors": {"rxTba": "red"}}))
        assert exc_info.value.problems[0].startswith("colors→rxTba:")

    def test_sample_config_round_trip(self, tmp_path):
        path = write_sample_config(tmp_path / "nested" / "sample.json")
        assert path.exists()
        assert load_config(path) == DEFAULT_CONFIG


# ── CLI overrides and validation ─────────────────────────────────────────


class TestOverridesAndValidation:
    def test_no_override_returns_same_config(self):
        assert apply_cli_overrides(DEFAULT_CONFIG, None) is DEFAULT_CONFIG

    def test_date_format_override(self):
        assert apply_cli_overrides(DEFAULT_CONFIG, "MM/DD/YYYY").date_format == "MM/DD/YYYY"

    def test_bad_date_format_override(self):
        with pytest.raises(ConfigError, match="Unsupported date format"):
            apply_cli_overrides(DEFAULT_CONFIG, "bogus")

    def test_default_config_is_valid(self):
        assert validate_config(DEFAULT_CONFIG) == []

    def test_validate_config_reports_colors(self):
        config = merge_config({"colors": {"rxTba": "blue"}})
        problems = validate_config(config)
        assert len(problems) == 1
        assert "rxTba" in problems[0]

    def test_root_level_message(self):
        ok, problems = validate_config_data("not an object")
        assert not ok
        assert problems[0].startswith("<root>:")


class TestSupportedDateFormats:
    def test_covers_fallback_chain(self):
        assert set(FALLBACK_DATE_FORMATS) <= set(supported_date_formats())

    def test_every_supported_format_compiles_and_formats(self):
        from datetime import date

        for fmt in supported_date_formats():
            pattern = compile_format(fmt)
            assert pattern.match(format_date(date(2024, 7, 4), fmt)), fmt
