from __future__ import annotations

from claims_timeline.shared.utils.field_utils import (
    first_present,
    first_text,
    get_path,
    is_missing,
    parse_leading_int,
    source_fields,
    scalar_or_na,
    text_or_na,
)


def test_is_missing_treats_blank_as_missing() -> None:
    assert is_missing(None)
    assert is_missing("")
    assert is_missing("   ")
    assert not is_missing(0)
    assert not is_missing(False)
    assert not is_missing("0")


def test_get_path_walks_nested_objects() -> None:
    data = {"data": {"claims": {"rx": [1, 2]}}}
    assert get_path(data, "data.claims.rx") == [1, 2]
    assert get_path(data, "data.missing.rx") is None
    assert get_path({"data": [1]}, "data.0") is None
    assert get_path({"rxTba": []}, "rxTba") == []


def test_first_present_skips_blank_but_keeps_zero() -> None:
    record = {"a": "", "b": 0, "c": 5}
    assert first_present(record, "a", "b", "c") == 0
    assert first_present(record, "x", "y") is None


def test_first_text_strips() -> None:
    assert first_text({"name": "  Drug A "}, "name") == "Drug A"
    assert first_text({}, "name") is None


def test_text_and_scalar_defaults() -> None:
    assert text_or_na(None) == "N/A"
    assert text_or_na(" 10mg ") == "10mg"
    assert scalar_or_na(12.5) == 12.5
    assert scalar_or_na("") == "N/A"
    assert scalar_or_na(True) == "True"


def test_parse_leading_int() -> None:
    assert parse_leading_int(30) == 30
    assert parse_leading_int("30") == 30
    assert parse_leading_int(" 90 days") == 90
    assert parse_leading_int("12.9") == 12
    assert parse_leading_int(7.8) == 7
    assert parse_leading_int("-5") == -5
    assert parse_leading_int("days: 30") is None
    assert parse_leading_int(float("nan")) is None
    assert parse_leading_int(True) is None
    assert parse_leading_int(None) is None


def test_source_fields_copies_in_order() -> None:
    record = {"dos": "2024-01-01", "zeta": 1, "alpha": 2}
    copied = source_fields(record)
    assert list(copied) == ["dos", "zeta", "alpha"]
    copied["zeta"] = 9
    assert record["zeta"] == 1
