import pytest

from interpreters import (
    extract_date_from_timestamp,
    extract_time_from_timestamp,
    parse_break_time_to_minutes,
    parse_time_to_hours,
)


def test_extract_time_from_timestamp():
    assert extract_time_from_timestamp("2023-05-15 09:30:00+0200") == "09:30"
    assert extract_time_from_timestamp("2023-05-15 17:45:00+0200") == "17:45"
    assert extract_time_from_timestamp("invalid") == "00:00"


def test_extract_time_pads_and_accepts_iso_separator():
    assert extract_time_from_timestamp("2023-05-15 9:05:00+0200") == "09:05"
    assert extract_time_from_timestamp("2023-05-15T22:10:00+02:00") == "22:10"


@pytest.mark.parametrize("text", ["", None, "2023-05-15", "2023-05-15 25:00:00+0200", "2023-05-15 xx"])
def test_extract_time_falls_back(text):
    assert extract_time_from_timestamp(text) == "00:00"


def test_extract_date_from_timestamp():
    assert extract_date_from_timestamp("2023-05-15 09:30:00+0200") == "2023-05-15"
    assert extract_date_from_timestamp("2023-07-01 00:00:00+0200") == "2023-07-01"
    assert extract_date_from_timestamp("2023-07-01") == "2023-07-01"
    assert extract_date_from_timestamp("invalid") == ""
    assert extract_date_from_timestamp(None) == ""


def test_parse_time_to_hours():
    assert parse_time_to_hours("8h0m0s") == 8.0
    assert parse_time_to_hours("4h30m0s") == 4.5
    assert parse_time_to_hours("1h15m0s") == 1.25
    assert parse_time_to_hours("0h30m0s") == 0.5


def test_parse_time_to_hours_partial_and_seconds():
    assert parse_time_to_hours("7h") == 7.0
    assert parse_time_to_hours("45m") == 0.75
    assert parse_time_to_hours("0h0m36s") == pytest.approx(0.01)


@pytest.mark.parametrize("text", ["", None, "invalid", "-1h0m0s", "8 hours", "h m s"])
def test_parse_time_to_hours_falls_back(text):
    assert parse_time_to_hours(text) == 0.0


def test_parse_break_time_to_minutes():
    assert parse_break_time_to_minutes("30m") == 30
    assert parse_break_time_to_minutes("45m") == 45
    assert parse_break_time_to_minutes("60m") == 60
    assert parse_break_time_to_minutes("invalid") == 0


@pytest.mark.parametrize("text", ["", None, "m", "30", "-5m", "1h"])
def test_parse_break_time_falls_back(text):
    assert parse_break_time_to_minutes(text) == 0
