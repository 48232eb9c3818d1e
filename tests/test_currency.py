"""Tests for form value parsing and display formatting."""
from datetime import date

import pytest

from models.currency import (
    format_currency, format_ordinal_date, format_percent, format_plain_number,
    ordinal_suffix, parse_currency, parse_int, parse_number,
)


@pytest.mark.parametrize("raw, expected", [
    ("£200,000", 200000.0),
    (" £1,200.50 ", 1200.5),
    ("1 500", 1500.0),
    (750, 750.0),
    (12.5, 12.5),
    ("-£80", -80.0),
    ("", 0.0),
    (None, 0.0),
    ("abc", 0.0),
    ("£", 0.0),
])
def test_parse_currency(raw, expected):
    assert parse_currency(raw) == expected


def test_parse_currency_never_returns_nan():
    assert parse_currency("nan") == 0.0
    assert parse_currency(float("inf")) == 0.0


@pytest.mark.parametrize("raw, expected", [
    ("5.5", 5.5),
    ("  25 ", 25.0),
    ("12.5%", 12.5),
    ("3e1", 30.0),
    (".5", 0.5),
])
def test_parse_number_takes_leading_number(raw, expected):
    assert parse_number(raw, 20) == expected


@pytest.mark.parametrize("raw", [None, "", "abc", "0", 0, True, float("nan")])
def test_parse_number_falls_back_to_default(raw):
    assert parse_number(raw, 5.8) == 5.8


@pytest.mark.parametrize("raw, expected", [
    ("84", 84),
    ("84.7", 84),
    (" 72 pts", 72),
    (65.9, 65),
    ("x1", 0),
    (None, 0),
])
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


def test_format_currency_rounds_to_whole_units():
    assert format_currency(1234.5) == "£1,235"
    assert format_currency(200000) == "£200,000"
    assert format_currency(0) == "£0"
    assert format_currency(None) == "£0"


def test_format_currency_negative():
    assert format_currency(-80) == "-£80"
    assert format_currency(-1234.4) == "-£1,234"


@pytest.mark.parametrize("value", [0, 0.4, 99.5, 1234.56, 200000, 987654.49])
def test_currency_round_trip(value):
    assert parse_currency(format_currency(value)) == pytest.approx(round(value + 1e-9))


def test_format_percent_and_plain_number():
    assert format_percent(7.2) == "7.2%"
    assert format_percent(13.17) == "13.2%"
    assert format_percent(39.1304, places=2) == "39.13%"
    assert format_plain_number(20.0) == "20"
    assert format_plain_number(12.5) == "12.5"


@pytest.mark.parametrize("day, suffix", [
    (1, "st"), (2, "nd"), (3, "rd"), (4, "th"),
    (11, "th"), (12, "th"), (13, "th"),
    (21, "st"), (22, "nd"), (23, "rd"), (31, "st"),
])
def test_ordinal_suffix(day, suffix):
    assert ordinal_suffix(day) == suffix


def test_format_ordinal_date():
    assert format_ordinal_date(date(2026, 10, 17)) == "17th October 2026"
    assert format_ordinal_date(date(2026, 1, 1)) == "1st January 2026"
    assert format_ordinal_date(date(2025, 12, 22)) == "22nd December 2025"
