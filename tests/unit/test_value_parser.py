"""
Tests for lossy value parsing.
"""
import pytest
from fieldcheck.translator import (
    VariableKind,
    parse_bool,
    parse_date,
    parse_int,
    parse_real,
    parse_typed,
)


@pytest.mark.parametrize("raw,expected", [
    ("Yes", True),
    ("yes", True),
    (" TRUE ", True),
    ("1", True),
    ("no", False),
    ("maybe", False),
    ("", False),
    (None, False),
])
def test_parse_bool(raw, expected):
    assert parse_typed(raw, VariableKind.BOOL) is expected


@pytest.mark.parametrize("raw,expected", [
    ("24", 24),
    ("24 months", 24),
    ("Term: 36 months, renewable", 36),
    ("-5", 5),
    ("n/a", 0),
    ("", 0),
    (None, 0),
])
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("1000", 1000.0),
    ("$10,000", 10000.0),
    ("$1,000,000.50", 1000000.5),
    ("1.5M", 1500000.0),
    ("250k", 250000.0),
    ("$2.3M", 2300000.0),
    ("15%", 0.15),
    ("7.5 %", 0.075),
    ("€ 12 500", 12500.0),
    ("-42.5", -42.5),
    ("500 per month", 500.0),
    ("unlimited", 0.0),
    ("M", 0.0),
    ("", 0.0),
    (None, 0.0),
])
def test_parse_real(raw, expected):
    assert parse_real(raw) == expected


def test_parse_real_is_always_finite():
    assert parse_real("1e999") == 0.0
    assert parse_real("nan") == 0.0


def test_parse_exists():
    assert parse_typed("Delaware", VariableKind.STRING) is True
    assert parse_typed("", VariableKind.STRING) is False
    assert parse_typed(None, VariableKind.STRING) is False


@pytest.mark.parametrize("raw", [
    "2024-01-15",
    "2024-01-15T09:30:00",
    "01/15/2024",
    "15.01.2024",
    "January 15, 2024",
    "Jan 15, 2024",
    "15 January 2024",
])
def test_parse_date_formats(raw):
    # 2024-01-15 is 19737 days after 1970-01-01
    assert parse_date(raw) == 19737


def test_parse_date_ordering_and_default():
    assert parse_date("2024-01-01") < parse_date("2024-12-31")
    assert parse_date("1970-01-01") == 0
    assert parse_date("sometime next year") == 0
    assert parse_date(None) == 0


def test_parse_typed_accepts_kind_strings():
    assert parse_typed("24 months", "int") == 24
    assert parse_typed("$5", "real") == 5.0


def test_parse_typed_unknown_kind():
    with pytest.raises(ValueError):
        parse_typed("1", "complex")


def test_parse_bool_direct():
    assert parse_bool("Yes") is True
    assert parse_bool("No") is False


def test_parse_int_overlong_digit_run():
    """Digit runs too long to convert read as the default."""
    assert parse_int("9" * 5000 + " months") == 0
    assert parse_typed("9" * 5000 + " months", VariableKind.INT) == 0
    assert parse_int("9" * 4000) == int("9" * 4000)


def test_parse_real_exponent_overflow():
    assert parse_real("1e9999999999") == 0.0
    assert parse_real("1e9999999999%") == 0.0
