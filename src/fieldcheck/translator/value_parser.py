"""
Lossy conversion of extracted strings into typed values.

Extracted values are free text ("$10,000", "24 months", "Yes"). Every parser
here is total: input that cannot be read falls back to a documented default
(``False`` / ``0`` / ``0.0``) instead of raising. Callers that need to tell
"missing" apart from "zero" must check value formats before validation.
"""
import math
import re
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from ..logic.values import is_affirmative, leading_number


TypedValue = Union[bool, int, float]


class VariableKind(str, Enum):
    """Solver-side type a field is translated to.

    STRING fields are not modelled as strings: they become a boolean that is
    true when the field has a value, for use as guards.
    """
    BOOL = "bool"
    INT = "int"
    REAL = "real"
    STRING = "string"
    DATE = "date"


_DIGITS_RE = re.compile(r"\d+")
# Python refuses int <-> str conversion past 4300 digits
_MAX_INT_DIGITS = 4000
_STRIP_RE = re.compile(r"[,\s$€£¥₹]")

_EPOCH_ORDINAL = date(1970, 1, 1).toordinal()

_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d.%m.%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def parse_bool(value: Optional[str]) -> bool:
    """True only for "yes", "true" or "1" (any case); False otherwise.

    There is no unknown state: anything that is not clearly affirmative,
    including an absent value, reads as False.
    """
    if not value:
        return False
    return is_affirmative(value)


def parse_int(value: Optional[str]) -> int:
    """First run of decimal digits, or 0 when there is none.

    "24 months" -> 24, "-5" -> 5 (the sign is dropped), "n/a" -> 0. A digit
    run too long to convert also reads as 0.
    """
    if not value:
        return 0
    match = _DIGITS_RE.search(value)
    if not match or len(match.group(0)) > _MAX_INT_DIGITS:
        return 0
    return int(match.group(0))


def parse_real(value: Optional[str]) -> float:
    """Parse amounts such as "$1,000", "1.5M", "250k" or "15%".

    Thousands separators, whitespace and currency symbols are removed. A
    trailing M/K scales by a million/thousand, a trailing % divides by 100.
    Unparseable input yields 0.0.
    """
    if not value:
        return 0.0
    text = _STRIP_RE.sub("", value)

    scale = Decimal(1)
    if text.endswith(("M", "m")):
        scale = Decimal(1_000_000)
        text = text[:-1]
    elif text.endswith(("K", "k")):
        scale = Decimal(1_000)
        text = text[:-1]
    elif text.endswith("%"):
        scale = Decimal(1) / Decimal(100)
        text = text[:-1]

    number = leading_number(text)
    if number is None:
        return 0.0
    try:
        result = float(number * scale)
    except ArithmeticError:
        # Decimal overflow on exponents beyond the context limits
        return 0.0
    return result if math.isfinite(result) else 0.0


def parse_exists(value: Optional[str]) -> bool:
    """True when the raw value is present and non-empty."""
    return value is not None and value != ""


def parse_date(value: Optional[str]) -> int:
    """Days since 1970-01-01 for common date spellings, 0 if unreadable."""
    if not value:
        return 0
    text = " ".join(value.strip().split())
    # Drop a time part on ISO timestamps
    if len(text) > 10 and text[4:5] == "-" and text[10:11] in ("T", " "):
        text = text[:10]
    for fmt in _DATE_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt).date()
        except ValueError:
            continue
        return parsed.toordinal() - _EPOCH_ORDINAL
    return 0


_PARSERS = {
    VariableKind.BOOL: parse_bool,
    VariableKind.INT: parse_int,
    VariableKind.REAL: parse_real,
    VariableKind.STRING: parse_exists,
    VariableKind.DATE: parse_date,
}


def parse_typed(value: Optional[str], kind: Union[VariableKind, str]) -> TypedValue:
    """Convert a raw field value into the typed value for ``kind``.

    Args:
        value: Raw extracted string, or None when the field is absent
        kind: Target variable kind (a VariableKind or its string value)

    Returns:
        bool for BOOL/STRING, int for INT/DATE, float for REAL

    Raises:
        ValueError: If ``kind`` is not a known variable kind
    """
    return _PARSERS[VariableKind(kind)](value)
