"""
Value-reading conventions shared by predicates and the typed translation layer.
"""
import re
from decimal import Decimal, InvalidOperation
from typing import Optional


# Leading decimal number, as read by a lenient float parser: "90 days" -> 90
LEADING_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

AFFIRMATIVE = frozenset({"yes", "true", "1"})


def leading_number(text: str) -> Optional[Decimal]:
    """Parse the decimal number at the start of ``text``.

    Returns None when the (whitespace-trimmed) text does not start with a
    number.
    """
    match = LEADING_NUMBER_RE.match(text.strip())
    if match is None:
        return None
    try:
        number = Decimal(match.group(0))
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


def is_affirmative(text: str) -> bool:
    return text.strip().lower() in AFFIRMATIVE
