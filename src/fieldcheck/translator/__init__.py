"""
Translation of extracted field values into typed SMT values.
"""

from .value_parser import (
    TypedValue,
    VariableKind,
    parse_bool,
    parse_int,
    parse_real,
    parse_exists,
    parse_date,
    parse_typed,
)
from .type_translator import TypeTranslator

__all__ = [
    "TypedValue",
    "VariableKind",
    "parse_bool",
    "parse_int",
    "parse_real",
    "parse_exists",
    "parse_date",
    "parse_typed",
    "TypeTranslator",
]
