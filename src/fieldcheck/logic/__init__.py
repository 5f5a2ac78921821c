"""
Propositional formula language and evaluator over record fields.
"""

from .expr import (
    Atom,
    And,
    Or,
    Implies,
    Not,
    Iff,
    LogicExpression,
    Predicate,
    Equals,
    Present,
    Matches,
    InRange,
    atom,
    equals,
    is_yes,
    is_no,
    exists,
    is_absent,
    matches,
    in_range,
    and_,
    or_,
    implies,
    not_,
    iff,
    all_of,
    any_of,
)
from .evaluator import (
    ValidationRule,
    ValidationResult,
    evaluate,
    affected_fields,
    validate_record,
)

__all__ = [
    "Atom",
    "And",
    "Or",
    "Implies",
    "Not",
    "Iff",
    "LogicExpression",
    "Predicate",
    "Equals",
    "Present",
    "Matches",
    "InRange",
    "atom",
    "equals",
    "is_yes",
    "is_no",
    "exists",
    "is_absent",
    "matches",
    "in_range",
    "and_",
    "or_",
    "implies",
    "not_",
    "iff",
    "all_of",
    "any_of",
    "ValidationRule",
    "ValidationResult",
    "evaluate",
    "affected_fields",
    "validate_record",
]
