"""
Propositional formula language over field predicates.

Expressions are immutable trees. Leaves are :class:`Atom` nodes binding a
predicate to a field id; inner nodes are the usual connectives.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Pattern, Union

from .values import leading_number


Predicate = Callable[[str], bool]


# ---------------------------------------------------------------------------
# Built-in predicates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Equals:
    """Case-sensitive exact match against a literal."""
    literal: str

    def __call__(self, value: str) -> bool:
        return value == self.literal


@dataclass(frozen=True)
class Present:
    """Value is non-empty."""

    def __call__(self, value: str) -> bool:
        return value != ""


@dataclass(frozen=True)
class Matches:
    """Regular-expression search against the raw string."""
    pattern: Pattern[str]

    def __call__(self, value: str) -> bool:
        return self.pattern.search(value) is not None


@dataclass(frozen=True)
class InRange:
    """Value starts with a number within ``[low, high]``.

    Non-numeric values fail the predicate rather than raising.
    """
    low: float
    high: float

    def __call__(self, value: str) -> bool:
        number = leading_number(value)
        if number is None:
            return False
        return self.low <= float(number) <= self.high


# ---------------------------------------------------------------------------
# Expression nodes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Atom:
    field_id: str
    predicate: Predicate


@dataclass(frozen=True)
class And:
    left: "LogicExpression"
    right: "LogicExpression"


@dataclass(frozen=True)
class Or:
    left: "LogicExpression"
    right: "LogicExpression"


@dataclass(frozen=True)
class Implies:
    premise: "LogicExpression"
    conclusion: "LogicExpression"


@dataclass(frozen=True)
class Not:
    operand: "LogicExpression"


@dataclass(frozen=True)
class Iff:
    left: "LogicExpression"
    right: "LogicExpression"


LogicExpression = Union[Atom, And, Or, Implies, Not, Iff]


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------

def atom(field_id: str, predicate: Predicate) -> Atom:
    """Bind an arbitrary predicate to a field.

    The predicate must be total: it is never called with an absent value, but
    any exception it raises propagates out of evaluation.
    """
    return Atom(field_id, predicate)


def equals(field_id: str, literal: str) -> Atom:
    return Atom(field_id, Equals(literal))


def is_yes(field_id: str) -> Atom:
    return equals(field_id, "Yes")


def is_no(field_id: str) -> Atom:
    return equals(field_id, "No")


def exists(field_id: str) -> Atom:
    """Field is present and non-empty."""
    return Atom(field_id, Present())


def is_absent(field_id: str) -> Not:
    """Field is missing, None or empty.

    Built as ``Not(exists(field_id))`` since an atom over a missing field is
    always false.
    """
    return Not(exists(field_id))


def matches(field_id: str, pattern: Union[str, Pattern[str]]) -> Atom:
    if isinstance(pattern, str):
        pattern = re.compile(pattern)
    return Atom(field_id, Matches(pattern))


def in_range(field_id: str, low: float, high: float) -> Atom:
    return Atom(field_id, InRange(float(low), float(high)))


def and_(left: LogicExpression, right: LogicExpression) -> And:
    return And(left, right)


def or_(left: LogicExpression, right: LogicExpression) -> Or:
    return Or(left, right)


def implies(premise: LogicExpression, conclusion: LogicExpression) -> Implies:
    return Implies(premise, conclusion)


def not_(operand: LogicExpression) -> Not:
    return Not(operand)


def iff(left: LogicExpression, right: LogicExpression) -> Iff:
    return Iff(left, right)


def all_of(first: LogicExpression, *rest: LogicExpression) -> LogicExpression:
    """Left-folded conjunction of one or more expressions."""
    expr = first
    for operand in rest:
        expr = And(expr, operand)
    return expr


def any_of(first: LogicExpression, *rest: LogicExpression) -> LogicExpression:
    """Left-folded disjunction of one or more expressions."""
    expr = first
    for operand in rest:
        expr = Or(expr, operand)
    return expr
