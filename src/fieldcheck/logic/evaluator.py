"""
Evaluation of logic expressions against a record and rule-level validation.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import structlog

from ..record import field_values
from ..severity import Severity
from .expr import And, Atom, Iff, Implies, LogicExpression, Not, Or

logger = structlog.get_logger()


@dataclass(frozen=True)
class ValidationRule:
    """A named propositional rule over record fields.

    Attributes:
        id: Unique rule identifier
        name: Short human-readable name
        description: Sentence used in pass/fail messages
        formula: Expression that must hold for the record
        severity: Severity reported when the formula does not hold
        auto_fix: Advisory flag; downstream may attempt re-extraction.
            Never acted upon here.
    """
    id: str
    name: str
    description: str
    formula: LogicExpression
    severity: Severity = Severity.ERROR
    auto_fix: bool = False

    def __post_init__(self):
        object.__setattr__(self, "severity", Severity(self.severity))


@dataclass
class ValidationResult:
    """Outcome of evaluating one rule against one record."""
    rule_id: str
    rule_name: str
    satisfied: bool
    severity: Severity
    message: str
    affected_fields: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "rule_name": self.rule_name,
            "satisfied": self.satisfied,
            "severity": self.severity.value,
            "message": self.message,
            "affected_fields": list(self.affected_fields),
        }


def evaluate(expr: LogicExpression, record: Mapping[str, Any]) -> bool:
    """Evaluate an expression against a record.

    An atom over an absent field (missing key or None) is False and its
    predicate is not called. Both operands of every connective are
    evaluated.
    """
    return _evaluate(expr, field_values(record))


def _evaluate(expr: LogicExpression, values: Mapping[str, Optional[str]]) -> bool:
    if isinstance(expr, Atom):
        value = values.get(expr.field_id)
        if value is None:
            return False
        return bool(expr.predicate(value))
    if isinstance(expr, And):
        left = _evaluate(expr.left, values)
        right = _evaluate(expr.right, values)
        return left and right
    if isinstance(expr, Or):
        left = _evaluate(expr.left, values)
        right = _evaluate(expr.right, values)
        return left or right
    if isinstance(expr, Implies):
        premise = _evaluate(expr.premise, values)
        conclusion = _evaluate(expr.conclusion, values)
        return not premise or conclusion
    if isinstance(expr, Not):
        return not _evaluate(expr.operand, values)
    if isinstance(expr, Iff):
        return _evaluate(expr.left, values) == _evaluate(expr.right, values)
    raise TypeError(f"Not a logic expression: {type(expr).__name__}")


def affected_fields(expr: LogicExpression) -> List[str]:
    """Field ids referenced by atoms in ``expr``, in first-seen order."""
    seen: Dict[str, None] = {}
    _collect_fields(expr, seen)
    return list(seen)


def _collect_fields(expr: LogicExpression, seen: Dict[str, None]) -> None:
    if isinstance(expr, Atom):
        seen.setdefault(expr.field_id, None)
    elif isinstance(expr, (And, Or, Iff)):
        _collect_fields(expr.left, seen)
        _collect_fields(expr.right, seen)
    elif isinstance(expr, Implies):
        _collect_fields(expr.premise, seen)
        _collect_fields(expr.conclusion, seen)
    elif isinstance(expr, Not):
        _collect_fields(expr.operand, seen)
    else:
        raise TypeError(f"Not a logic expression: {type(expr).__name__}")


def validate_record(record: Mapping[str, Any],
                    rules: Sequence[ValidationRule]) -> List[ValidationResult]:
    """Evaluate every rule against a record.

    All rules are evaluated in order; there is no fail-fast. Exceptions raised
    by predicates propagate to the caller.
    """
    values = field_values(record)
    results = []

    for rule in rules:
        satisfied = _evaluate(rule.formula, values)
        mark = "✓" if satisfied else "✗"
        results.append(ValidationResult(
            rule_id=rule.id,
            rule_name=rule.name,
            satisfied=satisfied,
            severity=rule.severity,
            message=f"{mark} {rule.description}",
            affected_fields=affected_fields(rule.formula),
        ))

    failed = sum(1 for r in results if not r.satisfied)
    logger.debug("logic_rules_evaluated", rules=len(results), failed=failed)
    return results
