"""
SMT constraint definitions, a fluent builder, and compilation of simple
per-field relational rules into constraints.
"""
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from .severity import Severity
from .translator import VariableKind, parse_real

AssertionBuilder = Callable[[Dict[str, Any]], List[Any]]


@dataclass(frozen=True)
class SMTConstraint:
    """An arithmetic/relational constraint checked with the SMT solver.

    Attributes:
        id: Unique constraint identifier
        name: Short human-readable name
        description: Sentence used in pass/fail messages
        severity: Severity reported when the constraint is violated
        variables: Field id -> kind of solver variable to declare for it
        build: Receives the declared Z3 variables keyed by field id and
            returns the list of Z3 assertions expressing the constraint.
            Any numeric tolerance belongs in these assertions.
    """
    id: str
    name: str
    description: str
    severity: Severity
    variables: Mapping[str, VariableKind]
    build: AssertionBuilder

    def __post_init__(self):
        object.__setattr__(self, "severity", Severity(self.severity))
        object.__setattr__(
            self, "variables",
            {field_id: VariableKind(kind) for field_id, kind in self.variables.items()})

    @property
    def affected_fields(self) -> List[str]:
        return list(self.variables)


class ConstraintBuilder:
    """Fluent construction of :class:`SMTConstraint` objects.

    Example:
        >>> constraint = (create_constraint()
        ...     .with_id("warranty_bounds")
        ...     .with_name("Warranty Period")
        ...     .with_description("Warranty must be between 30 and 1825 days")
        ...     .with_severity("warning")
        ...     .with_variables({"warranty_days": "int"})
        ...     .with_build(lambda v: [v["warranty_days"] >= 30,
        ...                            v["warranty_days"] <= 1825])
        ...     .build())
    """

    def __init__(self):
        self._fields: Dict[str, Any] = {}

    def with_id(self, id: str) -> "ConstraintBuilder":
        self._fields["id"] = id
        return self

    def with_name(self, name: str) -> "ConstraintBuilder":
        self._fields["name"] = name
        return self

    def with_description(self, description: str) -> "ConstraintBuilder":
        self._fields["description"] = description
        return self

    def with_severity(self, severity: Union[Severity, str]) -> "ConstraintBuilder":
        self._fields["severity"] = Severity(severity)
        return self

    def with_variables(self, variables: Mapping[str, Union[VariableKind, str]]) -> "ConstraintBuilder":
        self._fields["variables"] = dict(variables)
        return self

    def with_build(self, build: AssertionBuilder) -> "ConstraintBuilder":
        self._fields["build"] = build
        return self

    def build(self) -> SMTConstraint:
        missing = [name for name in ("id", "name", "description", "severity", "variables", "build")
                   if not self._fields.get(name)]
        if missing:
            raise ValueError(f"SMT constraint is incomplete, missing: {', '.join(missing)}")
        return SMTConstraint(**self._fields)


def create_constraint() -> ConstraintBuilder:
    return ConstraintBuilder()


# ---------------------------------------------------------------------------
# Dynamic per-field rules
# ---------------------------------------------------------------------------

class Comparison(str, Enum):
    GT = "gt"
    LT = "lt"
    EQ = "eq"
    NEQ = "neq"
    GE = "ge"
    LE = "le"


_OPERATORS = {
    Comparison.GT: operator.gt,
    Comparison.LT: operator.lt,
    Comparison.EQ: operator.eq,
    Comparison.NEQ: operator.ne,
    Comparison.GE: operator.ge,
    Comparison.LE: operator.le,
}


class FieldType(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    LIST = "list"


@dataclass(frozen=True)
class FieldRule:
    """A user-declared ``<field> <operator> <threshold>`` rule."""
    id: str
    operator: Comparison
    value: Union[str, float, int]
    description: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "operator", Comparison(self.operator))


@dataclass(frozen=True)
class FieldSpec:
    """A record field as declared by the user, with its simple rules."""
    id: str
    name: str
    type: FieldType = FieldType.TEXT
    rules: Sequence[FieldRule] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "type", FieldType(self.type))


def parse_threshold(value: Union[str, float, int]) -> float:
    """Read a rule threshold the way field values are read ($, commas, K/M, %).

    Raises:
        ValueError: The threshold contains no number at all
    """
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    text = str(value).strip()
    if not any(ch.isdigit() for ch in text):
        raise ValueError(f"Rule threshold is not a number: {value!r}")
    return parse_real(text)


def _relational_build(field_id: str, rule: FieldRule) -> AssertionBuilder:
    compare = _OPERATORS[rule.operator]

    def build(variables: Dict[str, Any]) -> List[Any]:
        # Parsed here so a bad threshold is reported against this constraint
        threshold = parse_threshold(rule.value)
        return [compare(variables[field_id], threshold)]

    return build


def compile_field_rules(fields: Sequence[FieldSpec]) -> List[SMTConstraint]:
    """Turn per-field relational rules into single-variable constraints.

    Only number fields are compiled; their values are declared as reals.
    """
    constraints = []
    for spec in fields:
        if spec.type != FieldType.NUMBER:
            continue
        for rule in spec.rules:
            constraints.append(SMTConstraint(
                id=f"dynamic_{spec.id}_{rule.id}",
                name=f"{spec.name} Validation",
                description=rule.description or f"{spec.name} check",
                severity=Severity.ERROR,
                variables={spec.id: VariableKind.REAL},
                build=_relational_build(spec.id, rule),
            ))
    return constraints
