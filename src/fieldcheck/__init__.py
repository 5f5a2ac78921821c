"""
Validation of extracted document fields.

Two tiers are provided: propositional rules over field presence and shape
(:mod:`fieldcheck.logic`), and arithmetic/relational constraints discharged
with the Z3 SMT solver (:mod:`fieldcheck.checker`).
"""

__version__ = "0.1.0"

from .severity import Severity
from .logic import (
    ValidationRule,
    ValidationResult,
    evaluate,
    affected_fields,
    validate_record,
)
from .translator import VariableKind, TypeTranslator, parse_typed
from .solver import (
    SolverBackend,
    CheckResult,
    SolverResult,
    Z3Solver,
    SessionProvider,
    SolverSession,
)
from .constraints import (
    SMTConstraint,
    ConstraintBuilder,
    create_constraint,
    Comparison,
    FieldType,
    FieldRule,
    FieldSpec,
    compile_field_rules,
)
from .checker import (
    ConstraintChecker,
    ConstraintOutcome,
    SMTValidationResult,
    validate_with_constraints,
)
from .pipeline import RecordValidation, validate_record_all, validate_records
from .report import (
    format_validation_report,
    format_constraint_report,
    collect_field_messages,
)
from .config import FieldCheckSettings, load_settings
from .catalog import DEFAULT_CONTRACT_RULES, DEFAULT_SMT_CONSTRAINTS

__all__ = [
    "Severity",
    "ValidationRule",
    "ValidationResult",
    "evaluate",
    "affected_fields",
    "validate_record",
    "VariableKind",
    "TypeTranslator",
    "parse_typed",
    "SolverBackend",
    "CheckResult",
    "SolverResult",
    "Z3Solver",
    "SessionProvider",
    "SolverSession",
    "SMTConstraint",
    "ConstraintBuilder",
    "create_constraint",
    "Comparison",
    "FieldType",
    "FieldRule",
    "FieldSpec",
    "compile_field_rules",
    "ConstraintChecker",
    "ConstraintOutcome",
    "SMTValidationResult",
    "validate_with_constraints",
    "RecordValidation",
    "validate_record_all",
    "validate_records",
    "format_validation_report",
    "format_constraint_report",
    "collect_field_messages",
    "FieldCheckSettings",
    "load_settings",
    "DEFAULT_CONTRACT_RULES",
    "DEFAULT_SMT_CONSTRAINTS",
]
