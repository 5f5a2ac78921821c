"""
Constraint checking of records with the SMT solver.

For each constraint, the record's raw values are parsed into typed values and
asserted alongside the constraint's own assertions in an isolated solver scope:

* sat     - the observed values are consistent with the constraint (pass)
* unsat   - the observed values contradict it (violation)
* unknown - the solver gave up, e.g. on timeout (undecided)
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import structlog
import z3

from .config import FieldCheckSettings, load_settings
from .constraints import FieldSpec, SMTConstraint, compile_field_rules
from .record import field_values
from .severity import Severity
from .solver import SessionProvider, SolverResult, SolverSession
from .translator import TypedValue, TypeTranslator, parse_typed

logger = structlog.get_logger()


class ConstraintOutcome(str, Enum):
    SATISFIED = "satisfied"
    VIOLATED = "violated"
    UNDECIDED = "undecided"
    ERROR = "error"


@dataclass
class SMTValidationResult:
    """Outcome of checking one constraint against one record.

    Attributes:
        constraint_id: Id of the checked constraint
        constraint_name: Name of the checked constraint
        satisfied: True only for the SATISFIED outcome
        severity: Constraint severity for violations, ERROR when undecided,
            WARNING when the check itself failed
        message: Rendered one-line message
        affected_fields: Field ids the constraint declares variables for
        outcome: What the solver concluded
        counterexample: Solver model for a violation, when the backend can
            produce one after an unsat result (Z3 cannot)
        explanation: Text built from the observed values
        witness: Values that would satisfy the constraint, if requested
        solver_time_ms: Time spent in the satisfiability check
    """
    constraint_id: str
    constraint_name: str
    satisfied: bool
    severity: Severity
    message: str
    affected_fields: List[str] = field(default_factory=list)
    outcome: ConstraintOutcome = ConstraintOutcome.SATISFIED
    counterexample: Optional[Dict[str, Any]] = None
    explanation: Optional[str] = None
    witness: Optional[Dict[str, Any]] = None
    solver_time_ms: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "constraint_id": self.constraint_id,
            "constraint_name": self.constraint_name,
            "satisfied": self.satisfied,
            "severity": self.severity.value,
            "message": self.message,
            "affected_fields": list(self.affected_fields),
            "outcome": self.outcome.value,
        }
        if self.counterexample is not None:
            data["counterexample"] = dict(self.counterexample)
        if self.explanation is not None:
            data["explanation"] = self.explanation
        if self.witness is not None:
            data["witness"] = dict(self.witness)
        return data


Observed = Dict[str, Tuple[Optional[str], TypedValue]]


def format_observed(observed: Observed) -> str:
    """Render observed values as ``field='raw' -> parsed`` pairs."""
    parts = []
    for field_id, (raw, typed) in observed.items():
        raw_str = "<absent>" if raw is None else repr(raw)
        parts.append(f"{field_id}={raw_str} -> {typed}")
    return ", ".join(parts)


def explain_violation(constraint: SMTConstraint, observed: Observed) -> str:
    return f"Given values ({format_observed(observed)}) violate constraint: {constraint.description}"


class ConstraintChecker:
    """Checks records against SMT constraints using a shared solver session.

    Args:
        provider: Owner of the solver session. Several checkers may share
            one provider; each gets the same lazily-created session.
            Defaults to the process-wide provider, since all Z3 solvers
            share one context and must not check concurrently.
        settings: Solver settings (timeout, witness extraction); read from
            the environment when omitted
    """

    def __init__(self,
                 provider: Optional[SessionProvider] = None,
                 settings: Optional[FieldCheckSettings] = None):
        self.provider = provider or default_provider()
        self.settings = settings or load_settings()
        self.translator = TypeTranslator()

    async def check(self,
                    record: Mapping[str, Any],
                    constraints: Sequence[SMTConstraint],
                    field_specs: Optional[Sequence[FieldSpec]] = None,
                    timeout_ms: Optional[int] = None) -> List[SMTValidationResult]:
        """Check every constraint against a record.

        Constraints are checked one at a time in the given order, followed by
        constraints compiled from ``field_specs``. Results come back in the
        same order. A constraint that fails to build or check yields a
        warning result; the remaining constraints still run.

        Args:
            record: Field id -> value (string, None, or extraction cell)
            constraints: Constraints to check
            field_specs: Fields with user-declared relational rules
            timeout_ms: Per-check solver timeout, defaults to settings

        Returns:
            One SMTValidationResult per constraint
        """
        values = field_values(record)
        all_constraints = list(constraints)
        if field_specs:
            all_constraints.extend(compile_field_rules(field_specs))
        if timeout_ms is None:
            timeout_ms = self.settings.solver.timeout_ms

        session = await self.provider.get()
        results = []
        for constraint in all_constraints:
            results.append(await self._check_one(session, constraint, values, timeout_ms))

        failed = sum(1 for r in results if not r.satisfied)
        logger.debug("constraints_checked", constraints=len(results), failed=failed)
        return results

    async def _check_one(self,
                         session: SolverSession,
                         constraint: SMTConstraint,
                         values: Mapping[str, Optional[str]],
                         timeout_ms: Optional[int]) -> SMTValidationResult:
        log = logger.bind(constraint_id=constraint.id)
        try:
            async with session.scope():
                variables = self.translator.declare_all(constraint.variables)
                assertions = constraint.build(variables)
                if isinstance(assertions, z3.ExprRef):
                    assertions = [assertions]
                for assertion in assertions:
                    session.add(assertion)

                observed: Observed = {}
                with session.frame():
                    for field_id, kind in constraint.variables.items():
                        raw = values.get(field_id)
                        typed = parse_typed(raw, kind)
                        observed[field_id] = (raw, typed)
                        session.add(self.translator.bind_value(variables[field_id], typed, kind))
                    check = await session.check(timeout_ms)

                witness = None
                if (check.result == SolverResult.UNSAT
                        and self.settings.solver.witness_on_violation):
                    witness = await self._find_witness(session, constraint, timeout_ms)
        except Exception as exc:
            log.warning("constraint_check_failed", error=str(exc), exc_info=True)
            return SMTValidationResult(
                constraint_id=constraint.id,
                constraint_name=constraint.name,
                satisfied=False,
                severity=Severity.WARNING,
                message=f"⚠ Could not validate: {constraint.description}",
                affected_fields=constraint.affected_fields,
                outcome=ConstraintOutcome.ERROR,
                explanation=f"SMT solver error: {exc}",
            )

        if check.result == SolverResult.SAT:
            return SMTValidationResult(
                constraint_id=constraint.id,
                constraint_name=constraint.name,
                satisfied=True,
                severity=constraint.severity,
                message=f"✓ {constraint.description}",
                affected_fields=constraint.affected_fields,
                outcome=ConstraintOutcome.SATISFIED,
                solver_time_ms=check.solver_time_ms,
            )

        if check.result == SolverResult.UNSAT:
            log.info("constraint_violated", observed=format_observed(observed))
            return SMTValidationResult(
                constraint_id=constraint.id,
                constraint_name=constraint.name,
                satisfied=False,
                severity=constraint.severity,
                message=f"✗ {constraint.description}",
                affected_fields=constraint.affected_fields,
                outcome=ConstraintOutcome.VIOLATED,
                counterexample=_restrict(check.model, constraint),
                explanation=explain_violation(constraint, observed),
                witness=witness,
                solver_time_ms=check.solver_time_ms,
            )

        reason = check.reason_unknown or "unknown"
        log.warning("constraint_undecided", reason=reason, timeout_ms=timeout_ms)
        return SMTValidationResult(
            constraint_id=constraint.id,
            constraint_name=constraint.name,
            satisfied=False,
            severity=Severity.ERROR,
            message=f"? Could not decide: {constraint.description}",
            affected_fields=constraint.affected_fields,
            outcome=ConstraintOutcome.UNDECIDED,
            explanation=(f"Solver could not decide the constraint ({reason}) "
                         f"for values ({format_observed(observed)})"),
            solver_time_ms=check.solver_time_ms,
        )

    async def _find_witness(self,
                            session: SolverSession,
                            constraint: SMTConstraint,
                            timeout_ms: Optional[int]) -> Optional[Dict[str, Any]]:
        # Only the constraint's own assertions are left in the scope here
        check = await session.check(timeout_ms)
        if check.result != SolverResult.SAT:
            return None
        return _restrict(check.model, constraint)


def _restrict(model: Optional[Dict[str, Any]],
              constraint: SMTConstraint) -> Optional[Dict[str, Any]]:
    if model is None:
        return None
    return {field_id: model[field_id] for field_id in constraint.variables if field_id in model}


_default_provider: Optional[SessionProvider] = None


def default_provider() -> SessionProvider:
    """Process-wide provider used when callers do not pass their own."""
    global _default_provider
    if _default_provider is None:
        _default_provider = SessionProvider()
    return _default_provider


async def validate_with_constraints(record: Mapping[str, Any],
                                    constraints: Sequence[SMTConstraint],
                                    *,
                                    field_specs: Optional[Sequence[FieldSpec]] = None,
                                    provider: Optional[SessionProvider] = None,
                                    timeout_ms: Optional[int] = None,
                                    settings: Optional[FieldCheckSettings] = None) -> List[SMTValidationResult]:
    """Check a record against SMT constraints.

    Example:
        >>> results = await validate_with_constraints(
        ...     {"notice_period": "10 days"}, DEFAULT_SMT_CONSTRAINTS)
        >>> [r.message for r in results if not r.satisfied]
    """
    checker = ConstraintChecker(provider or default_provider(), settings)
    return await checker.check(record, constraints, field_specs, timeout_ms)
