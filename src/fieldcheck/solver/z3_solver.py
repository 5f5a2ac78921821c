"""
Z3 SMT solver backend implementation.
"""
import time
from typing import Any, Optional, Dict

import z3

from .result import CheckResult, SolverResult

# Z3's own default: effectively no timeout
_NO_TIMEOUT_MS = 4294967295


class Z3Solver:
    """Z3 solver backend wrapper.

    Provides a clean interface to Z3 solver functionality.
    """

    name = "z3"

    def __init__(self):
        """Initialize Z3 solver instance."""
        self.solver = z3.Solver()

    def add_constraint(self, constraint: Any) -> None:
        """Add a Z3 constraint to the solver.

        Args:
            constraint: Z3 boolean expression
        """
        self.solver.add(constraint)

    def check_sat(self, timeout_ms: Optional[int] = None) -> CheckResult:
        """Check satisfiability of constraints.

        Args:
            timeout_ms: Solver timeout in milliseconds, None for no limit

        Returns:
            CheckResult with status, and a model when one is available
        """
        self.solver.set("timeout", int(timeout_ms) if timeout_ms else _NO_TIMEOUT_MS)

        start_time = time.time()
        result = self.solver.check()
        elapsed_ms = (time.time() - start_time) * 1000

        if result == z3.sat:
            status = SolverResult.SAT
        elif result == z3.unsat:
            status = SolverResult.UNSAT
        else:
            status = SolverResult.UNKNOWN

        reason = self.solver.reason_unknown() if status == SolverResult.UNKNOWN else None
        return CheckResult(
            result=status,
            model=self.get_model() if status != SolverResult.UNKNOWN else None,
            reason_unknown=reason,
            solver_time_ms=elapsed_ms,
            solver_name=self.name,
        )

    def get_model(self) -> Optional[Dict[str, Any]]:
        """Extract the model of the last check.

        Z3 only has a model after a sat result; in every other case this
        returns None.

        Returns:
            Dictionary mapping variable names to their values
        """
        try:
            model = self.solver.model()
        except z3.Z3Exception:
            return None

        result = {}
        for decl in model:
            result[decl.name()] = to_python(model[decl])
        return result

    def push(self) -> None:
        """Push a new assertion scope."""
        self.solver.push()

    def pop(self) -> None:
        """Pop the most recent assertion scope."""
        self.solver.pop()

    def reset(self) -> None:
        """Reset solver state."""
        self.solver.reset()

    def num_scopes(self) -> int:
        return self.solver.num_scopes()


def to_python(value: Any) -> Any:
    """Convert a Z3 model value to a Python value.

    Integers become int, rationals float, booleans bool. Anything else
    (e.g. algebraic numbers) is returned as its Z3 text.
    """
    if z3.is_true(value):
        return True
    if z3.is_false(value):
        return False
    if z3.is_int_value(value):
        return value.as_long()
    if z3.is_rational_value(value):
        fraction = value.as_fraction()
        return float(fraction)
    return str(value)
