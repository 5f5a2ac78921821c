"""
Abstract base interface for SMT solver backends.
"""
from typing import Protocol, Any, Optional, Dict
from .result import CheckResult


class SolverBackend(Protocol):
    """Protocol defining the interface for SMT solver backends.

    Constraint checks rely on push/pop for isolation: everything added after a
    push must be gone after the matching pop.
    """

    def add_constraint(self, constraint: Any) -> None:
        """Add a constraint to the current assertion scope."""
        ...

    def check_sat(self, timeout_ms: Optional[int] = None) -> CheckResult:
        """Check satisfiability of the asserted constraints.

        Args:
            timeout_ms: Upper bound on solving time; exceeding it yields
                an UNKNOWN result

        Returns:
            CheckResult with sat/unsat/unknown status and optional model
        """
        ...

    def get_model(self) -> Optional[Dict[str, Any]]:
        """Variable assignments from the last check, if the backend has one."""
        ...

    def push(self) -> None:
        """Push a new assertion scope."""
        ...

    def pop(self) -> None:
        """Pop the most recent assertion scope."""
        ...

    def reset(self) -> None:
        """Reset the solver state, clearing all constraints."""
        ...
