"""
Solver check result types.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


class SolverResult(Enum):
    """Result from SMT solver check."""
    SAT = "sat"
    UNSAT = "unsat"
    UNKNOWN = "unknown"


@dataclass
class CheckResult:
    """Result of one satisfiability check.

    Attributes:
        result: Raw solver result (SAT/UNSAT/UNKNOWN)
        model: Variable assignments, when the backend can provide one
        reason_unknown: Solver's explanation for an UNKNOWN result
        solver_time_ms: Time taken by solver in milliseconds
        solver_name: Name of the solver backend used
    """
    result: SolverResult
    model: Optional[Dict[str, Any]] = None
    reason_unknown: Optional[str] = None
    solver_time_ms: float = 0.0
    solver_name: str = "unknown"

    @property
    def satisfiable(self) -> bool:
        return self.result == SolverResult.SAT

    def __str__(self) -> str:
        if self.result == SolverResult.UNKNOWN:
            reason = f": {self.reason_unknown}" if self.reason_unknown else ""
            return f"Unknown{reason} ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
        model_str = ", ".join(f"{k}={v}" for k, v in (self.model or {}).items())
        return f"{self.result.value} [{model_str}] ({self.solver_name}, {self.solver_time_ms:.2f}ms)"
