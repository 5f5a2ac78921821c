"""Solver abstraction layer and the shared solver session."""

from .base import SolverBackend
from .result import CheckResult, SolverResult
from .z3_solver import Z3Solver
from .session import SessionFactory, SessionProvider, SolverSession

__all__ = [
    "SolverBackend",
    "CheckResult",
    "SolverResult",
    "Z3Solver",
    "SessionFactory",
    "SessionProvider",
    "SolverSession",
]
