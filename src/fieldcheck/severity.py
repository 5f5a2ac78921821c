"""
Severity levels shared by logic rules and SMT constraints.
"""
from enum import Enum


class Severity(str, Enum):
    """How seriously a failed rule or constraint should be treated."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
