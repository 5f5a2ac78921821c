"""
Reference rule and constraint catalogs.

Callers may use these as-is, extend them, or replace them entirely.
"""

from .contract_rules import DEFAULT_CONTRACT_RULES
from .contract_constraints import DEFAULT_SMT_CONSTRAINTS, PAYMENT_TOLERANCE

__all__ = [
    "DEFAULT_CONTRACT_RULES",
    "DEFAULT_SMT_CONSTRAINTS",
    "PAYMENT_TOLERANCE",
]
