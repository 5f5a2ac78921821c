"""
Pytest configuration and fixtures for fieldcheck tests.
"""
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from fieldcheck.config import FieldCheckSettings, SolverConfig  # noqa: E402
from fieldcheck.solver import SessionProvider  # noqa: E402


@pytest.fixture
def settings():
    """Settings independent of the environment."""
    return FieldCheckSettings(solver=SolverConfig(timeout_ms=5000))


@pytest.fixture
def provider():
    """A fresh solver session provider per test."""
    return SessionProvider()


@pytest.fixture
def compliant_contract():
    """A contract record that satisfies every catalog rule and constraint."""
    return {
        "col_term_length": "24 months",
        "col_notice_period": "60 days",
        "col_proc_auto_renewal": "Yes",
        "col_proc_cap_liability": "Yes",
        "col_liability_amount": "$1,000,000",
        "col_upfront_payment": "$1,000",
        "col_recurring_payment": "$500",
        "col_total_payment": "$13,000",
        "col_start_date": "2024-01-01",
        "col_end_date": "2026-01-01",
        "col_payment_wire": "Yes",
        "col_payment_check": "No",
        "col_payment_ach": "No",
        "col_ownership_pct": "25%",
        "col_proc_insurance": "Yes",
        "col_insurance_amount": "$2.5M",
    }
