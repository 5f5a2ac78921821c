"""
Reference SMT constraints for commercial contracts.

Absent or unreadable values take the parser defaults (0 / False), so a
constraint over a missing field is checked against those defaults.
"""
import z3

from ..constraints import SMTConstraint
from ..severity import Severity
from ..translator import VariableKind

BOOL = VariableKind.BOOL
INT = VariableKind.INT
REAL = VariableKind.REAL
DATE = VariableKind.DATE

# Relative tolerance on derived totals, to absorb rounding in extracted figures
PAYMENT_TOLERANCE = 0.01


def _term_length_bounds(v):
    term = v["col_term_length"]
    return [term >= 1, term <= 60]


def _notice_period_range(v):
    notice = v["col_notice_period"]
    return [notice >= 30, notice <= 180]


def _auto_renewal_requires_term(v):
    return [z3.Implies(v["col_proc_auto_renewal"], v["col_term_length"] > 0)]


def _liability_cap_amount(v):
    return [z3.Implies(v["col_proc_cap_liability"], v["col_liability_amount"] > 0)]


def _payment_terms_arithmetic(v):
    upfront = v["col_upfront_payment"]
    recurring = v["col_recurring_payment"]
    term = z3.ToReal(v["col_term_length"])
    total = v["col_total_payment"]

    calculated = upfront + recurring * term
    tolerance = total * PAYMENT_TOLERANCE
    return [
        total >= calculated - tolerance,
        total <= calculated + tolerance,
    ]


def _date_ordering(v):
    return [v["col_start_date"] < v["col_end_date"]]


def _payment_method_exactly_one(v):
    wire = v["col_payment_wire"]
    check = v["col_payment_check"]
    ach = v["col_payment_ach"]
    return [
        z3.Or(wire, check, ach),
        z3.Not(z3.And(wire, check)),
        z3.Not(z3.And(wire, ach)),
        z3.Not(z3.And(check, ach)),
    ]


def _ownership_percentage(v):
    pct = v["col_ownership_pct"]
    # Percentages are parsed to fractions: "25%" -> 0.25
    return [pct >= 0, pct <= 1]


def _insurance_minimum(v):
    return [z3.Implies(
        v["col_proc_insurance"],
        v["col_insurance_amount"] >= v["col_liability_amount"] * 2,
    )]


def _notice_vs_term(v):
    # Term in months, notice in days
    max_notice = v["col_term_length"] * 30 / 2
    return [v["col_notice_period"] <= max_notice]


DEFAULT_SMT_CONSTRAINTS = [
    SMTConstraint(
        id="smt_term_length_bounds",
        name="Term Length Range",
        description="Contract term must be between 1 and 60 months",
        severity=Severity.ERROR,
        variables={"col_term_length": INT},
        build=_term_length_bounds,
    ),
    SMTConstraint(
        id="smt_notice_period_range",
        name="Notice Period Range",
        description="Notice period must be between 30 and 180 days",
        severity=Severity.WARNING,
        variables={"col_notice_period": INT},
        build=_notice_period_range,
    ),
    SMTConstraint(
        id="smt_auto_renewal_requires_term",
        name="Auto-Renewal → Term Length",
        description="If auto-renewal exists, term length must be positive",
        severity=Severity.ERROR,
        variables={"col_proc_auto_renewal": BOOL, "col_term_length": INT},
        build=_auto_renewal_requires_term,
    ),
    SMTConstraint(
        id="smt_liability_cap_amount",
        name="Liability Cap → Positive Amount",
        description="If liability is capped, cap amount must be positive",
        severity=Severity.ERROR,
        variables={"col_proc_cap_liability": BOOL, "col_liability_amount": REAL},
        build=_liability_cap_amount,
    ),
    SMTConstraint(
        id="smt_payment_terms_arithmetic",
        name="Payment Terms Consistency",
        description="Total payment equals upfront + recurring * term length",
        severity=Severity.WARNING,
        variables={
            "col_upfront_payment": REAL,
            "col_recurring_payment": REAL,
            "col_term_length": INT,
            "col_total_payment": REAL,
        },
        build=_payment_terms_arithmetic,
    ),
    SMTConstraint(
        id="smt_date_ordering",
        name="Start Date < End Date",
        description="Contract start date must be before end date",
        severity=Severity.ERROR,
        variables={"col_start_date": DATE, "col_end_date": DATE},
        build=_date_ordering,
    ),
    SMTConstraint(
        id="smt_payment_method_xor",
        name="Payment Method XOR",
        description="Exactly one payment method must be selected",
        severity=Severity.ERROR,
        variables={"col_payment_wire": BOOL, "col_payment_check": BOOL, "col_payment_ach": BOOL},
        build=_payment_method_exactly_one,
    ),
    SMTConstraint(
        id="smt_percentage_bounds",
        name="Ownership Percentage",
        description="Ownership percentage must be between 0% and 100%",
        severity=Severity.ERROR,
        variables={"col_ownership_pct": REAL},
        build=_ownership_percentage,
    ),
    SMTConstraint(
        id="smt_insurance_minimum",
        name="Insurance Coverage Minimum",
        description="Insurance coverage must be at least 2x liability cap",
        severity=Severity.WARNING,
        variables={
            "col_proc_insurance": BOOL,
            "col_liability_amount": REAL,
            "col_insurance_amount": REAL,
        },
        build=_insurance_minimum,
    ),
    SMTConstraint(
        id="smt_notice_vs_term",
        name="Notice Period vs Term Length",
        description="Notice period must not exceed 50% of contract term",
        severity=Severity.WARNING,
        variables={"col_notice_period": INT, "col_term_length": INT},
        build=_notice_vs_term,
    ),
]
