"""
Reference propositional rules for commercial contracts.
"""
from ..logic import ValidationRule, exists, implies, in_range, is_no, is_yes
from ..severity import Severity


DEFAULT_CONTRACT_RULES = [
    ValidationRule(
        id="rule_auto_renewal_requires_term",
        name="Auto-Renewal → Term Length",
        description="If auto-renewal exists, term length must be specified",
        formula=implies(is_yes("col_proc_auto_renewal"), exists("col_term_length")),
        severity=Severity.ERROR,
        auto_fix=True,
    ),
    ValidationRule(
        id="rule_termination_requires_notice",
        name="Termination → Notice Period",
        description="If termination for convenience exists, notice period must be specified",
        formula=implies(is_yes("col_proc_term_convenience"), exists("col_notice_period")),
        severity=Severity.ERROR,
        auto_fix=True,
    ),
    ValidationRule(
        id="rule_liability_cap_requires_amount",
        name="Liability Cap → Amount",
        description="If liability is capped, the cap amount must be specified",
        formula=implies(is_yes("col_proc_cap_liability"), exists("col_liability_amount")),
        severity=Severity.WARNING,
        auto_fix=True,
    ),
    ValidationRule(
        id="rule_mutual_exclusion_unlimited_cap",
        name="Unlimited Liability ↔ ¬Capped",
        description="Cannot have both unlimited liability and a liability cap",
        formula=implies(is_yes("col_unlimited_liability"), is_no("col_proc_cap_liability")),
        severity=Severity.ERROR,
    ),
    ValidationRule(
        id="rule_insurance_with_cap",
        name="Capped Liability → Insurance",
        description="If liability is capped, insurance requirement should be specified",
        formula=implies(is_yes("col_proc_cap_liability"), exists("col_proc_insurance")),
        severity=Severity.INFO,
    ),
    ValidationRule(
        id="rule_notice_period_range",
        name="Notice Period Range",
        description="Notice period must be between 30 and 180 days",
        formula=implies(exists("col_notice_period"), in_range("col_notice_period", 30, 180)),
        severity=Severity.WARNING,
    ),
]
