"""
Tests for the contract rule and constraint catalog.
"""
import pytest

from fieldcheck.catalog import DEFAULT_CONTRACT_RULES, DEFAULT_SMT_CONSTRAINTS
from fieldcheck.checker import ConstraintChecker
from fieldcheck.logic import validate_record


def test_catalog_ids_are_unique():
    rule_ids = [r.id for r in DEFAULT_CONTRACT_RULES]
    constraint_ids = [c.id for c in DEFAULT_SMT_CONSTRAINTS]

    assert len(rule_ids) == len(set(rule_ids))
    assert len(constraint_ids) == len(set(constraint_ids))


def test_rules_pass_for_compliant_contract(compliant_contract):
    results = validate_record(compliant_contract, DEFAULT_CONTRACT_RULES)

    assert all(r.satisfied for r in results)


def test_rules_flag_missing_term_and_conflicting_caps():
    record = {
        "col_proc_auto_renewal": "Yes",
        "col_unlimited_liability": "Yes",
        "col_proc_cap_liability": "Yes",
        "col_liability_amount": "$5,000",
    }

    failed = {r.rule_id for r in validate_record(record, DEFAULT_CONTRACT_RULES)
              if not r.satisfied}

    assert failed == {
        "rule_auto_renewal_requires_term",
        "rule_mutual_exclusion_unlimited_cap",
        "rule_insurance_with_cap",
    }


@pytest.mark.asyncio
async def test_constraints_pass_for_compliant_contract(provider, settings, compliant_contract):
    checker = ConstraintChecker(provider, settings)

    results = await checker.check(compliant_contract, DEFAULT_SMT_CONSTRAINTS)

    assert [r.constraint_id for r in results if not r.satisfied] == []


@pytest.mark.asyncio
async def test_empty_record_checked_against_defaults(provider, settings):
    checker = ConstraintChecker(provider, settings)

    results = await checker.check({}, DEFAULT_SMT_CONSTRAINTS)

    failed = [r.constraint_id for r in results if not r.satisfied]
    assert failed == [
        "smt_term_length_bounds",
        "smt_notice_period_range",
        "smt_date_ordering",
        "smt_payment_method_xor",
    ]


@pytest.mark.asyncio
async def test_underinsured_contract(provider, settings, compliant_contract):
    checker = ConstraintChecker(provider, settings)
    record = dict(compliant_contract, col_insurance_amount="$1.5M")

    results = await checker.check(record, DEFAULT_SMT_CONSTRAINTS)

    failed = [r for r in results if not r.satisfied]
    assert [r.constraint_id for r in failed] == ["smt_insurance_minimum"]
    assert failed[0].severity.value == "warning"


@pytest.mark.asyncio
async def test_notice_longer_than_half_the_term(provider, settings, compliant_contract):
    checker = ConstraintChecker(provider, settings)
    record = dict(compliant_contract, col_term_length="6 months", col_notice_period="120 days",
                  col_total_payment="$4,000")

    results = await checker.check(record, DEFAULT_SMT_CONSTRAINTS)

    assert [r.constraint_id for r in results if not r.satisfied] == ["smt_notice_vs_term"]
