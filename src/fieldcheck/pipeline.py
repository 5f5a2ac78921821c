"""
Both validation tiers for one record, and for many records at once.
"""
import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import structlog

from .checker import ConstraintChecker, SMTValidationResult
from .constraints import FieldSpec, SMTConstraint
from .logic import ValidationResult, ValidationRule, validate_record
from .report import collect_field_messages, field_status

logger = structlog.get_logger()


@dataclass
class RecordValidation:
    """Logic and SMT results for one record."""
    logic_results: List[ValidationResult] = field(default_factory=list)
    smt_results: List[SMTValidationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.violations

    @property
    def violations(self) -> List[Any]:
        return ([r for r in self.logic_results if not r.satisfied]
                + [r for r in self.smt_results if not r.satisfied])

    def field_messages(self) -> Dict[str, List[str]]:
        return collect_field_messages(self.logic_results, self.smt_results)

    def field_statuses(self) -> Dict[str, str]:
        return {
            field_id: field_status(field_id, self.logic_results, self.smt_results)
            for field_id in self.field_messages()
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "logic": [r.to_dict() for r in self.logic_results],
            "smt": [r.to_dict() for r in self.smt_results],
        }


async def validate_record_all(record: Mapping[str, Any],
                              rules: Sequence[ValidationRule],
                              constraints: Sequence[SMTConstraint],
                              checker: ConstraintChecker,
                              field_specs: Optional[Sequence[FieldSpec]] = None,
                              timeout_ms: Optional[int] = None) -> RecordValidation:
    """Run the logic rules, then the SMT constraints, against one record."""
    logic_results = validate_record(record, rules)
    smt_results = await checker.check(record, constraints, field_specs, timeout_ms)
    return RecordValidation(logic_results, smt_results)


async def validate_records(records: Mapping[str, Mapping[str, Any]],
                           rules: Sequence[ValidationRule],
                           constraints: Sequence[SMTConstraint],
                           checker: Optional[ConstraintChecker] = None,
                           field_specs: Optional[Sequence[FieldSpec]] = None,
                           timeout_ms: Optional[int] = None) -> Dict[str, RecordValidation]:
    """Validate many records concurrently, one task per record.

    Solver checks of different records still run one at a time on the shared
    session. Results are keyed by record id, in input order.
    """
    checker = checker or ConstraintChecker()
    record_ids = list(records)
    outcomes = await asyncio.gather(*(
        validate_record_all(records[record_id], rules, constraints, checker,
                            field_specs, timeout_ms)
        for record_id in record_ids
    ))

    results = dict(zip(record_ids, outcomes))
    for record_id, validation in results.items():
        logger.info("record_validated", record_id=record_id,
                    violations=len(validation.violations))
    return results
