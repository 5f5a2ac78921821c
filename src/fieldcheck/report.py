"""
Rendering of validation results for people and for per-field annotation.
"""
from typing import Dict, Iterable, List, Optional, Sequence

from .checker import SMTValidationResult
from .logic import ValidationResult
from .severity import Severity

FAILED_VALIDATION = "validation_failed"
NEEDS_REVIEW = "needs_review"

_HEADINGS = (
    (Severity.ERROR, "❌ {prefix}ERRORS ({count}):"),
    (Severity.WARNING, "⚠️  {prefix}WARNINGS ({count}):"),
    (Severity.INFO, "ℹ️  {prefix}INFO ({count}):"),
)


def format_validation_report(results: Sequence[ValidationResult]) -> str:
    """Summarize failed logic rules grouped by severity."""
    lines: List[str] = []
    for severity, heading in _HEADINGS:
        failed = [r for r in results if not r.satisfied and r.severity == severity]
        if not failed:
            continue
        lines.append("")
        lines.append(heading.format(prefix="", count=len(failed)))
        lines.extend(f"  • {r.message}" for r in failed)

    if not lines:
        return "✅ All validation rules passed!"
    return "\n".join(lines) + "\n"


def format_constraint_report(results: Sequence[SMTValidationResult]) -> str:
    """Summarize failed SMT constraints grouped by severity.

    Explanations are included for errors and warnings.
    """
    lines: List[str] = []
    for severity, heading in _HEADINGS:
        failed = [r for r in results if not r.satisfied and r.severity == severity]
        if not failed:
            continue
        lines.append("")
        lines.append(heading.format(prefix="SMT ", count=len(failed)))
        for r in failed:
            lines.append(f"  • {r.message}")
            if r.explanation and severity != Severity.INFO:
                lines.append(f"    {r.explanation}")

    if not lines:
        return "✅ All SMT constraints satisfied!"
    return "\n".join(lines) + "\n"


def smt_message(result: SMTValidationResult) -> str:
    """Per-field message for a failed constraint."""
    if result.explanation:
        return f"[SMT] {result.message} ({result.explanation})"
    return f"[SMT] {result.message}"


def collect_field_messages(logic_results: Iterable[ValidationResult] = (),
                           smt_results: Iterable[SMTValidationResult] = ()) -> Dict[str, List[str]]:
    """Field id -> messages of every failed rule or constraint touching it.

    Messages accumulate; a field touched by several failures gets all of
    them, logic rules first.
    """
    messages: Dict[str, List[str]] = {}
    for result in logic_results:
        if result.satisfied:
            continue
        for field_id in result.affected_fields:
            messages.setdefault(field_id, []).append(result.message)
    for result in smt_results:
        if result.satisfied:
            continue
        for field_id in result.affected_fields:
            messages.setdefault(field_id, []).append(smt_message(result))
    return messages


def field_status(field_id: str,
                 logic_results: Iterable[ValidationResult] = (),
                 smt_results: Iterable[SMTValidationResult] = ()) -> Optional[str]:
    """Review status for a field, or None if nothing failed on it.

    ``validation_failed`` when any error-severity failure touches the field,
    otherwise ``needs_review``.
    """
    status = None
    for result in [*logic_results, *smt_results]:
        if result.satisfied or field_id not in result.affected_fields:
            continue
        if result.severity == Severity.ERROR:
            return FAILED_VALIDATION
        status = NEEDS_REVIEW
    return status
