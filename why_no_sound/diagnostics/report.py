"""Aggregation of check results into a single diagnosis."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from why_no_sound.diagnostics.models import CheckResult, CheckStatus, DiagnosticReport

HEALTHY_SUMMARY = (
    "Audio system appears healthy. If you still have no sound, "
    "the issue may be application-specific."
)


def build_report(checks: Iterable[CheckResult]) -> DiagnosticReport:
    """Build a report from results given in evaluation order.

    The probable cause is the message of the first error in that order, not
    the most severe one. Fixes list every error first, then warnings; a
    warning fix identical to one already listed is dropped, errors are
    never deduplicated.
    """

    checks = tuple(checks)
    errors = [check for check in checks if check.status is CheckStatus.ERROR]
    warnings = [check for check in checks if check.status is CheckStatus.WARNING]

    probable_cause = errors[0].message if errors else None

    if not errors and not warnings:
        summary = HEALTHY_SUMMARY
    elif not errors:
        summary = (
            f"No critical issues found, but {len(warnings)} warning(s) detected "
            "that may affect audio."
        )
    else:
        summary = (
            f"Found {len(errors)} error(s) and {len(warnings)} warning(s). "
            f"Most likely cause: {probable_cause}"
        )

    suggested_fixes: list[str] = []
    for check in errors:
        if check.fix is not None:
            suggested_fixes.append(check.fix)
    for check in warnings:
        if check.fix is not None and check.fix not in suggested_fixes:
            suggested_fixes.append(check.fix)

    return DiagnosticReport(
        checks=checks,
        summary=summary,
        probable_cause=probable_cause,
        suggested_fixes=tuple(suggested_fixes),
    )


def strip_evidence(report: DiagnosticReport) -> DiagnosticReport:
    """Return a copy of ``report`` without raw command output."""

    return replace(
        report,
        checks=tuple(replace(check, evidence=None) for check in report.checks),
    )
