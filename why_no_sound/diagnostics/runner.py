"""Diagnostics runner utilities."""

from __future__ import annotations

from collections.abc import Callable, Iterable
import json

from why_no_sound.config.controller import Settings
from why_no_sound.core.command_hal import CommandRunner
from why_no_sound.core.logging import log_info, logger as LOGGER
from why_no_sound.diagnostics.models import CheckResult, CheckStatus, DiagnosticReport

CheckFunction = Callable[[CommandRunner, Settings], CheckResult]

_RULE = "─" * 41


def run_diagnostics(
    checks: Iterable[tuple[str, CheckFunction]],
    runner: CommandRunner,
    settings: Settings,
) -> list[CheckResult]:
    """Run checks one after another and return results in the same order."""

    results: list[CheckResult] = []
    for name, check in checks:
        try:
            result = check(runner, settings)
        except Exception as exc:  # noqa: BLE001 - diagnostics must keep running
            LOGGER.exception("Check %s failed", name)
            result = CheckResult.error(
                name,
                f"Check raised an unexpected exception: {exc}",
                "Re-run with --verbose to see the traceback",
            )
        if result.status is not CheckStatus.OK:
            log_info(f"[{name}] {result.status.value}: {result.message}")
        results.append(result)
    return results


def format_report(report: DiagnosticReport, debug: bool = False) -> str:
    """Return a human-friendly diagnostics report."""

    lines = ["", "🔊 why-no-sound — Linux Audio Diagnostic", _RULE, ""]
    for check in report.checks:
        lines.append(f"{check.status.icon} {check.message}")
        if check.suggestion is not None:
            lines.append(f"   👉 Fix: {check.suggestion}")
        if debug and check.evidence:
            lines.append("")
            lines.append(f"   [DEBUG: {check.name}]")
            lines.extend(f"   | {line}" for line in check.evidence.splitlines())
            lines.append("")

    lines.extend(["", _RULE, ""])
    if report.has_errors:
        lines.append("❌ DIAGNOSIS: Issues detected")
    elif report.has_warnings:
        lines.append("⚠️  DIAGNOSIS: Potential issues")
    else:
        lines.append("✅ DIAGNOSIS: System looks healthy")

    lines.extend(["", report.summary])

    if report.probable_cause is not None:
        lines.extend(["", "🎯 Probable root cause:", f"   {report.probable_cause}"])

    if report.suggested_fixes:
        lines.extend(["", "📋 Suggested fixes (in order):"])
        lines.extend(
            f"   {index}. {fix}" for index, fix in enumerate(report.suggested_fixes, start=1)
        )

    lines.append("")
    return "\n".join(lines)


def report_to_json(report: DiagnosticReport) -> str:
    """Serialize a report; unset optional fields are left out."""

    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)
