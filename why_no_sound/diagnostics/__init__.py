"""Diagnostics models and report aggregation."""

from why_no_sound.diagnostics.models import CheckResult, CheckStatus, DiagnosticReport
from why_no_sound.diagnostics.report import build_report

__all__ = [
    "CheckResult",
    "CheckStatus",
    "DiagnosticReport",
    "build_report",
]
