"""Models for diagnostics results."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any


class CheckStatus(str, Enum):
    """Status for diagnostics checks."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"

    @property
    def icon(self) -> str:
        return _ICONS[self]


_ICONS = {
    CheckStatus.OK: "✅",
    CheckStatus.WARNING: "⚠️",
    CheckStatus.ERROR: "❌",
}


@dataclass(frozen=True)
class CheckResult:
    """Result for a single diagnostic check."""

    name: str
    status: CheckStatus
    message: str
    suggestion: str | None = None
    evidence: str | None = None

    @classmethod
    def ok(cls, name: str, message: str) -> "CheckResult":
        return cls(name=name, status=CheckStatus.OK, message=message)

    @classmethod
    def warning(cls, name: str, message: str, suggestion: str) -> "CheckResult":
        return cls(name=name, status=CheckStatus.WARNING, message=message, suggestion=suggestion)

    @classmethod
    def error(cls, name: str, message: str, suggestion: str) -> "CheckResult":
        return cls(name=name, status=CheckStatus.ERROR, message=message, suggestion=suggestion)

    def with_evidence(self, evidence: str) -> "CheckResult":
        """Return a copy carrying the raw command output it was based on."""

        return replace(self, evidence=evidence)

    @property
    def fix(self) -> str | None:
        """The ``message: suggestion`` line used in the fix list."""

        if self.suggestion is None:
            return None
        return f"{self.message}: {self.suggestion}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "status": self.status.value,
            "message": self.message,
        }
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        if self.evidence is not None:
            data["evidence"] = self.evidence
        return data


@dataclass(frozen=True)
class DiagnosticReport:
    """Aggregated outcome of one diagnostic run."""

    checks: tuple[CheckResult, ...]
    summary: str
    probable_cause: str | None = None
    suggested_fixes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_errors(self) -> bool:
        return any(check.status is CheckStatus.ERROR for check in self.checks)

    @property
    def has_warnings(self) -> bool:
        return any(check.status is CheckStatus.WARNING for check in self.checks)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "checks": [check.to_dict() for check in self.checks],
            "summary": self.summary,
        }
        if self.probable_cause is not None:
            data["probable_cause"] = self.probable_cause
        data["suggested_fixes"] = list(self.suggested_fixes)
        return data
