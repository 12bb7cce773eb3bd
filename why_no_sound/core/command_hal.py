"""Thin command execution layer for audio inspection tools."""

from __future__ import annotations

from dataclasses import dataclass, field
import subprocess
from typing import Mapping, Protocol, Sequence

from why_no_sound.core.logging import log_command


@dataclass(frozen=True)
class CommandResult:
    """Captured output of one external command."""

    stdout: str
    stderr: str
    success: bool


class CommandRunner(Protocol):
    """Minimal interface for running an inspection command."""

    def run(self, program: str, args: Sequence[str]) -> CommandResult:
        """Run ``program`` with ``args`` and capture its output. Must not raise."""


class SubprocessCommandRunner:
    """Command runner backed by :func:`subprocess.run`."""

    def run(self, program: str, args: Sequence[str]) -> CommandResult:
        """Run a command, reporting launch failures through the result."""

        cmd = [program, *args]
        try:
            completed = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as exc:
            log_command(program, list(args), False)
            return CommandResult(
                stdout="",
                stderr=f"Failed to execute command: {exc}",
                success=False,
            )

        result = CommandResult(
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            success=completed.returncode == 0,
        )
        log_command(program, list(args), result.success)
        return result


@dataclass
class FakeCommandRunner:
    """Fake command runner replaying canned results keyed by command line."""

    responses: Mapping[str, CommandResult] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    def run(self, program: str, args: Sequence[str]) -> CommandResult:
        """Return the canned result, or a missing-binary failure."""

        key = " ".join([program, *args])
        self.calls.append(key)
        if key in self.responses:
            return self.responses[key]
        return CommandResult(
            stdout="",
            stderr=f"Failed to execute command: {program}: command not found",
            success=False,
        )


def ok(stdout: str = "") -> CommandResult:
    """Return a successful result with ``stdout``."""

    return CommandResult(stdout=stdout, stderr="", success=True)


def failed(stderr: str = "", stdout: str = "") -> CommandResult:
    """Return a failed result with ``stderr``."""

    return CommandResult(stdout=stdout, stderr=stderr, success=False)
