"""Shared pieces for the diagnostic checks."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from why_no_sound.core.command_hal import CommandResult, CommandRunner
from why_no_sound.diagnostics.models import CheckResult


@dataclass(frozen=True)
class Rule:
    """One row of a decision table: when ``applies`` holds, report ``outcome``."""

    name: str
    applies: Callable[[Any], bool]
    outcome: Callable[[Any], CheckResult]


def first_match(rules: Sequence[Rule], context: Any) -> CheckResult:
    """Evaluate ``rules`` top to bottom and return the first matching outcome."""

    for rule in rules:
        if rule.applies(context):
            return rule.outcome(context)
    raise LookupError(f"No rule matched {context!r}")


def always(_: Any) -> bool:
    return True


class Evidence:
    """Collects the raw command output a check based its decision on."""

    def __init__(self, max_chars: int = 2000) -> None:
        self._max_chars = max_chars
        self._sections: list[str] = []

    def add(self, title: str, text: str) -> None:
        body = text[: self._max_chars] if self._max_chars > 0 else text
        self._sections.append(f"{title}:\n{body.rstrip()}")

    def add_result(self, title: str, result: CommandResult) -> None:
        self.add(title, result.stdout + result.stderr)

    def render(self) -> str:
        return "\n".join(self._sections)


def filter_lines(text: str, needles: Iterable[str]) -> str:
    """Keep only the lines of ``text`` that contain one of ``needles``."""

    needles = tuple(needles)
    return "\n".join(
        line for line in text.splitlines() if any(needle in line for needle in needles)
    )


def read_default_sink(runner: CommandRunner, evidence: Evidence) -> CommandResult:
    """Ask the audio server for the default sink name."""

    result = runner.run("pactl", ["get-default-sink"])
    evidence.add("pactl get-default-sink", result.stdout.strip())
    return result
