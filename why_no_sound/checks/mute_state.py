"""Check 4: the default sink is not muted or turned all the way down."""

from __future__ import annotations

from dataclasses import dataclass, field

from why_no_sound.checks.base import (
    Evidence,
    Rule,
    always,
    filter_lines,
    first_match,
    read_default_sink,
)
from why_no_sound.config.controller import Settings
from why_no_sound.core.command_hal import CommandRunner
from why_no_sound.diagnostics.models import CheckResult
from why_no_sound.facts.sinks import MuteFact, extract_mute_fact

CHECK_NAME = "mute_state"


@dataclass(frozen=True)
class MuteContext:
    default_sink: str
    sinks_listed: bool = True
    fact: MuteFact = field(default_factory=MuteFact)
    low_volume_percent: int = 5


RULES = (
    Rule(
        "no_default",
        lambda ctx: not ctx.default_sink,
        lambda ctx: CheckResult.warning(
            CHECK_NAME,
            "Cannot check mute state (no default sink)",
            "Set a default output device first",
        ),
    ),
    Rule(
        "listing_failed",
        lambda ctx: not ctx.sinks_listed,
        lambda ctx: CheckResult.warning(
            CHECK_NAME, "Cannot check mute state", "Ensure audio server is running"
        ),
    ),
    Rule(
        "muted",
        lambda ctx: ctx.fact.muted is True,
        lambda ctx: CheckResult.error(
            CHECK_NAME,
            "Output is muted",
            "Unmute in sound settings or press the mute key",
        ),
    ),
    Rule(
        "volume_low",
        lambda ctx: ctx.fact.muted is False
        and ctx.fact.volume_percent is not None
        and ctx.fact.volume_percent < ctx.low_volume_percent,
        lambda ctx: CheckResult.warning(
            CHECK_NAME,
            f"Volume is very low ({ctx.fact.volume_percent}%)",
            "Increase volume in sound settings",
        ),
    ),
    Rule(
        "audible",
        lambda ctx: ctx.fact.muted is False and ctx.fact.volume_percent is not None,
        lambda ctx: CheckResult.ok(
            CHECK_NAME, f"Output is not muted (volume: {ctx.fact.volume_percent}%)"
        ),
    ),
    Rule(
        "unmuted_volume_unknown",
        lambda ctx: ctx.fact.muted is False,
        lambda ctx: CheckResult.ok(CHECK_NAME, "Output is not muted"),
    ),
    Rule(
        "indeterminate",
        always,
        lambda ctx: CheckResult.warning(
            CHECK_NAME, "Could not determine mute state", "Check sound settings manually"
        ),
    ),
)


def evaluate(context: MuteContext) -> CheckResult:
    return first_match(RULES, context)


def check(runner: CommandRunner, settings: Settings) -> CheckResult:
    """Read the mute flag and volume of the default sink."""

    evidence = Evidence(settings.evidence_max_chars)
    default_sink = read_default_sink(runner, evidence).stdout.strip()
    if not default_sink:
        return evaluate(MuteContext(default_sink="")).with_evidence(evidence.render())

    sinks = runner.run("pactl", ["list", "sinks"])
    evidence.add(
        "pactl list sinks (mute info)",
        filter_lines(sinks.stdout, ("Name:", "Mute:", "Volume:")),
    )
    context = MuteContext(
        default_sink=default_sink,
        sinks_listed=sinks.success,
        fact=extract_mute_fact(sinks.stdout, default_sink) if sinks.success else MuteFact(),
        low_volume_percent=settings.low_volume_percent,
    )
    return evaluate(context).with_evidence(evidence.render())
