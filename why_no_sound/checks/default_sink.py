"""Check 3: the default sink exists, is awake and is not an unplugged HDMI port."""

from __future__ import annotations

from dataclasses import dataclass

from why_no_sound.checks.base import Evidence, Rule, always, first_match, read_default_sink
from why_no_sound.config.controller import Settings
from why_no_sound.core.command_hal import CommandRunner
from why_no_sound.diagnostics.models import CheckResult
from why_no_sound.facts.sinks import SinkFact, find_sink

CHECK_NAME = "default_sink"


@dataclass(frozen=True)
class DefaultSinkContext:
    lookup_ok: bool
    default_sink: str
    sinks_listed: bool = True
    sink: SinkFact | None = None

    @property
    def label(self) -> str:
        if self.sink is None:
            return self.default_sink
        return self.sink.description or self.sink.identifier


RULES = (
    Rule(
        "lookup_failed",
        lambda ctx: not ctx.lookup_ok,
        lambda ctx: CheckResult.error(
            CHECK_NAME,
            "Cannot determine default sink (audio server not responding)",
            "Ensure PipeWire or PulseAudio is running",
        ),
    ),
    Rule(
        "no_default",
        lambda ctx: not ctx.default_sink,
        lambda ctx: CheckResult.error(
            CHECK_NAME,
            "No default sink configured",
            "Set a default output device in your sound settings",
        ),
    ),
    Rule(
        "listing_failed",
        lambda ctx: not ctx.sinks_listed,
        lambda ctx: CheckResult.warning(
            CHECK_NAME, "Cannot list sinks", "Check audio server status"
        ),
    ),
    Rule(
        "sink_missing",
        lambda ctx: ctx.sink is None,
        lambda ctx: CheckResult.error(
            CHECK_NAME,
            f"Default sink '{ctx.default_sink}' not found in sink list",
            "Your default audio device may have been removed. Select a new output device.",
        ),
    ),
    Rule(
        "suspended",
        lambda ctx: ctx.sink.is_suspended,
        lambda ctx: CheckResult.warning(
            CHECK_NAME,
            "Default sink is SUSPENDED (no active audio streams)",
            "This is normal when nothing is playing. Try playing audio.",
        ),
    ),
    Rule(
        "hdmi_disconnected",
        lambda ctx: ctx.sink.is_hdmi and ctx.sink.port_unplugged,
        lambda ctx: CheckResult.error(
            CHECK_NAME,
            f"Default output is HDMI ({ctx.label}) but appears disconnected",
            "Switch output to Built-in Audio or connect your HDMI display",
        ),
    ),
    Rule(
        "valid",
        always,
        lambda ctx: CheckResult.ok(CHECK_NAME, f"Default sink: {ctx.label}"),
    ),
)


def evaluate(context: DefaultSinkContext) -> CheckResult:
    return first_match(RULES, context)


def check(runner: CommandRunner, settings: Settings) -> CheckResult:
    """Resolve the default sink and inspect its record in ``pactl list sinks``."""

    evidence = Evidence(settings.evidence_max_chars)
    lookup = read_default_sink(runner, evidence)
    default_sink = lookup.stdout.strip()

    if not lookup.success or not default_sink:
        context = DefaultSinkContext(lookup_ok=lookup.success, default_sink=default_sink)
        return evaluate(context).with_evidence(evidence.render())

    sinks = runner.run("pactl", ["list", "sinks"])
    evidence.add("pactl list sinks (truncated)", sinks.stdout)
    context = DefaultSinkContext(
        lookup_ok=True,
        default_sink=default_sink,
        sinks_listed=sinks.success,
        sink=find_sink(sinks.stdout, default_sink) if sinks.success else None,
    )
    return evaluate(context).with_evidence(evidence.render())
