"""Check 5: playing streams are routed to the default sink."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from why_no_sound.checks.base import Evidence, read_default_sink
from why_no_sound.config.controller import Settings
from why_no_sound.core.command_hal import CommandRunner
from why_no_sound.diagnostics.models import CheckResult
from why_no_sound.facts.sinks import parse_sink_index_map
from why_no_sound.facts.streams import StreamFact, extract_streams, resolve_sink_name

CHECK_NAME = "sink_inputs"


def misrouted_streams(
    default_sink: str,
    streams: Sequence[StreamFact],
    sink_map: Mapping[int, str],
) -> list[str]:
    """Describe every stream playing to a known sink other than the default."""

    mismatches = []
    for stream in streams:
        sink_name = resolve_sink_name(stream, dict(sink_map))
        if sink_name and sink_name != default_sink:
            mismatches.append(f"'{stream.owning_app_name}' is playing to '{sink_name}'")
    return mismatches


def evaluate(
    default_sink: str,
    streams: Sequence[StreamFact],
    sink_map: Mapping[int, str],
    *,
    streams_listed: bool = True,
) -> CheckResult:
    if not default_sink:
        return CheckResult.warning(
            CHECK_NAME,
            "Cannot check stream routing (no default sink)",
            "Set a default output device first",
        )
    if not streams_listed:
        return CheckResult.warning(
            CHECK_NAME,
            "Cannot list active audio streams",
            "Ensure audio server is running",
        )
    if not streams:
        return CheckResult.ok(CHECK_NAME, "No active audio streams (nothing playing)")

    mismatches = misrouted_streams(default_sink, streams, sink_map)
    if mismatches:
        return CheckResult.warning(
            CHECK_NAME,
            f"{len(mismatches)} stream(s) playing to non-default output: "
            f"{', '.join(mismatches)}",
            "Move streams to default output in sound settings or pavucontrol",
        )
    return CheckResult.ok(CHECK_NAME, f"{len(streams)} active stream(s) correctly routed")


def check(runner: CommandRunner, settings: Settings) -> CheckResult:
    """Compare the sink of every sink input against the default sink."""

    evidence = Evidence(settings.evidence_max_chars)
    default_sink = read_default_sink(runner, evidence).stdout.strip()
    if not default_sink:
        return evaluate("", [], {}).with_evidence(evidence.render())

    inputs = runner.run("pactl", ["list", "sink-inputs"])
    evidence.add("pactl list sink-inputs", inputs.stdout)
    if not inputs.success:
        return evaluate(default_sink, [], {}, streams_listed=False).with_evidence(
            evidence.render()
        )

    streams = extract_streams(inputs.stdout)
    sink_map: dict[int, str] = {}
    if streams:
        sinks = runner.run("pactl", ["list", "sinks"])
        sink_map = parse_sink_index_map(sinks.stdout)
    return evaluate(default_sink, streams, sink_map).with_evidence(evidence.render())
