"""Check 1: which audio server (PipeWire, WirePlumber, PulseAudio) is running."""

from __future__ import annotations

from why_no_sound.checks.base import Evidence, Rule, always, first_match
from why_no_sound.config.controller import Settings
from why_no_sound.core.command_hal import CommandRunner
from why_no_sound.diagnostics.models import CheckResult
from why_no_sound.facts.stack import StackFact, extract_stack_fact

CHECK_NAME = "audio_stack"

RULES = (
    Rule(
        "pipewire_and_wireplumber",
        lambda fact: fact.pipewire_active and fact.wireplumber_active,
        lambda fact: CheckResult.ok(CHECK_NAME, "PipeWire and WirePlumber are running"),
    ),
    Rule(
        "wireplumber_missing",
        lambda fact: fact.pipewire_active and not fact.wireplumber_active,
        lambda fact: CheckResult.warning(
            CHECK_NAME,
            "PipeWire is running but WirePlumber is not",
            "Start WirePlumber: systemctl --user start wireplumber",
        ),
    ),
    Rule(
        "pulseaudio_legacy",
        lambda fact: not fact.pipewire_active
        and fact.server_reachable
        and not fact.server_is_pipewire,
        lambda fact: CheckResult.ok(CHECK_NAME, "PulseAudio is running (legacy mode)"),
    ),
    Rule(
        "pipewire_socket_activated",
        lambda fact: not fact.pipewire_active
        and fact.server_reachable
        and fact.server_is_pipewire,
        lambda fact: CheckResult.ok(CHECK_NAME, "PipeWire is running (socket-activated)"),
    ),
    Rule(
        "no_server",
        lambda fact: not fact.server_reachable,
        lambda fact: CheckResult.error(
            CHECK_NAME,
            "No audio server detected",
            "Start PipeWire: systemctl --user start pipewire pipewire-pulse wireplumber",
        ),
    ),
    Rule(
        "unclear",
        always,
        lambda fact: CheckResult.warning(
            CHECK_NAME,
            "Audio stack status is unclear",
            "Check your audio server manually: systemctl --user status pipewire",
        ),
    ),
)


def evaluate(fact: StackFact) -> CheckResult:
    return first_match(RULES, fact)


def check(runner: CommandRunner, settings: Settings) -> CheckResult:
    """Inspect the user services and ``pactl info``."""

    evidence = Evidence(settings.evidence_max_chars)

    pipewire = runner.run("systemctl", ["--user", "is-active", "pipewire"])
    evidence.add("systemctl --user is-active pipewire", pipewire.stdout.strip())

    wireplumber = runner.run("systemctl", ["--user", "is-active", "wireplumber"])
    evidence.add("systemctl --user is-active wireplumber", wireplumber.stdout.strip())

    info = runner.run("pactl", ["info"])
    evidence.add("pactl info (first 500 chars)", info.stdout[:500])

    fact = extract_stack_fact(pipewire, wireplumber, info)
    return evaluate(fact).with_evidence(evidence.render())
