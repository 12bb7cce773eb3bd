"""Check 2: at least one ALSA sound card exists."""

from __future__ import annotations

from why_no_sound.checks.base import Evidence, Rule, always, first_match
from why_no_sound.config.controller import Settings
from why_no_sound.core.command_hal import CommandRunner
from why_no_sound.diagnostics.models import CheckResult
from why_no_sound.facts.devices import DeviceListing, extract_device_listing

CHECK_NAME = "audio_devices"

_NO_DEVICES = "No audio devices detected"
_NO_DEVICES_HINT = "Possible cause: missing driver or disabled device in BIOS"

RULES = (
    Rule(
        "aplay_missing",
        lambda listing: not listing.tool_available,
        lambda listing: CheckResult.warning(
            CHECK_NAME,
            "Cannot check audio devices (aplay not installed)",
            "Install alsa-utils package for full diagnostics",
        ),
    ),
    Rule(
        "no_soundcards",
        lambda listing: listing.no_soundcards or listing.card_count == 0,
        lambda listing: CheckResult.error(CHECK_NAME, _NO_DEVICES, _NO_DEVICES_HINT),
    ),
    Rule(
        "cards_present",
        always,
        lambda listing: CheckResult.ok(
            CHECK_NAME, f"{listing.card_count} audio device(s) detected"
        ),
    ),
)


def evaluate(listing: DeviceListing) -> CheckResult:
    return first_match(RULES, listing)


def check(runner: CommandRunner, settings: Settings) -> CheckResult:
    """List hardware playback devices with ``aplay -l``."""

    evidence = Evidence(settings.evidence_max_chars)
    result = runner.run("aplay", ["-l"])
    evidence.add_result("aplay -l", result)
    return evaluate(extract_device_listing(result)).with_evidence(evidence.render())
