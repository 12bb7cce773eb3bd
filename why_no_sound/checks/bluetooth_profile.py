"""Check 6: bluetooth headsets stuck in the low-quality call profile."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

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
from why_no_sound.facts.cards import AudioCardFact, extract_bluetooth_cards

CHECK_NAME = "bluetooth_profile"

_EVIDENCE_NEEDLES = (
    "Name:",
    "bluez",
    "bluetooth",
    "Active Profile:",
    "a2dp",
    "hsp",
    "hfp",
    "headset",
)


@dataclass(frozen=True)
class CardIssue:
    card: AudioCardFact
    high_quality_available: bool

    def describe(self) -> str:
        availability = "A2DP available" if self.high_quality_available else "A2DP not available"
        return (
            f"'{self.card.description}' is in call/headset mode "
            f"({self.card.active_profile}), {availability}"
        )


@dataclass(frozen=True)
class BluetoothContext:
    cards_listed: bool
    cards: tuple[AudioCardFact, ...] = ()
    issues: tuple[CardIssue, ...] = ()
    active: bool = False

    @property
    def fixable(self) -> bool:
        return any(issue.high_quality_available for issue in self.issues)

    @property
    def issue_text(self) -> str:
        return "; ".join(issue.describe() for issue in self.issues)


def find_issues(
    cards: Sequence[AudioCardFact],
    low_quality_markers: Sequence[str],
    high_quality_marker: str,
) -> tuple[CardIssue, ...]:
    """Return one issue per card whose active profile is a call profile."""

    issues = []
    for card in cards:
        profile = card.active_profile.lower()
        if not any(marker in profile for marker in low_quality_markers):
            continue
        has_high_quality = any(
            high_quality_marker in name.lower() for name in card.available_profiles
        )
        issues.append(CardIssue(card=card, high_quality_available=has_high_quality))
    return tuple(issues)


RULES = (
    Rule(
        "cards_unlisted",
        lambda ctx: not ctx.cards_listed,
        lambda ctx: CheckResult.ok(
            CHECK_NAME, "No Bluetooth audio issues (cannot list cards)"
        ),
    ),
    Rule(
        "no_cards",
        lambda ctx: not ctx.cards,
        lambda ctx: CheckResult.ok(CHECK_NAME, "No Bluetooth audio devices connected"),
    ),
    Rule(
        "active_call_mode_fixable",
        lambda ctx: bool(ctx.issues) and ctx.fixable and ctx.active,
        lambda ctx: CheckResult.error(
            CHECK_NAME,
            f"Bluetooth headset in call mode: {ctx.issue_text}",
            "Switch Bluetooth profile to A2DP (high-quality audio) in sound settings",
        ),
    ),
    Rule(
        "active_low_quality",
        lambda ctx: bool(ctx.issues) and ctx.active,
        lambda ctx: CheckResult.warning(
            CHECK_NAME,
            f"Bluetooth in low-quality mode: {ctx.issue_text}",
            "A2DP profile may not be available. Check if device supports it.",
        ),
    ),
    Rule(
        "inactive_call_mode",
        lambda ctx: bool(ctx.issues),
        lambda ctx: CheckResult.warning(
            CHECK_NAME,
            f"Bluetooth device in call mode but not active output: {ctx.issue_text}",
            "If using Bluetooth, switch profile to A2DP for better quality",
        ),
    ),
    Rule(
        "active_optimal",
        lambda ctx: ctx.active,
        lambda ctx: CheckResult.ok(CHECK_NAME, "Bluetooth audio profile is optimal (A2DP)"),
    ),
    Rule(
        "connected_optimal",
        always,
        lambda ctx: CheckResult.ok(
            CHECK_NAME, "Bluetooth device connected with correct profile"
        ),
    ),
)


def build_context(
    default_sink: str,
    cards: Sequence[AudioCardFact],
    settings: Settings,
    *,
    cards_listed: bool = True,
) -> BluetoothContext:
    return BluetoothContext(
        cards_listed=cards_listed,
        cards=tuple(cards),
        issues=find_issues(cards, settings.low_quality_markers, settings.high_quality_marker),
        active=any(card.is_referenced_by(default_sink) for card in cards),
    )


def evaluate(context: BluetoothContext) -> CheckResult:
    return first_match(RULES, context)


def check(runner: CommandRunner, settings: Settings) -> CheckResult:
    """Inspect bluetooth cards in ``pactl list cards``."""

    evidence = Evidence(settings.evidence_max_chars)
    default_sink = read_default_sink(runner, evidence).stdout.strip()

    cards_result = runner.run("pactl", ["list", "cards"])
    evidence.add(
        "pactl list cards (bluetooth info)",
        filter_lines(cards_result.stdout, _EVIDENCE_NEEDLES),
    )
    if not cards_result.success:
        context = BluetoothContext(cards_listed=False)
    else:
        cards = extract_bluetooth_cards(cards_result.stdout, settings.card_markers)
        context = build_context(default_sink, cards, settings)
    return evaluate(context).with_evidence(evidence.render())
