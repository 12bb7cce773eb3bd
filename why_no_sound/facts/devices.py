"""Facts about ALSA hardware devices from ``aplay -l``."""

from __future__ import annotations

from dataclasses import dataclass

from why_no_sound.core.command_hal import CommandResult

_MISSING_TOOL_MARKERS = ("not found", "No such file")
_NO_CARDS_MARKER = "no soundcards found"


@dataclass(frozen=True)
class DeviceListing:
    """Hardware playback devices listed by ``aplay -l``."""

    tool_available: bool
    no_soundcards: bool
    cards: tuple[str, ...] = ()

    @property
    def card_count(self) -> int:
        return len(self.cards)


def extract_device_listing(result: CommandResult) -> DeviceListing:
    """Build a :class:`DeviceListing` from an ``aplay -l`` run."""

    tool_available = result.success or not any(
        marker in result.stderr for marker in _MISSING_TOOL_MARKERS
    )
    no_soundcards = _NO_CARDS_MARKER in result.stdout or _NO_CARDS_MARKER in result.stderr
    cards = tuple(line for line in result.stdout.splitlines() if line.startswith("card "))
    return DeviceListing(
        tool_available=tool_available,
        no_soundcards=no_soundcards,
        cards=cards,
    )
