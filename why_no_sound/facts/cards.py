"""Facts about bluetooth audio cards from ``pactl list cards``."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from why_no_sound.parsing.blocks import PACTL_NAME_GRAMMAR, Record, parse_records

CARD_PREFIX = "bluez_card."


@dataclass(frozen=True)
class AudioCardFact:
    """Profile state of one card and the sinks it provides."""

    identifier: str
    description: str = ""
    active_profile: str = ""
    available_profiles: frozenset[str] = field(default_factory=frozenset)
    associated_sink_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def address(self) -> str:
        """Device address part of a ``bluez_card.<address>`` identifier."""

        if self.identifier.startswith(CARD_PREFIX):
            return self.identifier[len(CARD_PREFIX):]
        return ""

    def is_referenced_by(self, sink_name: str) -> bool:
        """Return True when ``sink_name`` belongs to this card."""

        if not sink_name:
            return False
        if self.identifier and self.identifier in sink_name:
            return True
        if self.address and self.address in sink_name:
            return True
        return any(sink_id in sink_name for sink_id in self.associated_sink_ids if sink_id)


def _has_marker(text: str, markers: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def _sink_id(line: str) -> str:
    label = line.split(":", 1)[0].strip()
    if label.startswith("#"):
        return label
    return label.split("/#", 1)[0]


def _card_from_record(record: Record, markers: Iterable[str]) -> AudioCardFact:
    profiles = frozenset(
        label
        for label in record.subsection("Profiles").labels()
        if label and not label.startswith("Part of")
    )
    sink_ids = frozenset(
        _sink_id(line)
        for line in record.subsection("Sinks").lines
        if line.startswith("#") or _has_marker(line, markers)
    )
    identifier = record.fields.get("Name", "")
    description = (
        record.properties.get("device.description")
        or record.fields.get("Description")
        or identifier
    )
    return AudioCardFact(
        identifier=identifier,
        description=description,
        active_profile=record.fields.get("Active Profile", ""),
        available_profiles=profiles,
        associated_sink_ids=sink_ids,
    )


def extract_bluetooth_cards(
    text: str,
    markers: Iterable[str] = ("bluez", "bluetooth"),
) -> list[AudioCardFact]:
    """Return facts for every card whose name carries a bluetooth marker."""

    markers = tuple(markers)
    return [
        _card_from_record(record, markers)
        for record in parse_records(text, PACTL_NAME_GRAMMAR)
        if _has_marker(record.fields.get("Name", ""), markers)
    ]
