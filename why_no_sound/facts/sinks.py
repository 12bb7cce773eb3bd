"""Facts about output sinks from ``pactl list sinks``."""

from __future__ import annotations

from dataclasses import dataclass
import re

from why_no_sound.parsing.blocks import (
    PACTL_NAME_GRAMMAR,
    PACTL_SINK_HEADER_GRAMMAR,
    Record,
    Subsection,
    parse_records,
)

_SINK_INDEX_PATTERN = re.compile(r"^Sink #(\d+)")


@dataclass(frozen=True)
class SinkFact:
    """State of one sink and the availability of its active port."""

    identifier: str
    description: str = ""
    state: str = ""
    active_port: str = ""
    port_availability: str = ""

    @property
    def is_suspended(self) -> bool:
        return self.state.upper() == "SUSPENDED"

    @property
    def is_hdmi(self) -> bool:
        return "hdmi" in self.identifier.lower() or "hdmi" in self.description.lower()

    @property
    def port_unplugged(self) -> bool:
        return (
            "unavailable" in self.active_port.lower()
            or self.port_availability == "not available"
        )


@dataclass(frozen=True)
class MuteFact:
    """Mute flag and front volume of a sink; ``None`` means unknown."""

    muted: bool | None = None
    volume_percent: int | None = None


def _sink_records(text: str) -> list[Record]:
    # pactl prints State before Name, so split on the "Sink #n" headers when present.
    records = list(parse_records(text, PACTL_SINK_HEADER_GRAMMAR))
    if records:
        return records
    return list(parse_records(text, PACTL_NAME_GRAMMAR))


def find_sink_record(text: str, sink_name: str) -> Record | None:
    """Return the record whose ``Name`` equals ``sink_name`` exactly."""

    for record in _sink_records(text):
        if record.fields.get("Name") == sink_name:
            return record
    return None


def port_availability(ports: Subsection, active_port: str) -> str:
    """Return ``not available``, ``available`` or ``""`` for the active port."""

    if not active_port:
        return ""
    candidates = [
        line for line, label in zip(ports.lines, _labels(ports)) if label == active_port
    ]
    if not candidates:
        candidates = [line for line in ports.lines if active_port in line]
    for line in candidates:
        if "not available" in line:
            return "not available"
        if "available" in line:
            return "available"
    return ""


def _labels(ports: Subsection) -> list[str]:
    return [line.split(":", 1)[0].strip() for line in ports.lines]


def find_sink(text: str, sink_name: str) -> SinkFact | None:
    """Extract the :class:`SinkFact` for ``sink_name``, or None when absent."""

    record = find_sink_record(text, sink_name)
    if record is None:
        return None
    active_port = record.fields.get("Active Port", "")
    return SinkFact(
        identifier=sink_name,
        description=record.fields.get("Description", ""),
        state=record.fields.get("State", ""),
        active_port=active_port,
        port_availability=port_availability(record.subsection("Ports"), active_port),
    )


def parse_volume_percent(volume: str) -> int | None:
    """Return the integer immediately preceding the first ``%`` in ``volume``."""

    percent_pos = volume.find("%")
    if percent_pos < 0:
        return None
    start = percent_pos
    while start > 0 and volume[start - 1].isdigit():
        start -= 1
    digits = volume[start:percent_pos]
    return int(digits) if digits else None


def extract_mute_fact(text: str, sink_name: str) -> MuteFact:
    """Read the first ``Mute:`` and ``Volume:`` values of the target sink."""

    record = find_sink_record(text, sink_name)
    if record is None:
        return MuteFact()

    muted = None
    if "Mute" in record.fields:
        muted = record.fields["Mute"].strip().lower() == "yes"

    volume_percent = None
    if "Volume" in record.fields:
        volume_percent = parse_volume_percent(record.fields["Volume"])

    return MuteFact(muted=muted, volume_percent=volume_percent)


def parse_sink_index_map(text: str) -> dict[int, str]:
    """Map ``Sink #<n>`` indexes to the sink name that follows them."""

    sink_map: dict[int, str] = {}
    for record in parse_records(text, PACTL_SINK_HEADER_GRAMMAR):
        match = _SINK_INDEX_PATTERN.match(record.header)
        name = record.fields.get("Name", "")
        if match is None or not name:
            continue
        sink_map.setdefault(int(match.group(1)), name)
    return sink_map
