"""Facts about playing streams from ``pactl list sink-inputs``."""

from __future__ import annotations

from dataclasses import dataclass

from why_no_sound.parsing.blocks import PACTL_STREAM_GRAMMAR, parse_records

UNKNOWN_APP = "Unknown"


@dataclass(frozen=True)
class StreamFact:
    """One sink input: which application plays to which sink index."""

    owning_app_name: str
    target_sink_index: int


def extract_streams(text: str) -> list[StreamFact]:
    """Return one :class:`StreamFact` per ``Sink:`` line.

    ``application.name`` names the stream; ``media.name`` is only used when
    no application name is present. Streams whose sink index cannot be read
    are skipped since they cannot be routed anywhere.
    """

    streams: list[StreamFact] = []
    for record in parse_records(text, PACTL_STREAM_GRAMMAR):
        try:
            sink_index = int(record.fields.get("Sink", ""))
        except ValueError:
            continue
        app_name = (
            record.properties.get("application.name")
            or record.properties.get("media.name")
            or UNKNOWN_APP
        )
        streams.append(StreamFact(owning_app_name=app_name, target_sink_index=sink_index))
    return streams


def resolve_sink_name(stream: StreamFact, sink_map: dict[int, str]) -> str:
    """Return the name of the stream's sink, or ``""`` when it is unknown."""

    return sink_map.get(stream.target_sink_index, "")
