"""Parsing helpers for audio tool output."""

from why_no_sound.parsing.blocks import (
    PACTL_NAME_GRAMMAR,
    PACTL_SINK_HEADER_GRAMMAR,
    PACTL_STREAM_GRAMMAR,
    BlockGrammar,
    Record,
    Subsection,
    parse_records,
    render_record,
)

__all__ = [
    "PACTL_NAME_GRAMMAR",
    "PACTL_SINK_HEADER_GRAMMAR",
    "PACTL_STREAM_GRAMMAR",
    "BlockGrammar",
    "Record",
    "Subsection",
    "parse_records",
    "render_record",
]
