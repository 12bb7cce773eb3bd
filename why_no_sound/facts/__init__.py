"""Typed facts extracted from audio tool output."""

from why_no_sound.facts.cards import AudioCardFact, extract_bluetooth_cards
from why_no_sound.facts.devices import DeviceListing, extract_device_listing
from why_no_sound.facts.sinks import (
    MuteFact,
    SinkFact,
    extract_mute_fact,
    find_sink,
    parse_sink_index_map,
)
from why_no_sound.facts.stack import StackFact, extract_stack_fact
from why_no_sound.facts.streams import StreamFact, extract_streams

__all__ = [
    "AudioCardFact",
    "DeviceListing",
    "MuteFact",
    "SinkFact",
    "StackFact",
    "StreamFact",
    "extract_bluetooth_cards",
    "extract_device_listing",
    "extract_mute_fact",
    "extract_stack_fact",
    "extract_streams",
    "find_sink",
    "parse_sink_index_map",
]
