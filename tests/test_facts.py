"""Tests for the fact extractors."""

from __future__ import annotations

from samples import (
    APLAY_OUTPUT,
    BUILTIN_SINK,
    CARDS_OUTPUT,
    HDMI_SINK,
    PACTL_INFO_PIPEWIRE,
    SINK_INPUTS_OUTPUT,
    SINKS_OUTPUT,
)
from why_no_sound.core.command_hal import failed, ok
from why_no_sound.facts.cards import extract_bluetooth_cards
from why_no_sound.facts.devices import extract_device_listing
from why_no_sound.facts.sinks import (
    extract_mute_fact,
    find_sink,
    parse_sink_index_map,
    parse_volume_percent,
)
from why_no_sound.facts.stack import extract_stack_fact, parse_server_name
from why_no_sound.facts.streams import UNKNOWN_APP, extract_streams


def test_stack_fact_reads_services_and_server_name() -> None:
    fact = extract_stack_fact(ok("active\n"), ok("inactive\n"), ok(PACTL_INFO_PIPEWIRE))
    assert fact.pipewire_active is True
    assert fact.wireplumber_active is False
    assert fact.server_reachable is True
    assert fact.server_name == "PulseAudio (on PipeWire 1.0.5)"
    assert fact.server_is_pipewire is True


def test_server_name_missing() -> None:
    assert parse_server_name("Server String: /run/user/1000/pulse/native\n") == ""


def test_device_listing_counts_cards() -> None:
    listing = extract_device_listing(ok(APLAY_OUTPUT))
    assert listing.tool_available is True
    assert listing.no_soundcards is False
    assert listing.card_count == 2


def test_device_listing_missing_tool() -> None:
    listing = extract_device_listing(failed("Failed to execute command: aplay: not found"))
    assert listing.tool_available is False


def test_device_listing_no_soundcards() -> None:
    listing = extract_device_listing(failed("aplay: device_list:274: no soundcards found..."))
    assert listing.tool_available is True
    assert listing.no_soundcards is True
    assert listing.card_count == 0


def test_find_sink_reads_state_and_port() -> None:
    sink = find_sink(SINKS_OUTPUT, BUILTIN_SINK)
    assert sink is not None
    assert sink.description == "Built-in Audio Analog Stereo"
    assert sink.state == "RUNNING"
    assert sink.active_port == "analog-output-speaker"
    assert sink.port_availability == ""
    assert sink.is_hdmi is False


def test_find_sink_hdmi_port_not_available() -> None:
    sink = find_sink(SINKS_OUTPUT, HDMI_SINK)
    assert sink is not None
    assert sink.state == "IDLE"
    assert sink.is_hdmi is True
    assert sink.port_availability == "not available"
    assert sink.port_unplugged is True


def test_find_sink_requires_exact_name() -> None:
    assert find_sink(SINKS_OUTPUT, "alsa_output.pci-0000_00_1f.3") is None
    assert find_sink("", BUILTIN_SINK) is None


def test_find_sink_without_sink_headers() -> None:
    text = "Name: speakers\n\tState: SUSPENDED\n\tActive Port: out\n"
    sink = find_sink(text, "speakers")
    assert sink is not None
    assert sink.is_suspended is True


def test_volume_percent_takes_first_percentage() -> None:
    assert parse_volume_percent("front-left: 42598 /  65% / -11.23 dB, front-right: 1 / 3%") == 65
    assert parse_volume_percent("front-left: 0 /   0% / -inf dB") == 0
    assert parse_volume_percent("mono: 65536") is None
    assert parse_volume_percent("mono: 65536 / % / 0 dB") is None


def test_mute_fact_for_target_sink() -> None:
    fact = extract_mute_fact(SINKS_OUTPUT, BUILTIN_SINK)
    assert fact.muted is False
    assert fact.volume_percent == 65

    hdmi = extract_mute_fact(SINKS_OUTPUT, HDMI_SINK)
    assert hdmi.volume_percent == 100


def test_mute_fact_unknown_sink() -> None:
    fact = extract_mute_fact(SINKS_OUTPUT, "missing")
    assert fact.muted is None
    assert fact.volume_percent is None


def test_mute_flag_is_case_insensitive() -> None:
    text = "Sink #3\n\tName: s\n\tMute: YES\n"
    assert extract_mute_fact(text, "s").muted is True


def test_sink_index_map() -> None:
    assert parse_sink_index_map(SINKS_OUTPUT) == {0: BUILTIN_SINK, 1: HDMI_SINK}
    assert parse_sink_index_map("garbage") == {}


def test_streams_prefer_application_name() -> None:
    streams = extract_streams(SINK_INPUTS_OUTPUT)
    assert [(s.owning_app_name, s.target_sink_index) for s in streams] == [
        ("Firefox", 0),
        ("Spotify", 1),
    ]


def test_streams_without_names_or_index() -> None:
    text = "Sink Input #1\n\tSink: 4\nSink Input #2\n\tSink: n/a\n"
    streams = extract_streams(text)
    assert len(streams) == 1
    assert streams[0].owning_app_name == UNKNOWN_APP
    assert streams[0].target_sink_index == 4


def test_no_streams() -> None:
    assert extract_streams("") == []


def test_bluetooth_cards_only() -> None:
    cards = extract_bluetooth_cards(CARDS_OUTPUT)
    assert len(cards) == 1
    card = cards[0]
    assert card.identifier == "bluez_card.00_1B_66_AA_BB_CC"
    assert card.description == "WH-1000XM4"
    assert card.active_profile == "headset-head-unit"
    assert card.available_profiles == frozenset({"off", "a2dp-sink", "headset-head-unit"})
    assert card.associated_sink_ids == frozenset({"bluez_output.00_1B_66_AA_BB_CC.1"})
    assert card.address == "00_1B_66_AA_BB_CC"


def test_card_reference_by_sink_name() -> None:
    card = extract_bluetooth_cards(CARDS_OUTPUT)[0]
    assert card.is_referenced_by("bluez_output.00_1B_66_AA_BB_CC.1") is True
    assert card.is_referenced_by("bluez_sink.00_1B_66_AA_BB_CC.a2dp_sink") is True
    assert card.is_referenced_by(BUILTIN_SINK) is False
    assert card.is_referenced_by("") is False


def test_card_description_falls_back_to_name() -> None:
    text = "Card #1\n\tName: bluez_card.11_22\n\tActive Profile: off\n"
    card = extract_bluetooth_cards(text)[0]
    assert card.description == "bluez_card.11_22"
    assert card.available_profiles == frozenset()
