"""Tests for the default sink validity check."""

from __future__ import annotations

from samples import HDMI_SINK, SINKS_OUTPUT
from why_no_sound.checks import default_sink
from why_no_sound.core.command_hal import failed, ok
from why_no_sound.diagnostics.models import CheckStatus


def test_builtin_sink_is_valid(make_runner, settings) -> None:
    result = default_sink.check(make_runner(), settings)
    assert result.status is CheckStatus.OK
    assert result.message == "Default sink: Built-in Audio Analog Stereo"


def test_lookup_failure_is_error(make_runner, settings) -> None:
    runner = make_runner({"pactl get-default-sink": failed("Connection failure")})
    result = default_sink.check(runner, settings)
    assert result.status is CheckStatus.ERROR
    assert "not responding" in result.message
    assert "pactl list sinks" not in runner.calls


def test_empty_default_sink_is_error(make_runner, settings) -> None:
    runner = make_runner({"pactl get-default-sink": ok("\n")})
    result = default_sink.check(runner, settings)
    assert result.status is CheckStatus.ERROR
    assert result.message == "No default sink configured"


def test_sink_listing_failure_is_warning(make_runner, settings) -> None:
    runner = make_runner({"pactl list sinks": failed("Connection failure")})
    result = default_sink.check(runner, settings)
    assert result.status is CheckStatus.WARNING
    assert result.message == "Cannot list sinks"


def test_missing_sink_is_error(make_runner, settings) -> None:
    runner = make_runner({"pactl get-default-sink": ok("alsa_output.usb-headset\n")})
    result = default_sink.check(runner, settings)
    assert result.status is CheckStatus.ERROR
    assert "'alsa_output.usb-headset' not found" in result.message


def test_suspended_sink_is_warning(make_runner, settings) -> None:
    runner = make_runner(
        {"pactl list sinks": ok(SINKS_OUTPUT.replace("State: RUNNING", "State: SUSPENDED"))}
    )
    result = default_sink.check(runner, settings)
    assert result.status is CheckStatus.WARNING
    assert "SUSPENDED" in result.message


def test_disconnected_hdmi_is_error(make_runner, settings) -> None:
    runner = make_runner({"pactl get-default-sink": ok(HDMI_SINK + "\n")})
    result = default_sink.check(runner, settings)
    assert result.status is CheckStatus.ERROR
    assert "HDMI" in result.message
    assert "disconnected" in result.message


def test_connected_hdmi_is_ok(make_runner, settings) -> None:
    plugged = SINKS_OUTPUT.replace("priority: 5900, not available", "priority: 5900, available")
    runner = make_runner(
        {
            "pactl get-default-sink": ok(HDMI_SINK + "\n"),
            "pactl list sinks": ok(plugged),
        }
    )
    result = default_sink.check(runner, settings)
    assert result.status is CheckStatus.OK
    assert result.message.startswith("Default sink: GA104")
