"""Shared fixtures for the diagnostics tests."""

from __future__ import annotations

from collections.abc import Mapping

import pytest

from samples import (
    APLAY_OUTPUT,
    BUILTIN_SINK,
    CARDS_OUTPUT,
    PACTL_INFO_PIPEWIRE,
    SINKS_OUTPUT,
)
from why_no_sound.config.controller import ConfigController, Settings
from why_no_sound.core.command_hal import CommandResult, FakeCommandRunner, ok


def healthy_responses() -> dict[str, CommandResult]:
    """Command results of a working PipeWire desktop playing nothing."""

    return {
        "systemctl --user is-active pipewire": ok("active\n"),
        "systemctl --user is-active wireplumber": ok("active\n"),
        "pactl info": ok(PACTL_INFO_PIPEWIRE),
        "aplay -l": ok(APLAY_OUTPUT),
        "pactl get-default-sink": ok(BUILTIN_SINK + "\n"),
        "pactl list sinks": ok(SINKS_OUTPUT),
        "pactl list sink-inputs": ok(""),
        "pactl list cards": ok(CARDS_OUTPUT.split("Card #42")[0]),
    }


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def make_runner():
    """Build a fake runner from the healthy responses plus overrides."""

    def _make(overrides: Mapping[str, CommandResult] | None = None) -> FakeCommandRunner:
        responses = healthy_responses()
        responses.update(overrides or {})
        return FakeCommandRunner(responses=responses)

    return _make


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Point the config override at a temp file and reset the singleton."""

    override = tmp_path / "override.yaml"
    monkeypatch.setenv("WHY_NO_SOUND_CONFIG", str(override))
    ConfigController.reset()
    yield override
    ConfigController.reset()
