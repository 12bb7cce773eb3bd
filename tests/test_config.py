"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from why_no_sound.config.controller import ConfigController, ConfigError, Settings


def test_packaged_defaults_match_settings(isolated_config) -> None:
    settings = ConfigController.get_instance().get_settings()
    assert settings == Settings()


def test_singleton(isolated_config) -> None:
    assert ConfigController.get_instance() is ConfigController.get_instance()
    with pytest.raises(RuntimeError):
        ConfigController()


def test_override_is_deep_merged(isolated_config) -> None:
    isolated_config.write_text(
        "mute_state:\n"
        "  low_volume_percent: 12\n"
        "bluetooth:\n"
        "  high_quality_marker: A2DP\n"
        "logging:\n"
        "  file: /tmp/why-no-sound.log\n",
        encoding="utf-8",
    )
    controller = ConfigController.get_instance()
    settings = controller.get_settings()

    assert settings.low_volume_percent == 12
    assert settings.high_quality_marker == "a2dp"
    assert settings.card_markers == ("bluez", "bluetooth")
    assert settings.evidence_max_chars == 2000
    assert settings.log_file == Path("/tmp/why-no-sound.log")
    assert controller.get_config()["evidence"] == {"max_chars": 2000}


def test_single_marker_string(isolated_config) -> None:
    isolated_config.write_text("bluetooth:\n  card_markers: BlueZ\n", encoding="utf-8")
    settings = ConfigController.get_instance().get_settings()
    assert settings.card_markers == ("bluez",)


def test_missing_override_keeps_defaults(isolated_config) -> None:
    assert not isolated_config.exists()
    assert ConfigController.get_instance().get_settings().low_volume_percent == 5


def test_invalid_yaml_raises(isolated_config) -> None:
    isolated_config.write_text("mute_state: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        ConfigController.get_instance()


def test_non_mapping_raises(isolated_config) -> None:
    isolated_config.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must contain a mapping"):
        ConfigController.get_instance()


def test_bad_number_raises(isolated_config) -> None:
    isolated_config.write_text("evidence:\n  max_chars: lots\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid numeric setting"):
        ConfigController.get_instance()
