"""Configuration controller for YAML-based settings."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_FILE = Path(__file__).with_name("default.yaml")
USER_OVERRIDE_FILE = Path("~/.config/why-no-sound/override.yaml")
OVERRIDE_ENV_VAR = "WHY_NO_SOUND_CONFIG"


class ConfigError(RuntimeError):
    """Raised when a configuration file cannot be read or parsed."""


@dataclass(frozen=True)
class ConfigPaths:
    """Filesystem paths for configuration files."""

    config_file: Path
    override_file: Path | None


@dataclass(frozen=True)
class Settings:
    """Normalized settings consumed by the checks."""

    low_volume_percent: int = 5
    card_markers: tuple[str, ...] = ("bluez", "bluetooth")
    low_quality_markers: tuple[str, ...] = (
        "hsp",
        "hfp",
        "headset-head-unit",
        "headset_head_unit",
        "handsfree",
    )
    high_quality_marker: str = "a2dp"
    evidence_max_chars: int = 2000
    log_file: Path | None = None


class ConfigController:
    """Singleton controller for loading configuration."""

    _instance: "ConfigController | None" = None

    def __init__(
        self,
        config_file: Path | None = None,
        override_file: Path | None = None,
    ) -> None:
        if ConfigController._instance is not None:
            raise RuntimeError("You cannot create another ConfigController class")

        self.paths = ConfigPaths(
            config_file=config_file or DEFAULT_CONFIG_FILE,
            override_file=override_file if override_file is not None else _default_override(),
        )
        self.config: dict[str, Any] = {}
        self.settings = Settings()
        self.load_config()

    @classmethod
    def get_instance(cls) -> "ConfigController":
        """Return the singleton instance of the controller."""

        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next access reloads from disk."""

        cls._instance = None

    def load_config(self) -> None:
        """Load configuration from default and override YAML files."""

        config = self._read_yaml(self.paths.config_file)

        override_file = self.paths.override_file
        if override_file is not None and override_file.exists():
            override_config = self._read_yaml(override_file)
            if override_config:
                config = self._deep_merge(config, override_config)

        self.config = config
        self.settings = self._normalize(config)

    def get_config(self) -> dict[str, Any]:
        """Return the currently loaded configuration."""

        return dict(self.config)

    def get_settings(self) -> Settings:
        """Return the normalized settings."""

        return self.settings

    def _read_yaml(self, path: Path) -> dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as file:
                loaded = yaml.safe_load(file) or {}
        except OSError as exc:
            raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")
        return loaded

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge dictionaries, overriding base values with override values."""

        merged = dict(base)
        for key, value in override.items():
            if (
                key in merged
                and isinstance(merged[key], dict)
                and isinstance(value, dict)
            ):
                merged[key] = self._deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged

    def _normalize(self, config: dict[str, Any]) -> Settings:
        """Convert the raw mapping into typed settings, keeping defaults for gaps."""

        defaults = Settings()
        mute_cfg = dict(config.get("mute_state") or {})
        bluetooth_cfg = dict(config.get("bluetooth") or {})
        evidence_cfg = dict(config.get("evidence") or {})
        logging_cfg = dict(config.get("logging") or {})

        try:
            low_volume = int(mute_cfg.get("low_volume_percent", defaults.low_volume_percent))
            max_chars = int(evidence_cfg.get("max_chars", defaults.evidence_max_chars))
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Invalid numeric setting: {exc}") from exc

        log_file = logging_cfg.get("file")
        return Settings(
            low_volume_percent=low_volume,
            card_markers=_string_tuple(
                bluetooth_cfg.get("card_markers"), defaults.card_markers
            ),
            low_quality_markers=_string_tuple(
                bluetooth_cfg.get("low_quality_markers"), defaults.low_quality_markers
            ),
            high_quality_marker=str(
                bluetooth_cfg.get("high_quality_marker", defaults.high_quality_marker)
            ).lower(),
            evidence_max_chars=max_chars,
            log_file=Path(str(log_file)).expanduser() if log_file else None,
        )


def _default_override() -> Path | None:
    env_path = os.environ.get(OVERRIDE_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return USER_OVERRIDE_FILE.expanduser()


def _string_tuple(value: Any, default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return default
    if isinstance(value, str):
        return (value.lower(),)
    return tuple(str(item).lower() for item in value)
