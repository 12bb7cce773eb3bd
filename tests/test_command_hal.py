"""Tests for the command execution layer."""

from __future__ import annotations

import subprocess

from why_no_sound.core import command_hal
from why_no_sound.core.command_hal import FakeCommandRunner, SubprocessCommandRunner, ok


def test_successful_command(monkeypatch) -> None:
    captured = {}

    def fake_run(cmd, **kwargs):
        captured["cmd"] = cmd
        captured["kwargs"] = kwargs
        return subprocess.CompletedProcess(cmd, 0, stdout="active\n", stderr="")

    monkeypatch.setattr(command_hal.subprocess, "run", fake_run)
    result = SubprocessCommandRunner().run("systemctl", ["--user", "is-active", "pipewire"])

    assert captured["cmd"] == ["systemctl", "--user", "is-active", "pipewire"]
    assert captured["kwargs"]["check"] is False
    assert result.success is True
    assert result.stdout == "active\n"


def test_non_zero_exit_keeps_output(monkeypatch) -> None:
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 3, stdout="inactive\n", stderr="")

    monkeypatch.setattr(command_hal.subprocess, "run", fake_run)
    result = SubprocessCommandRunner().run("systemctl", ["--user", "is-active", "pipewire"])

    assert result.success is False
    assert result.stdout == "inactive\n"


def test_missing_binary_is_reported_not_raised(monkeypatch) -> None:
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(command_hal.subprocess, "run", fake_run)
    result = SubprocessCommandRunner().run("aplay", ["-l"])

    assert result.success is False
    assert result.stdout == ""
    assert result.stderr.startswith("Failed to execute command:")


def test_fake_runner_replays_and_records() -> None:
    runner = FakeCommandRunner(responses={"pactl info": ok("Server Name: PulseAudio\n")})

    assert runner.run("pactl", ["info"]).stdout == "Server Name: PulseAudio\n"
    missing = runner.run("aplay", ["-l"])
    assert missing.success is False
    assert "command not found" in missing.stderr
    assert runner.calls == ["pactl info", "aplay -l"]
