"""Facts about the running audio server."""

from __future__ import annotations

from dataclasses import dataclass

from why_no_sound.core.command_hal import CommandResult
from why_no_sound.parsing.blocks import parse_field


@dataclass(frozen=True)
class StackFact:
    """Service states plus what ``pactl info`` says about the server."""

    pipewire_active: bool
    wireplumber_active: bool
    server_reachable: bool
    server_name: str = ""

    @property
    def server_is_pipewire(self) -> bool:
        return "pipewire" in self.server_name.lower()


def is_service_active(result: CommandResult) -> bool:
    """Return True when ``systemctl is-active`` printed exactly ``active``."""

    return result.stdout.strip() == "active"


def parse_server_name(text: str) -> str:
    """Return the ``Server Name:`` value from ``pactl info`` output."""

    for line in (text or "").splitlines():
        parsed = parse_field(line)
        if parsed is not None and parsed[0] == "Server Name":
            return parsed[1]
    return ""


def extract_stack_fact(
    pipewire: CommandResult,
    wireplumber: CommandResult,
    info: CommandResult,
) -> StackFact:
    return StackFact(
        pipewire_active=is_service_active(pipewire),
        wireplumber_active=is_service_active(wireplumber),
        server_reachable=info.success,
        server_name=parse_server_name(info.stdout),
    )
