"""Audio diagnostic checks, in evaluation order.

The order matters: the report's probable cause is the first error in this
order, so checks for the server and hardware come before routing and
bluetooth checks that depend on them.
"""

from why_no_sound.checks import (
    audio_stack,
    bluetooth_profile,
    default_sink,
    device_presence,
    mute_state,
    stream_routing,
)

CHECKS = (
    (audio_stack.CHECK_NAME, audio_stack.check),
    (device_presence.CHECK_NAME, device_presence.check),
    (default_sink.CHECK_NAME, default_sink.check),
    (mute_state.CHECK_NAME, mute_state.check),
    (stream_routing.CHECK_NAME, stream_routing.check),
    (bluetooth_profile.CHECK_NAME, bluetooth_profile.check),
)

CHECK_NAMES = tuple(name for name, _ in CHECKS)

__all__ = ["CHECKS", "CHECK_NAMES"]
