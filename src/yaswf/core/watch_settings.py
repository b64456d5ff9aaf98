"""Watch-side view of the settings the companion sends.

Mirrors what the watchface does with an incoming AppMessage: the vibrate
flag arrives either as a boolean or in the firmware's string form
``"on"``/``"off"``, and gates the vibration on phone disconnect.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .protocol import KEY_VIBRATE, KEY_VIBRATE_ID

# Milliseconds: on, off, on
DISCONNECT_VIBE_PATTERN = (500, 200, 500)

_VIBRATE_VALUES = {"on": True, "off": False}


def parse_vibrate(value: Any) -> bool | None:
    """Map a KEY_VIBRATE value to a bool, or None if unrecognised."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return _VIBRATE_VALUES.get(value)
    return None


@dataclass
class WatchSettings:
    vibrate_enabled: bool = True

    def apply_message(self, message: dict) -> bool:
        """Apply an incoming message; return True if the setting changed.

        Messages without KEY_VIBRATE, or with a value that is neither a
        boolean nor "on"/"off", leave the setting untouched.
        """
        if KEY_VIBRATE in message:
            raw = message[KEY_VIBRATE]
        elif KEY_VIBRATE_ID in message:
            raw = message[KEY_VIBRATE_ID]
        else:
            return False

        enabled = parse_vibrate(raw)
        if enabled is None or enabled == self.vibrate_enabled:
            return False
        self.vibrate_enabled = enabled
        return True

    def should_vibrate_on_disconnect(self, connected: bool, plugged: bool) -> bool:
        return not connected and not plugged and self.vibrate_enabled
