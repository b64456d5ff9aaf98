"""Configuration hand-off protocol between the companion, the remote page and the watch.

The remote configuration page returns its settings as a percent-encoded JSON
object. The companion decodes it and forwards a flat device message over the
AppMessage channel:

    %7B%22vibrate%22%3Atrue%7D  ->  {"vibrate": true}  ->  {"KEY_VIBRATE": true}

The payload schema is implicit and unversioned. Keys other than ``vibrate``
are ignored, and a missing ``vibrate`` is forwarded as ``None``.
"""

from __future__ import annotations

import json
import re
from typing import Any
from urllib.parse import unquote_to_bytes

CONFIGURATION_URL = "https://goddess-gate.com/yaswf/index.html"

KEY_VIBRATE = "KEY_VIBRATE"
# Numeric AppMessage key the watchface firmware uses for KEY_VIBRATE
KEY_VIBRATE_ID = 0

EVENT_READY = "ready"
EVENT_SHOW_CONFIGURATION = "showConfiguration"
EVENT_WEBVIEW_CLOSED = "webviewclosed"

_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class MalformedPayloadError(ValueError):
    """The configuration page returned something that is not percent-encoded JSON."""


class MessageSendError(RuntimeError):
    """The message channel reported a transmission failure."""

    def __init__(self, event: Any = None, message: str = "AppMessage delivery failed"):
        super().__init__(message)
        self.event = event


def decode_response(raw_response: str) -> Any:
    """Percent-decode and JSON-parse a configuration page response.

    Decoding is strict: a ``%`` not followed by two hex digits, or bytes that
    are not valid UTF-8, are rejected. ``+`` is kept as a literal plus.
    """
    if not isinstance(raw_response, str):
        raise MalformedPayloadError(f"Response must be a string, got {type(raw_response).__name__}")

    if _BAD_ESCAPE.search(raw_response):
        raise MalformedPayloadError("Malformed percent-encoding in response")

    try:
        text = unquote_to_bytes(raw_response).decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedPayloadError(f"Response is not valid UTF-8: {e}") from e

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(f"Response is not valid JSON: {e}") from e


def build_device_message(payload: Any) -> dict[str, Any]:
    """Translate a decoded configuration payload into the device message.

    A JSON ``null`` payload is rejected. Any other value that is not an
    object has no ``vibrate`` field and is forwarded as ``None``.
    """
    if payload is None:
        raise MalformedPayloadError("Configuration payload is null")
    if not isinstance(payload, dict):
        return {KEY_VIBRATE: None}
    return {KEY_VIBRATE: payload.get("vibrate")}


def _reject_constant(name: str) -> Any:
    raise MalformedPayloadError(f"Response is not valid JSON: {name} is not allowed")
