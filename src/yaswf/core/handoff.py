"""Configuration hand-off for the yaswf watchface.

Opens the remote configuration page when the host asks for it, and turns
the page's response into a device message once the webview closes. Each
handler is independent and keeps no state between events.
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import Future
from typing import Any, Callable

from .ports import EventSource, MessageChannel, UrlOpener
from .protocol import (
    CONFIGURATION_URL,
    EVENT_READY,
    EVENT_SHOW_CONFIGURATION,
    EVENT_WEBVIEW_CLOSED,
    MessageSendError,
    build_device_message,
    decode_response,
)

logger = logging.getLogger(__name__)


def send_with_callbacks(
    channel: MessageChannel,
    message: dict[str, Any],
    on_success: Callable[[Any], None],
    on_failure: Callable[[Any], None],
) -> Future:
    """Send a message and resolve exactly one of two continuations.

    The continuations run once, from the future's completion, with the
    acknowledgement event or the failure event respectively. They are
    called from whichever thread completes the future; with the local
    channel that is the async bridge thread, not the dispatcher's.
    """
    future = channel.send_app_message(message)

    def _complete(done: Future) -> None:
        if done.cancelled():
            on_failure(None)
            return
        error = done.exception()
        if error is None:
            on_success(done.result())
        elif isinstance(error, MessageSendError):
            on_failure(error.event)
        else:
            on_failure(error)

    future.add_done_callback(_complete)
    return future


class ConfigurationHandoff:
    """Bridges host lifecycle events to the remote configuration page."""

    def __init__(self, url_opener: UrlOpener, channel: MessageChannel):
        self._url_opener = url_opener
        self._channel = channel

    def register(self, events: EventSource) -> None:
        """Subscribe the three lifecycle handlers on an event source."""
        events.on(EVENT_READY, self.on_ready)
        events.on(EVENT_SHOW_CONFIGURATION, self.on_show_configuration)
        events.on(EVENT_WEBVIEW_CLOSED, self.on_webview_closed)

    def on_ready(self, event: Any = None) -> None:
        logger.info("Companion ready")

    def on_show_configuration(self, event: Any = None) -> None:
        # The response arrives later as a separate webviewclosed event
        self._url_opener.open_url(CONFIGURATION_URL)

    def on_webview_closed(self, event: Any) -> Future:
        """Decode the page response and forward it to the watch.

        Raises MalformedPayloadError before anything is sent if the response
        is not percent-encoded JSON.
        """
        configuration = decode_response(_response_of(event))
        logger.info("Configuration window returned: %s", json.dumps(configuration))

        message = build_device_message(configuration)
        return send_with_callbacks(
            self._channel,
            message,
            on_success=self.on_sent,
            on_failure=self.on_send_failed,
        )

    def on_sent(self, ack: Any) -> None:
        logger.info("Sending settings data...")

    def on_send_failed(self, failure: Any) -> None:
        logger.warning("Settings feedback failed! (%s)", failure)


def _response_of(event: Any) -> Any:
    if isinstance(event, dict):
        return event.get("response")
    return getattr(event, "response", None)
