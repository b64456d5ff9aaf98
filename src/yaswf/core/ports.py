"""Core ports (interfaces) for the yaswf companion.

These protocols define the boundary between the configuration hand-off and
the host runtime that delivers events, opens pages and talks to the watch.
"""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any, Callable, Protocol, runtime_checkable

EventHandler = Callable[[Any], None]


@runtime_checkable
class EventSource(Protocol):
    """Subscribe handlers to host lifecycle events by name."""

    def on(self, event_name: str, handler: EventHandler) -> None:
        """Register a handler for an event."""


@runtime_checkable
class UrlOpener(Protocol):
    """Opens a page in the host's configuration webview."""

    def open_url(self, url: str) -> None:
        """Open an absolute URL; must not wait for the page to close."""


@runtime_checkable
class MessageChannel(Protocol):
    """Asynchronous AppMessage channel to the watch."""

    def send_app_message(self, message: dict[str, Any]) -> Future:
        """Queue a message for delivery.

        The returned future resolves with an acknowledgement event, or with
        a MessageSendError carrying the failure event.
        """
