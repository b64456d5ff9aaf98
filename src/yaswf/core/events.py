"""Host lifecycle events and a minimal in-process dispatcher."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any

from .ports import EventHandler


@dataclass(frozen=True)
class HostEvent:
    """Event delivered by the host runtime.

    Only ``webviewclosed`` carries a ``response``.
    """

    type: str
    response: str | None = None


class EventDispatcher:
    """Runs handlers by event name, in registration order, on the caller's thread.

    Handler faults are not caught here; they propagate to whoever emitted
    the event.
    """

    def __init__(self):
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def on(self, event_name: str, handler: EventHandler) -> None:
        self._handlers[event_name].append(handler)

    def off(self, event_name: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, event_name: str, response: str | None = None) -> list[Any]:
        """Deliver an event and return what each handler returned."""
        event = HostEvent(type=event_name, response=response)
        handlers = list(self._handlers.get(event_name, []))
        if not handlers:
            logging.getLogger(__name__).debug("No handler for event %r", event_name)
        return [handler(event) for handler in handlers]
