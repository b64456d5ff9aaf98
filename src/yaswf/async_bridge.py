"""Background asyncio loop standing in for the watch link.

The companion's handlers are synchronous and called from the dispatcher.
The local AppMessage channel schedules each delivery on this loop and hands
the handler a ``concurrent.futures.Future`` straight away.
"""

import asyncio
import threading
from concurrent.futures import Future
from typing import Any, Coroutine


class AsyncBridge:
    """Event loop running in a daemon thread."""

    def __init__(self):
        self._loop: asyncio.AbstractEventLoop | None = None
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        if self._thread is not None:
            return
        ready = threading.Event()

        def _run():
            loop = asyncio.new_event_loop()
            self._loop = loop
            ready.set()
            loop.run_forever()
            loop.close()

        self._thread = threading.Thread(target=_run, name="yaswf-AppMessage-loop", daemon=True)
        self._thread.start()
        if not ready.wait(timeout=5.0):
            raise RuntimeError("AppMessage loop did not start")

    def submit(self, coro: Coroutine[Any, Any, Any]) -> Future:
        if self._loop is None:
            coro.close()
            raise RuntimeError("AsyncBridge not started. Call start() first.")
        return asyncio.run_coroutine_threadsafe(coro, self._loop)

    def stop(self) -> None:
        """Stop the loop; deliveries still in flight are dropped."""
        if self._thread is None:
            return
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5.0)
        self._thread = None
        self._loop = None
