"""Local AppMessage channel delivering to an in-memory watch."""

from __future__ import annotations

import asyncio
import itertools
import logging
from concurrent.futures import Future
from typing import Any

from ..async_bridge import AsyncBridge
from ..core.protocol import KEY_VIBRATE, MessageSendError
from ..core.watch_settings import WatchSettings, parse_vibrate

logger = logging.getLogger(__name__)


class LocalAppMessageChannel:
    """Sends messages to a WatchSettings inbox on the async bridge.

    The watch NACKs a message whose KEY_VIBRATE value it cannot read, which
    surfaces as a transmission failure on the sender's side.
    """

    def __init__(
        self,
        settings: WatchSettings,
        bridge: AsyncBridge,
        latency: float = 0.05,
    ):
        self._settings = settings
        self._bridge = bridge
        self._latency = latency
        self._transaction_ids = itertools.count(1)

    @property
    def settings(self) -> WatchSettings:
        return self._settings

    def send_app_message(self, message: dict[str, Any]) -> Future:
        transaction_id = next(self._transaction_ids)
        return self._bridge.submit(self._deliver(dict(message), transaction_id))

    async def _deliver(self, message: dict[str, Any], transaction_id: int) -> dict[str, Any]:
        await asyncio.sleep(self._latency)

        if KEY_VIBRATE in message and parse_vibrate(message[KEY_VIBRATE]) is None:
            logger.debug("Watch rejected message %s", message)
            raise MessageSendError(
                {"transactionId": transaction_id, "error": f"Unreadable {KEY_VIBRATE} value"}
            )

        changed = self._settings.apply_message(message)
        logger.debug(
            "Delivered %s (transaction %d, changed=%s)", message, transaction_id, changed
        )
        return {"transactionId": transaction_id}
