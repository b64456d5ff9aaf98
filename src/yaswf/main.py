#!/usr/bin/env python3
"""yaswf companion: run one configuration hand-off against a local watch"""

import argparse
import logging
import sys
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeoutError

from .adapters.app_message import LocalAppMessageChannel
from .adapters.browser import LoggingUrlOpener, WebbrowserUrlOpener
from .adapters.config_env import load_app_config
from .async_bridge import AsyncBridge
from .core.events import EventDispatcher
from .core.handoff import ConfigurationHandoff
from .core.protocol import (
    EVENT_READY,
    EVENT_SHOW_CONFIGURATION,
    EVENT_WEBVIEW_CLOSED,
    MalformedPayloadError,
    MessageSendError,
)
from .core.watch_settings import WatchSettings


class Companion:
    """Local host runtime wired to the configuration hand-off"""

    def __init__(self, app_config=None, settings=None, url_opener=None, bridge=None):
        self.config = app_config or load_app_config()
        self.settings = settings or WatchSettings()
        self._owns_bridge = bridge is None
        if bridge is None:
            bridge = AsyncBridge()
            bridge.start()
        self.bridge = bridge
        if url_opener is None:
            url_opener = WebbrowserUrlOpener() if self.config.open_browser else LoggingUrlOpener()
        self.channel = LocalAppMessageChannel(
            self.settings,
            bridge=bridge,
            latency=self.config.send_latency,
        )
        self.events = EventDispatcher()
        self.handoff = ConfigurationHandoff(url_opener, self.channel)
        self.handoff.register(self.events)

    def close(self):
        if self._owns_bridge:
            self.bridge.stop()

    def start(self):
        self.events.emit(EVENT_READY)

    def show_configuration(self):
        self.events.emit(EVENT_SHOW_CONFIGURATION)

    def close_configuration(self, response) -> Future | None:
        """Emit webviewclosed and return the resulting send future."""
        results = self.events.emit(EVENT_WEBVIEW_CLOSED, response)
        return next((r for r in results if isinstance(r, Future)), None)

    def run(self, response=None):
        """Run one hand-off; return a process exit status"""
        self.start()
        self.show_configuration()

        if response is None:
            print("Paste the configuration page response and press Enter:")
            response = sys.stdin.readline().strip()

        try:
            future = self.close_configuration(response)
        except MalformedPayloadError as e:
            print(f"❌ Malformed response: {e}")
            return 1

        try:
            ack = future.result(timeout=self.config.send_timeout)
        except MessageSendError as e:
            print(f"⚠ Settings not delivered: {e.event}")
            return 1
        except FutureTimeoutError:
            print("⚠ Watch did not acknowledge in time")
            return 1

        state = "on" if self.settings.vibrate_enabled else "off"
        print(f"✓ Delivered (transaction {ack['transactionId']}), vibrate {state}")
        return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="yaswf-companion",
        description="Open the yaswf configuration page and send its result to the watch",
    )
    parser.add_argument(
        "response",
        nargs="?",
        help="percent-encoded response returned by the configuration page (read from stdin if omitted)",
    )
    args = parser.parse_args(argv)

    app_config = load_app_config()
    logging.basicConfig(
        level=logging.DEBUG if app_config.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    companion = Companion(app_config=app_config)
    try:
        return companion.run(args.response)
    finally:
        companion.close()


if __name__ == "__main__":
    sys.exit(main())
