"""URL opener adapters."""

from __future__ import annotations

import logging
import webbrowser

logger = logging.getLogger(__name__)


class WebbrowserUrlOpener:
    def open_url(self, url: str) -> None:
        logger.info("Opening configuration page: %s", url)
        try:
            webbrowser.open(url, new=2)
        except webbrowser.Error as e:
            logger.debug("Could not open %s: %s", url, e)  # The page is optional


class LoggingUrlOpener:
    """Only reports the URL, for headless sessions."""

    def __init__(self):
        self.opened: list[str] = []

    def open_url(self, url: str) -> None:
        self.opened.append(url)
        logger.info("Configuration page: %s", url)
