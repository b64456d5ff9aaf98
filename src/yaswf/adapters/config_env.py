"""Env configuration adapter producing a structured AppConfig."""

from __future__ import annotations

from ..config import config as env_config
from ..core.config_model import AppConfig


def load_app_config() -> AppConfig:
    return AppConfig(
        debug=env_config.DEBUG,
        open_browser=env_config.OPEN_BROWSER,
        send_latency=max(0.0, env_config.SEND_LATENCY),
        send_timeout=env_config.SEND_TIMEOUT,
    )
