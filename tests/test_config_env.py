from yaswf.adapters import config_env
from yaswf.core.config_model import AppConfig


class _Config:
    DEBUG = True
    OPEN_BROWSER = False
    SEND_LATENCY = -1.0
    SEND_TIMEOUT = 3.0


def test_load_app_config_maps_env_config(monkeypatch):
    monkeypatch.setattr(config_env, "env_config", _Config())

    app_config = config_env.load_app_config()

    assert app_config == AppConfig(
        debug=True,
        open_browser=False,
        send_latency=0.0,
        send_timeout=3.0,
    )


def test_config_has_no_url_override():
    from yaswf.config import config

    assert not hasattr(config, "CONFIG_URL")
    assert "config_url" not in AppConfig.__dataclass_fields__
