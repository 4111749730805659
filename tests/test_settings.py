"""Tests for environment-driven configuration."""

import pytest

from reqlog.config.options import ErrorLoggerConfig, RequestLoggerConfig
from reqlog.config.settings import Settings
from reqlog.core.constants import DEFAULT_REQUEST_WHITELIST
from reqlog.logging.backend import StructlogBackend
from reqlog.services.container import LoggingContainer


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)

    assert settings.request_whitelist == list(DEFAULT_REQUEST_WHITELIST)
    assert settings.response_whitelist == ["status_code"]
    assert settings.ignored_routes == []
    assert settings.log_level == "INFO"


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REQLOG_LOG_LEVEL", "debug")
    monkeypatch.setenv("REQLOG_IGNORED_ROUTES", '["/health"]')
    monkeypatch.setenv("REQLOG_STATUS_LEVELS_ENABLED", "true")
    monkeypatch.setenv("REQLOG_META_FIELD", "http")

    settings = Settings(_env_file=None)
    config = RequestLoggerConfig.from_settings(settings, level="debug")

    assert settings.log_level == "DEBUG"
    assert config.ignored_routes == ["/health"]
    assert config.status_levels is True
    assert config.meta_field == "http"
    assert config.level == "debug"


def test_configs_do_not_share_defaults() -> None:
    first = RequestLoggerConfig()
    second = RequestLoggerConfig()

    first.request_whitelist.append("body")
    first.base_meta["service"] = "a"

    assert "body" not in second.request_whitelist
    assert second.base_meta == {}
    assert ErrorLoggerConfig().level == "error"


def test_container_shares_one_backend() -> None:
    container = LoggingContainer(Settings(_env_file=None))

    assert isinstance(container.backend, StructlogBackend)
    assert container.request_config.backend is container.backend
    assert container.error_config.backend is container.backend
