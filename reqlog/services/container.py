"""Dependency container for the logging middleware."""

from __future__ import annotations

import structlog

from reqlog.config.options import ErrorLoggerConfig, RequestLoggerConfig
from reqlog.config.settings import Settings
from reqlog.logging.backend import StructlogBackend


class LoggingContainer:
    """Create the shared backend and both middleware configs once."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

        self.backend = StructlogBackend(structlog.get_logger(settings.logger_name))
        self.request_config = RequestLoggerConfig.from_settings(
            settings,
            backend=self.backend,
        )
        self.error_config = ErrorLoggerConfig.from_settings(
            settings,
            backend=self.backend,
        )
