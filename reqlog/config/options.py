"""Middleware configuration objects.

Each middleware receives one of these at construction time. Defaults are
copied from :mod:`reqlog.core.constants`, so mutating a config never leaks into
another one.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from reqlog.config.settings import Settings
from reqlog.core.constants import (
    DEFAULT_BODY_BLACKLIST,
    DEFAULT_BODY_WHITELIST,
    DEFAULT_ERROR_LEVEL,
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_IGNORED_ROUTES,
    DEFAULT_LEVEL,
    DEFAULT_REQUEST_MESSAGE,
    DEFAULT_REQUEST_WHITELIST,
    DEFAULT_RESPONSE_WHITELIST,
)
from reqlog.core.levels import LevelSpec, MessageSpec, StatusLevels
from reqlog.filtering.object_filter import (
    FieldExtractor,
    default_request_filter,
    default_response_filter,
)
from reqlog.logging.backend import Backend, StructlogBackend, Transport

ExchangePredicate = Callable[[Any, Any], bool]
MetaFactory = Callable[..., Mapping[str, Any]]


def never_skip(request: Any, response: Any) -> bool:
    return False


@dataclass(slots=True)
class RequestLoggerConfig:
    """Options of the success-path logger."""

    request_whitelist: list[str] = field(default_factory=lambda: list(DEFAULT_REQUEST_WHITELIST))
    response_whitelist: list[str] = field(default_factory=lambda: list(DEFAULT_RESPONSE_WHITELIST))
    body_whitelist: list[str] = field(default_factory=lambda: list(DEFAULT_BODY_WHITELIST))
    body_blacklist: list[str] = field(default_factory=lambda: list(DEFAULT_BODY_BLACKLIST))
    request_filter: FieldExtractor = default_request_filter
    response_filter: FieldExtractor = default_response_filter
    ignored_routes: list[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_ROUTES))
    ignore_route: ExchangePredicate = never_skip
    skip: ExchangePredicate = never_skip
    level: LevelSpec = DEFAULT_LEVEL
    # None disables status mapping; True or a mapping enables it.
    status_levels: StatusLevels | bool | None = None
    msg: MessageSpec = DEFAULT_REQUEST_MESSAGE
    base_meta: dict[str, Any] = field(default_factory=dict)
    meta_field: str | None = None
    meta: bool = True
    dynamic_meta: MetaFactory | None = None
    backend: Backend = field(default_factory=StructlogBackend)
    transports: Transport | Sequence[Transport] | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "RequestLoggerConfig":
        """Build a config from environment settings plus explicit overrides."""
        values: dict[str, Any] = {
            "request_whitelist": list(settings.request_whitelist),
            "response_whitelist": list(settings.response_whitelist),
            "body_whitelist": list(settings.body_whitelist),
            "body_blacklist": list(settings.body_blacklist),
            "ignored_routes": list(settings.ignored_routes),
            "status_levels": True if settings.status_levels_enabled else None,
            "meta_field": settings.meta_field,
        }
        values.update(overrides)
        return cls(**values)


@dataclass(slots=True)
class ErrorLoggerConfig:
    """Options of the error-path logger."""

    request_whitelist: list[str] = field(default_factory=lambda: list(DEFAULT_REQUEST_WHITELIST))
    request_filter: FieldExtractor = default_request_filter
    msg: MessageSpec = DEFAULT_ERROR_MESSAGE
    base_meta: dict[str, Any] = field(default_factory=dict)
    meta_field: str | None = None
    level: LevelSpec = DEFAULT_ERROR_LEVEL
    dynamic_meta: MetaFactory | None = None
    backend: Backend = field(default_factory=StructlogBackend)
    transports: Transport | Sequence[Transport] | None = None

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: Any) -> "ErrorLoggerConfig":
        values: dict[str, Any] = {
            "request_whitelist": list(settings.request_whitelist),
            "meta_field": settings.meta_field,
        }
        values.update(overrides)
        return cls(**values)
