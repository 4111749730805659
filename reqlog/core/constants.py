"""Default field lists, templates and level names."""

from __future__ import annotations

# Request attributes that are safe to log. "body" is left out because it can
# carry passwords and other secrets; opt in per app or per route.
DEFAULT_REQUEST_WHITELIST: tuple[str, ...] = (
    "url",
    "headers",
    "method",
    "http_version",
    "original_url",
    "query",
)

DEFAULT_RESPONSE_WHITELIST: tuple[str, ...] = ("status_code",)

# Usually configured at the route level instead.
DEFAULT_BODY_WHITELIST: tuple[str, ...] = ()
DEFAULT_BODY_BLACKLIST: tuple[str, ...] = ()

# Health checks and pings that would otherwise flood the logs.
DEFAULT_IGNORED_ROUTES: tuple[str, ...] = ()

DEFAULT_REQUEST_MESSAGE = "HTTP {req.method} {req.url}"
DEFAULT_ERROR_MESSAGE = "HTTP {req.method} {req.url} {err}"

DEFAULT_LEVEL = "info"
DEFAULT_ERROR_LEVEL = "error"

LOG_CONTEXT_STATE_KEY = "log_context"
DEFAULT_LOGGER_NAME = "reqlog.http"
