"""Log level and message resolution."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

T = TypeVar("T")

# A level or message is either a static value or computed per request.
LevelSpec = str | Callable[..., str]
MessageSpec = str | Callable[..., str]
StatusLevels = Mapping[str, str]


def resolve_option(option: T | Callable[..., T], *args: Any) -> T:
    """Return ``option(*args)`` for callables, else the option itself."""
    if callable(option):
        return option(*args)
    return option


def format_message(spec: MessageSpec, **exchange: Any) -> str:
    """Render a message template or call a message function.

    Templates use ``str.format`` fields such as ``{req.method}``; functions
    receive the exchange objects positionally (``req, res[, err]``).
    """
    if callable(spec):
        return spec(*exchange.values())
    return spec.format(**exchange)


def level_from_status(status_code: int | None, status_levels: StatusLevels) -> str:
    """Map a status code onto a level; the highest matching threshold wins."""
    level = "info"
    code = status_code or 0
    if code >= 200:
        level = status_levels.get("success") or "info"
    if code >= 400:
        level = status_levels.get("warn") or "warn"
    if code >= 500:
        level = status_levels.get("error") or "error"
    return level
