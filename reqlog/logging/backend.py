"""Log sinks that receive the assembled HTTP log records."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import partial
from typing import Any, Protocol

import structlog

from reqlog.core.constants import DEFAULT_LOGGER_NAME
from reqlog.logging.setup import shared_processors

# npm-style level names mapped onto structlog methods.
LEVEL_METHODS: dict[str, str] = {
    "silly": "debug",
    "verbose": "debug",
    "debug": "debug",
    "http": "info",
    "info": "info",
    "warn": "warning",
    "warning": "warning",
    "error": "error",
    "critical": "critical",
}


@dataclass(frozen=True, slots=True)
class LogRecord:
    """A single leveled message with structured metadata."""

    level: str
    message: str
    meta: dict[str, Any] = field(default_factory=dict)


class Backend(Protocol):
    """Anything that accepts finished log records."""

    def log(self, record: LogRecord) -> None:
        """Persist or print the record."""


class Transport(Protocol):
    """Output target for a one-off backend, e.g. ``structlog.PrintLogger``."""

    def msg(self, message: str) -> None:
        """Write a rendered line."""


class StructlogBackend:
    """Emit records through a structlog logger."""

    def __init__(self, logger: Any | None = None) -> None:
        self._logger = logger if logger is not None else structlog.get_logger(DEFAULT_LOGGER_NAME)

    def log(self, record: LogRecord) -> None:
        method_name = LEVEL_METHODS.get(record.level.lower(), "info")
        getattr(self._logger, method_name)(record.message, meta=record.meta)


class TransportFanout:
    """Forward each rendered line to every transport."""

    def __init__(self, transports: Sequence[Transport]) -> None:
        self._transports = tuple(transports)

    def _emit(self, method_name: str, *args: Any, **kwargs: Any) -> None:
        for transport in self._transports:
            method = getattr(transport, method_name, None) or transport.msg
            method(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        return partial(self._emit, name)


def create_backend(transports: Transport | Sequence[Transport]) -> StructlogBackend:
    """Build a short-lived backend that writes only to ``transports``."""
    if not isinstance(transports, Sequence):
        transports = [transports]
    logger = structlog.wrap_logger(
        TransportFanout(transports),
        processors=[*shared_processors, structlog.processors.JSONRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
    )
    return StructlogBackend(logger)
