"""Error-path HTTP log record assembly."""

from __future__ import annotations

from typing import Any

from reqlog.api.exchange import RequestContext, RequestView, ResponseView
from reqlog.config.options import ErrorLoggerConfig
from reqlog.core.exception_info import get_all_info
from reqlog.core.levels import format_message, resolve_option
from reqlog.filtering.object_filter import filter_object
from reqlog.logging.backend import Backend, LogRecord, create_backend


class ErrorLogger:
    """Observe a failed request and log it without handling the error."""

    def __init__(self, config: ErrorLoggerConfig) -> None:
        self._config = config

    @property
    def config(self) -> ErrorLoggerConfig:
        return self._config

    def build_meta(
        self,
        request: RequestView,
        response: ResponseView,
        exc: BaseException,
    ) -> dict[str, Any]:
        config = self._config
        meta: dict[str, Any] = get_all_info(exc)
        request_meta = filter_object(request, config.request_whitelist, config.request_filter)
        if request_meta is not None:
            meta["req"] = request_meta

        if config.dynamic_meta is not None:
            meta.update(config.dynamic_meta(request, response, exc))
        if config.meta_field:
            meta = {config.meta_field: meta}
        meta.update(config.base_meta)
        return meta

    def build_record(
        self,
        request: RequestView,
        response: ResponseView,
        exc: BaseException,
    ) -> LogRecord:
        config = self._config
        meta = self.build_meta(request, response, exc)
        return LogRecord(
            level=resolve_option(config.level, request, response, exc),
            message=format_message(config.msg, req=request, res=response, err=exc),
            meta=meta,
        )

    def backend_for(self, context: RequestContext | None) -> Backend:
        transports = (context.transports if context else None) or self._config.transports
        if transports:
            return create_backend(transports)
        return self._config.backend

    def emit(
        self,
        request: RequestView,
        response: ResponseView,
        exc: BaseException,
        context: RequestContext | None = None,
    ) -> LogRecord:
        record = self.build_record(request, response, exc)
        self.backend_for(context).log(record)
        return record
