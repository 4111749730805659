"""Success-path HTTP log record assembly."""

from __future__ import annotations

from typing import Any

from reqlog.api.exchange import RequestContext, RequestView, ResponseView
from reqlog.config.options import RequestLoggerConfig
from reqlog.core.levels import format_message, level_from_status
from reqlog.filtering.body_filter import filter_body
from reqlog.filtering.object_filter import filter_object
from reqlog.logging.backend import Backend, LogRecord, create_backend


class RequestLogger:
    """Decide whether a request is logged and build its record."""

    def __init__(self, config: RequestLoggerConfig) -> None:
        self._config = config

    @property
    def config(self) -> RequestLoggerConfig:
        return self._config

    def is_skipped(self, request: RequestView, response: ResponseView) -> bool:
        """Return True for ignored routes and requests rejected by predicates."""
        config = self._config
        return (
            request.url in config.ignored_routes
            or bool(config.ignore_route(request, response))
            or bool(config.skip(request, response))
        )

    def captures_response_body(self, context: RequestContext) -> bool:
        return self._config.meta and "body" in self._response_whitelist(context)

    def resolve_level(self, request: RequestView, response: ResponseView) -> str:
        config = self._config
        if callable(config.level):
            return config.level(request, response)
        if config.status_levels is not None and config.status_levels is not False:
            status_levels = {} if config.status_levels is True else config.status_levels
            return level_from_status(response.status_code, status_levels)
        return config.level

    def build_meta(
        self,
        request: RequestView,
        response: ResponseView,
        context: RequestContext,
    ) -> dict[str, Any]:
        config = self._config
        if not config.meta:
            return {}

        meta: dict[str, Any] = {}
        request_meta = filter_object(
            request,
            [*config.request_whitelist, *context.whitelists.req],
            config.request_filter,
        )
        response_meta = filter_object(
            response,
            self._response_whitelist(context),
            config.response_filter,
        )
        if request_meta is not None:
            meta["req"] = request_meta
        if response_meta is not None:
            meta["res"] = response_meta
        meta["response_time"] = response.response_time

        if self.captures_response_body(context):
            meta.setdefault("res", {})["body"] = response.decode_body()

        filtered_body = filter_body(
            request,
            config.request_whitelist,
            config.request_filter,
            [*config.body_whitelist, *context.whitelists.body],
            [*config.body_blacklist, *context.blacklists.body],
        )
        if "req" in meta:
            if filtered_body is not None:
                meta["req"]["body"] = filtered_body
            else:
                meta["req"].pop("body", None)

        if config.dynamic_meta is not None:
            meta.update(config.dynamic_meta(request, response))
        if config.meta_field:
            meta = {config.meta_field: meta}
        meta.update(config.base_meta)
        return meta

    def build_record(
        self,
        request: RequestView,
        response: ResponseView,
        context: RequestContext,
    ) -> LogRecord:
        return LogRecord(
            level=self.resolve_level(request, response),
            message=format_message(self._config.msg, req=request, res=response),
            meta=self.build_meta(request, response, context),
        )

    def backend_for(self, context: RequestContext) -> Backend:
        """Route-level transports win over configured ones, then the shared backend."""
        transports = context.transports or self._config.transports
        if transports:
            return create_backend(transports)
        return self._config.backend

    def emit(self, request: RequestView, response: ResponseView, context: RequestContext) -> LogRecord:
        record = self.build_record(request, response, context)
        self.backend_for(context).log(record)
        return record

    def _response_whitelist(self, context: RequestContext) -> list[str]:
        return [*self._config.response_whitelist, *context.whitelists.res]
