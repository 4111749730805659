"""ASGI middleware for request/response and error logging."""

from __future__ import annotations

import dataclasses
import time
from collections.abc import Callable
from typing import Any

import structlog
from starlette.datastructures import Headers
from starlette.middleware import Middleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from reqlog.api.exchange import RequestContext, RequestView, ResponseView, parse_request_body
from reqlog.config.options import ErrorLoggerConfig, RequestLoggerConfig
from reqlog.core.constants import LOG_CONTEXT_STATE_KEY
from reqlog.services.error_logger import ErrorLogger
from reqlog.services.request_logger import RequestLogger

logger = structlog.get_logger(__name__)


class RequestBodyRecorder:
    """Wrap ``receive`` and keep a copy of the body chunks the app reads."""

    def __init__(self, receive: Receive, context: RequestContext) -> None:
        self._receive = receive
        self._context = context

    async def __call__(self) -> Message:
        message = await self._receive()
        if message["type"] == "http.request":
            self._context.body_chunks.append(message.get("body", b""))
        return message


class ResponseFinalizer:
    """Wrap ``send`` and run a hook once the last body chunk went out.

    Every message is forwarded unchanged. The hook fires after the final
    ``http.response.body`` message has been delivered, at most once.
    """

    def __init__(
        self,
        send: Send,
        start_time: float,
        on_finalize: Callable[[ResponseView], None] | None = None,
        capture_body: Callable[[], bool] = lambda: False,
    ) -> None:
        self._send = send
        self._start_time = start_time
        self._on_finalize = on_finalize
        self._capture_body = capture_body
        self._chunks: list[bytes] = []
        self._finalized = False
        self.response = ResponseView()

    @property
    def finalized(self) -> bool:
        return self._finalized

    async def __call__(self, message: Message) -> None:
        message_type = message["type"]
        if message_type == "http.response.start":
            self.response.status_code = message["status"]
            self.response.headers = dict(Headers(raw=list(message.get("headers", []))).items())
        elif message_type == "http.response.body" and not self._finalized:
            if self._capture_body():
                self._chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                self._finalized = True
                self.response.response_time = round((time.perf_counter() - self._start_time) * 1000, 3)
                self.response.raw_body = b"".join(self._chunks)
                await self._send(message)
                self._fire()
                return
        await self._send(message)

    def fail(self, status_code: int = 500) -> None:
        """Finalize a response the application never completed.

        Used when the app raised: the server answers with ``status_code``
        from outside this wrapper, so the hook has to fire here.
        """
        if self._finalized:
            return
        self._finalized = True
        if self.response.status_code is None:
            self.response.status_code = status_code
        self.response.response_time = round((time.perf_counter() - self._start_time) * 1000, 3)
        self.response.raw_body = b"".join(self._chunks)
        self._fire()

    def _fire(self) -> None:
        if self._on_finalize is not None:
            self._on_finalize(self.response)


class RequestLoggerMiddleware:
    """Log one record per completed HTTP response."""

    def __init__(self, app: ASGIApp, config: RequestLoggerConfig | None = None) -> None:
        self.app = app
        self._request_logger = RequestLogger(config or RequestLoggerConfig())

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        state = scope.setdefault("state", {})
        if LOG_CONTEXT_STATE_KEY in state:
            # An outer request logger already hooked this request.
            await self.app(scope, receive, send)
            return

        context = RequestContext(start_time=time.perf_counter())
        state[LOG_CONTEXT_STATE_KEY] = context
        request = RequestView.from_scope(scope)
        context.url = request.url

        if self._request_logger.is_skipped(request, ResponseView()):
            logger.debug("http_request_skipped", url=request.url)
            await self.app(scope, receive, send)
            return

        def on_finalize(response: ResponseView) -> None:
            request.body = parse_request_body(
                context.request_body,
                request.headers.get("content-type", ""),
            )
            self._request_logger.emit(request, response, context)

        finalizer = ResponseFinalizer(
            send,
            start_time=context.start_time,
            on_finalize=on_finalize,
            capture_body=lambda: self._request_logger.captures_response_body(context),
        )
        try:
            await self.app(scope, RequestBodyRecorder(receive, context), finalizer)
        except Exception:
            finalizer.fail(status_code=500)
            raise


class ErrorLoggerMiddleware:
    """Log exceptions escaping the application, then re-raise them."""

    def __init__(self, app: ASGIApp, config: ErrorLoggerConfig | None = None) -> None:
        self.app = app
        self._error_logger = ErrorLogger(config or ErrorLoggerConfig())

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        tracker = ResponseFinalizer(send, start_time=time.perf_counter())
        try:
            await self.app(scope, receive, tracker)
        except Exception as exc:
            context: RequestContext | None = scope.get("state", {}).get(LOG_CONTEXT_STATE_KEY)
            request = RequestView.from_scope(
                scope,
                raw_body=context.request_body if context is not None else None,
            )
            self._error_logger.emit(request, tracker.response, exc, context)
            raise


def request_logger(config: RequestLoggerConfig | None = None, **options: Any) -> Middleware:
    """Return a middleware entry for ``Starlette(middleware=[...])``.

    Keyword options build a new config or override fields of ``config``.
    """
    if config is None:
        config = RequestLoggerConfig(**options)
    elif options:
        config = dataclasses.replace(config, **options)
    return Middleware(RequestLoggerMiddleware, config=config)


def error_logger(config: ErrorLoggerConfig | None = None, **options: Any) -> Middleware:
    if config is None:
        config = ErrorLoggerConfig(**options)
    elif options:
        config = dataclasses.replace(config, **options)
    return Middleware(ErrorLoggerMiddleware, config=config)


def add_logging_middleware(
    app: Any,
    *,
    request_config: RequestLoggerConfig | None = None,
    error_config: ErrorLoggerConfig | None = None,
) -> None:
    """Install both loggers; the request logger ends up outermost."""
    app.add_middleware(ErrorLoggerMiddleware, config=error_config or ErrorLoggerConfig())
    app.add_middleware(RequestLoggerMiddleware, config=request_config or RequestLoggerConfig())
