"""Request/response views and per-request logging state."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs, parse_qsl

from starlette.datastructures import Headers
from starlette.requests import Request
from starlette.types import Scope

from reqlog.core.constants import LOG_CONTEXT_STATE_KEY
from reqlog.core.exceptions import BodyDecodeError
from reqlog.logging.backend import Transport


@dataclass(slots=True)
class RouteWhitelists:
    req: list[str] = field(default_factory=list)
    res: list[str] = field(default_factory=list)
    body: list[str] = field(default_factory=list)


@dataclass(slots=True)
class RouteBlacklists:
    body: list[str] = field(default_factory=list)


@dataclass(slots=True)
class RequestContext:
    """Logging state owned by a single in-flight request.

    Handlers reach it through ``request.state.log_context`` and may extend the
    route-level lists to log extra fields for this request only.
    """

    start_time: float
    url: str = ""
    whitelists: RouteWhitelists = field(default_factory=RouteWhitelists)
    blacklists: RouteBlacklists = field(default_factory=RouteBlacklists)
    transports: Transport | Sequence[Transport] | None = None
    body_chunks: list[bytes] = field(default_factory=list)

    @property
    def request_body(self) -> bytes | None:
        """Request body read so far by the application, or ``None``."""
        if not self.body_chunks:
            return None
        return b"".join(self.body_chunks)


def parse_request_body(raw_body: bytes | None, content_type: str) -> Any:
    """Parse JSON and url-encoded bodies; anything else counts as unparsed."""
    if not raw_body:
        return None
    if "json" in content_type:
        try:
            return json.loads(raw_body)
        except ValueError:
            return None
    if "application/x-www-form-urlencoded" in content_type:
        return dict(parse_qsl(raw_body.decode("utf-8", errors="replace"), keep_blank_values=True))
    return None


def parse_query(query_string: str) -> dict[str, str | list[str]]:
    """Map query keys to their value, or to every value when a key repeats."""
    parsed = parse_qs(query_string, keep_blank_values=True)
    return {key: values if len(values) > 1 else values[0] for key, values in parsed.items()}


class RequestView:
    """Loggable attributes of an ASGI HTTP request."""

    def __init__(
        self,
        method: str,
        url: str,
        original_url: str | None,
        headers: dict[str, str],
        http_version: str,
        query: dict[str, str | list[str]],
        ip: str | None = None,
        body: Any = None,
    ) -> None:
        self.method = method
        self.original_url = original_url
        # Prefer the URL as received, which survives internal route rewriting.
        self.url = original_url or url
        self.headers = headers
        self.http_version = http_version
        self.query = query
        self.ip = ip
        self.body = body

    @classmethod
    def from_scope(cls, scope: Scope, raw_body: bytes | None = None) -> "RequestView":
        query_string = scope.get("query_string", b"").decode("latin-1")
        suffix = f"?{query_string}" if query_string else ""
        raw_path = scope.get("raw_path")
        original_url = None
        if raw_path:
            original_url = f"{raw_path.split(b'?', 1)[0].decode('latin-1')}{suffix}"
        headers = Headers(scope=scope)
        client = scope.get("client")
        return cls(
            method=scope.get("method", "GET"),
            url=f"{scope.get('path', '')}{suffix}",
            original_url=original_url,
            headers=dict(headers.items()),
            http_version=scope.get("http_version", "1.1"),
            query=parse_query(query_string),
            ip=client[0] if client else None,
            body=parse_request_body(raw_body, headers.get("content-type", "")),
        )


class ResponseView:
    """Loggable attributes of an ASGI HTTP response."""

    def __init__(
        self,
        status_code: int | None = None,
        headers: dict[str, str] | None = None,
        response_time: float | None = None,
        raw_body: bytes = b"",
    ) -> None:
        self.status_code = status_code
        self.headers = headers or {}
        self.response_time = response_time
        self.raw_body = raw_body

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    def decode_body(self) -> Any:
        """Return the body as parsed JSON or text, ``None`` when empty."""
        if not self.raw_body:
            return None
        if "json" in self.content_type:
            try:
                return json.loads(self.raw_body)
            except ValueError as exc:
                raise BodyDecodeError("Response body is not valid JSON") from exc
        return self.raw_body.decode("utf-8", errors="replace")


def get_log_context(request: Request) -> RequestContext | None:
    """Return the logging state of ``request`` if the logger is installed."""
    return getattr(request.state, LOG_CONTEXT_STATE_KEY, None)


def add_route_whitelist(
    request: Request,
    *,
    req: Sequence[str] = (),
    res: Sequence[str] = (),
    body: Sequence[str] = (),
) -> None:
    """Log extra request, response or body fields for this request only."""
    context = get_log_context(request)
    if context is None:
        return
    context.whitelists.req.extend(req)
    context.whitelists.res.extend(res)
    context.whitelists.body.extend(body)


def add_route_blacklist(request: Request, *, body: Sequence[str] = ()) -> None:
    context = get_log_context(request)
    if context is None:
        return
    context.blacklists.body.extend(body)


def set_route_transports(request: Request, transports: Transport | Sequence[Transport]) -> None:
    """Send this request's record to ``transports`` instead of the shared backend."""
    context = get_log_context(request)
    if context is None:
        return
    context.transports = transports
