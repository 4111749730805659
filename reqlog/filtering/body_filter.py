"""Selection of request body fields for the log."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from reqlog.filtering.object_filter import FieldExtractor, filter_object


def _body_keys(body: Any) -> list[str]:
    if isinstance(body, Mapping):
        return list(body.keys())
    return []


def filter_body(
    request: Any,
    request_whitelist: Sequence[str],
    request_filter: FieldExtractor,
    body_whitelist: Sequence[str],
    body_blacklist: Sequence[str],
) -> dict[str, Any] | None:
    """Return the part of ``request.body`` that may be logged.

    Rules are evaluated in order and the first match wins:

    1. no parsed body: nothing is logged;
    2. a blacklist without a whitelist: every body key plus the blacklisted
       keys is used as the field set. Blacklisted keys are *not* removed by
       this rule; callers that need exclusion do it in ``request_filter``;
    3. ``"body"`` requested on the request and no body lists: the full body;
    4. otherwise the body whitelist.
    """
    body = getattr(request, "body", None)
    if body is None:
        return None

    if body_blacklist and not body_whitelist:
        fields = list(dict.fromkeys([*_body_keys(body), *body_blacklist]))
        return filter_object(body, fields, request_filter)

    if "body" in request_whitelist and not body_whitelist and not body_blacklist:
        return filter_object(body, _body_keys(body), request_filter)

    return filter_object(body, body_whitelist, request_filter)
