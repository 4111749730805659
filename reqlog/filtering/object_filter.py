"""Whitelist-driven field selection."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from typing import Any

FieldExtractor = Callable[[Any, str], Any]

# Returned by extractors for a field the source does not have. ``None`` is a
# real value (a JSON ``null``) and is kept.
MISSING: Any = object()


def default_request_filter(source: Any, field_name: str) -> Any:
    """Read a field from a request view or a parsed body."""
    if isinstance(source, Mapping):
        return source.get(field_name, MISSING)
    return getattr(source, field_name, MISSING)


def default_response_filter(source: Any, field_name: str) -> Any:
    """Read a field from a response view."""
    if isinstance(source, Mapping):
        return source.get(field_name, MISSING)
    return getattr(source, field_name, MISSING)


def filter_object(
    source: Any,
    allowed_fields: Iterable[str],
    extract: FieldExtractor,
) -> dict[str, Any] | None:
    """Copy whitelisted fields the source actually has.

    ``extract`` returns :data:`MISSING` for an absent field; any other value,
    ``None`` included, is copied. Returns ``None`` rather than an empty dict
    when no field matched, so the caller can leave the key out of the log
    entirely.
    """
    filtered: dict[str, Any] = {}
    for field_name in dict.fromkeys(allowed_fields):
        value = extract(source, field_name)
        if value is not MISSING:
            filtered[field_name] = value
    return filtered or None
