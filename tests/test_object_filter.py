"""Unit tests for whitelist field selection."""

from reqlog.filtering.object_filter import (
    MISSING,
    default_request_filter,
    default_response_filter,
    filter_object,
)


class Source:
    """Plain object with a couple of attributes."""

    method = "GET"
    url = "/items"
    empty = None


def test_filter_object_skips_absent_fields() -> None:
    filtered = filter_object(Source(), ["method", "missing", "empty"], default_request_filter)

    assert filtered == {"method": "GET", "empty": None}


def test_filter_object_returns_none_when_nothing_matches() -> None:
    assert filter_object(Source(), ["missing", "other"], default_request_filter) is None
    assert filter_object({"a": 1}, ["b"], default_request_filter) is None
    assert filter_object({"a": 1}, [], default_request_filter) is None


def test_filter_object_collapses_duplicate_fields() -> None:
    calls: list[str] = []

    def extract(source: dict, name: str) -> object:
        calls.append(name)
        return source.get(name, MISSING)

    filtered = filter_object({"a": 1, "b": 2}, ["a", "b", "a"], extract)

    assert filtered == {"a": 1, "b": 2}
    assert calls == ["a", "b"]


def test_filter_object_keeps_falsy_values() -> None:
    source = {"count": 0, "flag": False, "name": "", "note": None}

    filtered = filter_object(source, ["count", "flag", "name", "note"], default_response_filter)

    assert filtered == {"count": 0, "flag": False, "name": "", "note": None}


def test_custom_extractor_signals_absence_with_missing() -> None:
    def upper_only(source: dict, name: str) -> object:
        return source[name] if name.isupper() else MISSING

    filtered = filter_object({"ID": 7, "secret": "x"}, ["ID", "secret"], upper_only)

    assert filtered == {"ID": 7}
