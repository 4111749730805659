"""Unit tests for request body filtering rules."""

from typing import Any

from reqlog.filtering.body_filter import filter_body
from reqlog.filtering.object_filter import default_request_filter


class FakeRequest:
    """Request stand-in carrying only a parsed body."""

    def __init__(self, body: Any = None) -> None:
        self.body = body


def _filter(body: Any, request_whitelist=(), whitelist=(), blacklist=()) -> Any:
    return filter_body(
        FakeRequest(body),
        list(request_whitelist),
        default_request_filter,
        list(whitelist),
        list(blacklist),
    )


def test_no_body_returns_none() -> None:
    assert _filter(None, request_whitelist=["body"]) is None
    assert _filter(None, whitelist=["foo"], blacklist=["bar"]) is None


def test_blacklist_only_unions_body_keys_with_blacklist() -> None:
    # Existing behavior: the blacklisted key is still part of the field set.
    assert _filter({"foo": "bar"}, blacklist=["foo"]) == {"foo": "bar"}
    assert _filter({"foo": "bar", "baz": 1}, blacklist=["secret"]) == {"foo": "bar", "baz": 1}


def test_whitelist_wins_over_blacklist() -> None:
    filtered = _filter({"foo": "bar", "baz": "qux"}, whitelist=["baz"], blacklist=["foo"])

    assert filtered == {"baz": "qux"}


def test_full_body_when_body_is_requested_without_lists() -> None:
    filtered = _filter({"foo": "bar", "n": 2}, request_whitelist=["url", "body"])

    assert filtered == {"foo": "bar", "n": 2}


def test_body_not_requested_and_no_lists_logs_nothing() -> None:
    assert _filter({"foo": "bar"}, request_whitelist=["url"]) is None


def test_whitelist_selects_fields() -> None:
    filtered = _filter({"user": "ann", "password": "x"}, whitelist=["user", "missing"])

    assert filtered == {"user": "ann"}


def test_non_mapping_body_has_no_keys() -> None:
    assert _filter([1, 2, 3], request_whitelist=["body"]) is None
    assert _filter("raw text", blacklist=["foo"]) is None


def test_null_body_values_are_logged() -> None:
    assert _filter({"foo": None, "bar": 1}, request_whitelist=["body"]) == {"foo": None, "bar": 1}
    assert _filter({"foo": None, "bar": 1}, whitelist=["foo"]) == {"foo": None}
