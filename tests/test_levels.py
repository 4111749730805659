"""Unit tests for level and message resolution."""

from reqlog.core.levels import format_message, level_from_status, resolve_option


class FakeRequest:
    method = "POST"
    url = "/orders?id=1"


def test_level_from_status_default_thresholds() -> None:
    assert level_from_status(102, {}) == "info"
    assert level_from_status(200, {}) == "info"
    assert level_from_status(302, {}) == "info"
    assert level_from_status(400, {}) == "warn"
    assert level_from_status(404, {}) == "warn"
    assert level_from_status(500, {}) == "error"
    assert level_from_status(None, {}) == "info"


def test_level_from_status_overrides() -> None:
    levels = {"success": "debug", "warn": "notice", "error": "critical"}

    assert level_from_status(201, levels) == "debug"
    assert level_from_status(422, levels) == "notice"
    assert level_from_status(503, levels) == "critical"


def test_resolve_option_calls_functions_only() -> None:
    assert resolve_option("warn", FakeRequest()) == "warn"
    assert resolve_option(lambda req, res: req.method.lower(), FakeRequest(), None) == "post"


def test_format_message_template_and_callable() -> None:
    request = FakeRequest()

    assert format_message("HTTP {req.method} {req.url}", req=request, res=None) == "HTTP POST /orders?id=1"
    assert format_message(
        "HTTP {req.method} {req.url} {err}",
        req=request,
        res=None,
        err=ValueError("boom"),
    ) == "HTTP POST /orders?id=1 boom"
    assert format_message(lambda req, res, err: f"{req.method}:{err}", req=request, res=None, err="e") == "POST:e"
