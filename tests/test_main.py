"""Tests for the example application wiring."""

from fastapi.testclient import TestClient

from reqlog.config.settings import Settings
from reqlog.logging.backend import LogRecord
from reqlog.main import create_app
from reqlog.services.container import LoggingContainer


class RecordingBackend:
    """Keeps emitted records in memory."""

    def __init__(self) -> None:
        self.records: list[LogRecord] = []

    def log(self, record: LogRecord) -> None:
        self.records.append(record)


def _client(backend: RecordingBackend, **settings_values) -> TestClient:
    settings = Settings(_env_file=None, **settings_values)
    container = LoggingContainer(settings)
    container.request_config.backend = backend
    container.error_config.backend = backend
    return TestClient(create_app(settings, container), raise_server_exceptions=False)


def test_ok_route_is_logged() -> None:
    backend = RecordingBackend()

    response = _client(backend).get("/ok")

    assert response.text == "ok"
    assert [record.message for record in backend.records] == ["HTTP GET /ok"]
    assert backend.records[0].meta["res"] == {"status_code": 200}


def test_status_levels_from_settings() -> None:
    backend = RecordingBackend()
    client = _client(backend, status_levels_enabled=True)

    client.get("/not-found")
    client.get("/redirect", follow_redirects=False)

    assert [(record.level, record.meta["res"]["status_code"]) for record in backend.records] == [
        ("warn", 404),
        ("info", 302),
    ]


def test_ignored_routes_from_settings() -> None:
    backend = RecordingBackend()

    response = _client(backend, ignored_routes=["/ok"]).get("/ok")

    assert response.status_code == 200
    assert backend.records == []


def test_error_route_is_logged_and_returns_500() -> None:
    backend = RecordingBackend()

    response = _client(backend).get("/error")

    assert response.status_code == 500
    errors = [record for record in backend.records if record.level == "error"]
    assert [record.message for record in errors] == ["HTTP GET /error not ok"]
    assert errors[0].meta["name"] == "RuntimeError"
    access = [record for record in backend.records if record.message == "HTTP GET /error"]
    assert len(access) == 1
    assert access[0].meta["res"]["status_code"] == 500
