"""Example FastAPI application with request and error logging installed."""

from __future__ import annotations

import structlog
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse, RedirectResponse

from reqlog.api.middleware import add_logging_middleware
from reqlog.config.settings import Settings, get_settings
from reqlog.logging.setup import configure_logging
from reqlog.services.container import LoggingContainer

logger = structlog.get_logger(__name__)


def create_app(
    settings: Settings | None = None,
    container: LoggingContainer | None = None,
) -> FastAPI:
    """Build the demo app; routes exist to show each kind of log record."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)
    container = container or LoggingContainer(settings)

    app = FastAPI(title=settings.app_name, version="1.0.0")
    app.state.container = container
    add_logging_middleware(
        app,
        request_config=container.request_config,
        error_config=container.error_config,
    )

    @app.api_route("/ok", methods=["GET", "POST"], response_class=PlainTextResponse)
    async def ok() -> str:
        return "ok"

    @app.api_route("/redirect", methods=["GET", "POST"])
    async def redirect() -> RedirectResponse:
        return RedirectResponse(url="/ok", status_code=302)

    @app.api_route("/not-found", methods=["GET", "POST"])
    async def not_found() -> PlainTextResponse:
        return PlainTextResponse("not found", status_code=404)

    @app.api_route("/error", methods=["GET", "POST"])
    async def error() -> None:
        raise RuntimeError("not ok")

    logger.info("app_created", environment=settings.environment)
    return app
