"""Application settings loaded from environment variables."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from reqlog.core.constants import (
    DEFAULT_BODY_BLACKLIST,
    DEFAULT_BODY_WHITELIST,
    DEFAULT_IGNORED_ROUTES,
    DEFAULT_LOGGER_NAME,
    DEFAULT_REQUEST_WHITELIST,
    DEFAULT_RESPONSE_WHITELIST,
)


class Settings(BaseSettings):
    """Process-wide defaults for the HTTP logging middleware."""

    model_config = SettingsConfigDict(
        env_prefix="REQLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "reqlog-example"
    environment: str = "dev"
    log_level: str = "INFO"
    log_json: bool = True
    logger_name: str = DEFAULT_LOGGER_NAME

    request_whitelist: list[str] = Field(default_factory=lambda: list(DEFAULT_REQUEST_WHITELIST))
    response_whitelist: list[str] = Field(default_factory=lambda: list(DEFAULT_RESPONSE_WHITELIST))
    body_whitelist: list[str] = Field(default_factory=lambda: list(DEFAULT_BODY_WHITELIST))
    body_blacklist: list[str] = Field(default_factory=lambda: list(DEFAULT_BODY_BLACKLIST))
    ignored_routes: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORED_ROUTES))

    status_levels_enabled: bool = False
    meta_field: str | None = None

    @field_validator("log_level")
    @classmethod
    def normalize_level(cls, value: str) -> str:
        """Store level names upper-cased for stdlib lookups."""
        return value.strip().upper() or "INFO"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return singleton settings instance."""
    return Settings()
