"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings have defaults; validate_ranges rejects an empty
    DATABASE_URL and out-of-range text index tuning.
    """

    # App
    app_name: str = "orgfinder"
    app_version: str = "1.0.0"
    debug: bool = False

    # Record store (read-only from this service). SQLite file by default,
    # any SQLAlchemy async URL works (e.g. postgresql+asyncpg://...).
    database_url: str = "sqlite+aiosqlite:///./data.db"
    database_echo: bool = False
    # Optional pool overrides (None = driver defaults)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None

    # Text index
    text_search_limit: int = 100
    text_index_fuzzy: float = 0.2
    text_index_prefix: bool = True
    text_index_warm_on_startup: bool = False

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"
    search_rate_limit: str = "120/minute"

    # OpenTelemetry
    telemetry_enabled: bool = False
    telemetry_exporter: str = "console"
    telemetry_otlp_endpoint: str | None = None
    telemetry_sample_rate: float = 1.0
    telemetry_environment: str = "development"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_ranges(self) -> "Settings":
        """Validate required env and text index tuning."""
        if not self.database_url:
            raise ValueError(
                "DATABASE_URL is required. Set in environment or .env file "
                "(e.g. sqlite+aiosqlite:///./data.db)."
            )
        if not 0.0 <= self.text_index_fuzzy <= 1.0:
            raise ValueError(
                f"text_index_fuzzy must be between 0 and 1, got: {self.text_index_fuzzy!r}"
            )
        if self.text_search_limit < 1:
            raise ValueError("text_search_limit must be at least 1")
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
