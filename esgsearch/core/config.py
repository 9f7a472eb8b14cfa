"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Values are validated at load time.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from esgsearch.core.constants import (
    RECENT_SEARCH_CAPACITY,
    SEARCH_ADAPTER_TIMEOUT_SECONDS,
    SEARCH_RESULT_LIMIT_PER_KIND,
    TELEMETRY_EXPORTERS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    The record store is optional at load time: when DATABASE_URL is empty
    the search endpoints answer 503 instead of failing at startup.
    """

    # App
    app_name: str = "esg-search"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (postgresql+asyncpg in production, sqlite+aiosqlite in tests)
    database_url: str = ""
    database_echo: bool = False
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Caller scope headers (set by the upstream auth gateway)
    tenant_header_name: str = "X-Tenant-ID"
    user_header_name: str = "X-User-ID"

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    # Search
    search_adapter_timeout_seconds: float = SEARCH_ADAPTER_TIMEOUT_SECONDS
    search_result_limit_per_kind: int = SEARCH_RESULT_LIMIT_PER_KIND
    recent_search_capacity: int = RECENT_SEARCH_CAPACITY
    search_rate_limit: str = "60/minute"

    # Redis (recent search persistence)
    redis_enabled: bool = True
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None

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
    def validate_search_limits(self) -> "Settings":
        """Reject search settings that would make every search fail or return nothing."""
        if self.search_adapter_timeout_seconds <= 0:
            raise ValueError(
                "SEARCH_ADAPTER_TIMEOUT_SECONDS must be greater than 0, "
                f"got: {self.search_adapter_timeout_seconds!r}"
            )
        if self.search_result_limit_per_kind < 1:
            raise ValueError(
                "SEARCH_RESULT_LIMIT_PER_KIND must be at least 1, "
                f"got: {self.search_result_limit_per_kind!r}"
            )
        if self.recent_search_capacity < 1:
            raise ValueError(
                "RECENT_SEARCH_CAPACITY must be at least 1, "
                f"got: {self.recent_search_capacity!r}"
            )
        if self.database_url and not (
            self.database_url.startswith("postgresql")
            or self.database_url.startswith("sqlite")
        ):
            raise ValueError(
                "DATABASE_URL must use a postgresql+asyncpg or sqlite+aiosqlite driver, "
                f"got: {self.database_url.split(':', 1)[0]!r}"
            )
        return self

    @model_validator(mode="after")
    def validate_telemetry(self) -> "Settings":
        """Reject exporter settings that could only fail once tracing starts."""
        if self.telemetry_exporter not in TELEMETRY_EXPORTERS:
            raise ValueError(
                f"TELEMETRY_EXPORTER must be one of {', '.join(TELEMETRY_EXPORTERS)}, "
                f"got: {self.telemetry_exporter!r}"
            )
        if self.telemetry_exporter == "otlp" and not self.telemetry_otlp_endpoint:
            raise ValueError("TELEMETRY_OTLP_ENDPOINT is required when TELEMETRY_EXPORTER=otlp")
        if not 0.0 <= self.telemetry_sample_rate <= 1.0:
            raise ValueError(
                "TELEMETRY_SAMPLE_RATE must be between 0 and 1, "
                f"got: {self.telemetry_sample_rate!r}"
            )
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
