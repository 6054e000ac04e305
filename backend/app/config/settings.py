"""Application configuration and environment helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from networth.dates import TimeRange

DEFAULT_BASE_CURRENCY = "EUR"


class AppSettings(BaseSettings):
    """Configuration options for the net worth engine service."""

    app_name: str = Field(default="Net Worth Engine")
    base_currency: str = Field(default=DEFAULT_BASE_CURRENCY)
    log_level: str = Field(default="INFO")

    database_url: str = Field(
        default="sqlite:///./networth.db",
        description="SQLAlchemy database URL for the key-value cache table.",
    )
    cache_backend: Literal["memory", "database"] = Field(
        default="memory",
        description="Where the income memo table lives.",
    )
    default_history_range: TimeRange = Field(default=TimeRange.MONTH)

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:5173", "http://localhost:4200"])

    telemetry_enabled: bool = Field(default=False)
    telemetry_service_name: str = Field(default="networth-engine")
    telemetry_otlp_endpoint: str | None = Field(default=None)
    telemetry_otlp_insecure: bool = Field(default=True)
    telemetry_sample_ratio: float = Field(default=1.0, ge=0.0, le=1.0)

    portfolio_service_url: str = Field(
        default="http://localhost:8200/portfolio",
        description="Base URL of the CRUD service that owns positions and liabilities",
    )
    portfolio_service_token: str | None = Field(
        default=None,
        description="Optional shared secret for portfolio service authentication",
    )
    portfolio_service_timeout_seconds: float = Field(default=15.0)

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    def dict_for_logging(self) -> dict[str, Any]:
        """Return a sanitized dict for logging purposes."""

        hidden = {"portfolio_service_token"}
        return {k: ("***" if k in hidden else v) for k, v in self.model_dump().items()}


@lru_cache(maxsize=1)
def get_settings(**overrides: Any) -> AppSettings:
    """Return cached application settings with optional overrides."""

    if overrides:
        return AppSettings(**overrides)
    return AppSettings()


__all__ = [
    "AppSettings",
    "DEFAULT_BASE_CURRENCY",
    "get_settings",
]
