"""Application settings using pydantic-settings.

Settings are loaded from environment variables with sensible defaults
for development. Production deployments should set all values explicitly.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DashboardSettings(BaseSettings):
    """Dashboard shell settings.

    Environment variables:
        DASHBOARD_API_BASE_URL: Base URL of the backend API (falls back to
            the legacy hosted API with a warning when unset)
        DASHBOARD_DEFAULT_TENANT: Tenant used when nothing valid is persisted (default: gcpl)
        DASHBOARD_STORAGE_BACKEND: "memory" or "file" (default: memory)
        DASHBOARD_STORAGE_PATH: JSON file used by the file backend
        DASHBOARD_STORAGE_POLL_INTERVAL_SECONDS: How often the file backend is
            checked for writes from other processes (default: 2.0)
        DASHBOARD_RELOAD_DELAY_MS: Grace period before a forced reload (default: 100)
        DASHBOARD_RELOAD_ON_EXTERNAL_CHANGE: Also reload when another
            context switches tenant (default: false)
        DASHBOARD_LOG_LEVEL: Minimum log level (default: INFO)
        DASHBOARD_LOG_FORMAT: "console", "json" or "auto" (default: auto)
    """

    model_config = SettingsConfigDict(
        env_prefix="DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_base_url: str | None = Field(
        default=None,
        description="Base URL of the backend API",
    )
    default_tenant: str = Field(
        default="gcpl",
        description="Tenant key used when no valid selection is persisted",
    )
    storage_backend: Literal["memory", "file"] = Field(
        default="memory",
        description="Backing store for the selected tenant",
    )
    storage_path: Path = Field(
        default=Path(".dashboard/selection.json"),
        description="JSON file used by the file storage backend",
    )
    storage_poll_interval_seconds: float = Field(
        default=2.0,
        description="Polling interval for cross-process change detection",
        gt=0,
    )
    reload_delay_ms: int = Field(
        default=100,
        description="Grace period before a forced reload",
        ge=0,
        le=10000,
    )
    reload_on_external_change: bool = Field(
        default=False,
        description="Reload when another execution context switches tenant",
    )
    log_level: str = Field(default="INFO", description="Minimum log level")
    log_format: Literal["auto", "console", "json"] = Field(
        default="auto",
        description="Log renderer; auto picks console output on a TTY",
    )

    @field_validator("default_tenant")
    @classmethod
    def normalize_default_tenant(cls, value: str) -> str:
        """Tenant keys are stored lowercase and trimmed."""
        return value.strip().lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept only standard level names."""
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def reload_delay_seconds(self) -> float:
        """Reload grace period in seconds."""
        return self.reload_delay_ms / 1000


class Settings(BaseSettings):
    """Main application settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application metadata
    app_name: str = Field(default="Dashboard Shell API", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    @property
    def dashboard(self) -> DashboardSettings:
        """Get dashboard settings."""
        return get_dashboard_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_dashboard_settings() -> DashboardSettings:
    """Get cached dashboard settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return DashboardSettings()
