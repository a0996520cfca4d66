"""Infrastructure-level configuration helpers for background workers."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _DatabaseSettings(BaseSettings):
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/healthbeat",
        validation_alias=AliasChoices("DB_MONGO_URI", "MONGO_URI"),
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="healthbeat",
        validation_alias=AliasChoices("DB_DATABASE_NAME", "DATABASE_NAME"),
        description="MongoDB database name",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class _MonitoringSettings(BaseSettings):
    interval_seconds: int = Field(
        default=30,
        validation_alias=AliasChoices("MONITORING_INTERVAL_SECONDS"),
        description="Seconds between two health check cycles",
    )
    http_timeout_seconds: float = Field(
        default=5.0,
        validation_alias=AliasChoices("MONITORING_HTTP_TIMEOUT_SECONDS"),
        description="Timeout of a single HTTP probe",
    )
    http_method: str = Field(
        default="GET",
        validation_alias=AliasChoices("MONITORING_HTTP_METHOD"),
        description="HTTP method used by HTTP probes",
    )
    database_timeout_seconds: float = Field(
        default=10.0,
        validation_alias=AliasChoices("MONITORING_DATABASE_TIMEOUT_SECONDS"),
        description="Timeout of a single database probe",
    )
    max_concurrent_probes: int = Field(
        default=100,
        validation_alias=AliasChoices("MONITORING_MAX_CONCURRENT_PROBES"),
        description="Probes running at the same time within a cycle",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class InfrastructureSettings(BaseSettings):
    database: _DatabaseSettings = Field(default_factory=_DatabaseSettings)
    monitoring: _MonitoringSettings = Field(default_factory=_MonitoringSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


_settings: InfrastructureSettings | None = None


def get_settings() -> InfrastructureSettings:
    """Lazy-load infrastructure settings for Celery workers."""
    global _settings
    if _settings is None:
        _settings = InfrastructureSettings()
    return _settings
