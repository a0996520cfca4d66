"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import Optional

from pydantic import AliasChoices, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from healthbeat.shared import EnumEnvironment, EnumLogLevel
from healthbeat.shared.env import load_secret_file_variables  # noqa: F401


class DatabaseSettings(BaseSettings):
    """Database configuration settings."""

    mongo_uri: str = Field(
        default="mongodb://localhost:27017/healthbeat",
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="healthbeat", description="Name of the MongoDB database"
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_", case_sensitive=False, extra="ignore"
    )


class AppInfoSettings(BaseSettings):
    """Service information exposed by the API."""

    title: str = Field(default="Healthbeat", description="Service title")
    description: str = Field(
        default="Periodic liveness and latency checks "
        "for HTTP endpoints and databases",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    git_commit: str = Field(
        default="unknown",
        description="Git commit hash",
        validation_alias=AliasChoices("APP_GIT_COMMIT", "GIT_COMMIT"),
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    port: int = Field(default=8000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_", case_sensitive=False, extra="ignore"
    )


class CelerySettings(BaseSettings):
    """Celery configuration settings."""

    broker_url: str = Field(
        default="redis://redis:6379/0",
        description="Message broker URL",
        alias="CELERY_BROKER_URL",
    )
    result_backend_url: str = Field(
        default="redis://redis:6379/1",
        description="Result backend URL",
        alias="CELERY_RESULT_BACKEND",
    )

    model_config = SettingsConfigDict(
        env_prefix="CELERY_", case_sensitive=False, extra="ignore"
    )


class MonitoringSettings(BaseSettings):
    """Health check scheduling and probe settings."""

    scheduler_enabled: bool = Field(
        default=True, description="Run the in-process scheduler with the API"
    )
    beat_enabled: bool = Field(
        default=False, description="Schedule cycles with Celery beat in the worker"
    )
    interval_seconds: int = Field(
        default=30, description="Seconds between two health check cycles", gt=0
    )
    initial_delay_seconds: int = Field(
        default=5, description="Seconds before the first cycle", ge=0
    )
    http_timeout_seconds: float = Field(
        default=5.0, description="Timeout of a single HTTP probe", gt=0
    )
    http_method: str = Field(default="GET", description="HTTP method used by probes")
    database_timeout_seconds: float = Field(
        default=10.0, description="Timeout of a single database probe", gt=0
    )
    max_concurrent_probes: int = Field(
        default=100, description="Probes running at the same time across cycles", ge=1
    )
    max_pending_cycles: int = Field(
        default=100, description="Cycles allowed to run at the same time", ge=1
    )
    allow_overlapping_cycles: bool = Field(
        default=True,
        description="Start a new cycle even if the previous one is still running",
    )

    @model_validator(mode="after")
    def validate_single_scheduler(self) -> "MonitoringSettings":
        """Only one of the API scheduler and Celery beat may trigger cycles."""
        if self.scheduler_enabled and self.beat_enabled:
            raise ValueError(
                "MONITORING_SCHEDULER_ENABLED and MONITORING_BEAT_ENABLED "
                "cannot both be true"
            )
        return self

    model_config = SettingsConfigDict(
        env_prefix="MONITORING_", case_sensitive=False, extra="ignore"
    )


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Logging format",
    )
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    app: AppInfoSettings = Field(default_factory=AppInfoSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    celery: CelerySettings = Field(default_factory=CelerySettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()


settings = get_settings()
