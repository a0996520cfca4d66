"""
Domain Entities - Monitoring

Service definitions, connection configurations and the outcomes produced
by probing them. These entities carry no framework or storage concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CheckType(str, Enum):
    """Category of probe a service requires."""

    HTTP = "http"
    DATABASE = "database"
    # Declared for service definitions, no probe implemented yet.
    KAFKA = "kafka"
    REDIS = "redis"
    GRPC = "grpc"


class ServiceStatus(str, Enum):
    """Liveness verdict of a single probe."""

    UP = "up"
    DOWN = "down"


@dataclass
class ServiceDefinition:
    """A monitored target and the kind of probe used to check it."""

    id: UUID = field(default_factory=uuid4)
    name: str = ""
    check_type: CheckType = CheckType.HTTP
    url: Optional[str] = None
    database_config_id: Optional[UUID] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)


@dataclass
class DatabaseConnectionConfig:
    """Connection settings referenced by DATABASE service definitions."""

    id: UUID = field(default_factory=uuid4)
    name: str = ""
    connection_url: str = ""
    username: Optional[str] = None
    password: Optional[str] = None
    driver: Optional[str] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    def update_timestamp(self) -> None:
        """Update the 'updated_at' timestamp to current time."""
        self.updated_at = _utcnow()


@dataclass(slots=True)
class ProbeOutcome:
    """
    Normalized result of one probe, before persistence.

    ``response_time_ms`` is ``None`` only when the probe could not even be
    attempted (for example a missing connection config).
    """

    service_definition_id: UUID
    status: ServiceStatus
    response_time_ms: Optional[int] = None
    message: Optional[str] = None

    @property
    def is_up(self) -> bool:
        return self.status is ServiceStatus.UP


@dataclass(slots=True)
class HealthCheckResult:
    """Persisted, append-only record of a probe outcome."""

    service_definition_id: UUID
    status: ServiceStatus
    response_time_ms: Optional[int] = None
    message: Optional[str] = None
    checked_at: datetime = field(default_factory=_utcnow)
    id: UUID = field(default_factory=uuid4)

    @classmethod
    def from_outcome(cls, outcome: ProbeOutcome) -> "HealthCheckResult":
        return cls(
            service_definition_id=outcome.service_definition_id,
            status=outcome.status,
            response_time_ms=outcome.response_time_ms,
            message=outcome.message,
        )
