"""
Monitoring DTOs - Application Layer

Request and response models for the service catalog, the health check
results and the manual cycle trigger.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from healthbeat.domain.entities.monitoring import (
    CheckType,
    HealthCheckResult,
    ServiceDefinition,
    ServiceStatus,
)


class ServiceDefinitionCreateDTO(BaseModel):
    """DTO for registering a monitored service."""

    name: str = Field(..., description="Name of the service", min_length=1, max_length=100)
    check_type: CheckType = Field(..., description="Kind of probe used for the service")
    url: Optional[str] = Field(None, description="Target URL for HTTP checks")
    database_config_id: Optional[UUID] = Field(
        None, description="Connection config used by database checks"
    )
    is_active: bool = Field(True, description="Whether the service is active")

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "orders-api",
                "check_type": "http",
                "url": "https://orders.internal/health",
                "database_config_id": None,
                "is_active": True,
            }
        }
    }


class ServiceDefinitionResponseDTO(BaseModel):
    """DTO returned for a stored service definition."""

    id: UUID
    name: str
    check_type: str
    url: Optional[str] = None
    database_config_id: Optional[UUID] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, service: ServiceDefinition) -> "ServiceDefinitionResponseDTO":
        return cls(
            id=service.id,
            name=service.name,
            check_type=getattr(service.check_type, "value", service.check_type),
            url=service.url,
            database_config_id=service.database_config_id,
            is_active=service.is_active,
            created_at=service.created_at,
            updated_at=service.updated_at,
        )


class HealthCheckResultDTO(BaseModel):
    """DTO for one persisted probe outcome."""

    id: UUID
    service_definition_id: UUID
    status: ServiceStatus
    response_time_ms: Optional[int] = None
    message: Optional[str] = None
    checked_at: datetime

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "3fa85f64-5717-4562-b3fc-2c963f66afa6",
                "service_definition_id": "0b7d3c36-51f6-4c37-9f0b-8d7bb0d9c0a1",
                "status": "down",
                "response_time_ms": 5003,
                "message": "Timeout after 5s",
                "checked_at": "2025-09-21T16:00:00Z",
            }
        }
    }

    @classmethod
    def from_domain(cls, result: HealthCheckResult) -> "HealthCheckResultDTO":
        return cls(
            id=result.id,
            service_definition_id=result.service_definition_id,
            status=result.status,
            response_time_ms=result.response_time_ms,
            message=result.message,
            checked_at=result.checked_at,
        )


class HealthCheckRunDTO(BaseModel):
    """Completion of a manually triggered cycle."""

    result: str = Field(..., description="Completion message of the cycle")


class MonitoringStatusDTO(BaseModel):
    """State of the periodic health check scheduler."""

    message: str
    scheduler_running: bool
    interval_seconds: int
    in_flight_cycles: int
    supported_check_types: List[str]
