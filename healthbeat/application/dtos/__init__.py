"""
DTOs Package - Application Layer

This package contains Data Transfer Objects (DTOs) used for data exchange
between the application layer and the presentation layer.
"""

from .database_connection_dto import (
    DatabaseConnectionCreateDTO,
    DatabaseConnectionResponseDTO,
    DatabaseConnectionUpdateDTO,
)
from .monitoring_dto import (
    HealthCheckResultDTO,
    HealthCheckRunDTO,
    MonitoringStatusDTO,
    ServiceDefinitionCreateDTO,
    ServiceDefinitionResponseDTO,
)

__all__ = [
    "ServiceDefinitionCreateDTO",
    "ServiceDefinitionResponseDTO",
    "HealthCheckResultDTO",
    "HealthCheckRunDTO",
    "MonitoringStatusDTO",
    "DatabaseConnectionCreateDTO",
    "DatabaseConnectionUpdateDTO",
    "DatabaseConnectionResponseDTO",
]
