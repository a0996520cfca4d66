"""
Domain Entities Package

This package contains the monitoring entities and domain errors.
"""

from .errors import (
    DatabaseConnectionNotFoundError,
    DomainError,
    MonitoringOperationError,
    ServiceDefinitionNotFoundError,
    ServiceDefinitionValidationError,
)
from .monitoring import (
    CheckType,
    DatabaseConnectionConfig,
    HealthCheckResult,
    ProbeOutcome,
    ServiceDefinition,
    ServiceStatus,
)

__all__ = [
    "CheckType",
    "ServiceStatus",
    "ServiceDefinition",
    "DatabaseConnectionConfig",
    "ProbeOutcome",
    "HealthCheckResult",
    "DomainError",
    "ServiceDefinitionNotFoundError",
    "DatabaseConnectionNotFoundError",
    "ServiceDefinitionValidationError",
    "MonitoringOperationError",
]
