"""
Domain Errors

Errors raised by the catalog operations. Probe failures are never raised:
they are normalized into DOWN outcomes by the probes themselves.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base class for domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ServiceDefinitionNotFoundError(DomainError):
    """Raised when a service definition cannot be found."""

    def __init__(self, service_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Service definition with ID {service_id} not found", details)


class DatabaseConnectionNotFoundError(DomainError):
    """Raised when a database connection config cannot be found."""

    def __init__(self, config_id: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Database connection with ID {config_id} not found", details)


class ServiceDefinitionValidationError(DomainError):
    """Raised when a service definition misses its kind-specific target."""


class MonitoringOperationError(DomainError):
    """Raised when a storage operation behind the catalog fails."""
