"""
Use Cases Package - Application Layer

This package contains use cases that implement the business logic
of the application: running health check cycles and managing the
service catalog and its connection configs.
"""

from .database_connection_use_cases import (
    CreateDatabaseConnectionUseCase,
    DeleteDatabaseConnectionUseCase,
    GetDatabaseConnectionByIdUseCase,
    GetDatabaseConnectionsUseCase,
    UpdateDatabaseConnectionUseCase,
)
from .monitoring_use_cases import (
    CreateServiceDefinitionUseCase,
    DeleteServiceDefinitionUseCase,
    GetServiceDefinitionsUseCase,
    GetServiceResultsUseCase,
    RunHealthChecksUseCase,
)

__all__ = [
    "RunHealthChecksUseCase",
    "GetServiceDefinitionsUseCase",
    "CreateServiceDefinitionUseCase",
    "DeleteServiceDefinitionUseCase",
    "GetServiceResultsUseCase",
    "GetDatabaseConnectionsUseCase",
    "GetDatabaseConnectionByIdUseCase",
    "CreateDatabaseConnectionUseCase",
    "UpdateDatabaseConnectionUseCase",
    "DeleteDatabaseConnectionUseCase",
]
