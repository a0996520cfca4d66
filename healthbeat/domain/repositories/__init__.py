"""
Repositories Package

This package contains interfaces defining repository contracts
for data access operations. Specific implementations are provided
by the infrastructure layer.
"""

from .database_connection_repository import IDatabaseConnectionRepository
from .health_check_result_repository import IHealthCheckResultRepository
from .service_definition_repository import IServiceDefinitionRepository

__all__ = [
    "IServiceDefinitionRepository",
    "IDatabaseConnectionRepository",
    "IHealthCheckResultRepository",
]
