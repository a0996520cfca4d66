"""
Repositories Package - Infrastructure Layer

MongoDB implementations of the repository interfaces defined in the
domain layer.
"""

from .database_connection_repository import DatabaseConnectionRepository
from .health_check_result_repository import HealthCheckResultRepository
from .service_definition_repository import ServiceDefinitionRepository

__all__ = [
    "ServiceDefinitionRepository",
    "DatabaseConnectionRepository",
    "HealthCheckResultRepository",
]
