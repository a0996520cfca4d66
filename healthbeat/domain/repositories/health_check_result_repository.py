"""Health Check Result Repository Interface."""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from healthbeat.domain.entities.monitoring import HealthCheckResult


class IHealthCheckResultRepository(ABC):
    """Append-only store for probe results."""

    @abstractmethod
    async def save(self, result: HealthCheckResult) -> HealthCheckResult:
        """
        Persist one result.

        Raises:
            MonitoringOperationError: If the store rejects the write
        """
        pass

    @abstractmethod
    async def find_by_service(
        self, service_id: UUID, limit: int = 50
    ) -> List[HealthCheckResult]:
        """Return the most recent results of a service, newest first."""
        pass
