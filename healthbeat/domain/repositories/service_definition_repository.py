"""
Service Definition Repository Interface

Read access used by the health check dispatcher, plus the small write
surface used by the catalog API.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from healthbeat.domain.entities.monitoring import ServiceDefinition


class IServiceDefinitionRepository(ABC):
    """Interface for service definition repository implementations."""

    @abstractmethod
    async def find_all(self) -> List[ServiceDefinition]:
        """
        Return every stored service definition.

        The dispatcher calls this once per cycle and probes whatever is
        returned; no filtering on ``is_active`` happens on its side.
        """
        pass

    @abstractmethod
    async def find_by_id(self, service_id: UUID) -> Optional[ServiceDefinition]:
        """Find a service definition by its ID."""
        pass

    @abstractmethod
    async def create(self, service: ServiceDefinition) -> ServiceDefinition:
        """Store a new service definition."""
        pass

    @abstractmethod
    async def delete(self, service_id: UUID) -> None:
        """
        Delete a service definition.

        Raises:
            ServiceDefinitionNotFoundError: If the definition does not exist
        """
        pass
