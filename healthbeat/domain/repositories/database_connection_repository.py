"""
Database Connection Repository Interface

Connection configs are referenced by DATABASE service definitions and
read by the database probe.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from healthbeat.domain.entities.monitoring import DatabaseConnectionConfig


class IDatabaseConnectionRepository(ABC):
    """Interface for database connection config repositories."""

    @abstractmethod
    async def find_by_id(self, config_id: UUID) -> Optional[DatabaseConnectionConfig]:
        """
        Find a connection config by its ID.

        Returns:
            The config if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self) -> List[DatabaseConnectionConfig]:
        """Return every stored connection config."""
        pass

    @abstractmethod
    async def create(self, config: DatabaseConnectionConfig) -> DatabaseConnectionConfig:
        """Store a new connection config."""
        pass

    @abstractmethod
    async def update(self, config: DatabaseConnectionConfig) -> DatabaseConnectionConfig:
        """
        Replace an existing connection config.

        Raises:
            DatabaseConnectionNotFoundError: If the config does not exist
        """
        pass

    @abstractmethod
    async def delete(self, config_id: UUID) -> None:
        """
        Delete a connection config.

        Raises:
            DatabaseConnectionNotFoundError: If the config does not exist
        """
        pass
