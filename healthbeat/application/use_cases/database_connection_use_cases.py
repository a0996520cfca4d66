"""
Database Connection Use Cases - Application Layer

CRUD over the connection configs referenced by database checks.
"""

from typing import List
from uuid import UUID

from dependency_injector.wiring import Provide, inject

from healthbeat.domain.entities.errors import DatabaseConnectionNotFoundError
from healthbeat.domain.entities.monitoring import DatabaseConnectionConfig
from healthbeat.domain.repositories.database_connection_repository import (
    IDatabaseConnectionRepository,
)

from ..dtos.database_connection_dto import (
    DatabaseConnectionCreateDTO,
    DatabaseConnectionResponseDTO,
    DatabaseConnectionUpdateDTO,
)


class GetDatabaseConnectionsUseCase:
    """Use case for listing connection configs."""

    @inject
    def __init__(
        self,
        connection_repository: IDatabaseConnectionRepository = Provide[
            "database_connection_repository"
        ],
    ):
        self.connection_repository = connection_repository

    async def execute(self) -> List[DatabaseConnectionResponseDTO]:
        configs = await self.connection_repository.find_all()
        return [DatabaseConnectionResponseDTO.from_domain(c) for c in configs]


class GetDatabaseConnectionByIdUseCase:
    """Use case for retrieving one connection config."""

    @inject
    def __init__(
        self,
        connection_repository: IDatabaseConnectionRepository = Provide[
            "database_connection_repository"
        ],
    ):
        self.connection_repository = connection_repository

    async def execute(self, config_id: UUID) -> DatabaseConnectionResponseDTO:
        """
        Raises:
            DatabaseConnectionNotFoundError: If the config does not exist
        """
        config = await self.connection_repository.find_by_id(config_id)
        if config is None:
            raise DatabaseConnectionNotFoundError(str(config_id))
        return DatabaseConnectionResponseDTO.from_domain(config)


class CreateDatabaseConnectionUseCase:
    """Use case for storing a new connection config."""

    @inject
    def __init__(
        self,
        connection_repository: IDatabaseConnectionRepository = Provide[
            "database_connection_repository"
        ],
    ):
        self.connection_repository = connection_repository

    async def execute(
        self, config_dto: DatabaseConnectionCreateDTO
    ) -> DatabaseConnectionResponseDTO:
        config = DatabaseConnectionConfig(
            name=config_dto.name,
            connection_url=config_dto.connection_url,
            username=config_dto.username,
            password=config_dto.password,
            driver=config_dto.driver,
        )
        created = await self.connection_repository.create(config)
        return DatabaseConnectionResponseDTO.from_domain(created)


class UpdateDatabaseConnectionUseCase:
    """Use case for updating a connection config."""

    @inject
    def __init__(
        self,
        connection_repository: IDatabaseConnectionRepository = Provide[
            "database_connection_repository"
        ],
    ):
        self.connection_repository = connection_repository

    async def execute(
        self, config_id: UUID, config_dto: DatabaseConnectionUpdateDTO
    ) -> DatabaseConnectionResponseDTO:
        """
        Apply the fields set on ``config_dto`` to an existing config.

        Raises:
            DatabaseConnectionNotFoundError: If the config does not exist
        """
        config = await self.connection_repository.find_by_id(config_id)
        if config is None:
            raise DatabaseConnectionNotFoundError(str(config_id))

        for field_name, value in config_dto.model_dump(exclude_unset=True).items():
            setattr(config, field_name, value)
        config.update_timestamp()

        updated = await self.connection_repository.update(config)
        return DatabaseConnectionResponseDTO.from_domain(updated)


class DeleteDatabaseConnectionUseCase:
    """Use case for deleting a connection config."""

    @inject
    def __init__(
        self,
        connection_repository: IDatabaseConnectionRepository = Provide[
            "database_connection_repository"
        ],
    ):
        self.connection_repository = connection_repository

    async def execute(self, config_id: UUID) -> None:
        """
        Raises:
            DatabaseConnectionNotFoundError: If the config does not exist
        """
        await self.connection_repository.delete(config_id)
