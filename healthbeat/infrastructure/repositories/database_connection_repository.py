"""
MongoDB Database Connection Repository - Infrastructure Layer
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

import pymongo

from healthbeat.domain.entities.errors import (
    DatabaseConnectionNotFoundError,
    MonitoringOperationError,
)
from healthbeat.domain.entities.monitoring import DatabaseConnectionConfig
from healthbeat.domain.repositories.database_connection_repository import (
    IDatabaseConnectionRepository,
)
from healthbeat.infrastructure.database import MongoDatabase
from healthbeat.infrastructure.database.mongo_database import DATABASE_CONNECTIONS


class DatabaseConnectionRepository(IDatabaseConnectionRepository):
    """MongoDB implementation of the DatabaseConnectionRepository."""

    COLLECTION_NAME = DATABASE_CONNECTIONS

    def __init__(self, mongo_database: MongoDatabase):
        self.db = mongo_database

    def _to_document(self, config: DatabaseConnectionConfig) -> Dict[str, Any]:
        return {
            "id": str(config.id),
            "name": config.name,
            "connection_url": config.connection_url,
            "username": config.username,
            "password": config.password,
            "driver": config.driver,
            "created_at": config.created_at,
            "updated_at": config.updated_at,
        }

    def _to_entity(self, document: Dict[str, Any]) -> DatabaseConnectionConfig:
        return DatabaseConnectionConfig(
            id=UUID(document["id"]),
            name=document.get("name") or "",
            connection_url=document["connection_url"],
            username=document.get("username"),
            password=document.get("password"),
            driver=document.get("driver"),
            created_at=document["created_at"],
            updated_at=document.get("updated_at", document["created_at"]),
        )

    async def find_by_id(self, config_id: UUID) -> Optional[DatabaseConnectionConfig]:
        document = await self.db.find_one(self.COLLECTION_NAME, {"id": str(config_id)})
        if document is None:
            return None
        return self._to_entity(document)

    async def find_all(self) -> List[DatabaseConnectionConfig]:
        documents = await self.db.find_many(
            self.COLLECTION_NAME,
            {},
            sort_by="name",
            sort_direction=pymongo.ASCENDING,
            limit=0,
        )
        return [self._to_entity(document) for document in documents]

    async def create(self, config: DatabaseConnectionConfig) -> DatabaseConnectionConfig:
        """
        Create a new connection config.

        Raises:
            MonitoringOperationError: If the insert fails
        """
        try:
            await self.db.insert_one(self.COLLECTION_NAME, self._to_document(config))
            return config
        except Exception as e:
            raise MonitoringOperationError(
                f"Failed to create database connection: {str(e)}"
            )

    async def update(self, config: DatabaseConnectionConfig) -> DatabaseConnectionConfig:
        """
        Replace an existing connection config.

        Raises:
            DatabaseConnectionNotFoundError: If the config does not exist
            MonitoringOperationError: If the update fails
        """
        try:
            await self.db.replace_one(
                self.COLLECTION_NAME, {"id": str(config.id)}, self._to_document(config)
            )
            return config
        except Exception as e:
            if "Document not found" in str(e):
                raise DatabaseConnectionNotFoundError(str(config.id))
            raise MonitoringOperationError(
                f"Failed to update database connection: {str(e)}"
            )

    async def delete(self, config_id: UUID) -> None:
        """
        Delete a connection config.

        Raises:
            DatabaseConnectionNotFoundError: If the config does not exist
            MonitoringOperationError: If the deletion fails
        """
        try:
            await self.db.delete_one(self.COLLECTION_NAME, {"id": str(config_id)})
        except Exception as e:
            if "Document not found" in str(e):
                raise DatabaseConnectionNotFoundError(str(config_id))
            raise MonitoringOperationError(
                f"Failed to delete database connection: {str(e)}"
            )
