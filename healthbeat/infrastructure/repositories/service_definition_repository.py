"""
MongoDB Service Definition Repository - Infrastructure Layer

Stores the catalog of monitored targets read by the health check
dispatcher at the start of every cycle.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID

import pymongo

from healthbeat.domain.entities.errors import (
    MonitoringOperationError,
    ServiceDefinitionNotFoundError,
)
from healthbeat.domain.entities.monitoring import CheckType, ServiceDefinition
from healthbeat.domain.repositories.service_definition_repository import (
    IServiceDefinitionRepository,
)
from healthbeat.infrastructure.database import MongoDatabase
from healthbeat.infrastructure.database.mongo_database import SERVICE_DEFINITIONS


class ServiceDefinitionRepository(IServiceDefinitionRepository):
    """MongoDB implementation of the ServiceDefinitionRepository."""

    COLLECTION_NAME = SERVICE_DEFINITIONS

    def __init__(self, mongo_database: MongoDatabase):
        self.db = mongo_database

    def _to_document(self, service: ServiceDefinition) -> Dict[str, Any]:
        """Convert a ServiceDefinition entity to a MongoDB document."""
        return {
            "id": str(service.id),
            "name": service.name,
            "check_type": service.check_type.value,
            "url": service.url,
            "database_config_id": (
                str(service.database_config_id) if service.database_config_id else None
            ),
            "is_active": service.is_active,
            "created_at": service.created_at,
            "updated_at": service.updated_at,
        }

    def _to_entity(self, document: Dict[str, Any]) -> ServiceDefinition:
        """
        Convert a MongoDB document to a ServiceDefinition entity.

        Unknown ``check_type`` values are kept as raw strings so the
        dispatcher can skip them instead of failing the whole cycle.
        """
        raw_type = document.get("check_type") or CheckType.HTTP.value
        try:
            check_type: Any = CheckType(raw_type)
        except ValueError:
            check_type = raw_type

        config_id = document.get("database_config_id")
        return ServiceDefinition(
            id=UUID(document["id"]),
            name=document.get("name") or "",
            check_type=check_type,
            url=document.get("url"),
            database_config_id=UUID(config_id) if config_id else None,
            is_active=document.get("is_active", True),
            created_at=document["created_at"],
            updated_at=document.get("updated_at", document["created_at"]),
        )

    async def find_all(self) -> List[ServiceDefinition]:
        documents = await self.db.find_many(
            self.COLLECTION_NAME,
            {},
            sort_by="created_at",
            sort_direction=pymongo.ASCENDING,
            limit=0,
        )
        return [self._to_entity(document) for document in documents]

    async def find_by_id(self, service_id: UUID) -> Optional[ServiceDefinition]:
        document = await self.db.find_one(self.COLLECTION_NAME, {"id": str(service_id)})
        if document is None:
            return None
        return self._to_entity(document)

    async def create(self, service: ServiceDefinition) -> ServiceDefinition:
        """
        Create a new service definition.

        Raises:
            MonitoringOperationError: If the insert fails
        """
        try:
            await self.db.insert_one(self.COLLECTION_NAME, self._to_document(service))
            return service
        except Exception as e:
            raise MonitoringOperationError(
                f"Failed to create service definition: {str(e)}"
            )

    async def delete(self, service_id: UUID) -> None:
        """
        Delete a service definition by its ID.

        Raises:
            ServiceDefinitionNotFoundError: If the definition does not exist
            MonitoringOperationError: If the deletion fails
        """
        try:
            await self.db.delete_one(self.COLLECTION_NAME, {"id": str(service_id)})
        except Exception as e:
            if "Document not found" in str(e):
                raise ServiceDefinitionNotFoundError(str(service_id))
            raise MonitoringOperationError(
                f"Failed to delete service definition: {str(e)}"
            )
