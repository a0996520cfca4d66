"""
MongoDB Health Check Result Repository - Infrastructure Layer

Results are append-only: one document per probe per cycle.
"""

from typing import Any, Dict, List
from uuid import UUID

import pymongo

from healthbeat.domain.entities.errors import MonitoringOperationError
from healthbeat.domain.entities.monitoring import HealthCheckResult, ServiceStatus
from healthbeat.domain.repositories.health_check_result_repository import (
    IHealthCheckResultRepository,
)
from healthbeat.infrastructure.database import MongoDatabase
from healthbeat.infrastructure.database.mongo_database import HEALTH_CHECK_RESULTS


class HealthCheckResultRepository(IHealthCheckResultRepository):
    """MongoDB implementation of the HealthCheckResultRepository."""

    COLLECTION_NAME = HEALTH_CHECK_RESULTS

    def __init__(self, mongo_database: MongoDatabase):
        self.db = mongo_database

    def _to_document(self, result: HealthCheckResult) -> Dict[str, Any]:
        return {
            "id": str(result.id),
            "service_definition_id": str(result.service_definition_id),
            "status": result.status.value,
            "response_time_ms": result.response_time_ms,
            "message": result.message,
            "checked_at": result.checked_at,
        }

    def _to_entity(self, document: Dict[str, Any]) -> HealthCheckResult:
        return HealthCheckResult(
            id=UUID(document["id"]),
            service_definition_id=UUID(document["service_definition_id"]),
            status=ServiceStatus(document["status"]),
            response_time_ms=document.get("response_time_ms"),
            message=document.get("message"),
            checked_at=document["checked_at"],
        )

    async def save(self, result: HealthCheckResult) -> HealthCheckResult:
        """
        Persist one result.

        Raises:
            MonitoringOperationError: If the insert fails
        """
        try:
            await self.db.insert_one(self.COLLECTION_NAME, self._to_document(result))
            return result
        except Exception as e:
            raise MonitoringOperationError(
                f"Failed to save health check result: {str(e)}"
            )

    async def find_by_service(
        self, service_id: UUID, limit: int = 50
    ) -> List[HealthCheckResult]:
        documents = await self.db.find_many(
            self.COLLECTION_NAME,
            {"service_definition_id": str(service_id)},
            sort_by="checked_at",
            sort_direction=pymongo.DESCENDING,
            limit=limit,
        )
        return [self._to_entity(document) for document in documents]
