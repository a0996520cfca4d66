"""Celery task running one health check cycle."""

from __future__ import annotations

import asyncio
from typing import Optional

from healthbeat.application.use_cases.monitoring_use_cases import (
    RunHealthChecksUseCase,
)
from healthbeat.infrastructure.services.celery_config import (
    RUN_HEALTH_CHECKS_TASK,
    celery_app,
)
from healthbeat.infrastructure.services.tasks.base import CallbackTask, logger
from healthbeat.infrastructure.settings import get_settings

# Built once per worker process so the database probe keeps its engine cache.
_use_case: Optional[RunHealthChecksUseCase] = None


def build_health_check_use_case() -> RunHealthChecksUseCase:
    """Wire the dispatcher from the worker settings."""
    from healthbeat.domain.services import ProbeRegistry
    from healthbeat.infrastructure.database.mongo_database import MongoDatabase
    from healthbeat.infrastructure.probes import (
        DatabaseHealthProbe,
        HttpHealthProbe,
    )
    from healthbeat.infrastructure.repositories import (
        DatabaseConnectionRepository,
        HealthCheckResultRepository,
        ServiceDefinitionRepository,
    )

    settings = get_settings()
    database = MongoDatabase(
        mongo_uri=settings.database.mongo_uri,
        db_name=settings.database.database_name,
    )
    registry = ProbeRegistry(
        [
            HttpHealthProbe(
                timeout=settings.monitoring.http_timeout_seconds,
                method=settings.monitoring.http_method,
            ),
            DatabaseHealthProbe(
                DatabaseConnectionRepository(database),
                timeout=settings.monitoring.database_timeout_seconds,
            ),
        ]
    )
    return RunHealthChecksUseCase(
        service_repository=ServiceDefinitionRepository(database),
        result_repository=HealthCheckResultRepository(database),
        probe_registry=registry,
        max_concurrent_probes=settings.monitoring.max_concurrent_probes,
    )


def get_health_check_use_case() -> RunHealthChecksUseCase:
    global _use_case
    if _use_case is None:
        _use_case = build_health_check_use_case()
    return _use_case


@celery_app.task(bind=True, base=CallbackTask, name=RUN_HEALTH_CHECKS_TASK)
def run_health_checks(self) -> str:
    """Probe every registered service once and store the results."""

    try:
        return asyncio.run(get_health_check_use_case().execute())
    except Exception as exc:
        logger.error("monitoring.cycle.failed", error=str(exc), exc_info=exc)
        raise
