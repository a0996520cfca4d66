"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager

from dependency_injector import containers, providers

from healthbeat.application.use_cases.database_connection_use_cases import (
    CreateDatabaseConnectionUseCase,
    DeleteDatabaseConnectionUseCase,
    GetDatabaseConnectionByIdUseCase,
    GetDatabaseConnectionsUseCase,
    UpdateDatabaseConnectionUseCase,
)
from healthbeat.application.use_cases.monitoring_use_cases import (
    CreateServiceDefinitionUseCase,
    DeleteServiceDefinitionUseCase,
    GetServiceDefinitionsUseCase,
    GetServiceResultsUseCase,
    RunHealthChecksUseCase,
)
from healthbeat.domain.services import ProbeRegistry
from healthbeat.infrastructure.database import MongoDatabase
from healthbeat.infrastructure.probes import DatabaseHealthProbe, HttpHealthProbe
from healthbeat.infrastructure.repositories import (
    DatabaseConnectionRepository,
    HealthCheckResultRepository,
    ServiceDefinitionRepository,
)
from healthbeat.infrastructure.services.monitoring_scheduler import (
    MonitoringScheduler,
)
from healthbeat.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(
        packages=["..presentation", "..application"]
    )

    # Settings
    config = providers.Configuration()

    # Infrastructure
    mongo_database = providers.Singleton(
        MongoDatabase,
        mongo_uri=config.database.mongo_uri,
        db_name=config.database.database_name,
    )

    service_definition_repository = providers.Singleton(
        ServiceDefinitionRepository,
        mongo_database=mongo_database,
    )

    database_connection_repository = providers.Singleton(
        DatabaseConnectionRepository,
        mongo_database=mongo_database,
    )

    health_check_result_repository = providers.Singleton(
        HealthCheckResultRepository,
        mongo_database=mongo_database,
    )

    # Probes
    http_probe = providers.Singleton(
        HttpHealthProbe,
        timeout=config.monitoring.http_timeout_seconds,
        method=config.monitoring.http_method,
    )

    # One instance per process: it owns the engine cache.
    database_probe = providers.Singleton(
        DatabaseHealthProbe,
        connection_repository=database_connection_repository,
        timeout=config.monitoring.database_timeout_seconds,
    )

    probe_registry = providers.Singleton(
        ProbeRegistry,
        probes=providers.List(http_probe, database_probe),
    )

    # Application (use cases)
    run_health_checks_use_case = providers.Singleton(
        RunHealthChecksUseCase,
        service_repository=service_definition_repository,
        result_repository=health_check_result_repository,
        probe_registry=probe_registry,
        max_concurrent_probes=config.monitoring.max_concurrent_probes,
    )

    monitoring_scheduler = providers.Singleton(
        MonitoringScheduler,
        dispatcher=run_health_checks_use_case,
        interval_seconds=config.monitoring.interval_seconds,
        initial_delay_seconds=config.monitoring.initial_delay_seconds,
        max_pending_cycles=config.monitoring.max_pending_cycles,
        allow_overlapping_cycles=config.monitoring.allow_overlapping_cycles,
    )

    get_service_definitions_use_case = providers.Factory(
        GetServiceDefinitionsUseCase,
        service_repository=service_definition_repository,
    )

    create_service_definition_use_case = providers.Factory(
        CreateServiceDefinitionUseCase,
        service_repository=service_definition_repository,
    )

    delete_service_definition_use_case = providers.Factory(
        DeleteServiceDefinitionUseCase,
        service_repository=service_definition_repository,
    )

    get_service_results_use_case = providers.Factory(
        GetServiceResultsUseCase,
        service_repository=service_definition_repository,
        result_repository=health_check_result_repository,
    )

    get_database_connections_use_case = providers.Factory(
        GetDatabaseConnectionsUseCase,
        connection_repository=database_connection_repository,
    )

    get_database_connection_by_id_use_case = providers.Factory(
        GetDatabaseConnectionByIdUseCase,
        connection_repository=database_connection_repository,
    )

    create_database_connection_use_case = providers.Factory(
        CreateDatabaseConnectionUseCase,
        connection_repository=database_connection_repository,
    )

    update_database_connection_use_case = providers.Factory(
        UpdateDatabaseConnectionUseCase,
        connection_repository=database_connection_repository,
    )

    delete_database_connection_use_case = providers.Factory(
        DeleteDatabaseConnectionUseCase,
        connection_repository=database_connection_repository,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for external resources.

    Creates the MongoDB indexes, starts the health check scheduler when
    it is enabled and tears both down on shutdown.
    """
    container = get_container()

    mongo_database = container.mongo_database()
    scheduler = container.monitoring_scheduler()
    scheduler_enabled = bool(container.config.monitoring.scheduler_enabled())

    try:
        logger.info("container.mongo.ensure_connection")
        await mongo_database.create_indexes()

        if scheduler_enabled:
            scheduler.start()
        else:
            logger.info("container.scheduler.disabled")

        logger.info("container.resources.initialized")
        yield container

    finally:
        await scheduler.stop()

        logger.info("container.mongo.close")
        mongo_database.close()

        logger.info("container.resources.shutdown")
