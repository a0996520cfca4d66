"""
Monitoring Use Cases - Application Layer

Runs health check cycles over the service catalog and exposes the
catalog and its results to the presentation layer.
"""

import asyncio
from typing import List, Optional
from uuid import UUID

from dependency_injector.wiring import Provide, inject

from healthbeat.domain.entities.errors import (
    ServiceDefinitionNotFoundError,
    ServiceDefinitionValidationError,
)
from healthbeat.domain.entities.monitoring import (
    CheckType,
    HealthCheckResult,
    ServiceDefinition,
    ServiceStatus,
)
from healthbeat.domain.repositories.health_check_result_repository import (
    IHealthCheckResultRepository,
)
from healthbeat.domain.repositories.service_definition_repository import (
    IServiceDefinitionRepository,
)
from healthbeat.domain.services import ProbeRegistry
from healthbeat.shared import get_logger
from healthbeat.shared.consts import CYCLE_COMPLETED_MESSAGE

from ..dtos.monitoring_dto import (
    HealthCheckResultDTO,
    ServiceDefinitionCreateDTO,
    ServiceDefinitionResponseDTO,
)

logger = get_logger(__name__)


class RunHealthChecksUseCase:
    """
    Probe every service definition once and persist the outcomes.

    Probes run concurrently, at most ``max_concurrent_probes`` at a time
    across every cycle running on the same event loop.
    A failure while checking or saving one service is logged and does not
    affect the others. Loading the catalog is the only step whose failure
    propagates to the caller.
    """

    def __init__(
        self,
        service_repository: IServiceDefinitionRepository,
        result_repository: IHealthCheckResultRepository,
        probe_registry: ProbeRegistry,
        max_concurrent_probes: int = 100,
    ) -> None:
        if max_concurrent_probes < 1:
            raise ValueError("max_concurrent_probes must be at least 1")
        self.service_repository = service_repository
        self.result_repository = result_repository
        self.probe_registry = probe_registry
        self.max_concurrent_probes = max_concurrent_probes
        self._limiter: Optional[asyncio.Semaphore] = None
        self._limiter_loop: Optional[asyncio.AbstractEventLoop] = None

    async def execute(self) -> str:
        """
        Run one health check cycle.

        Returns:
            The completion message, once every service has been handled
        """
        services = await self.service_repository.find_all()
        logger.info("monitoring.cycle.started", services=len(services))

        semaphore = self._probe_limiter()
        statuses = await asyncio.gather(
            *(self._check_service(service, semaphore) for service in services)
        )

        recorded = [status for status in statuses if status is not None]
        logger.info(
            "monitoring.cycle.finished",
            services=len(services),
            recorded=len(recorded),
            skipped=len(services) - len(recorded),
            down=sum(1 for status in recorded if status is ServiceStatus.DOWN),
        )
        return CYCLE_COMPLETED_MESSAGE

    def _probe_limiter(self) -> asyncio.Semaphore:
        """Limiter shared by the cycles of the running event loop."""
        loop = asyncio.get_running_loop()
        if self._limiter is None or self._limiter_loop is not loop:
            # Each Celery task runs on a fresh loop.
            self._limiter = asyncio.Semaphore(self.max_concurrent_probes)
            self._limiter_loop = loop
        return self._limiter

    async def _check_service(
        self, service: ServiceDefinition, semaphore: asyncio.Semaphore
    ) -> Optional[ServiceStatus]:
        """Probe and persist one service. Returns None when nothing was saved."""
        probe = self.probe_registry.get(service.check_type)
        if probe is None:
            logger.warning(
                "monitoring.probe.not_found",
                service_id=str(service.id),
                service_name=service.name,
                check_type=getattr(service.check_type, "value", service.check_type),
            )
            return None

        try:
            async with semaphore:
                outcome = await probe.check_health(service)
        except Exception as e:
            logger.error(
                "monitoring.probe.failed",
                service_id=str(service.id),
                service_name=service.name,
                error=str(e),
                exc_info=True,
            )
            return None

        result = HealthCheckResult.from_outcome(outcome)
        try:
            await self.result_repository.save(result)
        except Exception as e:
            logger.error(
                "monitoring.result.save_failed",
                service_id=str(service.id),
                service_name=service.name,
                error=str(e),
                exc_info=True,
            )
            return None

        if result.status is ServiceStatus.DOWN:
            logger.info(
                "monitoring.service.down",
                service_id=str(service.id),
                service_name=service.name,
                message=result.message,
            )
        return result.status


class GetServiceDefinitionsUseCase:
    """Use case for listing the service catalog."""

    @inject
    def __init__(
        self,
        service_repository: IServiceDefinitionRepository = Provide[
            "service_definition_repository"
        ],
    ):
        self.service_repository = service_repository

    async def execute(self) -> List[ServiceDefinitionResponseDTO]:
        services = await self.service_repository.find_all()
        return [ServiceDefinitionResponseDTO.from_domain(s) for s in services]


class CreateServiceDefinitionUseCase:
    """Use case for registering a monitored service."""

    @inject
    def __init__(
        self,
        service_repository: IServiceDefinitionRepository = Provide[
            "service_definition_repository"
        ],
    ):
        self.service_repository = service_repository

    async def execute(
        self, service_dto: ServiceDefinitionCreateDTO
    ) -> ServiceDefinitionResponseDTO:
        """
        Create a new service definition.

        Raises:
            ServiceDefinitionValidationError: If the target the check kind
                needs is missing
        """
        if service_dto.check_type is CheckType.HTTP and not service_dto.url:
            raise ServiceDefinitionValidationError("HTTP services require a url")
        if (
            service_dto.check_type is CheckType.DATABASE
            and service_dto.database_config_id is None
        ):
            raise ServiceDefinitionValidationError(
                "Database services require a database_config_id"
            )

        service = ServiceDefinition(
            name=service_dto.name,
            check_type=service_dto.check_type,
            url=service_dto.url,
            database_config_id=service_dto.database_config_id,
            is_active=service_dto.is_active,
        )
        created = await self.service_repository.create(service)
        return ServiceDefinitionResponseDTO.from_domain(created)


class DeleteServiceDefinitionUseCase:
    """Use case for removing a service from the catalog."""

    @inject
    def __init__(
        self,
        service_repository: IServiceDefinitionRepository = Provide[
            "service_definition_repository"
        ],
    ):
        self.service_repository = service_repository

    async def execute(self, service_id: UUID) -> None:
        """
        Raises:
            ServiceDefinitionNotFoundError: If the service does not exist
        """
        await self.service_repository.delete(service_id)


class GetServiceResultsUseCase:
    """Use case for reading the latest results of one service."""

    @inject
    def __init__(
        self,
        service_repository: IServiceDefinitionRepository = Provide[
            "service_definition_repository"
        ],
        result_repository: IHealthCheckResultRepository = Provide[
            "health_check_result_repository"
        ],
    ):
        self.service_repository = service_repository
        self.result_repository = result_repository

    async def execute(
        self, service_id: UUID, limit: int = 50
    ) -> List[HealthCheckResultDTO]:
        """
        Return the most recent results, newest first.

        Raises:
            ServiceDefinitionNotFoundError: If the service does not exist
        """
        service = await self.service_repository.find_by_id(service_id)
        if service is None:
            raise ServiceDefinitionNotFoundError(str(service_id))

        results = await self.result_repository.find_by_service(service_id, limit=limit)
        return [HealthCheckResultDTO.from_domain(r) for r in results]
