"""
Monitoring Router - Presentation Layer

This module defines the FastAPI router for the health check cycle and
the service catalog.
"""

import asyncio
from typing import List

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import UUID4

from healthbeat.application.dtos.monitoring_dto import (
    HealthCheckResultDTO,
    HealthCheckRunDTO,
    MonitoringStatusDTO,
    ServiceDefinitionCreateDTO,
    ServiceDefinitionResponseDTO,
)
from healthbeat.application.use_cases.monitoring_use_cases import (
    CreateServiceDefinitionUseCase,
    DeleteServiceDefinitionUseCase,
    GetServiceDefinitionsUseCase,
    GetServiceResultsUseCase,
)
from healthbeat.domain.entities.errors import (
    MonitoringOperationError,
    ServiceDefinitionNotFoundError,
    ServiceDefinitionValidationError,
)
from healthbeat.domain.services import ProbeRegistry
from healthbeat.infrastructure.services.monitoring_scheduler import (
    MonitoringScheduler,
)
from healthbeat.shared.consts import MONITORING_RUNNING_MESSAGE

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/monitoring", tags=["Monitoring"])


@router.get("/status", response_model=MonitoringStatusDTO)
@inject
async def get_monitoring_status(
    scheduler: MonitoringScheduler = Depends(Provide["monitoring_scheduler"]),
    probe_registry: ProbeRegistry = Depends(Provide["probe_registry"]),
) -> MonitoringStatusDTO:
    """Report whether the periodic scheduler is running."""
    return MonitoringStatusDTO(
        message=MONITORING_RUNNING_MESSAGE,
        scheduler_running=scheduler.is_running,
        interval_seconds=int(scheduler.interval_seconds),
        in_flight_cycles=scheduler.in_flight,
        supported_check_types=[t.value for t in probe_registry.supported_types()],
    )


@router.post("/checks", response_model=HealthCheckRunDTO)
@inject
async def run_health_checks(
    scheduler: MonitoringScheduler = Depends(Provide["monitoring_scheduler"]),
) -> HealthCheckRunDTO:
    """
    Run one health check cycle now and wait for it to finish.

    The cycle keeps running if the client disconnects before it ends.
    """
    try:
        result = await asyncio.shield(scheduler.trigger())
        return HealthCheckRunDTO(result=result)
    except Exception as e:
        logger.error("Failed to run health checks", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.get("/services", response_model=List[ServiceDefinitionResponseDTO])
@inject
async def get_services(
    get_services_use_case: GetServiceDefinitionsUseCase = Depends(
        Provide["get_service_definitions_use_case"]
    ),
) -> List[ServiceDefinitionResponseDTO]:
    """List every monitored service."""
    try:
        return await get_services_use_case.execute()
    except Exception as e:
        logger.error("Failed to list services", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.post(
    "/services",
    response_model=ServiceDefinitionResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_service(
    service_dto: ServiceDefinitionCreateDTO,
    create_service_use_case: CreateServiceDefinitionUseCase = Depends(
        Provide["create_service_definition_use_case"]
    ),
) -> ServiceDefinitionResponseDTO:
    """
    Register a service to be probed on every cycle.

    HTTP services need a ``url``; database services need a
    ``database_config_id``.
    """
    try:
        return await create_service_use_case.execute(service_dto=service_dto)
    except ServiceDefinitionValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except MonitoringOperationError as e:
        logger.error("Failed to create service", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception as e:
        logger.error("Unexpected error creating service", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.delete("/services/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_service(
    service_id: UUID4,
    delete_service_use_case: DeleteServiceDefinitionUseCase = Depends(
        Provide["delete_service_definition_use_case"]
    ),
) -> None:
    """Remove a service from the catalog. Its past results are kept."""
    try:
        await delete_service_use_case.execute(service_id=service_id)
    except ServiceDefinitionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception as e:
        logger.error(
            "Unexpected error deleting service",
            service_id=str(service_id),
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.get(
    "/services/{service_id}/results", response_model=List[HealthCheckResultDTO]
)
@inject
async def get_service_results(
    service_id: UUID4,
    limit: int = Query(50, ge=1, le=1000, description="Maximum number of results"),
    get_results_use_case: GetServiceResultsUseCase = Depends(
        Provide["get_service_results_use_case"]
    ),
) -> List[HealthCheckResultDTO]:
    """Latest results of a service, newest first."""
    try:
        return await get_results_use_case.execute(service_id=service_id, limit=limit)
    except ServiceDefinitionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception as e:
        logger.error(
            "Failed to retrieve service results",
            service_id=str(service_id),
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
