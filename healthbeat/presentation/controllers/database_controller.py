"""
Databases Router - Presentation Layer

This module defines the FastAPI router for the connection configs used
by database health checks.
"""

from typing import List

import structlog
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import UUID4

from healthbeat.application.dtos.database_connection_dto import (
    DatabaseConnectionCreateDTO,
    DatabaseConnectionResponseDTO,
    DatabaseConnectionUpdateDTO,
)
from healthbeat.application.use_cases.database_connection_use_cases import (
    CreateDatabaseConnectionUseCase,
    DeleteDatabaseConnectionUseCase,
    GetDatabaseConnectionByIdUseCase,
    GetDatabaseConnectionsUseCase,
    UpdateDatabaseConnectionUseCase,
)
from healthbeat.domain.entities.errors import (
    DatabaseConnectionNotFoundError,
    MonitoringOperationError,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/databases", tags=["Databases"])


@router.get("/", response_model=List[DatabaseConnectionResponseDTO])
@inject
async def get_database_connections(
    get_connections_use_case: GetDatabaseConnectionsUseCase = Depends(
        Provide["get_database_connections_use_case"]
    ),
) -> List[DatabaseConnectionResponseDTO]:
    """List the stored connection configs."""
    try:
        return await get_connections_use_case.execute()
    except Exception as e:
        logger.error("Failed to list database connections", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.get("/{config_id}", response_model=DatabaseConnectionResponseDTO)
@inject
async def get_database_connection(
    config_id: UUID4,
    get_connection_use_case: GetDatabaseConnectionByIdUseCase = Depends(
        Provide["get_database_connection_by_id_use_case"]
    ),
) -> DatabaseConnectionResponseDTO:
    try:
        return await get_connection_use_case.execute(config_id=config_id)
    except DatabaseConnectionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception as e:
        logger.error(
            "Failed to retrieve database connection",
            config_id=str(config_id),
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.post(
    "/",
    response_model=DatabaseConnectionResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def create_database_connection(
    config_dto: DatabaseConnectionCreateDTO,
    create_connection_use_case: CreateDatabaseConnectionUseCase = Depends(
        Provide["create_database_connection_use_case"]
    ),
) -> DatabaseConnectionResponseDTO:
    """
    Store a connection config. The password is stored but never returned.
    """
    try:
        return await create_connection_use_case.execute(config_dto=config_dto)
    except MonitoringOperationError as e:
        logger.error("Failed to create database connection", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception as e:
        logger.error("Unexpected error creating database connection", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.patch("/{config_id}", response_model=DatabaseConnectionResponseDTO)
@inject
async def update_database_connection(
    config_id: UUID4,
    config_dto: DatabaseConnectionUpdateDTO,
    update_connection_use_case: UpdateDatabaseConnectionUseCase = Depends(
        Provide["update_database_connection_use_case"]
    ),
) -> DatabaseConnectionResponseDTO:
    """
    Update an existing connection config with new values.

    Probes keep using the engine built for the previous connection URI
    until the process restarts.
    """
    try:
        return await update_connection_use_case.execute(
            config_id=config_id, config_dto=config_dto
        )
    except DatabaseConnectionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except MonitoringOperationError as e:
        logger.error(
            "Failed to update database connection",
            config_id=str(config_id),
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
    except Exception as e:
        logger.error(
            "Unexpected error updating database connection",
            config_id=str(config_id),
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )


@router.delete("/{config_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def delete_database_connection(
    config_id: UUID4,
    delete_connection_use_case: DeleteDatabaseConnectionUseCase = Depends(
        Provide["delete_database_connection_use_case"]
    ),
) -> None:
    try:
        await delete_connection_use_case.execute(config_id=config_id)
    except DatabaseConnectionNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    except Exception as e:
        logger.error(
            "Unexpected error deleting database connection",
            config_id=str(config_id),
            error=str(e),
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        )
