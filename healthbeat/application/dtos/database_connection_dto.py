"""
Database Connection DTOs - Application Layer
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from healthbeat.domain.entities.monitoring import DatabaseConnectionConfig


class DatabaseConnectionCreateDTO(BaseModel):
    """DTO for creating a database connection config."""

    name: str = Field(..., description="Name of the connection", min_length=1, max_length=100)
    connection_url: str = Field(
        ..., description="SQLAlchemy style connection URI", min_length=1
    )
    username: Optional[str] = Field(None, description="Login user")
    password: Optional[str] = Field(None, description="Login password")
    driver: Optional[str] = Field(
        None, description="Driver hint such as 'psycopg2' or 'pymysql'"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "orders-db",
                "connection_url": "postgresql://db.internal:5432/orders",
                "username": "monitor",
                "password": "secret",
                "driver": "psycopg2",
            }
        }
    }


class DatabaseConnectionUpdateDTO(BaseModel):
    """DTO for updating a database connection config. Unset fields are kept."""

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    connection_url: Optional[str] = Field(None, min_length=1)
    username: Optional[str] = None
    password: Optional[str] = None
    driver: Optional[str] = None


class DatabaseConnectionResponseDTO(BaseModel):
    """DTO returned for a stored connection config. The password is never echoed."""

    id: UUID
    name: str
    connection_url: str
    username: Optional[str] = None
    driver: Optional[str] = None
    has_password: bool = False
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(
        cls, config: DatabaseConnectionConfig
    ) -> "DatabaseConnectionResponseDTO":
        return cls(
            id=config.id,
            name=config.name,
            connection_url=config.connection_url,
            username=config.username,
            driver=config.driver,
            has_password=bool(config.password),
            created_at=config.created_at,
            updated_at=config.updated_at,
        )
