"""
Controllers Package - Presentation Layer

This package contains FastAPI controllers (routers) that handle
HTTP requests and responses. Controllers are responsible for
input validation, error handling, and mapping between API DTOs
and application layer use cases.
"""

from .database_controller import router as databases_router
from .monitoring_controller import router as monitoring_router

__all__ = ["monitoring_router", "databases_router"]
