"""Celery task implementations for infrastructure services."""

from .base import CallbackTask, logger
from .health_checks import run_health_checks

__all__ = ["CallbackTask", "logger", "run_health_checks"]
