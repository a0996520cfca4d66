"""Infrastructure services package."""

from . import tasks
from .celery_config import celery_app
from .monitoring_scheduler import MonitoringScheduler

__all__ = ["celery_app", "tasks", "MonitoringScheduler"]
