"""
Infrastructure Services - Celery Configuration

This module contains the Celery configuration used to run health check
cycles from a worker. Celery beat schedules them only when enabled, so the
in-process scheduler of the API stays the single trigger by default.
"""

import os
from typing import Optional

from celery import Celery

HEALTH_CHECKS_QUEUE = "health_checks"
RUN_HEALTH_CHECKS_TASK = "run_health_checks"
BEAT_ENTRY_NAME = "run-health-checks"


def _interval_from_env() -> float:
    raw = os.getenv("MONITORING_INTERVAL_SECONDS", "30")
    try:
        interval = float(raw)
    except ValueError:
        interval = 30.0
    return max(interval, 1.0)


def _beat_enabled_from_env() -> bool:
    return os.getenv("MONITORING_BEAT_ENABLED", "false").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }


def create_celery_app(
    broker_url: Optional[str] = None,
    backend_url: Optional[str] = None,
    interval_seconds: Optional[float] = None,
    beat_enabled: Optional[bool] = None,
) -> Celery:
    """
    Create and configure Celery application.

    Args:
        broker_url: Message broker URL (uses env var if not provided)
        backend_url: Result backend URL (uses env var if not provided)
        interval_seconds: Period of the health check beat entry (uses
            ``MONITORING_INTERVAL_SECONDS`` if not provided)
        beat_enabled: Register the periodic beat entry (uses
            ``MONITORING_BEAT_ENABLED`` if not provided)

    Returns:
        Configured Celery application
    """
    # Use provided URLs or fall back to environment variables with defaults
    effective_broker = broker_url or os.getenv(
        "CELERY_BROKER_URL", "redis://redis:6379/0"
    )
    effective_backend = backend_url or os.getenv(
        "CELERY_RESULT_BACKEND", "redis://redis:6379/1"
    )
    effective_interval = interval_seconds or _interval_from_env()
    if beat_enabled is None:
        beat_enabled = _beat_enabled_from_env()

    app = Celery(
        "healthbeat_worker",
        broker=effective_broker,
        backend=effective_backend,
        include=["healthbeat.infrastructure.services.tasks.health_checks"],
    )

    app.conf.update(
        # Task configuration
        task_serializer="json",
        accept_content=["json"],
        result_serializer="json",
        timezone="UTC",
        enable_utc=True,
        result_expires=3600,  # 1 hour
        task_routes={
            RUN_HEALTH_CHECKS_TASK: {"queue": HEALTH_CHECKS_QUEUE},
        },
        # Worker configuration
        worker_prefetch_multiplier=1,
        worker_max_tasks_per_child=100,
        # Cycles are never retried; the next tick runs a fresh one.
        task_acks_late=False,
        task_max_retries=0,
    )

    if beat_enabled:
        app.conf.beat_schedule = {
            BEAT_ENTRY_NAME: {
                "task": RUN_HEALTH_CHECKS_TASK,
                "schedule": effective_interval,
                "options": {
                    "queue": HEALTH_CHECKS_QUEUE,
                    "expires": effective_interval * 10,
                },
            },
        }

    return app


celery_app = create_celery_app()
