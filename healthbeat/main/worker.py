#!/usr/bin/env python3
"""
Worker Entry Point - Main Layer

This module serves as the entry point for the Celery worker that runs
health check cycles. When MONITORING_BEAT_ENABLED is set, beat is
embedded in the worker and the API must run with its own scheduler off.
"""

import os

from healthbeat.main.config import get_settings
from healthbeat.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

# Configure logging with basic settings first
configure_logging()

# Load settings
settings = get_settings()

# Update logging with complete settings
update_logging_from_settings(settings)

logger = get_logger(__name__)


def create_worker():
    """
    Configure and return the Celery worker.

    Similar to create_app() in app.py, this function configures
    the worker with proper settings and environment.
    """
    settings = get_settings()

    os.environ.setdefault("CELERY_BROKER_URL", settings.celery.broker_url)
    os.environ.setdefault("CELERY_RESULT_BACKEND", settings.celery.result_backend_url)

    from healthbeat.infrastructure.services.celery_config import create_celery_app

    worker_app = create_celery_app(
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
        interval_seconds=settings.monitoring.interval_seconds,
        beat_enabled=settings.monitoring.beat_enabled,
    )

    logger.info(
        "Configuring Celery worker",
        broker_url=settings.celery.broker_url,
        backend_url=settings.celery.result_backend_url,
        interval_seconds=settings.monitoring.interval_seconds,
        beat_enabled=settings.monitoring.beat_enabled,
        app_name=worker_app.main,
    )

    return worker_app


def main():
    """Main entry point for Celery worker."""

    logger.info("Starting Celery worker")

    worker_app = create_worker()

    argv = [
        "worker",
        "--loglevel=info",
        "--queues=health_checks",
        "--concurrency=2",
    ]
    if get_settings().monitoring.beat_enabled:
        argv.append("--beat")

    worker_app.worker_main(argv)


if __name__ == "__main__":
    main()
