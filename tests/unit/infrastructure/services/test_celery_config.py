from __future__ import annotations

from healthbeat.infrastructure.services.celery_config import (
    BEAT_ENTRY_NAME,
    HEALTH_CHECKS_QUEUE,
    RUN_HEALTH_CHECKS_TASK,
    create_celery_app,
)


def test_create_celery_app_uses_env(monkeypatch) -> None:
    monkeypatch.setenv("CELERY_BROKER_URL", "redis://env/0")
    monkeypatch.setenv("CELERY_RESULT_BACKEND", "redis://env/1")
    monkeypatch.setenv("MONITORING_INTERVAL_SECONDS", "15")
    monkeypatch.setenv("MONITORING_BEAT_ENABLED", "true")

    app = create_celery_app()

    assert app.conf.broker_url == "redis://env/0"
    assert app.conf.result_backend == "redis://env/1"
    assert app.conf.task_routes[RUN_HEALTH_CHECKS_TASK] == {"queue": HEALTH_CHECKS_QUEUE}
    assert app.conf.beat_schedule[BEAT_ENTRY_NAME]["schedule"] == 15.0


def test_create_celery_app_with_explicit_params() -> None:
    app = create_celery_app(
        broker_url="redis://explicit/0",
        backend_url="redis://explicit/1",
        interval_seconds=60,
        beat_enabled=True,
    )

    assert app.conf.broker_url == "redis://explicit/0"
    assert app.conf.result_backend == "redis://explicit/1"
    entry = app.conf.beat_schedule[BEAT_ENTRY_NAME]
    assert entry["task"] == RUN_HEALTH_CHECKS_TASK
    assert entry["schedule"] == 60


def test_beat_entry_is_absent_by_default(monkeypatch) -> None:
    monkeypatch.delenv("MONITORING_BEAT_ENABLED", raising=False)

    app = create_celery_app(broker_url="memory://", backend_url="cache+memory://")

    assert BEAT_ENTRY_NAME not in app.conf.beat_schedule


def test_invalid_interval_env_falls_back_to_default(monkeypatch) -> None:
    monkeypatch.setenv("MONITORING_INTERVAL_SECONDS", "often")

    app = create_celery_app(
        broker_url="memory://", backend_url="cache+memory://", beat_enabled=True
    )

    assert app.conf.beat_schedule[BEAT_ENTRY_NAME]["schedule"] == 30.0
