"""Database probe: ``SELECT 1`` through a cached SQLAlchemy engine."""

from __future__ import annotations

import asyncio
import math
import threading
from concurrent.futures import ThreadPoolExecutor
from time import perf_counter
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine, make_url

from healthbeat.domain.entities.monitoring import (
    CheckType,
    DatabaseConnectionConfig,
    ProbeOutcome,
    ServiceDefinition,
    ServiceStatus,
)
from healthbeat.domain.repositories.database_connection_repository import (
    IDatabaseConnectionRepository,
)
from healthbeat.shared import get_logger

logger = get_logger(__name__)

LIVENESS_QUERY = "SELECT 1"
SUCCESS_MESSAGE = "Database connection successful"
# Blocking calls allowed at once against a single connection URI.
WORKERS_PER_TARGET = 4

_CONNECT_TIMEOUT_ARG = {
    "postgresql": "connect_timeout",
    "mysql": "connect_timeout",
    "mariadb": "connect_timeout",
    "sqlite": "timeout",
}


class _ConfigLookupError(Exception):
    pass


def _elapsed_ms(start: float) -> int:
    return max(0, int(round((perf_counter() - start) * 1000)))


def _build_url(config: DatabaseConnectionConfig) -> URL:
    url = make_url(config.connection_url)
    if config.driver and "+" not in url.drivername:
        url = url.set(drivername=f"{url.drivername}+{config.driver}")
    if config.username:
        url = url.set(username=config.username)
    if config.password:
        url = url.set(password=config.password)
    return url


def _connect_args(url: URL, timeout: float) -> Dict[str, Any]:
    key = _CONNECT_TIMEOUT_ARG.get(url.get_backend_name())
    if key is None:
        return {}
    return {key: max(1, math.ceil(timeout))}


class DatabaseHealthProbe:
    """
    Checks DATABASE services against the connection config they reference.

    Engines are cached per connection URI for the lifetime of the process:
    the first engine stored for a URI wins and is never refreshed or
    disposed here. The cache is unbounded.

    Blocking driver calls run on a small thread pool owned by each URI, not
    on the event loop's default executor. A timed out call is abandoned in
    place: it only holds a worker of its own target and is not joined when
    the caller's event loop shuts down. Drivers that accept one also get a
    connect timeout so abandoned calls eventually return.
    """

    def __init__(
        self,
        connection_repository: IDatabaseConnectionRepository,
        timeout: float = 10.0,
    ) -> None:
        self._connection_repository = connection_repository
        self._timeout = timeout
        self._engines: Dict[str, Engine] = {}
        self._executors: Dict[str, ThreadPoolExecutor] = {}
        self._engines_lock = threading.Lock()

    @property
    def check_type(self) -> CheckType:
        return CheckType.DATABASE

    @property
    def cached_engine_count(self) -> int:
        return len(self._engines)

    async def check_health(self, service: ServiceDefinition) -> ProbeOutcome:
        try:
            config = await self._load_config(service)
        except Exception as exc:
            logger.warning(
                "probe.database.config_error",
                service_id=str(service.id),
                error=str(exc),
            )
            return ProbeOutcome(
                service_definition_id=service.id,
                status=ServiceStatus.DOWN,
                message=f"Database config error: {exc}",
            )

        start = perf_counter()
        try:
            loop = asyncio.get_running_loop()
            await asyncio.wait_for(
                loop.run_in_executor(
                    self._executor_for(config), self._select_one, config
                ),
                timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            return self._down(
                service, start, f"Query timed out after {self._timeout:g}s"
            )
        except Exception as exc:
            return self._down(service, start, str(exc) or type(exc).__name__)

        return ProbeOutcome(
            service_definition_id=service.id,
            status=ServiceStatus.UP,
            response_time_ms=_elapsed_ms(start),
            message=SUCCESS_MESSAGE,
        )

    async def _load_config(self, service: ServiceDefinition) -> DatabaseConnectionConfig:
        if service.database_config_id is None:
            raise _ConfigLookupError("no database config referenced by service")
        config = await self._connection_repository.find_by_id(
            service.database_config_id
        )
        if config is None:
            raise _ConfigLookupError(
                f"no database config found for id {service.database_config_id}"
            )
        return config

    def _get_engine(self, config: DatabaseConnectionConfig) -> Engine:
        key = config.connection_url
        engine = self._engines.get(key)
        if engine is not None:
            return engine
        with self._engines_lock:
            engine = self._engines.get(key)
            if engine is None:
                url = _build_url(config)
                engine = create_engine(
                    url,
                    pool_pre_ping=True,
                    connect_args=_connect_args(url, self._timeout),
                )
                self._engines[key] = engine
                logger.debug("probe.database.engine_created", engines=len(self._engines))
        return engine

    def _executor_for(self, config: DatabaseConnectionConfig) -> ThreadPoolExecutor:
        key = config.connection_url
        with self._engines_lock:
            executor = self._executors.get(key)
            if executor is None:
                executor = ThreadPoolExecutor(
                    max_workers=WORKERS_PER_TARGET,
                    thread_name_prefix="healthbeat-db-probe",
                )
                self._executors[key] = executor
        return executor

    def _select_one(self, config: DatabaseConnectionConfig) -> Optional[int]:
        engine = self._get_engine(config)
        with engine.connect() as connection:
            row = connection.execute(text(LIVENESS_QUERY)).first()
        if row is None:
            raise RuntimeError("liveness query returned no row")
        return row[0]

    def _down(
        self, service: ServiceDefinition, start: float, cause: str
    ) -> ProbeOutcome:
        logger.debug(
            "probe.database.down", service_id=str(service.id), reason=cause
        )
        return ProbeOutcome(
            service_definition_id=service.id,
            status=ServiceStatus.DOWN,
            response_time_ms=_elapsed_ms(start),
            message=f"Database error: {cause}",
        )
