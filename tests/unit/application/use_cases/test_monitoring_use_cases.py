from __future__ import annotations

import asyncio
import random
from typing import Dict, List, Set
from unittest.mock import MagicMock
from uuid import UUID, uuid4

import pytest

from healthbeat.application.dtos.monitoring_dto import ServiceDefinitionCreateDTO
from healthbeat.application.use_cases import monitoring_use_cases
from healthbeat.application.use_cases.monitoring_use_cases import (
    CreateServiceDefinitionUseCase,
    DeleteServiceDefinitionUseCase,
    GetServiceDefinitionsUseCase,
    GetServiceResultsUseCase,
    RunHealthChecksUseCase,
)
from healthbeat.domain.entities.errors import (
    ServiceDefinitionNotFoundError,
    ServiceDefinitionValidationError,
)
from healthbeat.domain.entities.monitoring import (
    CheckType,
    HealthCheckResult,
    ProbeOutcome,
    ServiceDefinition,
    ServiceStatus,
)
from healthbeat.domain.services import ProbeRegistry
from healthbeat.infrastructure.repositories import (
    HealthCheckResultRepository,
    ServiceDefinitionRepository,
)
from healthbeat.shared.consts import CYCLE_COMPLETED_MESSAGE


class _ListServiceRepository:
    def __init__(self, services: List[ServiceDefinition]) -> None:
        self.services = services
        self.calls = 0

    async def find_all(self) -> List[ServiceDefinition]:
        self.calls += 1
        return list(self.services)


class _RecordingResultRepository:
    def __init__(self, failing_ids: Set[UUID] | None = None) -> None:
        self.saved: List[HealthCheckResult] = []
        self.failing_ids = failing_ids or set()

    async def save(self, result: HealthCheckResult) -> HealthCheckResult:
        await asyncio.sleep(0)
        if result.service_definition_id in self.failing_ids:
            raise RuntimeError("store rejected write")
        self.saved.append(result)
        return result


class _SlowProbe:
    """Sleeps a random time and tracks how many checks run at once."""

    def __init__(self, check_type: CheckType, status: ServiceStatus) -> None:
        self._check_type = check_type
        self.status = status
        self.calls: Dict[UUID, int] = {}
        self.finished: Set[UUID] = set()
        self.running = 0
        self.peak = 0

    @property
    def check_type(self) -> CheckType:
        return self._check_type

    async def check_health(self, service: ServiceDefinition) -> ProbeOutcome:
        self.calls[service.id] = self.calls.get(service.id, 0) + 1
        self.running += 1
        self.peak = max(self.peak, self.running)
        try:
            await asyncio.sleep(random.uniform(0.001, 0.02))
        finally:
            self.running -= 1
        self.finished.add(service.id)
        message = None if self.status is ServiceStatus.UP else "HTTP Error: 503"
        return ProbeOutcome(service.id, self.status, 5, message)


class _BrokenProbe:
    check_type = CheckType.HTTP

    async def check_health(self, service: ServiceDefinition) -> ProbeOutcome:
        raise RuntimeError("probe defect")


@pytest.fixture()
def use_case_logger(monkeypatch) -> MagicMock:
    logger = MagicMock()
    monkeypatch.setattr(monitoring_use_cases, "logger", logger)
    return logger


def _logged_events(logger: MagicMock, level: str) -> List[str]:
    return [c.args[0] for c in getattr(logger, level).call_args_list]


def _services(count: int, check_type) -> List[ServiceDefinition]:
    return [
        ServiceDefinition(name=f"svc-{i}", check_type=check_type, url="http://x")
        for i in range(count)
    ]


@pytest.mark.asyncio
async def test_cycle_saves_one_result_per_known_service(use_case_logger) -> None:
    http_probe = _SlowProbe(CheckType.HTTP, ServiceStatus.UP)
    database_probe = _SlowProbe(CheckType.DATABASE, ServiceStatus.DOWN)
    http_services = _services(6, CheckType.HTTP)
    database_services = _services(3, CheckType.DATABASE)
    unknown_services = _services(2, CheckType.KAFKA)
    services = http_services + unknown_services + database_services
    random.shuffle(services)
    results = _RecordingResultRepository()

    use_case = RunHealthChecksUseCase(
        service_repository=_ListServiceRepository(services),
        result_repository=results,
        probe_registry=ProbeRegistry([http_probe, database_probe]),
    )

    message = await use_case.execute()

    assert message == CYCLE_COMPLETED_MESSAGE
    assert len(results.saved) == len(services) - len(unknown_services)
    saved_ids = {r.service_definition_id for r in results.saved}
    assert saved_ids == {s.id for s in http_services + database_services}
    assert all(count == 1 for count in http_probe.calls.values())
    assert all(count == 1 for count in database_probe.calls.values())
    by_service = {r.service_definition_id: r for r in results.saved}
    assert all(by_service[s.id].status is ServiceStatus.UP for s in http_services)
    assert all(
        by_service[s.id].message == "HTTP Error: 503" for s in database_services
    )


@pytest.mark.asyncio
async def test_completion_is_returned_after_every_probe_finished(
    use_case_logger,
) -> None:
    probe = _SlowProbe(CheckType.HTTP, ServiceStatus.UP)
    services = _services(20, CheckType.HTTP)
    use_case = RunHealthChecksUseCase(
        _ListServiceRepository(services),
        _RecordingResultRepository(),
        ProbeRegistry([probe]),
    )

    await use_case.execute()

    assert probe.finished == {s.id for s in services}
    assert probe.running == 0


@pytest.mark.asyncio
async def test_unknown_kind_is_logged_and_not_recorded(use_case_logger) -> None:
    unknown = ServiceDefinition(name="smtp", check_type="smtp")
    grpc = ServiceDefinition(name="grpc", check_type=CheckType.GRPC)
    results = _RecordingResultRepository()
    use_case = RunHealthChecksUseCase(
        _ListServiceRepository([unknown, grpc]),
        results,
        ProbeRegistry([_SlowProbe(CheckType.HTTP, ServiceStatus.UP)]),
    )

    message = await use_case.execute()

    assert message == CYCLE_COMPLETED_MESSAGE
    assert results.saved == []
    assert _logged_events(use_case_logger, "warning") == [
        "monitoring.probe.not_found",
        "monitoring.probe.not_found",
    ]


@pytest.mark.asyncio
async def test_save_failure_does_not_abort_the_cycle(use_case_logger) -> None:
    services = _services(5, CheckType.HTTP)
    failing = services[2]
    results = _RecordingResultRepository(failing_ids={failing.id})
    use_case = RunHealthChecksUseCase(
        _ListServiceRepository(services),
        results,
        ProbeRegistry([_SlowProbe(CheckType.HTTP, ServiceStatus.UP)]),
    )

    message = await use_case.execute()

    assert message == CYCLE_COMPLETED_MESSAGE
    assert {r.service_definition_id for r in results.saved} == {
        s.id for s in services if s is not failing
    }
    assert _logged_events(use_case_logger, "error") == [
        "monitoring.result.save_failed"
    ]
    assert use_case_logger.error.call_args.kwargs["service_id"] == str(failing.id)


@pytest.mark.asyncio
async def test_probe_defect_is_isolated(use_case_logger) -> None:
    broken = _services(1, CheckType.HTTP)
    healthy = _services(2, CheckType.DATABASE)
    results = _RecordingResultRepository()
    use_case = RunHealthChecksUseCase(
        _ListServiceRepository(broken + healthy),
        results,
        ProbeRegistry(
            [_BrokenProbe(), _SlowProbe(CheckType.DATABASE, ServiceStatus.UP)]
        ),
    )

    assert await use_case.execute() == CYCLE_COMPLETED_MESSAGE
    assert len(results.saved) == 2
    assert _logged_events(use_case_logger, "error") == ["monitoring.probe.failed"]
    assert use_case_logger.error.call_args.kwargs["service_id"] == str(broken[0].id)


@pytest.mark.asyncio
async def test_concurrency_is_bounded(use_case_logger) -> None:
    probe = _SlowProbe(CheckType.HTTP, ServiceStatus.UP)
    use_case = RunHealthChecksUseCase(
        _ListServiceRepository(_services(25, CheckType.HTTP)),
        _RecordingResultRepository(),
        ProbeRegistry([probe]),
        max_concurrent_probes=3,
    )

    await use_case.execute()

    assert 1 < probe.peak <= 3


@pytest.mark.asyncio
async def test_concurrency_bound_is_shared_by_overlapping_cycles(
    use_case_logger,
) -> None:
    probe = _SlowProbe(CheckType.HTTP, ServiceStatus.UP)
    results = _RecordingResultRepository()
    use_case = RunHealthChecksUseCase(
        _ListServiceRepository(_services(10, CheckType.HTTP)),
        results,
        ProbeRegistry([probe]),
        max_concurrent_probes=4,
    )

    outcomes = await asyncio.gather(*(use_case.execute() for _ in range(3)))

    assert outcomes == [CYCLE_COMPLETED_MESSAGE] * 3
    assert len(results.saved) == 30
    assert 1 < probe.peak <= 4


def test_limiter_follows_the_running_event_loop(use_case_logger) -> None:
    probe = _SlowProbe(CheckType.HTTP, ServiceStatus.UP)
    results = _RecordingResultRepository()
    use_case = RunHealthChecksUseCase(
        _ListServiceRepository(_services(3, CheckType.HTTP)),
        results,
        ProbeRegistry([probe]),
        max_concurrent_probes=1,
    )

    asyncio.run(use_case.execute())
    asyncio.run(use_case.execute())

    assert len(results.saved) == 6
    assert probe.peak == 1


@pytest.mark.asyncio
async def test_empty_catalog_completes(use_case_logger) -> None:
    repository = _ListServiceRepository([])
    use_case = RunHealthChecksUseCase(
        repository, _RecordingResultRepository(), ProbeRegistry([])
    )

    assert await use_case.execute() == CYCLE_COMPLETED_MESSAGE
    assert repository.calls == 1


@pytest.mark.asyncio
async def test_catalog_failure_propagates(use_case_logger) -> None:
    class _BrokenRepository:
        async def find_all(self):
            raise ConnectionError("mongo down")

    use_case = RunHealthChecksUseCase(
        _BrokenRepository(), _RecordingResultRepository(), ProbeRegistry([])
    )

    with pytest.raises(ConnectionError):
        await use_case.execute()


def test_concurrency_limit_must_be_positive() -> None:
    with pytest.raises(ValueError):
        RunHealthChecksUseCase(
            _ListServiceRepository([]),
            _RecordingResultRepository(),
            ProbeRegistry([]),
            max_concurrent_probes=0,
        )


@pytest.mark.asyncio
async def test_create_http_service_requires_url(fake_mongo_database) -> None:
    use_case = CreateServiceDefinitionUseCase(
        service_repository=ServiceDefinitionRepository(fake_mongo_database)
    )

    with pytest.raises(ServiceDefinitionValidationError):
        await use_case.execute(
            ServiceDefinitionCreateDTO(name="api", check_type=CheckType.HTTP)
        )


@pytest.mark.asyncio
async def test_create_database_service_requires_config(fake_mongo_database) -> None:
    use_case = CreateServiceDefinitionUseCase(
        service_repository=ServiceDefinitionRepository(fake_mongo_database)
    )

    with pytest.raises(ServiceDefinitionValidationError):
        await use_case.execute(
            ServiceDefinitionCreateDTO(name="db", check_type=CheckType.DATABASE)
        )


@pytest.mark.asyncio
async def test_create_list_and_delete_services(fake_mongo_database) -> None:
    repository = ServiceDefinitionRepository(fake_mongo_database)

    created = await CreateServiceDefinitionUseCase(service_repository=repository).execute(
        ServiceDefinitionCreateDTO(
            name="api", check_type=CheckType.HTTP, url="http://api.test/health"
        )
    )
    listed = await GetServiceDefinitionsUseCase(service_repository=repository).execute()

    assert [s.id for s in listed] == [created.id]
    assert listed[0].check_type == "http"

    await DeleteServiceDefinitionUseCase(service_repository=repository).execute(
        created.id
    )
    assert await GetServiceDefinitionsUseCase(service_repository=repository).execute() == []


@pytest.mark.asyncio
async def test_delete_missing_service_raises(fake_mongo_database) -> None:
    use_case = DeleteServiceDefinitionUseCase(
        service_repository=ServiceDefinitionRepository(fake_mongo_database)
    )

    with pytest.raises(ServiceDefinitionNotFoundError):
        await use_case.execute(uuid4())


@pytest.mark.asyncio
async def test_results_are_read_newest_first(
    fake_mongo_database, sample_http_service
) -> None:
    services = ServiceDefinitionRepository(fake_mongo_database)
    results = HealthCheckResultRepository(fake_mongo_database)
    await services.create(sample_http_service)
    for response_time in (10, 20, 30):
        await results.save(
            HealthCheckResult(
                service_definition_id=sample_http_service.id,
                status=ServiceStatus.UP,
                response_time_ms=response_time,
            )
        )
        await asyncio.sleep(0.001)

    dtos = await GetServiceResultsUseCase(
        service_repository=services, result_repository=results
    ).execute(sample_http_service.id, limit=2)

    assert [d.response_time_ms for d in dtos] == [30, 20]


@pytest.mark.asyncio
async def test_results_of_unknown_service_raise(fake_mongo_database) -> None:
    use_case = GetServiceResultsUseCase(
        service_repository=ServiceDefinitionRepository(fake_mongo_database),
        result_repository=HealthCheckResultRepository(fake_mongo_database),
    )

    with pytest.raises(ServiceDefinitionNotFoundError):
        await use_case.execute(uuid4())
