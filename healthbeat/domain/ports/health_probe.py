"""Domain port for probes that check a single monitored service."""

from __future__ import annotations

from typing import Protocol

from healthbeat.domain.entities.monitoring import (
    CheckType,
    ProbeOutcome,
    ServiceDefinition,
)


class IHealthProbe(Protocol):
    """
    Performs exactly one health probe against one service.

    Implementations enforce their own timeout and never raise: every
    failure path is converted into a DOWN ``ProbeOutcome``.
    """

    @property
    def check_type(self) -> CheckType:
        """Check kind this probe is responsible for."""
        ...

    async def check_health(self, service: ServiceDefinition) -> ProbeOutcome:
        """Probe the service and return a normalized outcome."""
        ...
