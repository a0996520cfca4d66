"""Domain port for running one full health check cycle."""

from __future__ import annotations

from typing import Protocol


class IHealthCheckDispatcher(Protocol):
    """Runs every configured probe once and persists the outcomes."""

    async def execute(self) -> str:
        """Run one cycle and return its terminal status message."""
        ...
