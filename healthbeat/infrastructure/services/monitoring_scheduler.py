"""
Monitoring Scheduler - Infrastructure Layer

In-process periodic trigger for health check cycles. The clock fires on a
fixed rate and never waits for a cycle to finish: every tick starts the
dispatcher in its own asyncio task.
"""

from __future__ import annotations

import asyncio
import contextlib
from typing import Optional, Set

from healthbeat.domain.ports.health_check_dispatcher import IHealthCheckDispatcher
from healthbeat.shared import get_logger

logger = get_logger(__name__)


class MonitoringScheduler:
    """
    Fixed-rate scheduler for the health check dispatcher.

    Args:
        dispatcher: Object whose ``execute()`` runs one cycle
        interval_seconds: Period between two ticks
        initial_delay_seconds: Delay before the first tick
        max_pending_cycles: Ticks are dropped while this many cycles run
        allow_overlapping_cycles: When False a tick is skipped while any
            cycle is still running
    """

    def __init__(
        self,
        dispatcher: IHealthCheckDispatcher,
        interval_seconds: float = 30.0,
        initial_delay_seconds: float = 5.0,
        max_pending_cycles: int = 100,
        allow_overlapping_cycles: bool = True,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        if initial_delay_seconds < 0:
            raise ValueError("initial_delay_seconds must not be negative")
        if max_pending_cycles < 1:
            raise ValueError("max_pending_cycles must be at least 1")

        self._dispatcher = dispatcher
        self.interval_seconds = interval_seconds
        self.initial_delay_seconds = initial_delay_seconds
        self.max_pending_cycles = max_pending_cycles
        self.allow_overlapping_cycles = allow_overlapping_cycles

        self._clock: Optional[asyncio.Task[None]] = None
        self._cycles: Set[asyncio.Task[str]] = set()

    @property
    def is_running(self) -> bool:
        return self._clock is not None and not self._clock.done()

    @property
    def in_flight(self) -> int:
        """Number of cycles started and not finished yet."""
        return len(self._cycles)

    def start(self) -> None:
        """Start the clock on the running event loop. No-op when started."""
        if self.is_running:
            return
        self._clock = asyncio.get_running_loop().create_task(
            self._run(), name="monitoring-scheduler"
        )
        logger.info(
            "monitoring.scheduler.started",
            interval_seconds=self.interval_seconds,
            initial_delay_seconds=self.initial_delay_seconds,
        )

    async def stop(self) -> None:
        """Stop the clock and cancel the cycles still running."""
        if self._clock is not None:
            self._clock.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._clock
            self._clock = None

        pending = list(self._cycles)
        for cycle in pending:
            cycle.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        logger.info("monitoring.scheduler.stopped", cancelled_cycles=len(pending))

    def trigger(self) -> asyncio.Task[str]:
        """
        Start one cycle now and return its task without waiting for it.

        The task resolves to the dispatcher's completion message. Manual
        triggers are not subject to the overlap and pending limits.
        """
        cycle = asyncio.get_running_loop().create_task(
            self._dispatcher.execute(), name="health-check-cycle"
        )
        self._cycles.add(cycle)
        cycle.add_done_callback(self._on_cycle_done)
        return cycle

    def _tick(self) -> Optional[asyncio.Task[str]]:
        if self._cycles and not self.allow_overlapping_cycles:
            logger.warning(
                "monitoring.cycle.skipped",
                reason="previous cycle still running",
                in_flight=self.in_flight,
            )
            return None
        if self.in_flight >= self.max_pending_cycles:
            logger.warning(
                "monitoring.cycle.dropped",
                reason="too many cycles in flight",
                in_flight=self.in_flight,
                max_pending_cycles=self.max_pending_cycles,
            )
            return None
        return self.trigger()

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time() + self.initial_delay_seconds
        while True:
            await asyncio.sleep(max(0.0, next_tick - loop.time()))
            self._tick()
            next_tick += self.interval_seconds
            now = loop.time()
            if next_tick < now:
                # Missed ticks are not replayed.
                next_tick = now + self.interval_seconds

    def _on_cycle_done(self, cycle: asyncio.Task[str]) -> None:
        self._cycles.discard(cycle)
        if cycle.cancelled():
            logger.info("monitoring.cycle.cancelled")
            return
        exc = cycle.exception()
        if exc is not None:
            logger.error("monitoring.cycle.failed", error=str(exc), exc_info=exc)
            return
        logger.info("monitoring.cycle.completed", result=cycle.result())
