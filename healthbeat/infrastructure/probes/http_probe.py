"""HTTP probe: one unauthenticated request per service, bounded by a timeout."""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Optional

import httpx

from healthbeat.domain.entities.monitoring import (
    CheckType,
    ProbeOutcome,
    ServiceDefinition,
    ServiceStatus,
)
from healthbeat.shared import get_logger

logger = get_logger(__name__)


def _elapsed_ms(start: float) -> int:
    return max(0, int(round((perf_counter() - start) * 1000)))


class HttpHealthProbe:
    """
    Checks HTTP services by issuing a single request to ``service.url``.

    Any 2xx answer is UP. Every other status code is DOWN with
    ``"HTTP Error: <status>"``. Transport failures and timeouts are DOWN as
    well; nothing raised by httpx escapes ``check_health``.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        method: str = "GET",
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._timeout = timeout
        self._method = method.upper()
        self._transport = transport

    @property
    def check_type(self) -> CheckType:
        return CheckType.HTTP

    async def check_health(self, service: ServiceDefinition) -> ProbeOutcome:
        start = perf_counter()
        try:
            if not service.url:
                raise httpx.InvalidURL("Service URL not configured")
            # The client timeout covers each I/O phase; wait_for bounds the
            # whole exchange even if the transport never returns.
            response = await asyncio.wait_for(
                self._send(service.url), timeout=self._timeout
            )
        except (asyncio.TimeoutError, httpx.TimeoutException):
            return self._down(service, start, f"Timeout after {self._timeout:g}s")
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return self._down(service, start, f"Connection error: {exc}")
        except Exception as exc:
            logger.warning(
                "probe.http.unexpected_error",
                service_id=str(service.id),
                error=str(exc),
            )
            return self._down(
                service, start, f"Connection error: {type(exc).__name__}: {exc}"
            )

        response_time = _elapsed_ms(start)
        if response.is_success:
            return ProbeOutcome(
                service_definition_id=service.id,
                status=ServiceStatus.UP,
                response_time_ms=response_time,
            )
        return ProbeOutcome(
            service_definition_id=service.id,
            status=ServiceStatus.DOWN,
            response_time_ms=response_time,
            message=f"HTTP Error: {response.status_code}",
        )

    async def _send(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._timeout,
            follow_redirects=False,
            transport=self._transport,
        ) as client:
            return await client.request(self._method, url)

    def _down(
        self, service: ServiceDefinition, start: float, message: str
    ) -> ProbeOutcome:
        logger.debug(
            "probe.http.down",
            service_id=str(service.id),
            url=service.url,
            reason=message,
        )
        return ProbeOutcome(
            service_definition_id=service.id,
            status=ServiceStatus.DOWN,
            response_time_ms=_elapsed_ms(start),
            message=message,
        )
