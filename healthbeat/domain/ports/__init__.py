"""Domain ports package."""

from .health_check_dispatcher import IHealthCheckDispatcher
from .health_probe import IHealthProbe

__all__ = ["IHealthProbe", "IHealthCheckDispatcher"]
