"""Domain services package."""

from .probe_registry import ProbeRegistry

__all__ = ["ProbeRegistry"]
