"""
Application Layer Package

This package contains the application-specific business rules
and use cases. It orchestrates the health check cycle over the
domain entities and probes.
"""

# Re-export submodules
from healthbeat.application import dtos, use_cases

__all__ = ["dtos", "use_cases"]
