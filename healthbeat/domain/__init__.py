"""
Domain Layer Package

Monitoring entities, probe ports, repository contracts and the probe
registry. Nothing here depends on frameworks or infrastructure.
"""

# Re-export submodules
from healthbeat.domain import entities, ports, repositories, services

__all__ = ["entities", "repositories", "services", "ports"]
