"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer, dealing with external concerns such as MongoDB, the
probed services and Celery.
"""

from healthbeat.infrastructure import repositories

__all__ = ["repositories"]
