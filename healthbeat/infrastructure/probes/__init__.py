"""Probe implementations for each supported check kind."""

from .database_probe import DatabaseHealthProbe
from .http_probe import HttpHealthProbe

__all__ = ["HttpHealthProbe", "DatabaseHealthProbe"]
