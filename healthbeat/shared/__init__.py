"""
Shared module - Cross-cutting concerns / Shared Layer

Constants, enums and logging helpers used by every layer. It must not
depend on Infrastructure or Frameworks beyond the logging stack.
"""

from .consts import EnumEnvironment, EnumLogLevel
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "EnumEnvironment",
    "EnumLogLevel",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
