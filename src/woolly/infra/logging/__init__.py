from __future__ import annotations

from .config import LoggingConfig, for_cli, resolve_level
from .core import configure_logging, get_logger, reset_logging
from .handlers import _HANDLER_TAG_ATTR

__all__ = [
    "LoggingConfig",
    "for_cli",
    "resolve_level",
    "configure_logging",
    "get_logger",
    "reset_logging",
    "_HANDLER_TAG_ATTR",
]
