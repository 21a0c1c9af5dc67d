from __future__ import annotations

"""
Logging Core Orchestrator.

Configures the root logger once per process: a stderr console handler and an
optional rotating file. Repeated calls are no-ops unless forced.
"""

import logging
from typing import List

from woolly.infra.logging.config import LoggingConfig
from woolly.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
)

_CONFIGURED_FLAG_ATTR: str = "_woolly_configured"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Idempotently attach woolly's handlers to the root logger.

    Args:
        cfg: Structural configuration for the logging system.
        force: If True, detach previously attached handlers and re-initialize.

    Returns:
        logging.Logger: The configured root logger.
    """
    root = logging.getLogger()

    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    level_int = cfg.numeric_level
    root.setLevel(level_int)
    _remove_our_handlers(root)

    handlers: List[logging.Handler] = []
    if cfg.console:
        handlers.append(_create_console_handler(level_int, logging.Formatter(cfg.console_fmt)))

    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            handlers.append(fh)

    for h in handlers:
        root.addHandler(h)

    setattr(root, _CONFIGURED_FLAG_ATTR, True)
    return root


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def reset_logging() -> None:
    """Detach woolly's handlers and clear the configured flag."""
    root = logging.getLogger()
    _remove_our_handlers(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _remove_our_handlers(root: logging.Logger) -> None:
    for h in list(root.handlers):
        if _is_our_handler(h):
            root.removeHandler(h)
            h.close()
