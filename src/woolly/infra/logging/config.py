from __future__ import annotations

"""
Logging Configuration Models.

Turns the CLI's logging switches (`--debug`, `--log-file`) and the
WOOLLY_LOG_LEVEL environment variable into the settings consumed by
`configure_logging`.
"""

import logging
import os
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

LOG_LEVEL_ENV_VAR = "WOOLLY_LOG_LEVEL"

_LEVELS: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

_DEBUG_CONSOLE_FMT = "%(levelname)s | %(name)s | %(message)s"


@dataclass(frozen=True)
class LoggingConfig:
    """
    Settings for one `configure_logging` call.

    Attributes:
        level: Severity name; unknown names resolve to INFO.
        console: Attach a stderr handler.
        log_file: Rotating diagnostic log, kept small since one generation run
            logs a few dozen lines.
        console_fmt: Terminal format; DEBUG runs also show the logger name.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "%(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def numeric_level(self) -> int:
        return resolve_level(self.level)


def resolve_level(name: Optional[str]) -> int:
    """Map a severity name (any case) to its logging constant, INFO if unknown."""
    if not name:
        return logging.INFO
    return _LEVELS.get(str(name).strip().upper(), logging.INFO)


def for_cli(
        debug: bool = False,
        log_file: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
) -> LoggingConfig:
    """
    Build the configuration for one CLI invocation.

    `--debug` wins over WOOLLY_LOG_LEVEL, which wins over INFO.

    Args:
        debug: The `--debug` switch.
        log_file: The `--log-file` value, if any.
        environ: Environment to read; defaults to os.environ.

    Returns:
        LoggingConfig: Console logging plus the optional file.
    """
    env = os.environ if environ is None else environ
    if debug:
        return LoggingConfig(level="DEBUG", log_file=log_file, console_fmt=_DEBUG_CONSOLE_FMT)

    level = env.get(LOG_LEVEL_ENV_VAR, "INFO")
    fmt = _DEBUG_CONSOLE_FMT if resolve_level(level) == logging.DEBUG else LoggingConfig.console_fmt
    return LoggingConfig(level=level, log_file=log_file, console_fmt=fmt)
