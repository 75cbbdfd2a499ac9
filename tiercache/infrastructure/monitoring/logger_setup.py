"""Logging configuration for applications embedding tiercache.

The package only creates module loggers under the ``tiercache`` namespace.
setup_logging attaches handlers to that namespace, taking its level and
optional log file from configuration when they are not passed explicitly.
"""

import logging
import sys
from typing import Optional, Union

from tiercache.infrastructure.config.settings import get_config

PACKAGE_LOGGER = "tiercache"
LOG_LEVEL_KEY = "tiercache.log_level"
LOG_FILE_KEY = "tiercache.log_file"

DEFAULT_LOG_LEVEL = logging.WARNING
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def _resolve_level(level: Union[int, str, None]) -> int:
    """Accepts numeric levels or names such as 'debug'."""
    if level is None:
        return DEFAULT_LOG_LEVEL
    if isinstance(level, int) and not isinstance(level, bool):
        return level
    numeric = logging.getLevelName(str(level).upper())
    if isinstance(numeric, int):
        return numeric
    logger.warning(f"Unknown log level {level!r}. Using {logging.getLevelName(DEFAULT_LOG_LEVEL)}.")
    return DEFAULT_LOG_LEVEL


def setup_logging(
    log_level: Union[int, str, None] = None,
    log_format: str = DEFAULT_LOG_FORMAT,
    log_file: Optional[str] = None,
    propagate: bool = False,
) -> logging.Logger:
    """Routes tiercache log records to stdout and, optionally, a file.

    Handlers previously attached to the package logger are replaced, so the
    call is idempotent. Other loggers of the host application are untouched.

    Args:
        log_level: Level or level name. Defaults to tiercache.log_level
            (TIERCACHE_LOG_LEVEL), then WARNING.
        log_format: The format string for log messages.
        log_file: Optional log file. Defaults to tiercache.log_file
            (TIERCACHE_LOG_FILE).
        propagate: Also pass records on to the host's root handlers.

    Returns:
        The configured package logger.
    """
    level = _resolve_level(log_level if log_level is not None else get_config(LOG_LEVEL_KEY))
    log_file = log_file or get_config(LOG_FILE_KEY)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    package_logger.propagate = propagate

    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format)
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(str(log_file), encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    logger.debug(f"Logging configured. Level={logging.getLevelName(level)}, file={log_file}")
    return package_logger
