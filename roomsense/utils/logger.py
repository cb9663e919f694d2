"""Process-wide logging for the roomsense package."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from roomsense.utils.config import Settings, get_settings


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
PACKAGE_LOGGER_NAME = "roomsense"

_LOGGER_INITIALIZED = False


def configure_logging(
    settings: Optional[Settings] = None,
    level: Optional[str] = None,
) -> logging.Logger:
    """Install the stdout handler once and set the package log level.

    An explicit ``level`` wins over ``settings.log_level``; without either the
    cached process settings are used. Calling again with another session's
    settings only changes the level.
    """

    global _LOGGER_INITIALIZED
    if not _LOGGER_INITIALIZED:
        logging.basicConfig(format=LOG_FORMAT, stream=sys.stdout)
        _LOGGER_INITIALIZED = True

    resolved_level = (level or (settings or get_settings()).log_level).upper()
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel(resolved_level)
    return package_logger


def get_logger(name: str) -> logging.Logger:
    """Return a module logger, configuring defaults on first use."""
    if not _LOGGER_INITIALIZED:
        configure_logging()
    return logging.getLogger(name)
