"""
Application logging setup (single entry point).

setup_logger() configures the standard logging module once: message
format, level parsed from a string, stdout handler. It returns a named
logger. Library modules just call logging.getLogger(__name__).
"""

import logging
import sys
from logging import Logger, StreamHandler
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(name: str = "tracker", level: str = "INFO") -> Logger:
    """
    Configure logging and return the named logger.

    Parameters
    ----------
    name : str, optional
        Logger name, usually the caller's package.
    level : str, optional
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL", any case.
        Unknown values fall back to "INFO".
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[StreamHandler(sys.stdout)],
        force=True,
    )
    return logging.getLogger(name)
