"""Logging setup for the plainhttp command line."""

import logging
import sys
from typing import Optional

DEFAULT_FORMAT = "%(levelname)s %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# urllib3 logs connection setup and the raw status line at DEBUG
WIRE_LOGGER = "urllib3"


def setup_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Configure the plainhttp logger for a CLI run.

    Records go to stderr so stdout carries only the response body. A log
    file, when given, gets timestamped records. At DEBUG the urllib3
    connection log is attached to the same handlers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging output
        force: If True, reconfigure even if handlers exist

    Returns:
        Configured logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    logger = logging.getLogger("plainhttp")
    logger.setLevel(numeric_level)

    if force or not logger.handlers:
        logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
        logger.addHandler(console_handler)

        if log_file:
            file_handler = logging.FileHandler(log_file)
            file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
            logger.addHandler(file_handler)

    # Prevent propagation to root logger to avoid duplicate logs
    logger.propagate = False

    wire_logger = logging.getLogger(WIRE_LOGGER)
    wire_logger.handlers.clear()
    if numeric_level <= logging.DEBUG:
        wire_logger.setLevel(logging.DEBUG)
        for handler in logger.handlers:
            wire_logger.addHandler(handler)
        wire_logger.propagate = False
    else:
        wire_logger.setLevel(logging.NOTSET)
        wire_logger.propagate = True

    return logger
