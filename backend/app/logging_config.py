from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ROOT_LOGGER_NAME = "hr_assist"


def create_logger(logger_name: str = ROOT_LOGGER_NAME, log_level: str = "INFO") -> logging.Logger:
    """
    Create a logger that writes to the console.

    Args:
        logger_name: Name of the logger. Child names ("hr_assist.gateway")
            share the handler installed on the parent.
        log_level: Logging level name (e.g. "INFO", "DEBUG").

    Returns:
        The configured logger.
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    if not logger.handlers:  # Prevent handler duplication on reload
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
