"""Logging setup for the web application."""
from __future__ import annotations

import logging

from unixtime.utils.log_buffer import get_log_buffer_handler

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def setup_logging(name: str = "unixtime", level: str | int = "INFO", buffer_capacity: int = 1000) -> logging.Logger:
    """Configure logging for the application if it is not already configured."""

    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)

    buffer_handler = get_log_buffer_handler(capacity=buffer_capacity)
    if buffer_handler not in logger.handlers:
        buffer_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(buffer_handler)
    logger.setLevel(level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.INFO))

    # Child loggers report through this one only
    logger.propagate = False
    return logger
