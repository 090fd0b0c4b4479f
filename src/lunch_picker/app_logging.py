"""Logging configuration helpers."""

import logging

from lunch_picker.config import LogLevel


def configure_logging(level: LogLevel = "INFO") -> None:
    """Configure application logging with a single stream handler."""
    logger = logging.getLogger("lunch_picker")
    logger.setLevel(level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
