"""Logging setup for the fasting tracker package logger."""

import logging

from fasting_tracker.config import parse_log_level

LOGGER_NAME = "fasting_tracker"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str | None = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the package logger and set its level.

    ``level`` may be a number or a level name as read from settings. Calling
    again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level if isinstance(level, int) else parse_log_level(level))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
