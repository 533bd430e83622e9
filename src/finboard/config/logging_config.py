"""Logging configuration for the API process."""

import logging
import sys

from finboard.config.settings import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"

# Libraries that log every query or outbound request at INFO/DEBUG
_NOISY_LOGGERS = ("sqlalchemy.engine", "urllib3", "yfinance", "peewee")


def setup_logging() -> None:
    """Configure root logging from settings. Development logs finboard at DEBUG."""
    settings = get_settings()
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if settings.is_development:
        logging.getLogger("finboard").setLevel(logging.DEBUG)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
