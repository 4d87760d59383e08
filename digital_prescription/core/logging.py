"""Application logging: one named stdout logger shared by every feature."""

import logging
import sys

from digital_prescription.config import settings


LOGGER_NAME = "digital_prescription"
LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(name: str) -> int:
    """Map a level name such as "debug" to its logging constant, INFO when unknown."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level_name: str = settings.LOG_LEVEL) -> logging.Logger:
    """Configure the application logger; calling it again only changes the level."""
    level = resolve_level(level_name)

    app_logger = logging.getLogger(LOGGER_NAME)
    app_logger.setLevel(level)

    if not any(handler.get_name() == LOGGER_NAME for handler in app_logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(LOGGER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        app_logger.addHandler(handler)

    # Driver command logging is only wanted when debugging
    logging.getLogger("pymongo").setLevel(logging.DEBUG if level == logging.DEBUG else logging.WARNING)

    app_logger.debug(f"Logging configured with level: {logging.getLevelName(level)}")

    return app_logger


logger = setup_logging()
