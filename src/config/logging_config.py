"""
Dice Pool - Logging Configuration
"""

import logging

from src.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings | None = None) -> int:
    """Configure the root logger from settings.

    ``debug`` forces DEBUG; otherwise ``log_level`` is used, falling back
    to INFO for unknown level names.

    Returns:
        The numeric level applied.
    """
    settings = settings or get_settings()
    if settings.debug:
        level = logging.DEBUG
    else:
        level = logging.getLevelName(settings.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    return level
