"""Loguru sink configuration."""

import sys

from loguru import logger

from gacha_stats.config import Settings, settings as default_settings


def configure_logging(settings: Settings | None = None) -> None:
    """Replace the default loguru sinks with the configured ones."""
    settings = settings or default_settings

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if settings.DEBUG else settings.LOG_LEVEL)
    if settings.LOG_FILE is not None:
        settings.LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(settings.LOG_FILE),
            rotation="10 MB",
            retention="7 days",
            level=settings.LOG_LEVEL,
        )
