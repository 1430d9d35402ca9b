"""
Logging configuration.

Configures loguru sinks: stderr at the configured level and a rotating
log file.
"""

import sys

from loguru import logger

from app.config.settings import settings


def setup_logging(component: str = "app") -> None:
    """
    Configure logger with file rotation.

    Args:
        component: Name logged at startup (app, worker, script)
    """
    logger.remove()
    logger.add(sys.stderr, level=settings.log_level)
    logger.add(
        settings.log_file,
        rotation="1 day",
        retention="7 days",
        level=settings.log_level,
        encoding="utf-8",
    )

    logger.info(f"Starting 40 Acres {component}...")
