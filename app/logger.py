from __future__ import annotations

import sys

from loguru import logger

from app.config import settings


def setup_logger(level: str | None = None):
    """Configures the console sink. Safe to call more than once."""
    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {module}:{function}:{line} - <cyan>{message}</cyan>",
        level=(level or settings.log_level).upper(),
    )
    return logger
