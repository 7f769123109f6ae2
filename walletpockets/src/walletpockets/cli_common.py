"""
Shared CLI setup: logging and settings.
"""

from __future__ import annotations

import sys

from loguru import logger

from walletpockets.settings import PocketSettings, get_settings

LOG_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


def setup_logging(level: str = "INFO") -> None:
    """Replace loguru's handlers with a single stderr sink at ``level``."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper(), format=LOG_FORMAT)


def setup_cli(log_level: str | None = None) -> PocketSettings:
    """
    Load settings and configure logging for a CLI invocation.

    A level passed on the command line wins over the configured one.
    """
    settings = get_settings()
    setup_logging(log_level or settings.logging.level)
    return settings
