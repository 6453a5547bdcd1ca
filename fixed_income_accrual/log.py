"""
Logging configuration using loguru.

Library modules log through ``loguru.logger`` directly; applications call
setup_logging() once at startup to choose sinks and level.
"""
from __future__ import annotations

import sys
from typing import Optional

from loguru import logger

from .config import get_settings


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    fmt: str = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> | {message}",
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """
    Replace loguru sinks with stderr and an optional rotating file.

    `level` defaults to Settings.log_level.
    """
    if level is None:
        level = get_settings().log_level

    logger.remove()
    logger.add(sys.stderr, level=level, format=fmt)

    if log_file:
        logger.add(
            log_file,
            level=level,
            format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {name} | {message}",
            rotation=rotation,
            retention=retention,
        )
