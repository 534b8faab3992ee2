"""Logging configuration using loguru.

fw and its dependencies (click, pydantic) do not log through stdlib
``logging``, so loguru's own sink is the only one configured.
"""

from __future__ import annotations

import sys

from loguru import logger


def setup_logging(level: str = "WARNING") -> None:
    """Configure loguru as the sole logging sink.

    Call this once at process startup, before any engine operation runs.
    Bound context (``task``, ``project``, ``tags`` ...) is appended to each line.
    """
    level = level.upper()

    logger.remove()
    logger.add(
        sys.stderr,
        level=level,
        format=(
            "<green>{time:HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
            "<level>{message}</level> {extra}"
        ),
    )

    logger.debug("Logging initialised (level={})", level)
