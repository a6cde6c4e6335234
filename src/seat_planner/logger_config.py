"""Logging setup for the command line."""
from __future__ import annotations

import sys

from loguru import logger

log_format = " | ".join(
    (
        "<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>",
        "<lvl>{level:<8}</>",
        "<c>{name}::{function}:{line}</>",
        "{message}",
    )
)


def configure_logging(verbose: bool = False) -> None:
    """Send seat_planner logs to stderr, at DEBUG when ``verbose``."""
    logger.remove()
    logger.add(sys.stderr, format=log_format, level="DEBUG" if verbose else "INFO")
    logger.enable("seat_planner")
