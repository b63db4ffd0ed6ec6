"""
Logging setup for the teller package.

The package logs through loguru. Applications call ``setup_logging`` once to
choose the level and whether records are emitted as JSON lines.
"""

import sys
from typing import Optional, TextIO

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)

_LEVELS = {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}


def normalize_level(level: Optional[str]) -> str:
    """Return a loguru level name, falling back to INFO for unknown names."""
    name = (level or "INFO").strip().upper()
    return name if name in _LEVELS else "INFO"


def setup_logging(
    level: str = "INFO", json_logs: bool = False, sink: Optional[TextIO] = None
) -> int:
    """
    Set up logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: If True, emit one JSON object per record
        sink: Stream to write to (default: stderr)

    Returns:
        The loguru handler id of the added sink
    """
    logger.remove()
    return logger.add(
        sink or sys.stderr,
        level=normalize_level(level),
        format=LOG_FORMAT,
        serialize=json_logs,
        colorize=False if json_logs else None,
    )
