"""Core logging implementation for design-viewer."""

import logging
import sys
from typing import Optional

__all__ = ["get_logger", "parse_level", "setup_logging"]

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def parse_level(level: int | str | None, default: int = logging.INFO) -> int:
    """Convert a level name or number to a logging level.

    Args:
        level: Level as int ("20"), name ("debug") or None.
        default: Level used when the value is missing or unknown.

    Returns:
        Numeric logging level.
    """
    if level is None:
        return default
    if isinstance(level, int):
        return level

    text = level.strip()
    if text.isdigit():
        return int(text)

    resolved = logging.getLevelName(text.upper())
    return resolved if isinstance(resolved, int) else default


def setup_logging(level: int | str = logging.INFO, stream=sys.stderr) -> None:
    """Configure basic logging.

    Args:
        level: Logging level (number or name).
        stream: Output stream.
    """
    logging.basicConfig(
        level=parse_level(level),
        format=LOG_FORMAT,
        stream=stream,
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Name of the logger.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name or "design-viewer")
