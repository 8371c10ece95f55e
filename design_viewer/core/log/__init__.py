"""Logging micro API for design-viewer."""

from .lib import get_logger, parse_level, setup_logging

__all__ = ["get_logger", "parse_level", "setup_logging"]
