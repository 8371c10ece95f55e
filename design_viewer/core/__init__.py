"""Core utilities shared across design-viewer modules."""

from .errors import (
    DesignError,
    DesignNotFoundError,
    LayoutNotFound,
    ScreenNotFound,
    SiteNotFound,
)
from .log import get_logger, setup_logging

__all__ = [
    "DesignError",
    "DesignNotFoundError",
    "LayoutNotFound",
    "ScreenNotFound",
    "SiteNotFound",
    "get_logger",
    "setup_logging",
]
