"""Error taxonomy for design resolution."""

from .lib import (
    DesignError,
    DesignNotFoundError,
    LayoutNotFound,
    ScreenNotFound,
    SiteNotFound,
)

__all__ = [
    "DesignError",
    "DesignNotFoundError",
    "SiteNotFound",
    "ScreenNotFound",
    "LayoutNotFound",
]
