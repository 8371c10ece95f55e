"""design-viewer: resolves YAML UI designs into scenes and transition graphs."""

from design_viewer.core.errors import (
    DesignError,
    DesignNotFoundError,
    LayoutNotFound,
    ScreenNotFound,
    SiteNotFound,
)
from design_viewer.schema import Scene, ScreenDetail, TransitionGraph
from design_viewer.service import DesignService
from design_viewer.validation import ValidationIssue, validate_screen_detail

__all__ = [
    # Service
    "DesignService",
    # Read models
    "ScreenDetail",
    "Scene",
    "TransitionGraph",
    # Validation
    "ValidationIssue",
    "validate_screen_detail",
    # Errors
    "DesignError",
    "DesignNotFoundError",
    "SiteNotFound",
    "ScreenNotFound",
    "LayoutNotFound",
]
