"""MCP tools for design-viewer.

Tools:
    - list_sites, get_site_detail: Site discovery
    - get_transitions: Screen transition graph
    - get_screen_detail, get_screen_layout: Resolved screens and geometry
    - validate_screen: Structural diagnostics
    - preview_transitions: Render the transition graph via Kroki
"""

from .design import (
    get_screen_detail,
    get_screen_layout,
    get_site_detail,
    get_transitions,
    list_sites,
    validate_screen,
)
from .preview import preview_transitions

__all__ = [
    "list_sites",
    "get_site_detail",
    "get_transitions",
    "get_screen_detail",
    "get_screen_layout",
    "validate_screen",
    "preview_transitions",
]
