"""Design inspection tools for MCP server.

Each tool reads the design tree through a DesignService and returns a
JSON-ready dict with document (camelCase) keys.
"""

import logging
from dataclasses import asdict
from typing import Any

from design_viewer.output import format_scene_tree, format_transition_tree
from design_viewer.schema import to_payload
from design_viewer.service import DesignService

logger = logging.getLogger(__name__)


def _service(service: DesignService | None) -> DesignService:
    return service or DesignService()


def list_sites(service: DesignService | None = None) -> dict[str, Any]:
    """List every site of the design root.

    Returns:
        Dictionary with ``sites``: list of {id, name}.
    """
    sites = _service(service).list_sites()
    return {"sites": [to_payload(site) for site in sites]}


def get_site_detail(site_id: str, service: DesignService | None = None) -> dict[str, Any]:
    """Get a site with its viewports and default viewport."""
    return to_payload(_service(service).get_site_detail(site_id))


def get_transitions(
    site_id: str,
    viewport_id: str | None = None,
    service: DesignService | None = None,
) -> dict[str, Any]:
    """Get a site's transition graph.

    Returns:
        Dictionary with:
        - nodes, edges: The graph
        - tree: Outgoing edges grouped by source, as text
    """
    graph = _service(service).get_transitions(site_id, viewport_id)
    payload = to_payload(graph)
    payload["tree"] = format_transition_tree(graph)
    return payload


def get_screen_detail(
    site_id: str, screen_id: str, service: DesignService | None = None
) -> dict[str, Any]:
    """Get a fully resolved screen."""
    return to_payload(_service(service).get_screen_detail(site_id, screen_id))


def get_screen_layout(
    site_id: str,
    screen_id: str,
    viewport_id: str | None = None,
    service: DesignService | None = None,
) -> dict[str, Any]:
    """Get the laid-out scene of a screen.

    Returns:
        Dictionary with:
        - scene: Areas and elements with pixel boxes
        - tree: Human-readable text tree of the scene
    """
    scene = _service(service).get_screen_layout(site_id, screen_id, viewport_id)
    return {"scene": to_payload(scene), "tree": format_scene_tree(scene)}


def validate_screen(
    site_id: str, screen_id: str, service: DesignService | None = None
) -> dict[str, Any]:
    """Check a resolved screen for structural issues.

    Returns:
        Dictionary containing:
        - valid: Boolean indicating if the screen passes all checks
        - issues: List of {node_id, message, issue_type}
    """
    issues = _service(service).validate_screen(site_id, screen_id)
    if issues:
        logger.debug(f"{site_id}/{screen_id} has {len(issues)} issue(s)")
    return {"valid": not issues, "issues": [asdict(issue) for issue in issues]}


__all__ = [
    "list_sites",
    "get_site_detail",
    "get_transitions",
    "get_screen_detail",
    "get_screen_layout",
    "validate_screen",
]
