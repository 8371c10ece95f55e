"""MCP (Model Context Protocol) server for design-viewer.

Example:
    # Start server in STDIO mode
    >>> from design_viewer.mcp import run_server
    >>> run_server()

    # Start server in HTTP mode
    >>> from design_viewer.mcp import run_server, TransportType
    >>> run_server(transport=TransportType.HTTP, port=18080)

Available Tools:
    - list_sites, get_site_detail
    - get_transitions, preview_transitions
    - get_screen_detail, get_screen_layout
    - validate_screen
    - ping
"""

from .lib import ServerConfig, TransportType, get_server_version, tool_errors
from .server import create_server, main, mcp, run_server

__all__ = [
    # Server instance
    "mcp",
    "create_server",
    "run_server",
    "main",
    # Configuration
    "ServerConfig",
    "TransportType",
    # Utilities
    "get_server_version",
    "tool_errors",
]
