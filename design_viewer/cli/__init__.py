"""Command-line interface for design-viewer."""

from .lib import build_parser, handle_design_command, handle_mcp_command, main

__all__ = ["main", "build_parser", "handle_design_command", "handle_mcp_command"]
