"""Command-line interface for design-viewer.

Usage:
    python . sites
    python . site SITE
    python . transitions SITE [--viewport VP] [--format json|tree|d2|plantuml]
    python . screen SITE SCREEN
    python . layout SITE SCREEN [--viewport VP] [--format json|tree]
    python . validate SITE SCREEN
    python . mcp serve [--transport stdio|http|sse] [--host HOST] [--port PORT]

Exit codes: 0 on success, 1 on errors (including validation issues),
2 when a site, screen or layout does not exist.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from design_viewer.config import EnvVar, get_environment
from design_viewer.core.errors import DesignError, DesignNotFoundError
from design_viewer.core.log import get_logger, parse_level, setup_logging
from design_viewer.output import OutputGenerator, format_scene_tree
from design_viewer.schema import to_payload
from design_viewer.service import DesignService

logger = get_logger("cli")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2))


# =============================================================================
# Design Commands
# =============================================================================


def cmd_sites(service: DesignService, _args: argparse.Namespace) -> int:
    """List sites, one per line: id, then name."""
    for site in service.list_sites():
        print(f"{site.id}\t{site.name}")
    return EXIT_OK


def cmd_site(service: DesignService, args: argparse.Namespace) -> int:
    _print_json(to_payload(service.get_site_detail(args.site)))
    return EXIT_OK


def cmd_transitions(service: DesignService, args: argparse.Namespace) -> int:
    """Print the transition graph as JSON, a text tree or diagram source."""
    graph = service.get_transitions(args.site, args.viewport)
    if args.format == "json":
        _print_json(to_payload(graph))
        return EXIT_OK

    output = OutputGenerator().generate(
        graph, provider=None if args.format == "tree" else args.format
    )
    print(output.text_tree if args.format == "tree" else output.dsl_code)
    return EXIT_OK


def cmd_screen(service: DesignService, args: argparse.Namespace) -> int:
    _print_json(to_payload(service.get_screen_detail(args.site, args.screen)))
    return EXIT_OK


def cmd_layout(service: DesignService, args: argparse.Namespace) -> int:
    scene = service.get_screen_layout(args.site, args.screen, args.viewport)
    if args.format == "json":
        _print_json(to_payload(scene))
    else:
        print(format_scene_tree(scene))
    return EXIT_OK


def cmd_validate(service: DesignService, args: argparse.Namespace) -> int:
    """Print structural issues; fail when there are any."""
    issues = service.validate_screen(args.site, args.screen)
    if not issues:
        print(f"{args.site}/{args.screen}: OK")
        return EXIT_OK

    for issue in issues:
        print(f"{issue.node_id}: {issue.message} [{issue.issue_type}]")
    logger.error(f"{args.site}/{args.screen}: {len(issues)} issue(s)")
    return EXIT_ERROR


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for the design commands."""
    parser = argparse.ArgumentParser(
        prog="python .",
        description="Inspect YAML UI designs: sites, screens, layouts and transitions",
    )
    parser.add_argument("--root", type=Path, help="Design root (default: DESIGN_PATH)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sites = subparsers.add_parser("sites", help="List sites")
    sites.set_defaults(handler=cmd_sites)

    site = subparsers.add_parser("site", help="Show a site and its viewports")
    site.add_argument("site")
    site.set_defaults(handler=cmd_site)

    transitions = subparsers.add_parser("transitions", help="Show the transition graph")
    transitions.add_argument("site")
    transitions.add_argument("--viewport", help="Leave out shared areas hidden here")
    transitions.add_argument(
        "--format",
        choices=["json", "tree", "d2", "plantuml"],
        default="tree",
        help="Output format (default: tree)",
    )
    transitions.set_defaults(handler=cmd_transitions)

    screen = subparsers.add_parser("screen", help="Show a resolved screen")
    screen.add_argument("site")
    screen.add_argument("screen")
    screen.set_defaults(handler=cmd_screen)

    layout = subparsers.add_parser("layout", help="Lay out a screen at a viewport")
    layout.add_argument("site")
    layout.add_argument("screen")
    layout.add_argument("--viewport", help="Viewport id (default: site default)")
    layout.add_argument(
        "--format", choices=["json", "tree"], default="tree", help="Output format"
    )
    layout.set_defaults(handler=cmd_layout)

    validate = subparsers.add_parser("validate", help="Check a screen for structural issues")
    validate.add_argument("site")
    validate.add_argument("screen")
    validate.set_defaults(handler=cmd_validate)

    return parser


def handle_design_command(argv: list[str]) -> int:
    """Parse and run one design command."""
    args = build_parser().parse_args(argv)
    level = logging.DEBUG if args.verbose else parse_level(get_environment(EnvVar.LOG_LEVEL))
    setup_logging(level)

    try:
        return args.handler(DesignService(args.root), args)
    except DesignNotFoundError as e:
        logger.error(e.message)
        return EXIT_NOT_FOUND
    except (DesignError, KeyError) as e:
        logger.error(f"{args.command} failed: {e}")
        return EXIT_ERROR


# =============================================================================
# MCP Commands
# =============================================================================


def handle_mcp_command(argv: list[str]) -> int:
    """Handle MCP server commands.

    Usage:
        python . mcp serve                       # STDIO
        python . mcp serve --transport http      # HTTP on MCP_PORT
        python . mcp info                        # Show server information
    """
    if not argv or argv[0] not in ("serve", "info"):
        print("Usage: python . mcp {serve|info} [options]")
        print("\nOptions for 'serve':")
        print("  --transport TYPE    stdio, http or sse (default: stdio)")
        print("  --host HOST         Bind address (default: MCP_HOST)")
        print("  --port PORT         Port number (default: MCP_PORT)")
        return EXIT_ERROR

    from design_viewer.mcp import get_server_version
    from design_viewer.mcp import main as serve

    if argv[0] == "serve":
        return serve(argv[1:])

    print(f"design-viewer MCP server {get_server_version()}")
    return EXIT_OK


# =============================================================================
# Entry Point
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . [--root DIR] [--verbose] {command} [args]")
    print("\nDesign commands:")
    print("  sites                    List sites")
    print("  site SITE                Show a site and its viewports")
    print("  transitions SITE         Show the transition graph")
    print("  screen SITE SCREEN       Show a resolved screen")
    print("  layout SITE SCREEN       Lay out a screen at a viewport")
    print("  validate SITE SCREEN     Check a screen for structural issues")
    print("\nMCP server:")
    print("  mcp serve                Run the MCP server")
    print("  mcp info                 Show server information")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        show_help()
        return EXIT_ERROR
    if argv[0] in ("-h", "--help"):
        show_help()
        return EXIT_OK
    if argv[0] == "mcp":
        return handle_mcp_command(argv[1:])
    return handle_design_command(argv)


__all__ = ["main", "build_parser", "handle_design_command", "handle_mcp_command"]
