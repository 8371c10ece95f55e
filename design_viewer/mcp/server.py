"""FastMCP server instance for design-viewer.

Exposes the read-only design request surface to MCP clients:

    1. list_sites / get_site_detail: discover sites and viewports
    2. get_transitions / preview_transitions: the screen navigation graph
    3. get_screen_detail / get_screen_layout: resolved screens and geometry
    4. validate_screen: structural diagnostics

Not-found conditions surface as tool errors prefixed ``404:``, all other
failures as ``500:``.

Usage:
    # STDIO mode
    python . mcp serve

    # HTTP mode
    python . mcp serve --transport http --port 18080
"""

import argparse
import logging
import sys
from typing import Any

from fastmcp import FastMCP

from design_viewer.core.log import setup_logging

from . import tools
from .lib import SERVER_NAME, ServerConfig, TransportType, get_server_version, tool_errors

logger = logging.getLogger(__name__)


# =============================================================================
# Server Instructions (LLM Guidance)
# =============================================================================

SERVER_INSTRUCTIONS = """\
## Design Viewer MCP Server

Read-only access to YAML UI design documents: sites, screens, layout areas,
fields and navigation events.

### Quick Start
1. `list_sites()` → pick a site
2. `get_transitions(site_id)` → see screens and how they connect
3. `get_screen_layout(site_id, screen_id, viewport_id)` → geometry and text tree
4. `validate_screen(site_id, screen_id)` → dangling references, cycles, bad grids

### Notes
- Screens inherit shared areas, elements, fields and events; the screen wins.
- Viewports come from the site manifest; the widest one is the default.
- `preview_transitions` needs a running Kroki service.
"""

# =============================================================================
# Server Instance
# =============================================================================

mcp = FastMCP(
    name=SERVER_NAME,
    instructions=SERVER_INSTRUCTIONS,
)


# =============================================================================
# Design Tools
# =============================================================================


@mcp.tool
def list_sites() -> dict[str, Any]:
    """List every site in the design root, sorted by id.

    Returns:
        Dictionary with ``sites``: list of {id, name}.
    """
    with tool_errors():
        return tools.list_sites()


@mcp.tool
def get_site_detail(site_id: str) -> dict[str, Any]:
    """Get a site's name, declared viewports and default viewport.

    Args:
        site_id: Site directory name.
    """
    with tool_errors():
        return tools.get_site_detail(site_id)


@mcp.tool
def get_transitions(site_id: str, viewport_id: str | None = None) -> dict[str, Any]:
    """Get the screen transition graph of a site.

    Nodes are screens plus shared components that trigger navigation. Edges
    are navigate actions; targets outside the site are marked isExternal.

    Args:
        site_id: Site directory name.
        viewport_id: Optional viewport; shared components hidden there are
            left out.

    Returns:
        Dictionary with ``nodes``, ``edges`` and a text ``tree``.
    """
    with tool_errors():
        return tools.get_transitions(site_id, viewport_id)


@mcp.tool
def get_screen_detail(site_id: str, screen_id: str) -> dict[str, Any]:
    """Get a fully resolved screen: areas, elements, fields, events, viewports.

    Args:
        site_id: Site directory name.
        screen_id: Screen directory name.
    """
    with tool_errors():
        return tools.get_screen_detail(site_id, screen_id)


@mcp.tool
def get_screen_layout(
    site_id: str,
    screen_id: str,
    viewport_id: str | None = None,
) -> dict[str, Any]:
    """Lay out a screen at a viewport.

    Returns pixel boxes for every visible area and element, and a text tree
    for quick review:

        Home [grid, desktop, 410x260]
        ├── Header [header, horizontal, inherited, 370x64 @ 20,50]
        │   └── $logo [70x24 @ 26,74]
        └── Main Content [main-content, vertical, 180x96 @ 210,124]

    Args:
        site_id: Site directory name.
        screen_id: Screen directory name.
        viewport_id: Viewport to apply. Defaults to the site default.
    """
    with tool_errors():
        return tools.get_screen_layout(site_id, screen_id, viewport_id)


@mcp.tool
def validate_screen(site_id: str, screen_id: str) -> dict[str, Any]:
    """Check a resolved screen for dangling references, cycles and bad grids.

    Returns:
        Dictionary with ``valid`` and a list of ``issues``.
    """
    with tool_errors():
        return tools.validate_screen(site_id, screen_id)


@mcp.tool
def preview_transitions(
    site_id: str,
    viewport_id: str | None = None,
    provider: str | None = None,
    output_format: str = "svg",
) -> dict[str, Any]:
    """Render the transition graph of a site to an image via Kroki.

    Args:
        site_id: Site directory name.
        viewport_id: Optional viewport filter for shared components.
        provider: "d2" or "plantuml". Defaults to MCP_PREVIEW_PROVIDER.
        output_format: png, svg, pdf or jpeg. D2 renders svg only.

    Returns:
        Dictionary with base64 ``image_data``, ``format``, ``provider``,
        ``size_bytes`` and ``dsl_code``.
    """
    with tool_errors():
        return tools.preview_transitions(site_id, viewport_id, provider, output_format)


@mcp.tool
def ping() -> dict[str, Any]:
    """Health check.

    Returns:
        Dictionary with ``status`` and server ``version``.
    """
    return {"status": "ok", "version": get_server_version()}


# =============================================================================
# Server Factory & Runner
# =============================================================================


def create_server() -> FastMCP:
    """Create and configure the MCP server instance."""
    return mcp


def run_server(
    transport: TransportType = TransportType.STDIO,
    host: str = "0.0.0.0",
    port: int = 18080,
    path: str = "/mcp",
) -> None:
    """Run the MCP server with specified transport.

    Args:
        transport: Transport type (stdio, http, sse).
        host: Bind address for HTTP/SSE.
        port: Port for HTTP/SSE.
        path: URL path for HTTP.
    """
    logger.info(f"Starting {SERVER_NAME} server v{get_server_version()}")
    logger.info(f"Transport: {transport.value}")

    if transport == TransportType.STDIO:
        mcp.run()
    elif transport == TransportType.HTTP:
        logger.info(f"Running in HTTP mode at http://{host}:{port}{path}")
        mcp.run(transport="http", host=host, port=port, path=path)
    elif transport == TransportType.SSE:
        logger.info(f"Running in SSE mode at http://{host}:{port}")
        mcp.run(transport="sse", host=host, port=port)
    else:
        raise ValueError(f"Unknown transport: {transport}")


# =============================================================================
# CLI Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for MCP server.

    Args:
        argv: Command line arguments (uses sys.argv if None).

    Returns:
        Exit code (0 for success).
    """
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="MCP server for inspecting YAML UI designs",
    )
    parser.add_argument(
        "--transport",
        "-t",
        choices=[t.value for t in TransportType],
        default=TransportType.STDIO.value,
        help="Transport type (default: stdio)",
    )
    parser.add_argument("--host", help="Bind address for HTTP/SSE (default: MCP_HOST)")
    parser.add_argument("--port", "-p", type=int, help="Port for HTTP/SSE (default: MCP_PORT)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO, stream=sys.stderr)

    config = ServerConfig.from_env(TransportType(args.transport), args.host, args.port)
    try:
        run_server(config.transport, config.host, config.port, config.path)
        return 0
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0
    except Exception as e:
        logger.error(f"Server error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
