"""Core MCP server logic for design-viewer.

Provides configuration for creating MCP server instances and the mapping
from design errors to tool errors.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from importlib.metadata import PackageNotFoundError, version
from typing import Iterator

from fastmcp.exceptions import ToolError

from design_viewer.config import EnvVar, get_environment
from design_viewer.core.errors import DesignNotFoundError

logger = logging.getLogger(__name__)

SERVER_NAME = "design-viewer"


class TransportType(str, Enum):
    """Supported MCP transport types."""

    STDIO = "stdio"
    HTTP = "http"
    SSE = "sse"


@dataclass
class ServerConfig:
    """Configuration for MCP server.

    Attributes:
        name: Server display name.
        transport: Transport type for communication.
        host: Bind address for HTTP/SSE transports.
        port: Port for HTTP/SSE transports.
        path: URL path for HTTP transport.
    """

    name: str = SERVER_NAME
    transport: TransportType = TransportType.STDIO
    host: str = "0.0.0.0"
    port: int = 18080
    path: str = "/mcp"

    @classmethod
    def from_env(
        cls,
        transport: TransportType | None = None,
        host: str | None = None,
        port: int | None = None,
    ) -> "ServerConfig":
        """Create config from environment variables.

        Explicit arguments win over MCP_HOST and MCP_PORT.
        """
        return cls(
            transport=transport or TransportType.STDIO,
            host=get_environment(EnvVar.MCP_HOST, override=host),
            port=get_environment(EnvVar.MCP_PORT, override=port),
        )


def get_server_version() -> str:
    """Get server version string from the installed distribution."""
    try:
        return version(SERVER_NAME)
    except PackageNotFoundError:
        return "0.0.0"


@contextmanager
def tool_errors() -> Iterator[None]:
    """Translate failures raised inside a tool into ToolError.

    Not-found conditions become ``404: <message>``; anything else becomes
    ``500: <message>``.
    """
    try:
        yield
    except ToolError:
        raise
    except DesignNotFoundError as e:
        raise ToolError(f"404: {e.message}") from e
    except Exception as e:
        logger.exception("Tool failed")
        raise ToolError(f"500: {e}") from e


__all__ = [
    "SERVER_NAME",
    "TransportType",
    "ServerConfig",
    "get_server_version",
    "tool_errors",
]
