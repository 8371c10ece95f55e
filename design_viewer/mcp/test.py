"""Unit tests for MCP server module.

Tests cover:
- Server configuration
- Error translation to tool errors
- Tool registration
"""

import asyncio

import pytest
from fastmcp import Client
from fastmcp.exceptions import ToolError

from design_viewer.core.errors import LayoutNotFound, SiteNotFound

from .lib import ServerConfig, TransportType, get_server_version, tool_errors
from .server import create_server, mcp

# =============================================================================
# Configuration Tests
# =============================================================================


class TestServerConfig:
    """Tests for ServerConfig dataclass."""

    @pytest.mark.unit
    def test_default_config(self):
        """Default config has expected values."""
        config = ServerConfig()

        assert config.name == "design-viewer"
        assert config.transport == TransportType.STDIO
        assert config.host == "0.0.0.0"
        assert config.port == 18080
        assert config.path == "/mcp"

    @pytest.mark.unit
    def test_from_env(self, monkeypatch):
        """from_env reads MCP_HOST and MCP_PORT."""
        monkeypatch.setenv("MCP_HOST", "127.0.0.1")
        monkeypatch.setenv("MCP_PORT", "9001")
        config = ServerConfig.from_env()

        assert config.transport == TransportType.STDIO
        assert config.host == "127.0.0.1"
        assert config.port == 9001

    @pytest.mark.unit
    def test_from_env_overrides(self, monkeypatch):
        """Explicit values win over the environment."""
        monkeypatch.setenv("MCP_PORT", "9001")
        config = ServerConfig.from_env(TransportType.HTTP, host="localhost", port=7000)

        assert config.transport == TransportType.HTTP
        assert (config.host, config.port) == ("localhost", 7000)


class TestTransportType:
    """Tests for TransportType enum."""

    @pytest.mark.unit
    def test_transport_from_string(self):
        assert TransportType("http") == TransportType.HTTP
        assert [t.value for t in TransportType] == ["stdio", "http", "sse"]


class TestServerVersion:
    @pytest.mark.unit
    def test_get_server_version(self):
        version = get_server_version()
        assert isinstance(version, str)
        assert version.count(".") >= 2


# =============================================================================
# Error Translation Tests
# =============================================================================


class TestToolErrors:
    """Tests for the tool_errors boundary."""

    @pytest.mark.unit
    def test_not_found_is_404(self):
        with pytest.raises(ToolError, match="^404: Site not found: nope$"):
            with tool_errors():
                raise SiteNotFound("nope")

    @pytest.mark.unit
    def test_layout_reason_kept(self):
        with pytest.raises(ToolError, match="^404: Layout not found: shop/home \\(bad\\)$"):
            with tool_errors():
                raise LayoutNotFound("shop", "home", "bad")

    @pytest.mark.unit
    def test_other_errors_are_500(self):
        with pytest.raises(ToolError, match="^500: boom$"):
            with tool_errors():
                raise ValueError("boom")

    @pytest.mark.unit
    def test_tool_error_passes_through(self):
        with pytest.raises(ToolError, match="^already$"):
            with tool_errors():
                raise ToolError("already")

    @pytest.mark.unit
    def test_success_untouched(self):
        with tool_errors():
            result = 42
        assert result == 42


# =============================================================================
# Server Instance Tests
# =============================================================================


def _tool_names() -> set[str]:
    async def _list() -> set[str]:
        async with Client(mcp) as client:
            return {tool.name for tool in await client.list_tools()}

    return asyncio.run(_list())


class TestServerInstance:
    """Tests for the FastMCP server instance."""

    @pytest.mark.unit
    def test_create_server_returns_mcp(self):
        assert create_server() is mcp

    @pytest.mark.unit
    def test_server_has_name(self):
        assert mcp.name == "design-viewer"

    @pytest.mark.unit
    def test_tools_registered(self):
        """Every design tool is exposed, and nothing else."""
        assert _tool_names() == {
            "list_sites",
            "get_site_detail",
            "get_transitions",
            "get_screen_detail",
            "get_screen_layout",
            "validate_screen",
            "preview_transitions",
            "ping",
        }
