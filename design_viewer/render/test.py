"""Tests for render module.

Unit tests are mocked (no network).
Integration tests require a running Kroki container.
"""

import base64
import zlib
from dataclasses import dataclass

import httpx
import pytest

from design_viewer.render import (
    D2Theme,
    OutputFormat,
    PlantUMLTheme,
    RenderClient,
    RenderConfig,
    RenderError,
    RenderOutput,
)

# =============================================================================
# Unit Tests (Mocked)
# =============================================================================


@dataclass
class MockResponse:
    """Mock HTTP response for testing."""

    status_code: int
    content: bytes = b""
    text: str = ""


@pytest.fixture
def client():
    with RenderClient(base_url="http://kroki.test/") as client:
        yield client


class TestRenderConfig:
    """Tests for RenderConfig dataclass."""

    @pytest.mark.unit
    def test_default_values(self):
        """Defaults render SVG, which every provider supports."""
        config = RenderConfig()
        assert config.output_format == OutputFormat.SVG
        assert config.theme is None
        assert config.scale == 1.0

    @pytest.mark.unit
    def test_invalid_scale(self):
        with pytest.raises(ValueError, match="Scale must be between"):
            RenderConfig(scale=10.0)


class TestRenderOutput:
    """Tests for RenderOutput dataclass."""

    @pytest.mark.unit
    def test_save(self, tmp_path):
        """Save writes image bytes to file."""
        output = RenderOutput(image_bytes=b"<svg/>", format=OutputFormat.SVG, diagram_type="d2")
        path = tmp_path / "graph.svg"
        output.save(path)
        assert path.read_bytes() == b"<svg/>"
        assert output.size_bytes == 6


class TestRenderClientOptions:
    """Tests for URL handling, encoding and option injection."""

    @pytest.mark.unit
    def test_base_url_trailing_slash(self, client):
        assert client.base_url == "http://kroki.test"

    @pytest.mark.unit
    def test_base_url_from_environment(self, monkeypatch):
        monkeypatch.setenv("KROKI_URL", "http://env-kroki:9000")
        with RenderClient() as client:
            assert client.base_url == "http://env-kroki:9000"

    @pytest.mark.unit
    def test_encode_diagram(self, client):
        """Encoding is reversible zlib + URL-safe base64."""
        encoded = client._encode_diagram("a -> b")
        assert all(c.isalnum() or c in "-_=" for c in encoded)
        assert zlib.decompress(base64.urlsafe_b64decode(encoded)) == b"a -> b"

    @pytest.mark.unit
    def test_inject_d2_options(self, client):
        config = RenderConfig(theme=D2Theme.TERMINAL, sketch=True)
        result = client._inject_d2_options("a -> b", config)
        assert result == "# d2-config: --theme 300\n# d2-config: --sketch\n\na -> b"

    @pytest.mark.unit
    def test_no_injection_for_defaults(self, client):
        assert client._inject_d2_options("a -> b", RenderConfig()) == "a -> b"

    @pytest.mark.unit
    def test_inject_plantuml_options(self, client):
        """Theme and scale follow the @start directive."""
        config = RenderConfig(theme=PlantUMLTheme.SKETCHY, scale=1.5)
        result = client._inject_plantuml_options("@startuml\na --> b\n@enduml", config)
        assert result.split("\n")[:3] == ["@startuml", "!theme sketchy", "scale 1.5"]

    @pytest.mark.unit
    def test_foreign_theme_ignored(self, client):
        """A PlantUML theme has no effect on D2 source."""
        config = RenderConfig(theme=PlantUMLTheme.TOY)
        assert client._inject_d2_options("a -> b", config) == "a -> b"


class TestRenderClientMocked:
    """Tests for RenderClient with mocked HTTP."""

    @pytest.mark.unit
    def test_is_available(self, client, monkeypatch):
        monkeypatch.setattr(client._client, "get", lambda *a, **k: MockResponse(200))
        assert client.is_available() is True

    @pytest.mark.unit
    def test_is_available_failure(self, client, monkeypatch):
        """Connection errors mean unavailable."""

        def mock_get(*args, **kwargs):
            raise httpx.ConnectError("Connection refused")

        monkeypatch.setattr(client._client, "get", mock_get)
        assert client.is_available() is False

    @pytest.mark.unit
    def test_render_success(self, client, monkeypatch):
        """The URL names endpoint, format and encoded source."""
        calls = []

        def mock_get(url, *args, **kwargs):
            calls.append(url)
            return MockResponse(status_code=200, content=b"<svg/>")

        monkeypatch.setattr(client._client, "get", mock_get)
        result = client.render("a -> b", "d2")

        assert result.image_bytes == b"<svg/>"
        assert result.diagram_type == "d2"
        assert calls == [f"http://kroki.test/d2/svg/{client._encode_diagram('a -> b')}"]

    @pytest.mark.unit
    def test_puml_alias(self, client, monkeypatch):
        monkeypatch.setattr(
            client._client, "get", lambda *a, **k: MockResponse(200, content=b"x")
        )
        assert client.render("@startuml\n@enduml", "puml").diagram_type == "plantuml"

    @pytest.mark.unit
    def test_render_error_status(self, client, monkeypatch):
        """Non-200 responses raise with status and body excerpt."""
        monkeypatch.setattr(
            client._client,
            "get",
            lambda *a, **k: MockResponse(status_code=400, text="x" * 1000),
        )
        with pytest.raises(RenderError) as exc_info:
            client.render("invalid", "d2")
        assert exc_info.value.status_code == 400
        assert len(exc_info.value.response_body) == 500

    @pytest.mark.unit
    def test_render_request_error(self, client, monkeypatch):
        def mock_get(*args, **kwargs):
            raise httpx.ConnectError("Connection refused")

        monkeypatch.setattr(client._client, "get", mock_get)
        with pytest.raises(RenderError, match="Kroki request failed"):
            client.render("a -> b", "d2")

    @pytest.mark.unit
    def test_render_unsupported_type(self, client):
        with pytest.raises(RenderError, match="Unsupported diagram type"):
            client.render("test", "mermaid")

    @pytest.mark.unit
    def test_render_transitions(self, client, monkeypatch, transition_graph):
        """The graph is transpiled with the named provider."""
        monkeypatch.setattr(
            client._client, "get", lambda *a, **k: MockResponse(200, content=b"<svg/>")
        )
        result = client.render_transitions(transition_graph, "plantuml")
        assert result.diagram_type == "plantuml"
        assert result.dsl_code.startswith("@startuml")

    @pytest.mark.unit
    def test_render_transitions_unsupported_format(self, client, transition_graph):
        """D2 cannot be rendered to PNG."""
        config = RenderConfig(output_format=OutputFormat.PNG)
        with pytest.raises(RenderError, match="d2 cannot render png"):
            client.render_transitions(transition_graph, "d2", config)


# =============================================================================
# Integration Tests (require running Kroki)
# =============================================================================


class TestRenderClientIntegration:
    """Integration tests requiring a running Kroki container."""

    @pytest.mark.kroki
    def test_render_d2_transitions(self, kroki_client, transition_graph):
        result = kroki_client.render_transitions(transition_graph, "d2")
        assert b"<svg" in result.image_bytes

    @pytest.mark.kroki
    def test_render_plantuml_png(self, kroki_client, transition_graph):
        config = RenderConfig(output_format=OutputFormat.PNG)
        result = kroki_client.render_transitions(transition_graph, "plantuml", config)
        assert result.image_bytes[:8] == b"\x89PNG\r\n\x1a\n"
