"""Tests for MCP tool implementations against the sample design tree."""

import base64
from dataclasses import dataclass

import pytest

from design_viewer.core.errors import ScreenNotFound, SiteNotFound
from design_viewer.render import RenderClient

from .design import (
    get_screen_detail,
    get_screen_layout,
    get_site_detail,
    get_transitions,
    list_sites,
    validate_screen,
)
from .preview import preview_transitions


@dataclass
class MockResponse:
    """Mock HTTP response for testing."""

    status_code: int
    content: bytes = b""
    text: str = ""


@pytest.fixture
def render_client(monkeypatch):
    """RenderClient whose HTTP calls always succeed with a fake image."""
    client = RenderClient(base_url="http://kroki.test")
    monkeypatch.setattr(
        client._client, "get", lambda *a, **k: MockResponse(200, content=b"IMAGE")
    )
    yield client
    client.close()


class TestDesignTools:
    """Tests for the design inspection tools."""

    @pytest.mark.unit
    def test_list_sites(self, service):
        assert list_sites(service) == {
            "sites": [{"id": "blog", "name": "blog"}, {"id": "shop", "name": "Shop"}]
        }

    @pytest.mark.unit
    def test_list_sites_from_environment(self, design_root, monkeypatch):
        """Without a service, DESIGN_PATH selects the root."""
        monkeypatch.setenv("DESIGN_PATH", str(design_root))
        assert [site["id"] for site in list_sites()["sites"]] == ["blog", "shop"]

    @pytest.mark.unit
    def test_site_detail_uses_document_keys(self, service):
        detail = get_site_detail("shop", service)
        assert detail["defaultViewport"] == "desktop"
        assert detail["viewports"][0] == {"id": "mobile", "name": "Mobile", "maxWidth": 767}

    @pytest.mark.unit
    def test_transitions(self, service):
        payload = get_transitions("shop", service=service)
        external = [edge["id"] for edge in payload["edges"] if edge["isExternal"]]
        assert external == ["edge-open-help-help-center"]
        assert payload["tree"].startswith("Cart (node-cart)")

    @pytest.mark.unit
    def test_screen_detail(self, service):
        """Descriptive attributes survive serialization."""
        detail = get_screen_detail("shop", "home", service)
        header = next(area for area in detail["areas"] if area["areaId"] == "header")
        assert header["role"] == "banner"
        assert header["inherited"] is True

    @pytest.mark.unit
    def test_screen_layout(self, service):
        payload = get_screen_layout("shop", "home", "mobile", service)
        assert payload["scene"]["viewportId"] == "mobile"
        assert payload["tree"].startswith("Home [grid, mobile, ")

    @pytest.mark.unit
    def test_validate_screen(self, service, write_design):
        assert validate_screen("shop", "home", service) == {"valid": True, "issues": []}

        write_design(
            "sites/shop/screens/home/layout.yaml",
            {"areas": [{"areaId": "a", "children": ["x"]}]},
        )
        result = validate_screen("shop", "home", service)
        assert result["valid"] is False
        assert result["issues"][0]["issue_type"] == "invalid_child_ref"

    @pytest.mark.unit
    def test_not_found_propagates(self, service):
        """Tool functions raise; the server translates."""
        with pytest.raises(SiteNotFound):
            get_site_detail("nope", service)
        with pytest.raises(ScreenNotFound):
            get_screen_detail("shop", "nope", service)


class TestPreviewTransitions:
    """Tests for preview_transitions with mocked HTTP."""

    @pytest.mark.unit
    def test_render(self, service, render_client):
        result = preview_transitions(
            "shop",
            provider="plantuml",
            output_format="png",
            service=service,
            client=render_client,
        )
        assert base64.b64decode(result["image_data"]) == b"IMAGE"
        assert result["format"] == "png"
        assert result["provider"] == "plantuml"
        assert result["size_bytes"] == 5
        assert "node_home" in result["dsl_code"]

    @pytest.mark.unit
    def test_provider_from_environment(self, service, render_client, monkeypatch):
        monkeypatch.setenv("MCP_PREVIEW_PROVIDER", "d2")
        result = preview_transitions("shop", service=service, client=render_client)
        assert result["provider"] == "d2"
        assert result["dsl_code"].startswith("direction: right")

    @pytest.mark.unit
    def test_unsupported_format(self, service, render_client):
        with pytest.raises(ValueError, match="not supported by provider 'd2'"):
            preview_transitions(
                "shop", provider="d2", output_format="png", service=service, client=render_client
            )

    @pytest.mark.unit
    def test_unknown_provider(self, service, render_client):
        with pytest.raises(ValueError, match="Unknown provider"):
            preview_transitions("shop", provider="mermaid", service=service, client=render_client)

    @pytest.mark.unit
    def test_kroki_unavailable(self, service, monkeypatch):
        client = RenderClient(base_url="http://kroki.test")
        monkeypatch.setattr(client, "is_available", lambda: False)
        with pytest.raises(RuntimeError, match="not available"):
            preview_transitions("shop", service=service, client=client)

    @pytest.mark.unit
    def test_render_failure(self, service, monkeypatch):
        client = RenderClient(base_url="http://kroki.test")
        responses = iter([MockResponse(200), MockResponse(400, text="syntax error")])
        monkeypatch.setattr(client._client, "get", lambda *a, **k: next(responses))
        with pytest.raises(RuntimeError, match="Rendering failed"):
            preview_transitions("shop", provider="d2", service=service, client=client)
