"""Unit tests for the providers module.

Tests for:
- DiagramProvider abstract base class
- Provider registry (register_provider, get_provider, list_providers)
- Undeclared edge endpoints
"""

import pytest

from design_viewer.providers import (
    DiagramProvider,
    get_provider,
    get_provider_formats,
    list_providers,
    undeclared_targets,
)
from design_viewer.schema import TransitionEdge, TransitionGraph


class TestDiagramProviderContract:
    """Tests for DiagramProvider abstract base class contract."""

    @pytest.mark.unit
    def test_diagram_provider_is_abstract(self):
        """DiagramProvider cannot be instantiated directly."""
        with pytest.raises(TypeError, match="abstract"):
            DiagramProvider()  # type: ignore

    @pytest.mark.unit
    def test_concrete_provider_requires_transpile(self):
        """Concrete providers must implement transpile."""

        class IncompleteProvider(DiagramProvider):
            @property
            def name(self) -> str:
                return "incomplete"

            @property
            def file_extension(self) -> str:
                return ".test"

            @property
            def supported_formats(self) -> frozenset[str]:
                return frozenset({"svg"})

        with pytest.raises(TypeError, match="abstract"):
            IncompleteProvider()


class TestProviderRegistry:
    """Tests for provider registry functions."""

    @pytest.mark.unit
    def test_list_providers(self):
        """Both built-in providers are discovered."""
        providers = list_providers()
        assert "d2" in providers
        assert "plantuml" in providers

    @pytest.mark.unit
    def test_get_provider(self):
        """get_provider returns a fresh instance."""
        provider = get_provider("d2")
        assert isinstance(provider, DiagramProvider)
        assert provider.name == "d2"
        assert get_provider("d2") is not provider

    @pytest.mark.unit
    def test_unknown_provider(self):
        """Unknown names raise KeyError listing what is available."""
        with pytest.raises(KeyError, match="Unknown provider 'mermaid'"):
            get_provider("mermaid")

    @pytest.mark.unit
    def test_provider_formats(self):
        assert get_provider_formats("d2") == frozenset({"svg"})
        assert "png" in get_provider_formats("plantuml")


class TestUndeclaredTargets:
    """Tests for undeclared_targets."""

    @pytest.mark.unit
    def test_external_target(self, transition_graph):
        """External targets have no node and are reported once."""
        assert undeclared_targets(transition_graph) == ["node-help-center"]

    @pytest.mark.unit
    def test_sources_without_node(self):
        """Sources of screens without a layout are reported as well."""
        graph = TransitionGraph(
            edges=(
                TransitionEdge(
                    id="edge-e-b", source="node-a", target="node-b", label="e", event_id="e"
                ),
                TransitionEdge(
                    id="edge-f-b", source="node-a", target="node-b", label="f", event_id="f"
                ),
            )
        )
        assert undeclared_targets(graph) == ["node-a", "node-b"]

    @pytest.mark.unit
    def test_empty_graph(self):
        assert undeclared_targets(TransitionGraph()) == []
