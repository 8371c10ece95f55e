"""Unit tests for D2 provider."""

import pytest

from design_viewer.providers.d2 import D2Provider
from design_viewer.schema import TransitionGraph, TransitionNode


@pytest.fixture
def provider():
    """Create a D2Provider instance."""
    return D2Provider()


class TestD2Provider:
    """Tests for D2Provider."""

    @pytest.mark.unit
    def test_provider_name(self, provider):
        """Provider has correct name."""
        assert provider.name == "d2"

    @pytest.mark.unit
    def test_file_extension(self, provider):
        """Provider has correct file extension."""
        assert provider.file_extension == ".d2"

    @pytest.mark.unit
    def test_direction(self, provider, transition_graph):
        """Graphs flow left to right."""
        assert provider.transpile(transition_graph).startswith("direction: right\n")

    @pytest.mark.unit
    def test_screen_node(self, provider, transition_graph):
        """Screens are quoted keys labelled by title, described by tooltip."""
        result = provider.transpile(transition_graph)
        assert '"node-home": "Home" {' in result
        assert 'tooltip: "Landing"' in result
        assert '"node-cart": "Cart"\n' in result

    @pytest.mark.unit
    def test_shared_node_styled(self, provider, transition_graph):
        """Shared components are dashed and filled."""
        result = provider.transpile(transition_graph)
        block = result.split('"node-_shared-header": "Header" {')[1].split("}")[0]
        assert "style.stroke-dash: 3" in block
        assert 'style.fill: "#f5f5f5"' in block

    @pytest.mark.unit
    def test_edges(self, provider, transition_graph):
        """Internal edges are plain connections."""
        result = provider.transpile(transition_graph)
        assert '"node-home" -> "node-cart": "Promo"\n' in result
        assert '"node-_shared-header" -> "node-cart": "Open cart"' in result

    @pytest.mark.unit
    def test_external_edge(self, provider, transition_graph):
        """External targets are declared faded and their edges dashed."""
        result = provider.transpile(transition_graph)
        assert '"node-help-center": "help-center" {\n  style.opacity: 0.6\n}' in result
        assert '"node-home" -> "node-help-center": "help" {\n  style.stroke-dash: 5\n}' in result

    @pytest.mark.unit
    def test_quotes_escaped(self, provider):
        """Double quotes in labels are escaped."""
        graph = TransitionGraph(
            nodes=(TransitionNode(id="node-a", screen_id="a", label='Say "hi"'),)
        )
        assert '"node-a": "Say \\"hi\\""' in provider.transpile(graph)

    @pytest.mark.unit
    def test_multiline_description(self, provider):
        """Line breaks in block-scalar descriptions stay inside the quoted tooltip."""
        graph = TransitionGraph(
            nodes=(
                TransitionNode(
                    id="node-a", screen_id="a", label="A", description="First line\nSecond line\n"
                ),
            )
        )
        result = provider.transpile(graph)
        assert 'tooltip: "First line\\nSecond line\\n"' in result
        assert "First line\nSecond" not in result

    @pytest.mark.unit
    def test_empty_graph(self, provider):
        assert provider.transpile(TransitionGraph()) == "direction: right\n\n"
