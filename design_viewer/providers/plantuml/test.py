"""Unit tests for PlantUML provider."""

import pytest

from design_viewer.providers.plantuml import PlantUMLProvider
from design_viewer.schema import TransitionEdge, TransitionGraph, TransitionNode


@pytest.fixture
def provider():
    return PlantUMLProvider()


class TestPlantUMLProvider:
    """Tests for PlantUMLProvider."""

    @pytest.mark.unit
    def test_provider_name(self, provider):
        assert provider.name == "plantuml"
        assert provider.file_extension == ".puml"

    @pytest.mark.unit
    def test_wrapped_in_uml_block(self, provider, transition_graph):
        """Output starts with @startuml and ends with @enduml."""
        lines = provider.transpile(transition_graph).split("\n")
        assert lines[0] == "@startuml"
        assert lines[-1] == "@enduml"

    @pytest.mark.unit
    def test_nodes_use_safe_aliases(self, provider, transition_graph):
        """Hyphens and slashes become underscores in aliases."""
        result = provider.transpile(transition_graph)
        assert 'rectangle "Home" as node_home\n' in result
        assert 'rectangle "Header" as node__shared_header <<shared>>' in result

    @pytest.mark.unit
    def test_external_target(self, provider, transition_graph):
        """External targets are declared with a stereotype and dotted arrows."""
        result = provider.transpile(transition_graph)
        assert 'rectangle "help-center" as node_help_center <<external>>' in result
        assert "node_home ..> node_help_center : help" in result

    @pytest.mark.unit
    def test_internal_edges(self, provider, transition_graph):
        result = provider.transpile(transition_graph)
        assert "node_home --> node_cart : Promo" in result
        assert "node__shared_header --> node_cart : Open cart" in result

    @pytest.mark.unit
    def test_colliding_aliases_kept_apart(self, provider):
        """Ids that differ only in unsafe characters get distinct aliases."""
        graph = TransitionGraph(
            nodes=(
                TransitionNode(id="node-a-b", screen_id="a-b", label="Dashed"),
                TransitionNode(id="node-a_b", screen_id="a_b", label="Underscored"),
            ),
            edges=(
                TransitionEdge(
                    id="edge-go-a_b",
                    source="node-a-b",
                    target="node-a_b",
                    label="go",
                    event_id="go",
                ),
            ),
        )
        result = provider.transpile(graph)
        assert 'rectangle "Dashed" as node_a_b\n' in result
        assert 'rectangle "Underscored" as node_a_b_2\n' in result
        assert "node_a_b --> node_a_b_2 : go" in result
