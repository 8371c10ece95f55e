"""Tests for output module."""

import pytest

from design_viewer.output import (
    OutputGenerator,
    TransitionOutput,
    format_scene_tree,
    format_transition_tree,
)
from design_viewer.schema import AreaBox, ElementBox, Scene, TransitionEdge, TransitionGraph


@pytest.fixture
def sample_scene():
    """A stacked scene with one area holding an element and a child area."""
    return Scene(
        screen_id="s",
        title="Sample",
        viewport_id="desktop",
        mode="stack",
        width=640,
        height=230,
        areas=(
            AreaBox(
                area_id="a",
                name="Form",
                x=20,
                y=50,
                width=600,
                height=60,
                layout="vertical",
                inherited=True,
                elements=(
                    ElementBox(
                        element_id="email",
                        x=26,
                        y=74,
                        width=588,
                        height=24,
                        field_type="email",
                        has_events=True,
                    ),
                ),
                children=(AreaBox(area_id="b", x=26, y=102, width=588, height=30.5),),
            ),
        ),
    )


class TestFormatSceneTree:
    """Tests for format_scene_tree function."""

    @pytest.mark.unit
    def test_nested_tree(self, sample_scene):
        """Elements precede child areas under their parent."""
        assert format_scene_tree(sample_scene).split("\n") == [
            "Sample [stack, desktop, 640x230]",
            "└── Form [a, vertical, inherited, 600x60 @ 20,50]",
            "    ├── $email [email, events, 588x24 @ 26,74]",
            "    └── b [b, 588x30.5 @ 26,102]",
        ]

    @pytest.mark.unit
    def test_empty_scene(self):
        scene = Scene(
            screen_id="s", title="Empty", viewport_id="mobile", mode="fallback", width=800, height=90
        )
        assert format_scene_tree(scene) == "Empty [fallback, mobile, 800x90]"

    @pytest.mark.unit
    def test_service_scene(self, service):
        """Laid-out screens format with one line per area and element."""
        result = format_scene_tree(service.get_screen_layout("shop", "home"))
        lines = result.split("\n")
        assert lines[0] == "Home [grid, desktop, 410x260]"
        assert lines[1].startswith("├── Header [header, horizontal, inherited, 370x64 @ 20,50]")
        assert any("$cart-button [events" in line for line in lines)
        assert lines[-1].startswith("    └── $promo")


class TestFormatTransitionTree:
    """Tests for format_transition_tree function."""

    @pytest.mark.unit
    def test_grouped_by_source(self, transition_graph):
        assert format_transition_tree(transition_graph).split("\n") == [
            "Home (node-home)",
            "├── Promo -> cart",
            "└── help -> help-center [external]",
            "Cart (node-cart)",
            "Header (node-_shared-header) [shared]",
            "└── Open cart -> cart",
        ]

    @pytest.mark.unit
    def test_source_without_node(self):
        """Edges from screens without a layout are listed by node id."""
        graph = TransitionGraph(
            edges=(
                TransitionEdge(
                    id="edge-e-b", source="node-a", target="node-b", label="e", event_id="e"
                ),
            )
        )
        assert format_transition_tree(graph) == "node-a\n└── e -> b"

    @pytest.mark.unit
    def test_empty_graph(self):
        assert format_transition_tree(TransitionGraph()) == ""


class TestOutputGenerator:
    """Tests for OutputGenerator class."""

    @pytest.mark.unit
    def test_generate_d2(self, transition_graph):
        output = OutputGenerator(default_provider="d2").generate(transition_graph)
        assert isinstance(output, TransitionOutput)
        assert output.provider == "d2"
        assert output.dsl_code.startswith("direction: right")
        assert output.text_tree == format_transition_tree(transition_graph)

    @pytest.mark.unit
    def test_provider_override(self, transition_graph):
        output = OutputGenerator().generate(transition_graph, provider="plantuml")
        assert output.provider == "plantuml"
        assert "@startuml" in output.dsl_code

    @pytest.mark.unit
    def test_unknown_provider(self, transition_graph):
        with pytest.raises(KeyError):
            OutputGenerator().generate(transition_graph, provider="nope")
