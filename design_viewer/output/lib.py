"""Output formatting for scene and transition review.

Generates human-readable text trees of laid-out scenes and of transition
graphs, for terminal output and tool responses.
"""

from dataclasses import dataclass

from design_viewer.providers import get_provider
from design_viewer.schema import AreaBox, ElementBox, Scene, TransitionGraph


@dataclass
class TransitionOutput:
    """Complete text output for a transition graph.

    Attributes:
        text_tree: Human-readable tree representation.
        dsl_code: Transpiled DSL code.
        graph: Original TransitionGraph.
        provider: DSL provider used.
    """

    text_tree: str
    dsl_code: str
    graph: TransitionGraph
    provider: str


def _number(value: float) -> str:
    return f"{value:g}"


def _box(x: float, y: float, width: float, height: float) -> str:
    return f"{_number(width)}x{_number(height)} @ {_number(x)},{_number(y)}"


def _connector(prefix: str, is_last: bool) -> tuple[str, str]:
    """Return the line prefix for a node and the prefix for its children."""
    if is_last:
        return f"{prefix}└── ", f"{prefix}    "
    return f"{prefix}├── ", f"{prefix}│   "


def format_scene_tree(scene: Scene) -> str:
    """Format a Scene as a human-readable tree.

    Example output:
        Home [grid, desktop, 410x260]
        ├── Header [header, horizontal, inherited, 370x64 @ 20,50]
        │   ├── $logo [70x24 @ 26,74]
        │   └── $cart-button [events, 70x24 @ 314,74]
        ├── Sidebar [sidebar, vertical, inherited, 180x96 @ 20,124]
        │   └── $nav-home [events, 168x24 @ 26,148]
        └── Main Content [main-content, vertical, 180x96 @ 210,124]

    Args:
        scene: Scene to format.

    Returns:
        Formatted tree string.
    """
    header = f"{scene.title} [{scene.mode}, {scene.viewport_id}, "
    header += f"{_number(scene.width)}x{_number(scene.height)}]"
    lines = [header]
    for i, area in enumerate(scene.areas):
        _format_area(area, lines, "", i == len(scene.areas) - 1)
    return "\n".join(lines)


def _format_area(area: AreaBox, lines: list[str], prefix: str, is_last: bool) -> None:
    """Recursively format an area, its elements, then its child areas."""
    connector, child_prefix = _connector(prefix, is_last)

    attrs = [area.area_id]
    if area.layout:
        attrs.append(area.layout)
    if area.size_hint:
        attrs.append(area.size_hint)
    if area.inherited:
        attrs.append("inherited")
    attrs.append(_box(area.x, area.y, area.width, area.height))
    lines.append(f"{connector}{area.name or area.area_id} [{', '.join(attrs)}]")

    children: list[AreaBox | ElementBox] = [*area.elements, *area.children]
    for i, child in enumerate(children):
        last = i == len(children) - 1
        if isinstance(child, ElementBox):
            _format_element(child, lines, child_prefix, last)
        else:
            _format_area(child, lines, child_prefix, last)


def _format_element(element: ElementBox, lines: list[str], prefix: str, is_last: bool) -> None:
    connector, _ = _connector(prefix, is_last)
    attrs = []
    if element.field_type:
        attrs.append(element.field_type)
    if element.has_events:
        attrs.append("events")
    attrs.append(_box(element.x, element.y, element.width, element.height))
    lines.append(f"{connector}${element.element_id} [{', '.join(attrs)}]")


def format_transition_tree(graph: TransitionGraph) -> str:
    """Format a TransitionGraph as outgoing edges grouped by source.

    Example output:
        Home (node-home)
        ├── Promo to cart -> cart
        └── open-help -> help-center [external]
        Header (node-_shared-header) [shared]
        └── Open cart -> cart

    Sources without a node of their own (screens without a readable layout)
    are listed after the declared nodes, by id.
    """
    labels = {node.id: node.label for node in graph.nodes}
    outgoing: dict[str, list] = {node.id: [] for node in graph.nodes}
    for edge in graph.edges:
        outgoing.setdefault(edge.source, []).append(edge)

    shared = {node.id for node in graph.nodes if node.is_shared}
    lines: list[str] = []
    for source, edges in outgoing.items():
        title = f"{labels[source]} ({source})" if source in labels else source
        if source in shared:
            title += " [shared]"
        lines.append(title)

        for i, edge in enumerate(edges):
            connector, _ = _connector("", i == len(edges) - 1)
            target = edge.target.removeprefix("node-")
            suffix = " [external]" if edge.is_external else ""
            lines.append(f"{connector}{edge.label} -> {target}{suffix}")

    return "\n".join(lines)


class OutputGenerator:
    """Generates complete output for a transition graph.

    Produces both the human-readable tree and DSL code for it.
    """

    def __init__(self, default_provider: str = "d2"):
        """Initialize generator.

        Args:
            default_provider: Default DSL provider (d2, plantuml).
        """
        self._default_provider = default_provider

    def generate(self, graph: TransitionGraph, provider: str | None = None) -> TransitionOutput:
        """Generate output from a TransitionGraph.

        Raises:
            KeyError: If the provider is unknown.
        """
        provider_name = provider or self._default_provider
        dsl_provider = get_provider(provider_name)

        return TransitionOutput(
            text_tree=format_transition_tree(graph),
            dsl_code=dsl_provider.transpile(graph),
            graph=graph,
            provider=provider_name,
        )


__all__ = [
    "format_scene_tree",
    "format_transition_tree",
    "TransitionOutput",
    "OutputGenerator",
]
