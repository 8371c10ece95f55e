"""D2 DSL provider for transition diagrams.

D2 is a declarative diagramming language with first-class connections and
per-shape styling, a good fit for a screen-to-screen navigation graph.

See: https://d2lang.com/
"""

from design_viewer.providers.lib import (
    DiagramProvider,
    register_provider,
    undeclared_targets,
)
from design_viewer.schema import TransitionEdge, TransitionGraph, TransitionNode

SHARED_FILL = "#f5f5f5"
EXTERNAL_OPACITY = 0.6


@register_provider
class D2Provider(DiagramProvider):
    """Transpiles a TransitionGraph to D2 DSL syntax.

    D2 features used:
        - Quoted keys for node ids (ids may contain ``-`` and ``/``)
        - ``tooltip`` for screen descriptions
        - ``style.stroke-dash`` for shared nodes and external edges
        - ``style.opacity`` for external targets

    Example output:
        ```d2
        direction: right

        "node-home": "Home" {
          tooltip: "Landing page"
        }
        "node-cart": "Cart"

        "node-home" -> "node-cart": "Promo to cart"
        ```
    """

    @property
    def name(self) -> str:
        """Provider identifier."""
        return "d2"

    @property
    def file_extension(self) -> str:
        """D2 file extension."""
        return ".d2"

    @property
    def supported_formats(self) -> frozenset[str]:
        """D2 via Kroki only supports SVG output."""
        return frozenset({"svg"})

    def transpile(self, graph: TransitionGraph) -> str:
        """Transpile a TransitionGraph to D2 DSL.

        Args:
            graph: The site's transition graph.

        Returns:
            str: Complete D2 DSL code.
        """
        lines = ["direction: right", ""]

        for node in graph.nodes:
            lines.extend(self._transpile_node(node))
        for target in undeclared_targets(graph):
            lines.extend(self._transpile_external(target))

        if graph.edges:
            lines.append("")
        for edge in graph.edges:
            lines.extend(self._transpile_edge(edge))

        return "\n".join(lines) + "\n"

    def _transpile_node(self, node: TransitionNode) -> list[str]:
        styles: list[str] = []
        if node.description:
            styles.append(f"tooltip: {self._quote(node.description)}")
        if node.is_shared:
            styles.append("style.stroke-dash: 3")
            styles.append(f'style.fill: "{SHARED_FILL}"')

        head = f"{self._quote(node.id)}: {self._quote(node.label)}"
        if not styles:
            return [head]
        return [f"{head} {{", *(f"  {style}" for style in styles), "}"]

    def _transpile_external(self, node_id: str) -> list[str]:
        label = node_id.removeprefix("node-")
        return [
            f"{self._quote(node_id)}: {self._quote(label)} {{",
            f"  style.opacity: {EXTERNAL_OPACITY}",
            "}",
        ]

    def _transpile_edge(self, edge: TransitionEdge) -> list[str]:
        head = (
            f"{self._quote(edge.source)} -> {self._quote(edge.target)}: "
            f"{self._quote(edge.label)}"
        )
        if not edge.is_external:
            return [head]
        return [f"{head} {{", "  style.stroke-dash: 5", "}"]

    def _quote(self, text: str) -> str:
        """Quote a D2 key or label."""
        escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        return f'"{escaped}"'
