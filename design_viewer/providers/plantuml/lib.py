"""PlantUML provider for transition diagrams.

Screens become rectangles and navigations become arrows. Shared components
carry a ``<<shared>>`` stereotype; external targets are drawn with dotted
arrows and a ``<<external>>`` stereotype.

See: https://plantuml.com/deployment-diagram
"""

import re

from design_viewer.providers.lib import (
    DiagramProvider,
    register_provider,
    undeclared_targets,
)
from design_viewer.schema import TransitionEdge, TransitionGraph, TransitionNode

_ALIAS_UNSAFE = re.compile(r"[^A-Za-z0-9_]")


@register_provider
class PlantUMLProvider(DiagramProvider):
    """Transpiles a TransitionGraph to PlantUML syntax."""

    @property
    def name(self) -> str:
        return "plantuml"

    @property
    def file_extension(self) -> str:
        return ".puml"

    @property
    def supported_formats(self) -> frozenset[str]:
        """PlantUML via Kroki supports PNG, SVG, PDF, and JPEG."""
        return frozenset({"png", "svg", "pdf", "jpeg"})

    def transpile(self, graph: TransitionGraph) -> str:
        lines = [
            "@startuml",
            "left to right direction",
            "skinparam rectangle<<shared>> {",
            "  BackgroundColor #F5F5F5",
            "  BorderStyle dashed",
            "}",
            "skinparam rectangle<<external>> {",
            "  BorderStyle dotted",
            "}",
        ]

        aliases = self._aliases(graph)
        for node in graph.nodes:
            lines.append(self._transpile_node(node, aliases))
        for target in undeclared_targets(graph):
            label = target.removeprefix("node-")
            lines.append(
                f'rectangle "{self._escape(label)}" as {aliases[target]} <<external>>'
            )

        for edge in graph.edges:
            lines.append(self._transpile_edge(edge, aliases))

        lines.append("@enduml")
        return "\n".join(lines)

    def _transpile_node(self, node: TransitionNode, aliases: dict[str, str]) -> str:
        stereotype = " <<shared>>" if node.is_shared else ""
        return f'rectangle "{self._escape(node.label)}" as {aliases[node.id]}{stereotype}'

    def _transpile_edge(self, edge: TransitionEdge, aliases: dict[str, str]) -> str:
        arrow = "..>" if edge.is_external else "-->"
        return (
            f"{aliases[edge.source]} {arrow} {aliases[edge.target]}"
            f" : {self._escape(edge.label)}"
        )

    def _aliases(self, graph: TransitionGraph) -> dict[str, str]:
        """Map every node id in the graph to a distinct PlantUML identifier.

        Unsafe characters become underscores. Ids that collapse onto an alias
        already taken get a numeric suffix, in first-seen order.
        """
        ids = [node.id for node in graph.nodes] + undeclared_targets(graph)

        aliases: dict[str, str] = {}
        taken: set[str] = set()
        for node_id in ids:
            if node_id in aliases:
                continue
            base = _ALIAS_UNSAFE.sub("_", node_id)
            alias, n = base, 1
            while alias in taken:
                n += 1
                alias = f"{base}_{n}"
            aliases[node_id] = alias
            taken.add(alias)
        return aliases

    def _escape(self, text: str) -> str:
        """Escape quotes and line breaks in labels."""
        return text.replace('"', "'").replace("\n", " ")
