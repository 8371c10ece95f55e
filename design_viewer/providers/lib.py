"""Provider abstraction for diagram transpilation.

This module defines the abstract base class for diagram providers and
provides a registry/factory for accessing them by name. Providers turn a
site's TransitionGraph into a diagram DSL that Kroki can render.
"""

import importlib
from abc import ABC, abstractmethod

from design_viewer.schema import TransitionGraph

PROVIDER_MODULES = ("d2", "plantuml")


class DiagramProvider(ABC):
    """Abstract base class for transition diagram providers.

    Subclasses must implement:
        - name: Provider identifier string
        - file_extension: Output file extension
        - supported_formats: Set of output formats (png, svg, pdf, jpeg)
        - transpile: TransitionGraph to DSL conversion

    Example:
        >>> class MyProvider(DiagramProvider):
        ...     name = "my_dsl"
        ...     file_extension = ".dsl"
        ...     supported_formats = frozenset({"svg"})
        ...     def transpile(self, graph: TransitionGraph) -> str:
        ...         return "\\n".join(node.id for node in graph.nodes)
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider identifier string."""
        ...

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Output file extension (e.g., '.d2', '.puml')."""
        ...

    @property
    @abstractmethod
    def supported_formats(self) -> frozenset[str]:
        """Supported output formats for rendering via Kroki.

        Returns:
            frozenset of format strings (e.g., {"svg", "png", "pdf"}).
        """
        ...

    @abstractmethod
    def transpile(self, graph: TransitionGraph) -> str:
        """Transpile a TransitionGraph to DSL syntax.

        Args:
            graph: The site's transition graph.

        Returns:
            str: DSL code representing the graph.
        """
        ...


def undeclared_targets(graph: TransitionGraph) -> list[str]:
    """Edge targets with no node of their own, in first-seen order.

    External targets and screens without a readable layout end up here;
    providers declare them so every edge has two endpoints.
    """
    declared = {node.id for node in graph.nodes}
    targets: list[str] = []
    for edge in graph.edges:
        for endpoint in (edge.source, edge.target):
            if endpoint not in declared and endpoint not in targets:
                targets.append(endpoint)
    return targets


# Provider registry - populated by provider modules on import
_registry: dict[str, type[DiagramProvider]] = {}


def register_provider(provider_cls: type[DiagramProvider]) -> type[DiagramProvider]:
    """Register a provider class in the registry.

    Uses a temporary instance to retrieve the provider name.

    Args:
        provider_cls: The provider class to register.

    Returns:
        The provider class (for decorator chaining).
    """
    # Instantiate once to get the name property
    _registry[provider_cls().name] = provider_cls
    return provider_cls


def get_provider(name: str) -> DiagramProvider:
    """Get a provider instance by name.

    Args:
        name: The provider identifier (e.g., "d2", "plantuml").

    Returns:
        DiagramProvider: An instance of the requested provider.

    Raises:
        KeyError: If no provider with the given name is registered.

    Example:
        >>> provider = get_provider("d2")
        >>> provider.transpile(graph)
    """
    if name not in _registry:
        _import_providers()
        if name not in _registry:
            available = ", ".join(_registry.keys()) or "(none)"
            raise KeyError(f"Unknown provider '{name}'. Available: {available}")
    return _registry[name]()


def list_providers() -> list[str]:
    """List all registered provider names.

    Example:
        >>> list_providers()
        ['d2', 'plantuml']
    """
    _import_providers()
    return list(_registry.keys())


def get_provider_formats(name: str) -> frozenset[str]:
    """Get supported output formats for a provider.

    Raises:
        KeyError: If no provider with the given name is registered.

    Example:
        >>> get_provider_formats("d2")
        frozenset({'svg'})
    """
    return get_provider(name).supported_formats


def _import_providers() -> None:
    """Import provider modules to trigger registration."""
    for module_name in PROVIDER_MODULES:
        importlib.import_module(f"design_viewer.providers.{module_name}")


__all__ = [
    "DiagramProvider",
    "undeclared_targets",
    "register_provider",
    "get_provider",
    "list_providers",
    "get_provider_formats",
]
