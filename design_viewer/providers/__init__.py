"""Diagram provider abstraction and registry."""

from design_viewer.providers.lib import (
    DiagramProvider,
    get_provider,
    get_provider_formats,
    list_providers,
    register_provider,
    undeclared_targets,
)

__all__ = [
    "DiagramProvider",
    "get_provider",
    "get_provider_formats",
    "list_providers",
    "register_provider",
    "undeclared_targets",
]
