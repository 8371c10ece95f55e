"""Viewport module - per-viewport attribute resolution."""

from .lib import (
    OVERRIDABLE_ATTRIBUTES,
    EffectiveAttributes,
    default_viewport_id,
    effective_attributes,
    effective_value,
    find_viewport,
    is_hidden,
    override_for,
    prune_grid,
)

__all__ = [
    "OVERRIDABLE_ATTRIBUTES",
    "EffectiveAttributes",
    "override_for",
    "effective_value",
    "effective_attributes",
    "is_hidden",
    "default_viewport_id",
    "find_viewport",
    "prune_grid",
]
