"""Viewport resolution layer.

Overlays per-viewport ``responsiveBehavior`` records onto the base attributes
of Areas and Elements. Overrides apply per key:

- ``gridAreas``: an explicit key wins, including an explicit null (which
  disables the grid at that viewport).
- every other attribute: an explicit non-null value wins, otherwise the base.
- ``hidden`` defaults to False.
"""

from dataclasses import dataclass
from typing import Iterable

from design_viewer.schema import (
    DEFAULT_VIEWPORT_ID,
    Area,
    Element,
    GridTemplate,
    ResponsiveOverride,
    Viewport,
)

# Attributes a ResponsiveOverride may carry
OVERRIDABLE_ATTRIBUTES = (
    "hidden",
    "layout",
    "size_hint",
    "grid_areas",
    "layout_hint",
    "order",
)

# Attributes for which an explicit null overrides the base value
NULLABLE_OVERRIDES = frozenset({"grid_areas"})


@dataclass(frozen=True)
class EffectiveAttributes:
    """Attributes of an Area or Element as seen at one viewport."""

    hidden: bool = False
    layout: str | None = None
    size_hint: str | None = None
    grid_areas: GridTemplate | None = None
    layout_hint: str | None = None
    order: int | None = None


def override_for(entity: Area | Element, viewport_id: str | None) -> ResponsiveOverride | None:
    """The override record of ``entity`` for ``viewport_id``, if any."""
    if viewport_id is None or not entity.responsive_behavior:
        return None
    return entity.responsive_behavior.get(viewport_id)


def effective_value(entity: Area | Element, attribute: str, viewport_id: str | None):
    """Resolve one attribute of ``entity`` at ``viewport_id``.

    Args:
        entity: Area or Element.
        attribute: snake_case attribute name from OVERRIDABLE_ATTRIBUTES.
        viewport_id: Viewport to resolve for; None means base values.

    Returns:
        The overriding value when the record sets it, otherwise the base.
    """
    base = getattr(entity, attribute, None)
    if attribute == "hidden":
        base = base is True

    override = override_for(entity, viewport_id)
    if override is None or not override.defines(attribute):
        return base

    value = getattr(override, attribute)
    if value is None and attribute not in NULLABLE_OVERRIDES:
        return base
    return value


def effective_attributes(entity: Area | Element, viewport_id: str | None) -> EffectiveAttributes:
    """Resolve every overridable attribute of ``entity`` at ``viewport_id``."""
    return EffectiveAttributes(
        **{
            attribute: effective_value(entity, attribute, viewport_id)
            for attribute in OVERRIDABLE_ATTRIBUTES
        }
    )


def is_hidden(entity: Area | Element, viewport_id: str | None) -> bool:
    return effective_value(entity, "hidden", viewport_id)


def default_viewport_id(
    viewports: Iterable[Viewport], fallback: str = DEFAULT_VIEWPORT_ID
) -> str:
    """Pick the default viewport of a site.

    The viewport with the largest ``minWidth`` wins (absent counts as 0);
    the first declared wins ties. Without viewports ``fallback`` is used.
    """
    viewports = list(viewports)
    if not viewports:
        return fallback
    return max(viewports, key=lambda viewport: viewport.min_width or 0).id


def find_viewport(viewports: Iterable[Viewport], viewport_id: str) -> Viewport | None:
    """The viewport declared with ``viewport_id``, if any."""
    return next((v for v in viewports if v.id == viewport_id), None)


def prune_grid(grid_areas: GridTemplate | None, visible: Iterable[str]) -> GridTemplate:
    """Drop cells naming hidden or unknown areas, then empty rows.

    Args:
        grid_areas: Template rows of area ids.
        visible: Ids of areas that exist and are visible.

    Returns:
        The pruned template; empty when nothing remains.
    """
    visible = set(visible)
    pruned = []
    for row in grid_areas or ():
        kept = tuple(cell for cell in row if cell in visible)
        if kept:
            pruned.append(kept)
    return tuple(pruned)


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
