"""Inheritance resolver: merges screen documents with site-wide shared ones.

Resolution order for one screen:

1. Shared layout areas (when the screen ``extends`` one), tagged inherited.
2. Shared fields, then screen fields, keyed by fieldId.
3. Screen areas overlay the area map, tagged not inherited.
4. Screen elements overlay the element map.
5. ``mainContent`` is injected into the ``main-content`` area.
6. Shared events, then screen events, keyed by eventId.
7. Fields and events are attached to each element.

Each step is a pure function returning a new mapping. Later entries replace
earlier ones with the same id but keep the earlier position, so shared order
is preserved for overridden entities.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, TypeVar

from design_viewer.schema import (
    Area,
    Element,
    Event,
    FieldDefinition,
    LayoutDocument,
    MainContent,
    ScreenDetail,
    Viewport,
)

T = TypeVar("T")

MAIN_CONTENT_AREA_ID = "main-content"


@dataclass(frozen=True)
class ScreenSources:
    """Everything the resolver needs for one screen.

    Attributes:
        screen_id: Screen directory name.
        layout: The screen's layout document.
        shared_layout: Shared layout named by ``layout.extends``, if loaded.
        fields: Screen fields.
        shared_fields: Site-wide shared fields.
        events: Screen events.
        shared_events: Site-wide shared events.
        viewports: Site viewports.
    """

    screen_id: str
    layout: LayoutDocument
    shared_layout: LayoutDocument | None = None
    fields: tuple[FieldDefinition, ...] = ()
    shared_fields: tuple[FieldDefinition, ...] = ()
    events: tuple[Event, ...] = ()
    shared_events: tuple[Event, ...] = ()
    viewports: tuple[Viewport, ...] = ()


def overlay(
    base: Mapping[str, T], items: Iterable[T], key: Callable[[T], str]
) -> dict[str, T]:
    """Return a copy of ``base`` with ``items`` written over it by key."""
    merged = dict(base)
    for item in items:
        merged[key(item)] = item
    return merged


def shared_areas(shared_layout: LayoutDocument | None) -> dict[str, Area]:
    """Areas of the shared layout, tagged inherited."""
    if shared_layout is None:
        return {}
    return overlay(
        {},
        (area.model_copy(update={"inherited": True}) for area in shared_layout.areas),
        lambda area: area.area_id,
    )


def shared_elements(shared_layout: LayoutDocument | None) -> dict[str, Element]:
    """Elements of the shared layout, untagged."""
    if shared_layout is None:
        return {}
    return overlay({}, shared_layout.elements, lambda element: element.element_id)


def merge_fields(
    shared_fields: Iterable[FieldDefinition], fields: Iterable[FieldDefinition]
) -> dict[str, FieldDefinition]:
    """Shared fields then screen fields, last write wins by fieldId."""
    merged = overlay({}, shared_fields, lambda f: f.field_id)
    return overlay(merged, fields, lambda f: f.field_id)


def overlay_areas(areas: Mapping[str, Area], screen_areas: Iterable[Area]) -> dict[str, Area]:
    """Screen areas shadow shared ones and are never inherited."""
    return overlay(
        areas,
        (area.model_copy(update={"inherited": False}) for area in screen_areas),
        lambda area: area.area_id,
    )


def overlay_elements(
    elements: Mapping[str, Element], screen_elements: Iterable[Element]
) -> dict[str, Element]:
    """Screen elements shadow shared ones."""
    return overlay(elements, screen_elements, lambda element: element.element_id)


def inject_main_content(
    areas: Mapping[str, Area], main_content: MainContent | None
) -> dict[str, Area]:
    """Fill the ``main-content`` slot with the screen's mainContent block.

    The slot takes the block's layout when one is given and has its children
    replaced wholesale. The slot is then owned by the screen.
    """
    if main_content is None or MAIN_CONTENT_AREA_ID not in areas:
        return dict(areas)

    slot = areas[MAIN_CONTENT_AREA_ID]
    update = {"children": main_content.children, "inherited": False}
    if main_content.layout:
        update["layout"] = main_content.layout

    return overlay(areas, [slot.model_copy(update=update)], lambda area: area.area_id)


def merge_events(shared_events: Iterable[Event], events: Iterable[Event]) -> list[Event]:
    """Shared events then screen events, last write wins by eventId."""
    merged = overlay({}, shared_events, lambda event: event.event_id)
    return list(overlay(merged, events, lambda event: event.event_id).values())


def attach_fields_and_events(
    elements: Mapping[str, Element],
    fields: Mapping[str, FieldDefinition],
    events: Iterable[Event],
) -> list[Element]:
    """Attach the resolved Field and triggering Events to every element.

    An element is triggered by events whose ``trigger.element`` equals the
    element id or the id of its resolved field. A ``fieldRef`` without a
    matching field leaves the element without a field.
    """
    events = list(events)
    resolved = []
    for element in elements.values():
        bound = fields.get(element.field_ref) if element.field_ref else None
        keys = {element.element_id}
        if bound is not None:
            keys.add(bound.field_id)
        triggered = tuple(e for e in events if e.trigger_element in keys)
        resolved.append(element.model_copy(update={"field": bound, "events": triggered}))
    return resolved


def resolve_screen(sources: ScreenSources) -> ScreenDetail:
    """Merge one screen's documents into a ScreenDetail.

    Args:
        sources: The screen's documents and the site's shared documents.

    Returns:
        Request-scoped, fully resolved screen.
    """
    layout = sources.layout

    areas = shared_areas(sources.shared_layout)
    elements = shared_elements(sources.shared_layout)
    fields = merge_fields(sources.shared_fields, sources.fields)

    areas = overlay_areas(areas, layout.areas)
    elements = overlay_elements(elements, layout.elements)
    areas = inject_main_content(areas, layout.main_content)

    events = merge_events(sources.shared_events, sources.events)
    resolved_elements = attach_fields_and_events(elements, fields, events)

    return ScreenDetail(
        screen_id=layout.screen_id or sources.screen_id,
        title=layout.title or sources.screen_id,
        description=layout.description,
        extends=layout.extends,
        areas=tuple(areas.values()),
        elements=tuple(resolved_elements),
        fields=tuple(fields.values()),
        events=tuple(events),
        viewports=sources.viewports,
    )


__all__ = [
    "MAIN_CONTENT_AREA_ID",
    "ScreenSources",
    "overlay",
    "shared_areas",
    "shared_elements",
    "merge_fields",
    "overlay_areas",
    "overlay_elements",
    "inject_main_content",
    "merge_events",
    "attach_fields_and_events",
    "resolve_screen",
]
