"""Transition graph builder.

Derives a site's directed screen graph from ``navigate`` actions:

- one node per screen with a readable layout;
- one synthetic node per shared area whose elements trigger shared events;
- one edge per navigate action with a target, found by a pre-order walk of
  each event's action tree (``onSuccess`` and ``onError`` included).

Edges to targets that are not screens of the site are marked external.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from design_viewer.schema import (
    ActionKind,
    Area,
    Event,
    EventAction,
    LayoutDocument,
    TransitionEdge,
    TransitionGraph,
    TransitionNode,
)
from design_viewer.viewport import is_hidden

logger = logging.getLogger(__name__)

NODE_PREFIX = "node-"
EDGE_PREFIX = "edge-"
SHARED_NODE_PREFIX = "_shared-"
SHARED_SCREEN_PREFIX = "_shared/"


@dataclass(frozen=True)
class ScreenEntry:
    """One screen directory as seen by the graph builder.

    Attributes:
        screen_id: Directory name.
        layout: Parsed layout, or None when missing or unreadable.
        events: Screen events.
    """

    screen_id: str
    layout: LayoutDocument | None = None
    events: tuple[Event, ...] = ()


def node_id(screen_id: str) -> str:
    return f"{NODE_PREFIX}{screen_id}"


def shared_node_id(area_id: str) -> str:
    return f"{NODE_PREFIX}{SHARED_NODE_PREFIX}{area_id}"


def iter_navigations(actions: Iterable[EventAction]) -> Iterator[EventAction]:
    """Yield navigate actions with a target, depth-first, pre-order.

    Each action is visited before its ``onSuccess`` branch, which is visited
    before its ``onError`` branch.
    """
    for action in actions:
        if action.kind == ActionKind.NAVIGATE and action.target:
            yield action
        yield from iter_navigations(action.on_success)
        yield from iter_navigations(action.on_error)


def element_area_index(shared_layout: LayoutDocument | None) -> dict[str, Area]:
    """Map element ids to the shared area listing them as ``$`` children."""
    index: dict[str, Area] = {}
    if shared_layout is None:
        return index
    for area in shared_layout.areas:
        for element_id in area.element_refs:
            index[element_id] = area
    return index


def screen_node(entry: ScreenEntry) -> TransitionNode:
    layout = entry.layout
    return TransitionNode(
        id=node_id(entry.screen_id),
        screen_id=entry.screen_id,
        label=layout.title or entry.screen_id,
        description=layout.description,
    )


def shared_node(area: Area) -> TransitionNode:
    label = area.name or area.area_id
    return TransitionNode(
        id=shared_node_id(area.area_id),
        screen_id=f"{SHARED_SCREEN_PREFIX}{area.area_id}",
        label=label,
        description=f"Shared component: {label}",
    )


def event_edges(
    event: Event, source: str, screen_ids: set[str], is_shared: bool
) -> list[TransitionEdge]:
    """Edges contributed by one event.

    Args:
        event: Event whose action tree is walked.
        source: Node id the edges start from.
        screen_ids: Screen ids of the site; other targets are external.
        is_shared: Whether the event comes from the shared events document.
    """
    return [
        TransitionEdge(
            id=f"{EDGE_PREFIX}{event.event_id}-{action.target}",
            source=source,
            target=node_id(action.target),
            label=event.name or event.event_id,
            event_id=event.event_id,
            is_external=action.target not in screen_ids,
            is_shared=is_shared,
        )
        for action in iter_navigations(event.actions)
    ]


def build_transition_graph(
    screens: Iterable[ScreenEntry],
    shared_layout: LayoutDocument | None = None,
    shared_events: Iterable[Event] = (),
    viewport_id: str | None = None,
) -> TransitionGraph:
    """Build the navigation graph of a site.

    Args:
        screens: Every screen directory of the site, in order.
        shared_layout: The site's shared layout, used to find the area that
            owns each shared trigger element.
        shared_events: The site's shared events.
        viewport_id: When given, shared areas hidden at this viewport
            contribute neither nodes nor edges.

    Returns:
        TransitionGraph with screen nodes first, then shared nodes; shared
        edges first, then screen edges.
    """
    screens = list(screens)
    screen_ids = {entry.screen_id for entry in screens}

    nodes = [screen_node(entry) for entry in screens if entry.layout is not None]
    edges: list[TransitionEdge] = []

    owners = element_area_index(shared_layout)
    added: set[str] = set()
    for event in shared_events:
        trigger = event.trigger_element
        area = owners.get(trigger) if trigger else None
        if area is None:
            logger.debug(f"Shared event {event.event_id} has no owning area")
            continue
        if is_hidden(area, viewport_id):
            continue

        if area.area_id not in added:
            added.add(area.area_id)
            nodes.append(shared_node(area))

        edges.extend(event_edges(event, shared_node_id(area.area_id), screen_ids, True))

    for entry in screens:
        for event in entry.events:
            edges.extend(event_edges(event, node_id(entry.screen_id), screen_ids, False))

    return TransitionGraph(nodes=tuple(nodes), edges=tuple(edges))


__all__ = [
    "ScreenEntry",
    "node_id",
    "shared_node_id",
    "iter_navigations",
    "element_area_index",
    "screen_node",
    "shared_node",
    "event_edges",
    "build_transition_graph",
]
