"""Transitions module - navigation graph of a site."""

from .lib import (
    ScreenEntry,
    build_transition_graph,
    element_area_index,
    event_edges,
    iter_navigations,
    node_id,
    screen_node,
    shared_node,
    shared_node_id,
)

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
