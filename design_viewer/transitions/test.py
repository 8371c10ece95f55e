"""Unit tests for the transition graph builder."""

import pytest

from design_viewer.schema import Event, EventAction, LayoutDocument
from design_viewer.transitions import (
    ScreenEntry,
    build_transition_graph,
    element_area_index,
    iter_navigations,
)


def _event(event_id: str, element: str | None, *actions: dict, name: str | None = None) -> Event:
    return Event.model_validate(
        {
            "eventId": event_id,
            "name": name,
            "trigger": {"element": element, "event": "click"} if element else None,
            "actions": list(actions),
        }
    )


def _navigate(target: str) -> dict:
    return {"type": "navigate", "target": target}


@pytest.fixture
def shared_layout() -> LayoutDocument:
    return LayoutDocument.model_validate(
        {
            "areas": [
                {"areaId": "header", "name": "Header", "children": ["$cart", "$logo"]},
                {
                    "areaId": "sidebar",
                    "children": ["$nav"],
                    "responsiveBehavior": {"mobile": {"hidden": True}},
                },
            ]
        }
    )


@pytest.fixture
def screens() -> list[ScreenEntry]:
    return [
        ScreenEntry("cart", LayoutDocument(title="Cart")),
        ScreenEntry("drafts", None, (_event("d", "x", _navigate("cart")),)),
        ScreenEntry(
            "home",
            LayoutDocument(description="Landing"),
            (_event("to-cart", "promo", _navigate("cart"), name="Promo"),),
        ),
    ]


class TestNavigations:
    """Tests for the action tree visitor."""

    @pytest.mark.unit
    def test_pre_order_walk(self):
        """Actions precede their onSuccess branch, which precedes onError."""
        action = EventAction.model_validate(
            {
                "type": "navigate",
                "target": "a",
                "onSuccess": [
                    {"type": "apiCall", "onSuccess": [_navigate("b")]},
                    _navigate("c"),
                ],
                "onError": [_navigate("d")],
            }
        )
        assert [a.target for a in iter_navigations([action])] == ["a", "b", "c", "d"]

    @pytest.mark.unit
    def test_ignores_other_actions_and_missing_targets(self):
        """Only navigate actions with a target count."""
        actions = [
            EventAction(type="navigate"),
            EventAction(type="showError", target="x"),
        ]
        assert list(iter_navigations(actions)) == []


class TestElementAreaIndex:
    """Tests for the element-to-area index."""

    @pytest.mark.unit
    def test_maps_element_refs(self, shared_layout):
        """Only $ refs are indexed."""
        index = element_area_index(shared_layout)
        assert {k: v.area_id for k, v in index.items()} == {
            "cart": "header",
            "logo": "header",
            "nav": "sidebar",
        }

    @pytest.mark.unit
    def test_no_shared_layout(self):
        assert element_area_index(None) == {}


class TestBuildGraph:
    """Tests for graph construction."""

    @pytest.mark.unit
    def test_screen_nodes(self, screens):
        """Screens with a layout become nodes labelled by title or id."""
        graph = build_transition_graph(screens)
        assert [(n.id, n.label, n.description) for n in graph.nodes] == [
            ("node-cart", "Cart", None),
            ("node-home", "home", "Landing"),
        ]

    @pytest.mark.unit
    def test_screen_edges(self, screens):
        """Screens without a layout still contribute edges."""
        graph = build_transition_graph(screens)
        assert [(e.id, e.source, e.target, e.label) for e in graph.edges] == [
            ("edge-d-cart", "node-drafts", "node-cart", "d"),
            ("edge-to-cart-cart", "node-home", "node-cart", "Promo"),
        ]
        assert not any(e.is_shared or e.is_external for e in graph.edges)

    @pytest.mark.unit
    def test_external_targets(self):
        """Targets outside the site's screens are external."""
        graph = build_transition_graph(
            [ScreenEntry("a", LayoutDocument(), (_event("e", "x", _navigate("elsewhere")),))]
        )
        [edge] = graph.edges
        assert edge.is_external is True
        assert edge.target == "node-elsewhere"

    @pytest.mark.unit
    def test_shared_nodes_once_per_area(self, screens, shared_layout):
        """Several events from one area produce a single synthetic node."""
        shared = [
            _event("s1", "cart", _navigate("cart")),
            _event("s2", "logo", _navigate("home")),
        ]
        graph = build_transition_graph(screens, shared_layout, shared)
        shared_nodes = [n for n in graph.nodes if n.is_shared]
        assert len(shared_nodes) == 1
        [node] = shared_nodes
        assert node.id == "node-_shared-header"
        assert node.screen_id == "_shared/header"
        assert node.description == "Shared component: Header"

    @pytest.mark.unit
    def test_shared_edges_first(self, screens, shared_layout):
        """Shared edges precede screen edges and start at the area node."""
        graph = build_transition_graph(
            screens, shared_layout, [_event("s1", "cart", _navigate("cart"))]
        )
        first = graph.edges[0]
        assert (first.id, first.source, first.is_shared) == (
            "edge-s1-cart",
            "node-_shared-header",
            True,
        )
        assert [n.id for n in graph.nodes][-1] == "node-_shared-header"

    @pytest.mark.unit
    def test_unmapped_shared_events_ignored(self, screens, shared_layout):
        """Shared events without an owning area contribute nothing."""
        shared = [_event("lost", "nowhere", _navigate("cart")), _event("bare", None, _navigate("cart"))]
        graph = build_transition_graph(screens, shared_layout, shared)
        assert not any(n.is_shared for n in graph.nodes)
        assert not any(e.is_shared for e in graph.edges)

    @pytest.mark.unit
    def test_unnamed_area_label(self, screens, shared_layout):
        """Areas without a name are labelled by id."""
        graph = build_transition_graph(
            screens, shared_layout, [_event("n", "nav", _navigate("home"))]
        )
        assert graph.nodes[-1].label == "sidebar"

    @pytest.mark.unit
    def test_viewport_hides_shared_area(self, screens, shared_layout):
        """Areas hidden at the viewport contribute no node and no edges."""
        shared = [_event("n", "nav", _navigate("home"))]
        hidden = build_transition_graph(screens, shared_layout, shared, viewport_id="mobile")
        assert not any(n.is_shared for n in hidden.nodes)
        assert not any(e.is_shared for e in hidden.edges)
        shown = build_transition_graph(screens, shared_layout, shared, viewport_id="desktop")
        assert any(n.is_shared for n in shown.nodes)
