"""Unit tests for the inheritance resolver."""

import pytest

from design_viewer.inherit import (
    ScreenSources,
    attach_fields_and_events,
    inject_main_content,
    merge_events,
    merge_fields,
    overlay_areas,
    resolve_screen,
    shared_areas,
)
from design_viewer.schema import (
    Area,
    Element,
    Event,
    FieldDefinition,
    LayoutDocument,
    MainContent,
)


def _event(event_id: str, element: str | None = None, name: str | None = None) -> Event:
    trigger = {"element": element, "event": "click"} if element else None
    return Event.model_validate({"eventId": event_id, "name": name, "trigger": trigger})


@pytest.fixture
def shared_layout() -> LayoutDocument:
    """Shared layout with a header and a main-content slot."""
    return LayoutDocument.model_validate(
        {
            "areas": [
                {"areaId": "root", "gridAreas": [["header"], ["main-content"]]},
                {"areaId": "header", "name": "Header", "children": ["$logo"]},
                {"areaId": "main-content", "layout": "vertical", "children": ["$x"]},
            ],
            "elements": [{"elementId": "logo", "label": "Shared logo"}],
        }
    )


class TestMergeSteps:
    """Tests for the individual merge steps."""

    @pytest.mark.unit
    def test_shared_areas_are_inherited(self, shared_layout):
        """Shared areas are tagged inherited."""
        areas = shared_areas(shared_layout)
        assert list(areas) == ["root", "header", "main-content"]
        assert all(area.inherited for area in areas.values())

    @pytest.mark.unit
    def test_screen_area_shadows_shared(self, shared_layout):
        """Screen areas win and keep the shared position."""
        base = shared_areas(shared_layout)
        merged = overlay_areas(base, [Area(area_id="header", name="Custom")])
        assert list(merged) == ["root", "header", "main-content"]
        assert merged["header"].name == "Custom"
        assert merged["header"].inherited is False
        assert base["header"].name == "Header"

    @pytest.mark.unit
    def test_fields_last_write_wins(self):
        """Screen fields replace shared fields with the same id."""
        merged = merge_fields(
            [FieldDefinition(field_id="email", label="Shared")],
            [
                FieldDefinition(field_id="email", label="Screen"),
                FieldDefinition(field_id="name", label="Name"),
            ],
        )
        assert list(merged) == ["email", "name"]
        assert merged["email"].label == "Screen"

    @pytest.mark.unit
    def test_events_last_write_wins(self):
        """Screen events replace shared events and keep insertion order."""
        events = merge_events(
            [_event("a", name="shared a"), _event("b")],
            [_event("a", name="screen a"), _event("c")],
        )
        assert [e.event_id for e in events] == ["a", "b", "c"]
        assert events[0].name == "screen a"

    @pytest.mark.unit
    def test_main_content_injection(self, shared_layout):
        """mainContent replaces children and claims the slot."""
        areas = shared_areas(shared_layout)
        injected = inject_main_content(
            areas, MainContent(layout="horizontal", children=["@a", "$b"])
        )
        slot = injected["main-content"]
        assert slot.children == ("@a", "$b")
        assert slot.layout == "horizontal"
        assert slot.inherited is False
        assert areas["main-content"].children == ("$x",)

    @pytest.mark.unit
    def test_main_content_keeps_layout(self, shared_layout):
        """Without a layout in the block, the slot keeps its own."""
        injected = inject_main_content(
            shared_areas(shared_layout), MainContent(children=["$b"])
        )
        assert injected["main-content"].layout == "vertical"

    @pytest.mark.unit
    def test_main_content_without_slot(self):
        """Nothing happens when no main-content area exists."""
        areas = {"a": Area(area_id="a")}
        assert inject_main_content(areas, MainContent(children=["$b"])) == areas


class TestAttachment:
    """Tests for field and event attachment."""

    @pytest.mark.unit
    def test_field_attached(self):
        """A fieldRef to an existing field yields an equal field."""
        field = FieldDefinition(field_id="email", type="email")
        [element] = attach_fields_and_events(
            {"e": Element(element_id="e", field_ref="email")}, {"email": field}, []
        )
        assert element.field == field

    @pytest.mark.unit
    def test_missing_field_is_not_an_error(self):
        """A dangling fieldRef leaves the element without a field."""
        [element] = attach_fields_and_events(
            {"e": Element(element_id="e", field_ref="ghost")}, {}, []
        )
        assert element.field is None

    @pytest.mark.unit
    def test_events_by_element_or_field_id(self):
        """Events trigger on the element id or its field id."""
        fields = {"email": FieldDefinition(field_id="email")}
        elements = {"input": Element(element_id="input", field_ref="email")}
        events = [_event("by-element", "input"), _event("by-field", "email"), _event("other", "x")]
        [element] = attach_fields_and_events(elements, fields, events)
        assert [e.event_id for e in element.events] == ["by-element", "by-field"]

    @pytest.mark.unit
    def test_events_without_trigger_never_attach(self):
        """Events lacking a trigger element attach to nothing."""
        [element] = attach_fields_and_events(
            {"e": Element(element_id="e")}, {}, [_event("loose")]
        )
        assert element.events == ()


class TestResolveScreen:
    """Tests for the complete resolution."""

    @pytest.mark.unit
    def test_without_extends(self):
        """Screens without a shared layout only see their own areas."""
        layout = LayoutDocument.model_validate(
            {"title": "Solo", "areas": [{"areaId": "a"}], "elements": [{"elementId": "e"}]}
        )
        detail = resolve_screen(ScreenSources(screen_id="solo", layout=layout))
        assert detail.screen_id == "solo"
        assert detail.title == "Solo"
        assert [a.area_id for a in detail.areas] == ["a"]
        assert detail.areas[0].inherited is False

    @pytest.mark.unit
    def test_screen_elements_shadow_shared(self, shared_layout):
        """Screen elements replace shared elements with the same id."""
        layout = LayoutDocument.model_validate(
            {
                "extends": "_shared/app-layout",
                "elements": [{"elementId": "logo", "label": "Screen logo"}],
            }
        )
        detail = resolve_screen(
            ScreenSources(screen_id="s", layout=layout, shared_layout=shared_layout)
        )
        [logo] = detail.elements
        assert logo.label == "Screen logo"

    @pytest.mark.unit
    def test_title_falls_back_to_screen_id(self):
        """Untitled layouts are titled by their directory."""
        detail = resolve_screen(ScreenSources(screen_id="x", layout=LayoutDocument()))
        assert detail.title == "x"

    @pytest.mark.unit
    def test_inputs_not_mutated(self, shared_layout):
        """Resolution never mutates the input documents."""
        before = shared_layout.model_dump()
        layout = LayoutDocument.model_validate(
            {"mainContent": {"children": ["$b"]}, "areas": [{"areaId": "header"}]}
        )
        resolve_screen(ScreenSources(screen_id="s", layout=layout, shared_layout=shared_layout))
        assert shared_layout.model_dump() == before

    @pytest.mark.unit
    def test_idempotent(self, shared_layout):
        """Resolving the same sources twice gives equal output."""
        sources = ScreenSources(
            screen_id="s",
            layout=LayoutDocument(extends="_shared/app-layout"),
            shared_layout=shared_layout,
            shared_events=(_event("go", "logo"),),
        )
        assert resolve_screen(sources) == resolve_screen(sources)
