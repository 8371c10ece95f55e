"""Unit tests for the schema module."""

import pytest
from pydantic import ValidationError

from design_viewer.schema import (
    ActionKind,
    Area,
    Element,
    EventAction,
    EventsDocument,
    LayoutDocument,
    LayoutMode,
    ResponsiveOverride,
    Scene,
    ScreenDetail,
    SiteManifest,
    SizeHint,
    to_payload,
)


class TestEnums:
    """Tests for document enums."""

    @pytest.mark.unit
    def test_layout_mode_values(self):
        """All layout modes map to their document spelling."""
        assert LayoutMode.VERTICAL.value == "vertical"
        assert LayoutMode.HORIZONTAL.value == "horizontal"
        assert LayoutMode.GRID.value == "grid"

    @pytest.mark.unit
    def test_size_hint_values(self):
        """All size hints map to their document spelling."""
        assert SizeHint.AUTO.value == "auto"
        assert SizeHint.NARROW.value == "narrow"
        assert SizeHint.FILL.value == "fill"


class TestArea:
    """Tests for Area model."""

    @pytest.mark.unit
    def test_accepts_camel_case_keys(self):
        """Document keys are camelCase."""
        area = Area.model_validate(
            {
                "areaId": "root",
                "gridAreas": [["header", "header"], ["nav", "main"]],
                "sizeHint": "fill",
            }
        )
        assert area.area_id == "root"
        assert area.grid_areas == (("header", "header"), ("nav", "main"))
        assert area.size_hint == SizeHint.FILL

    @pytest.mark.unit
    def test_accepts_snake_case_names(self):
        """Attribute names are accepted too."""
        area = Area(area_id="main", layout="vertical")
        assert area.layout == LayoutMode.VERTICAL

    @pytest.mark.unit
    def test_preserves_descriptive_attributes(self):
        """Attributes the engine does not interpret survive validation."""
        area = Area.model_validate({"areaId": "nav", "role": "navigation"})
        assert area.model_extra == {"role": "navigation"}
        assert to_payload(area)["role"] == "navigation"

    @pytest.mark.unit
    def test_child_refs_split_by_prefix(self):
        """@ refs name areas, $ refs name elements."""
        area = Area(area_id="form", children=["$email", "@actions", "$password"])
        assert area.area_refs == ["actions"]
        assert area.element_refs == ["email", "password"]

    @pytest.mark.unit
    def test_no_children(self):
        """Absent children yield empty ref lists."""
        area = Area(area_id="empty")
        assert area.area_refs == []
        assert area.element_refs == []

    @pytest.mark.unit
    def test_is_frozen(self):
        """Areas cannot be mutated in place."""
        area = Area(area_id="main")
        with pytest.raises(ValidationError):
            area.name = "changed"

    @pytest.mark.unit
    def test_invalid_layout_rejected(self):
        """Unknown layout modes fail validation."""
        with pytest.raises(ValidationError):
            Area.model_validate({"areaId": "main", "layout": "diagonal"})


class TestResponsiveOverride:
    """Tests for per-viewport override records."""

    @pytest.mark.unit
    def test_tracks_explicit_keys(self):
        """Only written keys count as defined."""
        override = ResponsiveOverride.model_validate({"hidden": True})
        assert override.defines("hidden")
        assert not override.defines("layout")

    @pytest.mark.unit
    def test_explicit_null_is_defined(self):
        """An explicit null is distinguishable from an absent key."""
        override = ResponsiveOverride.model_validate({"gridAreas": None})
        assert override.defines("grid_areas")
        assert override.grid_areas is None

    @pytest.mark.unit
    def test_unknown_key_rejected(self):
        """Typos in override keys are errors."""
        with pytest.raises(ValidationError):
            ResponsiveOverride.model_validate({"hiden": True})

    @pytest.mark.unit
    def test_nested_in_area(self):
        """Overrides are keyed by viewport id inside an area."""
        area = Area.model_validate(
            {
                "areaId": "nav",
                "responsiveBehavior": {"mobile": {"hidden": True}},
            }
        )
        assert area.responsive_behavior["mobile"].hidden is True


class TestEvents:
    """Tests for Event and EventAction models."""

    @pytest.mark.unit
    def test_action_kind(self):
        """navigate actions are enumerated, everything else is other."""
        assert EventAction(type="navigate", target="home").kind == ActionKind.NAVIGATE
        assert EventAction(type="apiCall").kind == ActionKind.OTHER

    @pytest.mark.unit
    def test_nested_branches(self):
        """onSuccess and onError hold nested actions."""
        action = EventAction.model_validate(
            {
                "type": "apiCall",
                "interfaceRef": "auth.login",
                "onSuccess": [{"type": "navigate", "target": "dashboard"}],
                "onError": [{"type": "showError"}],
            }
        )
        assert action.on_success[0].target == "dashboard"
        assert action.on_error[0].kind == ActionKind.OTHER

    @pytest.mark.unit
    def test_events_document(self):
        """events.yaml wraps the list under an events key."""
        document = EventsDocument.model_validate(
            {
                "events": [
                    {
                        "eventId": "submit",
                        "trigger": {"element": "login-button", "event": "click"},
                        "actions": [{"type": "navigate", "target": "home"}],
                    }
                ]
            }
        )
        assert document.events[0].trigger_element == "login-button"

    @pytest.mark.unit
    def test_trigger_optional(self):
        """Events without a trigger have no trigger element."""
        document = EventsDocument.model_validate({"events": [{"eventId": "x"}]})
        assert document.events[0].trigger_element is None


class TestLayoutDocument:
    """Tests for LayoutDocument model."""

    @pytest.mark.unit
    def test_full_document(self):
        """A screen layout with extends and mainContent validates."""
        document = LayoutDocument.model_validate(
            {
                "screenId": "login",
                "title": "Login",
                "extends": "_shared/app-layout",
                "mainContent": {"layout": "vertical", "children": ["$email"]},
                "elements": [{"elementId": "email", "fieldRef": "email"}],
            }
        )
        assert document.extends == "_shared/app-layout"
        assert document.main_content.children == ("$email",)
        assert document.elements[0].field_ref == "email"
        assert document.areas == ()

    @pytest.mark.unit
    def test_element_defaults(self):
        """Elements start with no resolved field and no events."""
        element = Element(element_id="ok")
        assert element.field is None
        assert element.events == ()

    @pytest.mark.unit
    def test_null_collections_read_as_empty(self):
        """Null list keys become empty tuples; nullable fields stay null."""
        document = LayoutDocument.model_validate(
            {"areas": [{"areaId": "a", "children": None}], "elements": None}
        )
        assert document.elements == ()
        assert document.areas[0].children is None

        action = EventAction.model_validate(
            {"type": "navigate", "target": "home", "onSuccess": None, "onError": None}
        )
        assert (action.on_success, action.on_error) == ((), ())
        assert SiteManifest.model_validate({"viewports": None}).viewports == ()


class TestSiteManifest:
    """Tests for SiteManifest model."""

    @pytest.mark.unit
    def test_nested_name_wins(self):
        """site.name takes precedence over the top-level name."""
        manifest = SiteManifest.model_validate(
            {"name": "Top", "site": {"name": "Nested"}}
        )
        assert manifest.display_name == "Nested"

    @pytest.mark.unit
    def test_top_level_name(self):
        """The top-level name is used when no nested name exists."""
        assert SiteManifest(name="Top").display_name == "Top"

    @pytest.mark.unit
    def test_no_name(self):
        """Manifests may omit the name entirely."""
        assert SiteManifest().display_name is None

    @pytest.mark.unit
    def test_viewports(self):
        """Viewports are read from the top level."""
        manifest = SiteManifest.model_validate(
            {"viewports": [{"id": "mobile", "name": "Mobile", "maxWidth": 767}]}
        )
        assert manifest.viewports[0].max_width == 767


class TestReadModels:
    """Tests for resolved read models."""

    @pytest.mark.unit
    def test_root_area_is_first_with_grid(self):
        """The root is the first area with a non-empty template."""
        detail = ScreenDetail(
            screen_id="home",
            title="Home",
            areas=[
                Area(area_id="a", grid_areas=[]),
                Area(area_id="b", grid_areas=[["x"]]),
                Area(area_id="c", grid_areas=[["y"]]),
            ],
        )
        assert detail.root_area.area_id == "b"

    @pytest.mark.unit
    def test_no_root_area(self):
        """Screens without a grid template have no root."""
        detail = ScreenDetail(screen_id="home", title="Home")
        assert detail.root_area is None

    @pytest.mark.unit
    def test_scene_iteration_order(self):
        """Scene iteration is depth-first pre-order."""
        scene = Scene.model_validate(
            {
                "screenId": "home",
                "title": "Home",
                "viewportId": "desktop",
                "mode": "stack",
                "width": 640,
                "height": 300,
                "areas": [
                    {
                        "areaId": "a",
                        "x": 0,
                        "y": 0,
                        "width": 10,
                        "height": 10,
                        "children": [
                            {"areaId": "a1", "x": 0, "y": 0, "width": 5, "height": 5}
                        ],
                    },
                    {"areaId": "b", "x": 0, "y": 20, "width": 10, "height": 10},
                ],
            }
        )
        assert [box.area_id for box in scene.iter_areas()] == ["a", "a1", "b"]

    @pytest.mark.unit
    def test_payload_uses_document_keys(self):
        """Serialized payloads use camelCase keys and drop unset values."""
        payload = to_payload(Area(area_id="main", size_hint="fill"))
        assert payload == {"areaId": "main", "sizeHint": "fill", "inherited": False}
