"""Unit tests for viewport resolution."""

import pytest

from design_viewer.schema import Area, Element, Viewport
from design_viewer.viewport import (
    default_viewport_id,
    effective_attributes,
    effective_value,
    find_viewport,
    is_hidden,
    prune_grid,
)


def _area(**data) -> Area:
    return Area.model_validate({"areaId": "a", **data})


class TestEffectiveValues:
    """Tests for attribute resolution."""

    @pytest.mark.unit
    def test_base_values_without_viewport(self):
        """No viewport means base values."""
        area = _area(layout="horizontal", responsiveBehavior={"mobile": {"layout": "vertical"}})
        assert effective_value(area, "layout", None) == "horizontal"

    @pytest.mark.unit
    def test_override_wins(self):
        """An explicit override replaces the base value."""
        area = _area(layout="horizontal", responsiveBehavior={"mobile": {"layout": "vertical"}})
        assert effective_value(area, "layout", "mobile") == "vertical"
        assert effective_value(area, "layout", "desktop") == "horizontal"

    @pytest.mark.unit
    def test_hidden_override_is_isolated(self):
        """Overriding hidden leaves layout and sizeHint untouched."""
        area = _area(
            layout="vertical",
            sizeHint="narrow",
            responsiveBehavior={"mobile": {"hidden": True}},
        )
        attributes = effective_attributes(area, "mobile")
        assert attributes.hidden is True
        assert attributes.layout == "vertical"
        assert attributes.size_hint == "narrow"

    @pytest.mark.unit
    def test_hidden_defaults_to_false(self):
        """Entities are visible unless an override hides them."""
        assert is_hidden(_area(), "mobile") is False
        assert is_hidden(Element(element_id="e"), None) is False

    @pytest.mark.unit
    def test_null_falls_back_for_ordinary_attributes(self):
        """An explicit null layout keeps the base layout."""
        area = _area(layout="horizontal", responsiveBehavior={"mobile": {"layout": None}})
        assert effective_value(area, "layout", "mobile") == "horizontal"

    @pytest.mark.unit
    def test_null_grid_disables_grid(self):
        """An explicit null gridAreas removes the grid."""
        area = _area(gridAreas=[["x"]], responsiveBehavior={"mobile": {"gridAreas": None}})
        assert effective_value(area, "grid_areas", "mobile") is None
        assert effective_value(area, "grid_areas", "tablet") == (("x",),)

    @pytest.mark.unit
    def test_element_layout_hint(self):
        """Element layout hints are overridable."""
        element = Element.model_validate(
            {
                "elementId": "e",
                "layoutHint": "rightAligned",
                "responsiveBehavior": {"mobile": {"layoutHint": "centered", "order": 2}},
            }
        )
        attributes = effective_attributes(element, "mobile")
        assert attributes.layout_hint == "centered"
        assert attributes.order == 2


class TestDefaultViewport:
    """Tests for default viewport selection."""

    @pytest.mark.unit
    def test_largest_min_width_wins(self):
        """The viewport with the largest minWidth is the default."""
        viewports = [
            Viewport(id="mobile"),
            Viewport(id="desktop", min_width=1024),
            Viewport(id="tablet", min_width=768),
        ]
        assert default_viewport_id(viewports) == "desktop"

    @pytest.mark.unit
    def test_first_declared_wins_ties(self):
        """Ties resolve to the first declared viewport."""
        viewports = [Viewport(id="a"), Viewport(id="b")]
        assert default_viewport_id(viewports) == "a"

    @pytest.mark.unit
    def test_no_viewports(self):
        """Without viewports the sentinel is used."""
        assert default_viewport_id([]) == "desktop"
        assert default_viewport_id([], fallback="wide") == "wide"

    @pytest.mark.unit
    def test_find_viewport(self):
        """Viewports are looked up by id."""
        viewports = [Viewport(id="a"), Viewport(id="b")]
        assert find_viewport(viewports, "b").id == "b"
        assert find_viewport(viewports, "c") is None


class TestPruneGrid:
    """Tests for grid pruning."""

    @pytest.mark.unit
    def test_hidden_cells_dropped(self):
        """Cells naming invisible areas are removed from their row."""
        grid = (("header", "header"), ("sidebar", "main"))
        assert prune_grid(grid, {"header", "main"}) == (("header", "header"), ("main",))

    @pytest.mark.unit
    def test_empty_rows_removed(self):
        """Rows left empty disappear."""
        grid = (("header",), ("footer",))
        assert prune_grid(grid, {"header"}) == (("header",),)

    @pytest.mark.unit
    def test_no_grid(self):
        """A missing template prunes to nothing."""
        assert prune_grid(None, {"a"}) == ()
