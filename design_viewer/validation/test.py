"""Tests for structural validation."""

import pytest

from design_viewer.schema import ScreenDetail

from .lib import is_valid, validate_screen_detail


def _detail(areas, elements=(), viewports=()) -> ScreenDetail:
    return ScreenDetail.model_validate(
        {
            "screenId": "s",
            "title": "S",
            "areas": list(areas),
            "elements": list(elements),
            "viewports": list(viewports),
        }
    )


def _types(issues) -> list[str]:
    return [issue.issue_type for issue in issues]


class TestValidateScreen:
    """Tests for validate_screen_detail."""

    @pytest.mark.unit
    def test_valid_screen(self):
        """A consistent screen has no issues."""
        detail = _detail(
            [
                {"areaId": "root", "gridAreas": [["a", "b"]]},
                {"areaId": "a", "children": ["$e"]},
                {"areaId": "b"},
            ],
            [{"elementId": "e"}],
        )
        assert validate_screen_detail(detail) == []
        assert is_valid(detail)

    @pytest.mark.unit
    def test_unresolved_children(self):
        """Dangling area and element refs are reported."""
        detail = _detail([{"areaId": "a", "children": ["@ghost", "$gone"]}])
        issues = validate_screen_detail(detail)
        assert _types(issues) == ["unresolved_child", "unresolved_child"]
        assert all(issue.node_id == "a" for issue in issues)

    @pytest.mark.unit
    def test_unprefixed_child(self):
        """Refs without a prefix are malformed."""
        issues = validate_screen_detail(_detail([{"areaId": "a", "children": ["b"]}]))
        assert _types(issues) == ["invalid_child_ref"]

    @pytest.mark.unit
    def test_cycle_reported_once(self):
        """A two-area cycle yields a single issue."""
        detail = _detail(
            [
                {"areaId": "a", "children": ["@b"]},
                {"areaId": "b", "children": ["@a"]},
            ]
        )
        issues = validate_screen_detail(detail)
        assert _types(issues) == ["cycle"]
        assert "a -> b -> a" in issues[0].message

    @pytest.mark.unit
    def test_self_reference(self):
        """An area listing itself is a cycle."""
        issues = validate_screen_detail(_detail([{"areaId": "a", "children": ["@a"]}]))
        assert _types(issues) == ["cycle"]

    @pytest.mark.unit
    def test_grid_problems(self):
        """Ragged templates and unknown cells are reported, overrides included."""
        detail = _detail(
            [
                {
                    "areaId": "root",
                    "gridAreas": [["a", "a"], ["a"]],
                    "responsiveBehavior": {"mobile": {"gridAreas": [["z"]]}},
                },
                {"areaId": "a"},
            ]
        )
        issues = validate_screen_detail(detail)
        assert _types(issues) == ["non_rectangular_grid", "unknown_grid_area"]
        assert "mobile" in issues[1].message

    @pytest.mark.unit
    def test_unknown_viewport(self):
        """Overrides for undeclared viewports are reported."""
        detail = _detail(
            [{"areaId": "a", "responsiveBehavior": {"phablet": {"hidden": True}}}],
            [{"elementId": "e", "responsiveBehavior": {"mobile": {"hidden": True}}}],
            [{"id": "mobile"}],
        )
        issues = validate_screen_detail(detail)
        assert [(i.node_id, i.issue_type) for i in issues] == [("a", "unknown_viewport")]

    @pytest.mark.unit
    def test_viewports_unchecked_without_declarations(self):
        """Sites without viewports accept any override key."""
        detail = _detail([{"areaId": "a", "responsiveBehavior": {"any": {"hidden": True}}}])
        assert validate_screen_detail(detail) == []

    @pytest.mark.unit
    def test_missing_field(self):
        """Unresolved fieldRefs are reported."""
        detail = _detail([], [{"elementId": "e", "fieldRef": "ghost"}])
        assert _types(validate_screen_detail(detail)) == ["missing_field"]
