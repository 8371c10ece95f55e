"""Unit tests for the geometry layout engine."""

import logging

import pytest

from design_viewer.geometry import LayoutEngine, build_scene, calculate_grid_cells
from design_viewer.schema import Area, Element, ScreenDetail


def _detail(areas: list[dict], elements: list[dict] | None = None) -> ScreenDetail:
    return ScreenDetail.model_validate(
        {
            "screenId": "s",
            "title": "S",
            "areas": areas,
            "elements": elements or [],
        }
    )


def _elements(*ids: str, **hints: str) -> list[dict]:
    return [
        {"elementId": element_id, "layoutHint": hints.get(element_id.replace("-", "_"))}
        for element_id in ids
    ]


def _boxes(scene):
    return {box.area_id: box for box in scene.iter_areas()}


@pytest.fixture
def app_detail() -> ScreenDetail:
    """Two-row grid: a spanning header, then sidebar and main."""
    return _detail(
        [
            {
                "areaId": "root",
                "gridAreas": [["header", "header"], ["sidebar", "main"]],
                "responsiveBehavior": {"mobile": {"gridAreas": [["header"], ["main"]]}},
            },
            {"areaId": "header", "layout": "horizontal", "children": ["$logo", "$cart"]},
            {
                "areaId": "sidebar",
                "layout": "vertical",
                "children": ["$nav"],
                "responsiveBehavior": {"mobile": {"hidden": True}},
            },
            {"areaId": "main", "layout": "vertical", "children": ["$a", "$b"]},
        ],
        _elements("logo", "cart", "nav", "a", "b", cart="rightAligned"),
    )


class TestGridCells:
    """Tests for grid span detection."""

    @pytest.mark.unit
    def test_spans(self):
        """Spans follow contiguous repetition."""
        cells = calculate_grid_cells((("a", "a", "b"), ("c", "c", "b")))
        spans = {
            c.area_id: (c.start_col, c.start_row, c.col_span, c.row_span) for c in cells
        }
        assert spans == {"a": (0, 0, 2, 1), "b": (2, 0, 1, 2), "c": (0, 1, 2, 1)}
        assert [c.area_id for c in cells] == ["a", "b", "c"]

    @pytest.mark.unit
    def test_ragged_rows(self):
        """Short rows stop row spans without failing."""
        cells = calculate_grid_cells((("a", "b"), ("a",)))
        spans = {c.area_id: (c.col_span, c.row_span) for c in cells}
        assert spans == {"a": (1, 2), "b": (1, 1)}

    @pytest.mark.unit
    def test_first_occurrence_only(self):
        """Later, disconnected occurrences of an id are ignored."""
        cells = calculate_grid_cells((("a", "b", "a"),))
        assert [(c.area_id, c.start_col, c.col_span) for c in cells] == [
            ("a", 0, 1),
            ("b", 1, 1),
        ]


class TestGridScene:
    """Tests for grid mode."""

    @pytest.mark.unit
    def test_grid_dimensions(self, app_detail):
        """Rows size to their tallest single-row cell."""
        scene = build_scene(app_detail, "desktop")
        assert scene.mode == "grid"
        assert scene.root_area_id == "root"
        assert (scene.grid.rows, scene.grid.cols) == (2, 2)
        assert scene.grid.row_heights == (64, 96)
        assert scene.grid.row_offsets == (0, 74)
        assert (scene.width, scene.height) == (410, 260)

    @pytest.mark.unit
    def test_cell_placement(self, app_detail):
        """Cells are placed from the content origin."""
        boxes = _boxes(build_scene(app_detail, "desktop"))
        header, main = boxes["header"], boxes["main"]
        assert (header.x, header.y, header.width, header.height) == (20, 50, 370, 64)
        assert (main.x, main.y, main.width, main.height) == (210, 124, 180, 96)

    @pytest.mark.unit
    def test_vertical_elements(self, app_detail):
        """Vertical areas stack elements at the inner width."""
        boxes = _boxes(build_scene(app_detail, "desktop"))
        a, b = boxes["main"].elements
        assert (a.x, a.y, a.width, a.height) == (216, 148, 168, 24)
        assert b.y == 180

    @pytest.mark.unit
    def test_right_aligned_elements(self, app_detail):
        """Right-aligned elements pack from the right edge."""
        boxes = _boxes(build_scene(app_detail, "desktop"))
        logo, cart = boxes["header"].elements
        assert (logo.x, logo.width) == (26, 70)
        assert cart.x == 314
        assert cart.layout_hint == "rightAligned"

    @pytest.mark.unit
    def test_viewport_template_and_hidden_area(self, app_detail):
        """Viewport overrides change the template and drop hidden areas."""
        scene = build_scene(app_detail, "mobile")
        assert scene.mode == "grid"
        assert (scene.grid.rows, scene.grid.cols) == (2, 1)
        assert scene.width == 220
        assert "sidebar" not in _boxes(scene)

    @pytest.mark.unit
    def test_hidden_cell_pruned_from_template(self, app_detail):
        """Hidden areas are removed from the desktop template too."""
        detail = app_detail.model_copy(
            update={
                "areas": tuple(
                    area.model_copy(update={"responsive_behavior": None})
                    if area.area_id != "sidebar"
                    else Area.model_validate(
                        {
                            "areaId": "sidebar",
                            "responsiveBehavior": {"desktop": {"hidden": True}},
                        }
                    )
                    for area in app_detail.areas
                )
            }
        )
        scene = build_scene(detail, "desktop")
        assert [c.area_id for c in scene.grid.cells] == ["header", "main"]
        assert scene.grid.cells[1].start_col == 0

    @pytest.mark.unit
    def test_spanning_cells_do_not_size_rows(self):
        """A tall cell spanning two rows leaves row heights at their minimum."""
        detail = _detail(
            [
                {"areaId": "root", "gridAreas": [["side", "top"], ["side", "bottom"]]},
                {
                    "areaId": "side",
                    "layout": "vertical",
                    "children": ["$1", "$2", "$3", "$4", "$5"],
                },
                {"areaId": "top"},
                {"areaId": "bottom"},
            ],
            _elements("1", "2", "3", "4", "5"),
        )
        scene = build_scene(detail, "desktop")
        assert scene.grid.row_heights == (60, 60)
        assert _boxes(scene)["side"].height == 130


class TestStackScene:
    """Tests for stack mode."""

    @pytest.fixture
    def detail(self) -> ScreenDetail:
        return _detail(
            [
                {
                    "areaId": "root",
                    "gridAreas": [["a"]],
                    "children": ["@a", "@b"],
                    "responsiveBehavior": {
                        "mobile": {"layout": "vertical"},
                        "watch": {"gridAreas": None},
                    },
                },
                {"areaId": "a"},
                {"areaId": "b"},
            ]
        )

    @pytest.mark.unit
    @pytest.mark.parametrize("viewport_id", ["mobile", "watch"])
    def test_stacks_root_children(self, detail, viewport_id):
        """A vertical root or a disabled template stacks the root's children."""
        scene = build_scene(detail, viewport_id)
        assert scene.mode == "stack"
        assert scene.grid is None
        assert [(b.area_id, b.y, b.width) for b in scene.areas] == [
            ("a", 50, 600),
            ("b", 120, 600),
        ]
        assert (scene.width, scene.height) == (640, 230)

    @pytest.mark.unit
    def test_grid_at_other_viewports(self, detail):
        """Without overrides the template is used."""
        assert build_scene(detail, "desktop").mode == "grid"


class TestFallbackScene:
    """Tests for fallback mode and nested layouts."""

    @pytest.fixture
    def login(self) -> ScreenDetail:
        return _detail(
            [
                {
                    "areaId": "form",
                    "layout": "vertical",
                    "children": ["$email", "$password", "@actions"],
                },
                {"areaId": "actions", "layout": "horizontal", "children": ["$cancel", "$submit"]},
            ],
            _elements("email", "password", "cancel", "submit", submit="rightAligned"),
        )

    @pytest.mark.unit
    def test_top_level_areas_only(self, login):
        """Areas referenced as children are not stacked at the top."""
        scene = build_scene(login, "desktop")
        assert scene.mode == "fallback"
        assert [box.area_id for box in scene.areas] == ["form"]
        assert (scene.width, scene.height) == (800, 264)

    @pytest.mark.unit
    def test_nested_geometry(self, login):
        """Nested areas follow the elements of their parent."""
        boxes = _boxes(build_scene(login, "desktop"))
        form, actions = boxes["form"], boxes["actions"]
        assert (form.x, form.y, form.width, form.height) == (20, 50, 760, 164)
        assert (actions.x, actions.y, actions.width, actions.height) == (26, 138, 748, 64)
        assert actions.depth == 1
        cancel, submit = actions.elements
        assert (cancel.x, cancel.y) == (32, 162)
        assert submit.x == 698

    @pytest.mark.unit
    def test_horizontal_size_hints(self):
        """narrow, fill and auto areas share a horizontal row."""
        detail = _detail(
            [
                {"areaId": "row", "layout": "horizontal", "children": ["@n", "@f", "@u"]},
                {"areaId": "n", "sizeHint": "narrow"},
                {"areaId": "f", "sizeHint": "fill"},
                {"areaId": "u", "sizeHint": "auto"},
            ]
        )
        boxes = _boxes(build_scene(detail, "desktop"))
        assert [(boxes[i].x, boxes[i].width) for i in "nfu"] == [
            (26, 120),
            (150, 520),
            (674, 100),
        ]
        assert boxes["row"].height == 96

    @pytest.mark.unit
    def test_wrapped_elements(self):
        """Areas without a layout wrap elements at a fixed pitch."""
        detail = _detail(
            [{"areaId": "box", "children": ["$x", "$y", "$z"]}],
            _elements("x", "y", "z"),
        )
        [box] = build_scene(detail, "desktop").areas
        assert [(e.x, e.width) for e in box.elements] == [(26, 50), (80, 50), (134, 50)]

    @pytest.mark.unit
    def test_centered_elements(self):
        """Centred elements sit in the middle of the inner width."""
        detail = _detail(
            [{"areaId": "bar", "layout": "horizontal", "children": ["$c"]}],
            _elements("c", c="centered"),
        )
        [box] = build_scene(detail, "desktop").areas
        assert box.elements[0].x == 365

    @pytest.mark.unit
    def test_hidden_parent_removes_descendants(self):
        """Hiding an area removes its whole subtree."""
        detail = _detail(
            [
                {"areaId": "page", "layout": "vertical", "children": ["@panel"]},
                {
                    "areaId": "panel",
                    "children": ["@inner", "$x"],
                    "responsiveBehavior": {"mobile": {"hidden": True}},
                },
                {"areaId": "inner", "children": ["$y"]},
            ],
            _elements("x", "y"),
        )
        scene = build_scene(detail, "mobile")
        assert list(_boxes(scene)) == ["page"]
        assert list(scene.iter_elements()) == []
        assert set(_boxes(build_scene(detail, "desktop"))) == {"page", "panel", "inner"}

    @pytest.mark.unit
    def test_hidden_element(self):
        """Hidden elements are not placed."""
        detail = _detail(
            [{"areaId": "box", "layout": "vertical", "children": ["$x", "$y"]}],
            [
                {"elementId": "x", "responsiveBehavior": {"mobile": {"hidden": True}}},
                {"elementId": "y"},
            ],
        )
        [box] = build_scene(detail, "mobile").areas
        assert [e.element_id for e in box.elements] == ["y"]

    @pytest.mark.unit
    def test_cycles_are_skipped(self):
        """Cyclic children terminate instead of recursing forever."""
        detail = _detail(
            [
                {"areaId": "top", "layout": "vertical", "children": ["@a"]},
                {"areaId": "a", "layout": "vertical", "children": ["@b"]},
                {"areaId": "b", "layout": "vertical", "children": ["@a", "@b"]},
            ]
        )
        scene = build_scene(detail, "desktop")
        assert [box.area_id for box in scene.iter_areas()] == ["top", "a", "b"]

    @pytest.mark.unit
    def test_unresolved_children_dropped(self, caplog):
        """Unknown refs are dropped and logged at debug level."""
        detail = _detail([{"areaId": "box", "layout": "vertical", "children": ["@ghost", "$gone"]}])
        with caplog.at_level(logging.DEBUG, logger="design_viewer.geometry.lib"):
            [box] = build_scene(detail, "desktop").areas
        assert box.children == ()
        assert box.elements == ()
        assert "@ghost" in caplog.text
        assert "$gone" in caplog.text

    @pytest.mark.unit
    def test_element_details(self):
        """Element boxes carry field type and event presence."""
        detail = _detail(
            [{"areaId": "box", "layout": "vertical", "children": ["$e"]}],
            [
                {
                    "elementId": "e",
                    "field": {"fieldId": "f", "type": "email"},
                    "events": [{"eventId": "go"}],
                }
            ],
        )
        [box] = build_scene(detail, "desktop").areas
        assert box.elements[0].field_type == "email"
        assert box.elements[0].has_events is True

    @pytest.mark.unit
    def test_empty_screen(self):
        """A screen without areas yields an empty fallback canvas."""
        scene = build_scene(_detail([]), "desktop")
        assert scene.areas == ()
        assert scene.height == 90


class TestMeasurement:
    """Tests for measurement and placement agreement."""

    @pytest.mark.unit
    def test_minimum_height(self):
        """Empty areas take the minimum cell height."""
        engine = LayoutEngine([Area(area_id="a")], [], "desktop")
        assert engine.required_height(Area(area_id="a"), 180) == 60

    @pytest.mark.unit
    def test_children_fit_inside_parents(self, app_detail):
        """Every placed child lies inside its parent box."""
        scene = build_scene(app_detail, "desktop")
        for box in scene.iter_areas():
            for child in box.children:
                assert child.y + child.height <= box.y + box.height
            for element in box.elements:
                assert element.y + element.height <= box.y + box.height

    @pytest.mark.unit
    def test_idempotent(self, app_detail):
        """Laying out the same screen twice gives equal scenes."""
        assert build_scene(app_detail, "mobile") == build_scene(app_detail, "mobile")

    @pytest.mark.unit
    def test_element_ids(self):
        """Elements are looked up by id."""
        engine = LayoutEngine([], [Element(element_id="e")], None)
        assert engine.area("missing") is None
