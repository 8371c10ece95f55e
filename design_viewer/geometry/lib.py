"""Geometry layout engine.

Turns a resolved ScreenDetail into a Scene of absolutely positioned area and
element rectangles for one viewport. Three root strategies:

- grid: the root area's template, pruned of hidden areas, laid out in
  fixed-width columns.
- stack: the root exists but has no usable template; its child areas are
  stacked at a fixed width.
- fallback: no root; top-level areas are stacked at the fallback width.

Inside an area, children are arranged by the area's effective layout.
Measurement (``required_height``) and placement (``place_area``) share the
same width apportionment so a placed child always fits its measured height.
"""

import logging
import math
from dataclasses import dataclass

from design_viewer.schema import (
    Area,
    AreaBox,
    Element,
    ElementBox,
    GridCell,
    GridSpec,
    GridTemplate,
    LayoutHint,
    LayoutMode,
    Scene,
    SceneMode,
    ScreenDetail,
    SizeHint,
)
from design_viewer.viewport import effective_attributes, is_hidden, prune_grid

logger = logging.getLogger(__name__)

# =============================================================================
# Constants
# =============================================================================

PADDING = 20
TITLE_HEIGHT = 30
CELL_WIDTH = 180
MIN_CELL_HEIGHT = 60
ELEMENT_HEIGHT = 28
ELEMENT_DRAWN_HEIGHT = ELEMENT_HEIGHT - 4
ELEMENT_GAP = 4
GAP = 10
HEADER_HEIGHT = 24
AREA_INSET = 6
AREA_BOTTOM = 8
ELEMENT_PITCH = 54
WRAPPED_ELEMENT_WIDTH = 50
MAX_ROW_ELEMENT_WIDTH = 70
NARROW_WIDTH = 120
AUTO_WIDTH = 100
MIN_FILL_WIDTH = 100
STACK_WIDTH = 600
FALLBACK_CANVAS_WIDTH = 800

# Content origin inside the canvas
ORIGIN_X = PADDING
ORIGIN_Y = PADDING + TITLE_HEIGHT

# Vertical space below the last row for the canvas border
CANVAS_FOOTER = 50


# =============================================================================
# Grid Cells
# =============================================================================


def calculate_grid_cells(grid_areas: GridTemplate) -> list[GridCell]:
    """Derive cell placements from a template.

    Spans are inferred from contiguous repetition: rightward for columns,
    downward for rows, measured from an id's first occurrence (row-major).
    Later occurrences of an id are ignored.

    Args:
        grid_areas: Template rows of area ids; rows may differ in length.

    Returns:
        One GridCell per distinct id, in first-occurrence order.

    Example:
        >>> [c.col_span for c in calculate_grid_cells((("a", "a", "b"),))]
        [2, 1]
    """
    cells = []
    seen: set[str] = set()

    for row, cols in enumerate(grid_areas):
        for col, area_id in enumerate(cols):
            if area_id in seen:
                continue
            seen.add(area_id)

            col_span = 0
            while col + col_span < len(cols) and cols[col + col_span] == area_id:
                col_span += 1

            row_span = 0
            while (
                row + row_span < len(grid_areas)
                and col < len(grid_areas[row + row_span])
                and grid_areas[row + row_span][col] == area_id
            ):
                row_span += 1

            cells.append(
                GridCell(
                    area_id=area_id,
                    start_col=col,
                    start_row=row,
                    col_span=col_span,
                    row_span=row_span,
                )
            )

    return cells


def cell_width(span: int) -> float:
    """Width of a cell spanning ``span`` columns."""
    return span * CELL_WIDTH + (span - 1) * GAP


# =============================================================================
# Layout Engine
# =============================================================================


@dataclass(frozen=True)
class _Children:
    """Visible, resolved children of an area."""

    elements: tuple[Element, ...]
    areas: tuple[Area, ...]
    missing: tuple[str, ...]
    cyclic: tuple[str, ...]


class LayoutEngine:
    """Computes geometry for one screen at one viewport.

    Args:
        areas: Resolved areas of the screen.
        elements: Resolved elements of the screen.
        viewport_id: Viewport whose overrides apply.

    Example:
        >>> engine = LayoutEngine(detail.areas, detail.elements, "desktop")
        >>> engine.required_height(detail.areas[0], 180)
        60
    """

    def __init__(self, areas, elements, viewport_id: str | None):
        self.viewport_id = viewport_id
        self._areas = {area.area_id: area for area in areas}
        self._elements = {element.element_id: element for element in elements}

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def area(self, area_id: str) -> Area | None:
        return self._areas.get(area_id)

    def is_visible(self, area_id: str) -> bool:
        """Whether ``area_id`` names an existing, non-hidden area."""
        area = self._areas.get(area_id)
        return area is not None and not is_hidden(area, self.viewport_id)

    def visible_area_ids(self) -> list[str]:
        return [area_id for area_id in self._areas if self.is_visible(area_id)]

    def children(self, area: Area, path: frozenset[str] = frozenset()) -> _Children:
        """Resolve the visible children of ``area``.

        Hidden children are excluded with their whole subtree. Area refs back
        into ``path`` (the ancestors being laid out) are reported as cyclic.
        """
        elements, areas, missing, cyclic = [], [], [], []

        for element_id in area.element_refs:
            element = self._elements.get(element_id)
            if element is None:
                missing.append(f"${element_id}")
            elif not is_hidden(element, self.viewport_id):
                elements.append(element)

        for area_id in area.area_refs:
            child = self._areas.get(area_id)
            if child is None:
                missing.append(f"@{area_id}")
            elif area_id in path or area_id == area.area_id:
                cyclic.append(area_id)
            elif not is_hidden(child, self.viewport_id):
                areas.append(child)

        return _Children(tuple(elements), tuple(areas), tuple(missing), tuple(cyclic))

    def row_widths(self, areas: tuple[Area, ...], inner_width: float) -> list[float]:
        """Widths of child areas laid out in one horizontal row.

        narrow and auto areas get fixed widths; fill (or unset) areas share
        what remains, never narrower than MIN_FILL_WIDTH.
        """
        hints = [effective_attributes(a, self.viewport_id).size_hint for a in areas]
        narrow = hints.count(SizeHint.NARROW.value)
        auto = hints.count(SizeHint.AUTO.value)
        fill = len(hints) - narrow - auto

        used = narrow * NARROW_WIDTH + auto * AUTO_WIDTH + (len(areas) - 1) * ELEMENT_GAP
        fill_width = (inner_width - used) / fill if fill else 0

        widths = []
        for hint in hints:
            if hint == SizeHint.NARROW.value:
                widths.append(NARROW_WIDTH)
            elif hint == SizeHint.AUTO.value:
                widths.append(AUTO_WIDTH)
            else:
                widths.append(max(fill_width, MIN_FILL_WIDTH))
        return widths

    # -------------------------------------------------------------------------
    # Measurement
    # -------------------------------------------------------------------------

    def required_height(
        self, area: Area, width: float, path: frozenset[str] = frozenset()
    ) -> float:
        """Height ``area`` needs when laid out at ``width``.

        Args:
            area: Area to measure.
            width: Outer width of the area.
            path: Ids of the ancestors being laid out.

        Returns:
            max(MIN_CELL_HEIGHT, header + content + bottom margin).
        """
        path = path | {area.area_id}
        inner = width - 2 * AREA_INSET
        layout = effective_attributes(area, self.viewport_id).layout
        kids = self.children(area, path)

        content = HEADER_HEIGHT
        if layout == LayoutMode.VERTICAL.value:
            content += len(kids.elements) * (ELEMENT_HEIGHT + ELEMENT_GAP)
            for child in kids.areas:
                content += self.required_height(child, inner, path) + ELEMENT_GAP
        elif layout == LayoutMode.HORIZONTAL.value:
            if kids.elements:
                content += ELEMENT_HEIGHT + ELEMENT_GAP
            if kids.areas:
                widths = self.row_widths(kids.areas, inner)
                tallest = max(
                    self.required_height(child, w, path)
                    for child, w in zip(kids.areas, widths)
                )
                content += tallest + ELEMENT_GAP
        else:
            per_row = max(1, math.floor(inner / ELEMENT_PITCH))
            rows = math.ceil(len(kids.elements) / per_row)
            content += rows * (ELEMENT_HEIGHT + ELEMENT_GAP)
            for child in kids.areas:
                content += self.required_height(child, inner, path) + ELEMENT_GAP

        return max(MIN_CELL_HEIGHT, content + AREA_BOTTOM)

    # -------------------------------------------------------------------------
    # Placement
    # -------------------------------------------------------------------------

    def _element_box(self, element: Element, x: float, y: float, width: float) -> ElementBox:
        field_type = element.field.type if element.field and element.field.type else None
        return ElementBox(
            element_id=element.element_id,
            x=x,
            y=y,
            width=width,
            height=ELEMENT_DRAWN_HEIGHT,
            field_type=field_type,
            layout_hint=effective_attributes(element, self.viewport_id).layout_hint,
            has_events=bool(element.events),
        )

    def _place_row_elements(
        self, elements: tuple[Element, ...], x: float, y: float, width: float
    ) -> list[ElementBox]:
        """Place elements in one row, partitioned by layout hint."""
        inner = width - 2 * AREA_INSET
        count = len(elements)
        elem_width = min(
            MAX_ROW_ELEMENT_WIDTH, (inner - (count - 1) * ELEMENT_GAP) / max(count, 2)
        )
        step = elem_width + ELEMENT_GAP

        hints = [effective_attributes(e, self.viewport_id).layout_hint for e in elements]
        right = [i for i, h in enumerate(hints) if h == LayoutHint.RIGHT_ALIGNED.value]
        center = [i for i, h in enumerate(hints) if h == LayoutHint.CENTERED.value]
        # Any other hint packs from the left
        left = [i for i in range(count) if i not in right and i not in center]

        positions: dict[int, float] = {}
        for n, i in enumerate(left):
            positions[i] = x + AREA_INSET + n * step
        for n, i in enumerate(reversed(right)):
            positions[i] = x + width - AREA_INSET - elem_width - n * step
        if center:
            center_width = len(center) * elem_width + (len(center) - 1) * ELEMENT_GAP
            start = x + AREA_INSET + (inner - center_width) / 2
            for n, i in enumerate(center):
                positions[i] = start + n * step

        return [
            self._element_box(element, positions[i], y, elem_width)
            for i, element in enumerate(elements)
        ]

    def place_area(
        self,
        area: Area,
        x: float,
        y: float,
        width: float,
        height: float,
        depth: int = 0,
        path: frozenset[str] = frozenset(),
    ) -> AreaBox:
        """Place ``area`` and its visible descendants.

        Args:
            area: Area to place.
            x: Absolute left edge.
            y: Absolute top edge.
            width: Outer width.
            height: Outer height (the cell or measured height).
            depth: Nesting depth, 0 for root-level boxes.
            path: Ids of the ancestors being laid out.

        Returns:
            AreaBox with absolute coordinates.
        """
        path = path | {area.area_id}
        attributes = effective_attributes(area, self.viewport_id)
        inner = width - 2 * AREA_INSET
        kids = self.children(area, path)

        for ref in kids.missing:
            logger.debug(f"Dropping unresolved child {ref} of area {area.area_id}")
        for ref in kids.cyclic:
            logger.debug(f"Skipping cyclic child @{ref} of area {area.area_id}")

        element_boxes: list[ElementBox] = []
        child_boxes: list[AreaBox] = []
        current_y = y + HEADER_HEIGHT
        child_x = x + AREA_INSET

        if attributes.layout == LayoutMode.HORIZONTAL.value:
            if kids.elements:
                element_boxes = self._place_row_elements(kids.elements, x, current_y, width)
                current_y += ELEMENT_HEIGHT + ELEMENT_GAP
            if kids.areas:
                widths = self.row_widths(kids.areas, inner)
                tallest = max(
                    self.required_height(child, w, path)
                    for child, w in zip(kids.areas, widths)
                )
                for child, w in zip(kids.areas, widths):
                    child_boxes.append(
                        self.place_area(child, child_x, current_y, w, tallest, depth + 1, path)
                    )
                    child_x += w + ELEMENT_GAP
        else:
            if attributes.layout == LayoutMode.VERTICAL.value:
                for element in kids.elements:
                    element_boxes.append(self._element_box(element, child_x, current_y, inner))
                    current_y += ELEMENT_HEIGHT + ELEMENT_GAP
            else:
                per_row = max(1, math.floor(inner / ELEMENT_PITCH))
                for i, element in enumerate(kids.elements):
                    ex = child_x + (i % per_row) * ELEMENT_PITCH
                    ey = current_y + (i // per_row) * (ELEMENT_HEIGHT + ELEMENT_GAP)
                    element_boxes.append(
                        self._element_box(element, ex, ey, WRAPPED_ELEMENT_WIDTH)
                    )
                current_y += math.ceil(len(kids.elements) / per_row) * (
                    ELEMENT_HEIGHT + ELEMENT_GAP
                )

            for child in kids.areas:
                child_height = self.required_height(child, inner, path)
                child_boxes.append(
                    self.place_area(child, child_x, current_y, inner, child_height, depth + 1, path)
                )
                current_y += child_height + ELEMENT_GAP

        return AreaBox(
            area_id=area.area_id,
            name=area.name,
            x=x,
            y=y,
            width=width,
            height=height,
            depth=depth,
            layout=attributes.layout,
            size_hint=attributes.size_hint,
            inherited=area.inherited,
            elements=tuple(element_boxes),
            children=tuple(child_boxes),
        )

    def stack(
        self, areas, width: float, path: frozenset[str] = frozenset()
    ) -> tuple[list[AreaBox], float]:
        """Stack ``areas`` vertically from the content origin.

        Returns:
            Placed boxes and the total height consumed, one GAP per area.
        """
        boxes = []
        offset = 0.0
        for area in areas:
            height = self.required_height(area, width, path)
            boxes.append(self.place_area(area, ORIGIN_X, ORIGIN_Y + offset, width, height, 0, path))
            offset += height + GAP
        return boxes, offset


# =============================================================================
# Scene Construction
# =============================================================================


def _grid_scene(engine: LayoutEngine, detail: ScreenDetail, root: Area, template: GridTemplate) -> Scene:
    path = frozenset({root.area_id})
    cells = calculate_grid_cells(template)
    rows = max(cell.start_row + cell.row_span for cell in cells)
    cols = max(cell.start_col + cell.col_span for cell in cells)

    # Spanning cells do not size rows
    heights = [float(MIN_CELL_HEIGHT)] * rows
    for cell in cells:
        if cell.row_span == 1:
            area = engine.area(cell.area_id)
            needed = engine.required_height(area, cell_width(cell.col_span), path)
            heights[cell.start_row] = max(heights[cell.start_row], needed)

    offsets = [0.0]
    for height in heights[:-1]:
        offsets.append(offsets[-1] + height + GAP)

    boxes = []
    for cell in cells:
        spanned = heights[cell.start_row : cell.start_row + cell.row_span]
        boxes.append(
            engine.place_area(
                engine.area(cell.area_id),
                ORIGIN_X + cell.start_col * (CELL_WIDTH + GAP),
                ORIGIN_Y + offsets[cell.start_row],
                cell_width(cell.col_span),
                sum(spanned) + (len(spanned) - 1) * GAP,
                0,
                path,
            )
        )

    return Scene(
        screen_id=detail.screen_id,
        title=detail.title,
        viewport_id=engine.viewport_id,
        mode=SceneMode.GRID,
        width=2 * PADDING + cell_width(cols),
        height=2 * PADDING + sum(heights) + (rows - 1) * GAP + CANVAS_FOOTER,
        root_area_id=root.area_id,
        grid=GridSpec(
            rows=rows,
            cols=cols,
            cells=tuple(cells),
            row_heights=tuple(heights),
            row_offsets=tuple(offsets),
        ),
        areas=tuple(boxes),
    )


def _stack_scene(engine: LayoutEngine, detail: ScreenDetail, root: Area) -> Scene:
    path = frozenset({root.area_id})
    kids = engine.children(root, path)
    boxes, total = engine.stack(kids.areas, STACK_WIDTH, path)
    return Scene(
        screen_id=detail.screen_id,
        title=detail.title,
        viewport_id=engine.viewport_id,
        mode=SceneMode.STACK,
        width=2 * PADDING + STACK_WIDTH,
        height=2 * PADDING + total + CANVAS_FOOTER,
        root_area_id=root.area_id,
        areas=tuple(boxes),
    )


def _fallback_scene(engine: LayoutEngine, detail: ScreenDetail) -> Scene:
    referenced = {ref for area in detail.areas for ref in area.area_refs}
    top_level = [
        area
        for area in detail.areas
        if area.area_id not in referenced and engine.is_visible(area.area_id)
    ]
    boxes, total = engine.stack(top_level, FALLBACK_CANVAS_WIDTH - 2 * PADDING)
    return Scene(
        screen_id=detail.screen_id,
        title=detail.title,
        viewport_id=engine.viewport_id,
        mode=SceneMode.FALLBACK,
        width=FALLBACK_CANVAS_WIDTH,
        height=2 * PADDING + total + CANVAS_FOOTER,
        areas=tuple(boxes),
    )


def build_scene(detail: ScreenDetail, viewport_id: str) -> Scene:
    """Lay out a resolved screen at one viewport.

    Args:
        detail: Resolved screen.
        viewport_id: Viewport whose overrides apply.

    Returns:
        Scene with absolute coordinates; content starts at (20, 50).
    """
    engine = LayoutEngine(detail.areas, detail.elements, viewport_id)
    root = detail.root_area

    if root is None:
        return _fallback_scene(engine, detail)

    attributes = effective_attributes(root, viewport_id)
    if (attributes.layout or LayoutMode.GRID.value) != LayoutMode.VERTICAL.value:
        template = prune_grid(attributes.grid_areas, engine.visible_area_ids())
        if template:
            return _grid_scene(engine, detail, root, template)

    return _stack_scene(engine, detail, root)


__all__ = [
    # Constants
    "PADDING",
    "TITLE_HEIGHT",
    "CELL_WIDTH",
    "MIN_CELL_HEIGHT",
    "ELEMENT_HEIGHT",
    "ELEMENT_GAP",
    "GAP",
    "HEADER_HEIGHT",
    "STACK_WIDTH",
    "FALLBACK_CANVAS_WIDTH",
    # Functions
    "calculate_grid_cells",
    "cell_width",
    "build_scene",
    # Engine
    "LayoutEngine",
]
