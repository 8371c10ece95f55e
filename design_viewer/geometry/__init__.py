"""Geometry module - pixel layout of resolved screens.

Example:
    >>> from design_viewer.geometry import build_scene
    >>> scene = build_scene(detail, "desktop")
    >>> scene.mode
    'grid'
"""

from .lib import (
    CELL_WIDTH,
    ELEMENT_GAP,
    ELEMENT_HEIGHT,
    FALLBACK_CANVAS_WIDTH,
    GAP,
    HEADER_HEIGHT,
    MIN_CELL_HEIGHT,
    PADDING,
    STACK_WIDTH,
    TITLE_HEIGHT,
    LayoutEngine,
    build_scene,
    calculate_grid_cells,
    cell_width,
)

__all__ = [
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
    "calculate_grid_cells",
    "cell_width",
    "build_scene",
    "LayoutEngine",
]
