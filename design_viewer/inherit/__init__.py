"""Inherit module - merges screen documents with shared site documents."""

from .lib import (
    MAIN_CONTENT_AREA_ID,
    ScreenSources,
    attach_fields_and_events,
    inject_main_content,
    merge_events,
    merge_fields,
    overlay,
    overlay_areas,
    overlay_elements,
    resolve_screen,
    shared_areas,
    shared_elements,
)

__all__ = [
    "MAIN_CONTENT_AREA_ID",
    "ScreenSources",
    "overlay",
    "shared_areas",
    "shared_elements",
    "merge_fields",
    "overlay_areas",
    "overlay_elements",
    "inject_main_content",
    "merge_events",
    "attach_fields_and_events",
    "resolve_screen",
]
