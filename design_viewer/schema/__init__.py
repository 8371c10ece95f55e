"""Schema module - document and read-model types.

Pydantic models for every YAML document (layouts, fields, events, site
manifests) and for the resolved outputs (ScreenDetail, TransitionGraph, Scene).

Example:
    >>> from design_viewer.schema import Area, LayoutMode
    >>> area = Area.model_validate({"areaId": "header", "layout": "horizontal"})
    >>> area.layout == LayoutMode.HORIZONTAL
    True
"""

from .lib import (
    AREA_REF_PREFIX,
    DEFAULT_VIEWPORT_ID,
    ELEMENT_REF_PREFIX,
    ActionKind,
    Area,
    AreaBox,
    DesignModel,
    Element,
    ElementBox,
    Event,
    EventAction,
    EventsDocument,
    EventTrigger,
    FieldDefinition,
    GridCell,
    GridSpec,
    GridTemplate,
    LayoutDocument,
    LayoutHint,
    LayoutMode,
    MainContent,
    ResponsiveBehavior,
    ResponsiveOverride,
    Scene,
    SceneMode,
    ScreenDetail,
    Site,
    SiteDetail,
    SiteManifest,
    SiteSection,
    SizeHint,
    TransitionEdge,
    TransitionGraph,
    TransitionNode,
    Viewport,
    to_payload,
)

__all__ = [
    # Enums
    "LayoutMode",
    "SizeHint",
    "LayoutHint",
    "ActionKind",
    "SceneMode",
    # Constants
    "DEFAULT_VIEWPORT_ID",
    "AREA_REF_PREFIX",
    "ELEMENT_REF_PREFIX",
    # Base
    "DesignModel",
    "to_payload",
    # Documents
    "FieldDefinition",
    "EventTrigger",
    "EventAction",
    "Event",
    "EventsDocument",
    "ResponsiveOverride",
    "ResponsiveBehavior",
    "Area",
    "Element",
    "MainContent",
    "LayoutDocument",
    "Viewport",
    "SiteSection",
    "SiteManifest",
    # Read models
    "Site",
    "SiteDetail",
    "TransitionNode",
    "TransitionEdge",
    "TransitionGraph",
    "ScreenDetail",
    # Scene
    "ElementBox",
    "AreaBox",
    "GridCell",
    "GridSpec",
    "GridTemplate",
    "Scene",
]
