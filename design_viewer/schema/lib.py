"""Authoritative document and read-model types for design-viewer.

This module is the **Source of Truth** for the shapes that flow through the
resolution pipeline:

    YAML documents  ->  LayoutDocument / FieldDefinition / Event / SiteManifest
    resolution      ->  ScreenDetail, TransitionGraph
    geometry        ->  Scene (AreaBox / ElementBox)

Documents use camelCase keys (``areaId``, ``gridAreas``, ``responsiveBehavior``);
models expose snake_case attributes and accept either spelling on input.
Models are frozen: resolution steps build new instances instead of mutating.

Descriptive attributes that the engine does not interpret (``role``,
``ariaLabel``, ``conditional``, ...) are preserved as extra attributes so the
property inspector can show them.
"""

from enum import Enum
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    StringConstraints,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

# =============================================================================
# Enums
# =============================================================================


class LayoutMode(str, Enum):
    """Child arrangement of an Area.

    - VERTICAL: elements stacked, then child areas stacked
    - HORIZONTAL: elements in one row, child areas in one row
    - GRID: template grid on the root area, wrapped elements elsewhere
    """

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    GRID = "grid"


class SizeHint(str, Enum):
    """Width hint for an Area placed in a horizontal row."""

    AUTO = "auto"
    NARROW = "narrow"
    FILL = "fill"


class LayoutHint(str, Enum):
    """Alignment hint for an Element inside a horizontal Area.

    Documents may carry other hint strings; those are kept verbatim and
    treated like LEFT_ALIGNED by the geometry engine.
    """

    LEFT_ALIGNED = "leftAligned"
    RIGHT_ALIGNED = "rightAligned"
    CENTERED = "centered"


class ActionKind(str, Enum):
    """Enumerated kind of an EventAction."""

    NAVIGATE = "navigate"
    OTHER = "other"


class SceneMode(str, Enum):
    """Root placement strategy chosen by the geometry engine."""

    GRID = "grid"
    STACK = "stack"
    FALLBACK = "fallback"


ViewportId = Annotated[str, StringConstraints(min_length=1, strip_whitespace=True)]
GridTemplate = tuple[tuple[str, ...], ...]

# Sentinel viewport used when a site declares none
DEFAULT_VIEWPORT_ID = "desktop"

# Reference prefixes inside Area.children
AREA_REF_PREFIX = "@"
ELEMENT_REF_PREFIX = "$"


# =============================================================================
# Base Model
# =============================================================================


class DesignModel(BaseModel):
    """Base for all design documents and read models."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=True,
        extra="allow",
    )

    @field_validator("*", mode="before")
    @classmethod
    def empty_collection(cls, value: Any, info: ValidationInfo) -> Any:
        """Read a key left empty in YAML (`elements:`) as an empty collection."""
        if value is None and cls.model_fields[info.field_name].default == ():
            return ()
        return value


def to_payload(model: BaseModel) -> dict[str, Any]:
    """Serialize a model to a JSON-ready dict using document (camelCase) keys.

    Args:
        model: Any design-viewer model.

    Returns:
        dict suitable for json.dumps, without unset optional values.
    """
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


# =============================================================================
# Fields & Events
# =============================================================================


class FieldDefinition(DesignModel):
    """A data-entry definition, independent of visual placement.

    Attributes:
        field_id: Identifier referenced by Element.field_ref.
        name: Machine name.
        type: Field type (text, email, select, ...).
        label: Human-readable label.
        description: Optional long description.
        design_hint: Optional rendering hint for designers.
        validation: Free-form validation rules.
        metadata: Free-form metadata.
    """

    field_id: str
    name: str = ""
    type: str = ""
    label: str = ""
    description: str | None = None
    design_hint: str | None = None
    validation: dict[str, Any] | None = None
    metadata: dict[str, Any] | None = None


class EventTrigger(DesignModel):
    """What fires an Event: an element (or field) id and a DOM-like event."""

    element: str | None = None
    event: str | None = None


class EventAction(DesignModel):
    """One step of an Event's action tree.

    ``on_success`` and ``on_error`` hold nested branches; the tree is shallow
    and acyclic by construction (documents cannot express back references).
    """

    type: str
    target: str | None = None
    interface_ref: str | None = None
    params: dict[str, Any] | None = None
    value: Any = None
    action: str | None = None
    on_success: tuple["EventAction", ...] = ()
    on_error: tuple["EventAction", ...] = ()

    @property
    def kind(self) -> ActionKind:
        """Enumerated action kind derived from ``type``."""
        if self.type == ActionKind.NAVIGATE.value:
            return ActionKind.NAVIGATE
        return ActionKind.OTHER


class Event(DesignModel):
    """A named interaction: trigger plus ordered actions."""

    event_id: str
    name: str | None = None
    description: str | None = None
    trigger: EventTrigger | None = None
    actions: tuple[EventAction, ...] = ()

    @property
    def trigger_element(self) -> str | None:
        """Element or field id that fires this event, if declared."""
        return self.trigger.element if self.trigger else None


class EventsDocument(DesignModel):
    """Contents of an events.yaml / app-events.yaml document."""

    events: tuple[Event, ...] = ()


# =============================================================================
# Layout Documents
# =============================================================================


class ResponsiveOverride(DesignModel):
    """Per-viewport override record.

    Only the keys below are accepted; anything else is rejected when the
    document is loaded. Which keys were explicitly written is tracked through
    ``model_fields_set`` so that an explicit ``gridAreas: null`` can be told
    apart from an absent key.
    """

    model_config = ConfigDict(extra="forbid")

    hidden: bool | None = None
    layout: LayoutMode | None = None
    size_hint: SizeHint | None = None
    grid_areas: GridTemplate | None = None
    layout_hint: str | None = None
    order: int | None = None

    def defines(self, attribute: str) -> bool:
        """Whether the document explicitly set ``attribute`` (snake_case)."""
        return attribute in self.model_fields_set


ResponsiveBehavior = dict[ViewportId, ResponsiveOverride]


class Area(DesignModel):
    """A layout container node.

    Attributes:
        area_id: Identifier, unique within a screen after merge.
        name: Optional display name.
        layout: Child arrangement (vertical, horizontal, grid).
        size_hint: Width hint when placed in a horizontal row.
        grid_areas: 2D template of area ids (root area only).
        children: Ordered refs, ``@id`` for areas and ``$id`` for elements.
        responsive_behavior: Viewport id -> override record.
        inherited: True when the area came from the shared layout and was not
            overridden by the screen. Derived during resolution.
    """

    area_id: str
    name: str | None = None
    description: str | None = None
    layout: LayoutMode | None = None
    size_hint: SizeHint | None = None
    layout_hint: str | None = None
    grid_areas: GridTemplate | None = None
    children: tuple[str, ...] | None = None
    responsive_behavior: ResponsiveBehavior | None = None
    inherited: bool = False

    @property
    def area_refs(self) -> list[str]:
        """Ids of child areas referenced by ``@id``, in order."""
        return [
            ref[len(AREA_REF_PREFIX) :]
            for ref in self.children or ()
            if ref.startswith(AREA_REF_PREFIX)
        ]

    @property
    def element_refs(self) -> list[str]:
        """Ids of child elements referenced by ``$id``, in order."""
        return [
            ref[len(ELEMENT_REF_PREFIX) :]
            for ref in self.children or ()
            if ref.startswith(ELEMENT_REF_PREFIX)
        ]

    @property
    def has_grid(self) -> bool:
        """Whether the base definition carries a non-empty grid template."""
        return bool(self.grid_areas)


class Element(DesignModel):
    """A leaf UI control, optionally bound to a Field.

    ``field`` and ``events`` are filled in by the inheritance resolver;
    documents only carry ``field_ref``.
    """

    element_id: str
    field_ref: str | None = None
    field: FieldDefinition | None = None
    label: str | None = None
    layout_hint: str | None = None
    order: int | None = None
    responsive_behavior: ResponsiveBehavior | None = None
    events: tuple[Event, ...] = ()


class MainContent(DesignModel):
    """Slot injection block filling the shared ``main-content`` area."""

    layout: LayoutMode | None = None
    children: tuple[str, ...] | None = None


class LayoutDocument(DesignModel):
    """Contents of a screen layout.yaml or a shared layout document."""

    screen_id: str | None = None
    title: str | None = None
    description: str | None = None
    extends: str | None = None
    areas: tuple[Area, ...] = ()
    elements: tuple[Element, ...] = ()
    main_content: MainContent | None = None


# =============================================================================
# Site Documents
# =============================================================================


class Viewport(DesignModel):
    """A named responsive breakpoint."""

    id: ViewportId
    name: str = ""
    min_width: int | None = None
    max_width: int | None = None
    description: str | None = None


class SiteSection(DesignModel):
    """Nested ``site:`` block of a manifest."""

    name: str | None = None


class SiteManifest(DesignModel):
    """Contents of site.yaml.

    ``name`` may appear at the top level or under ``site``; the nested form
    takes precedence.
    """

    name: str | None = None
    site: SiteSection | None = None
    viewports: tuple[Viewport, ...] = ()

    @property
    def display_name(self) -> str | None:
        """Site name, preferring the nested ``site.name``."""
        if self.site and self.site.name:
            return self.site.name
        return self.name or None


# =============================================================================
# Read Models
# =============================================================================


class Site(DesignModel):
    """A design project."""

    id: str
    name: str


class SiteDetail(DesignModel):
    """A site together with its declared viewports."""

    id: str
    name: str
    viewports: tuple[Viewport, ...] = ()
    default_viewport: str = DEFAULT_VIEWPORT_ID


class TransitionNode(DesignModel):
    """A screen, or a shared component acting as a navigation source."""

    id: str
    screen_id: str
    label: str
    description: str | None = None

    @property
    def is_shared(self) -> bool:
        """Whether this node stands for a shared component."""
        return self.screen_id.startswith("_shared/")


class TransitionEdge(DesignModel):
    """A navigation from one node to another, derived from a navigate action."""

    id: str
    source: str
    target: str
    label: str
    event_id: str
    is_external: bool = False
    is_shared: bool = False


class TransitionGraph(DesignModel):
    """Directed navigation graph of a site."""

    nodes: tuple[TransitionNode, ...] = ()
    edges: tuple[TransitionEdge, ...] = ()


class ScreenDetail(DesignModel):
    """Fully resolved, request-scoped read model of one screen."""

    screen_id: str
    title: str
    description: str | None = None
    extends: str | None = None
    areas: tuple[Area, ...] = ()
    elements: tuple[Element, ...] = ()
    fields: tuple[FieldDefinition, ...] = ()
    events: tuple[Event, ...] = ()
    viewports: tuple[Viewport, ...] = ()

    @property
    def root_area(self) -> Area | None:
        """First area carrying a non-empty grid template, if any."""
        return next((area for area in self.areas if area.has_grid), None)


# =============================================================================
# Scene (Geometry Output)
# =============================================================================


class ElementBox(DesignModel):
    """Placed element rectangle in absolute canvas coordinates."""

    element_id: str
    x: float
    y: float
    width: float
    height: float
    field_type: str | None = None
    layout_hint: str | None = None
    has_events: bool = False


class AreaBox(DesignModel):
    """Placed area rectangle with its placed elements and child areas."""

    area_id: str
    name: str | None = None
    x: float
    y: float
    width: float
    height: float
    depth: int = 0
    layout: str | None = None
    size_hint: str | None = None
    inherited: bool = False
    elements: tuple[ElementBox, ...] = ()
    children: tuple["AreaBox", ...] = ()


class GridCell(DesignModel):
    """Placement of one area inside the root grid template."""

    area_id: str
    start_col: int
    start_row: int
    col_span: int
    row_span: int


class GridSpec(DesignModel):
    """Resolved root grid: cells plus row metrics."""

    rows: int
    cols: int
    cells: tuple[GridCell, ...] = ()
    row_heights: tuple[float, ...] = ()
    row_offsets: tuple[float, ...] = ()


class Scene(DesignModel):
    """Renderable layout of one screen at one viewport."""

    screen_id: str
    title: str
    viewport_id: str
    mode: SceneMode
    width: float
    height: float
    root_area_id: str | None = None
    grid: GridSpec | None = None
    areas: tuple[AreaBox, ...] = ()

    def iter_areas(self):
        """Yield every placed area, depth-first, pre-order."""
        stack = list(reversed(self.areas))
        while stack:
            box = stack.pop()
            yield box
            stack.extend(reversed(box.children))

    def iter_elements(self):
        """Yield every placed element in area pre-order."""
        for box in self.iter_areas():
            yield from box.elements


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
