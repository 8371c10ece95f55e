"""Structural validation of resolved screens.

Resolution is lenient: dangling references are dropped, cycles are skipped
and unknown viewport ids are simply never selected. This module reports those
conditions so design authors can find them.
"""

from dataclasses import dataclass

from design_viewer.schema import (
    AREA_REF_PREFIX,
    ELEMENT_REF_PREFIX,
    Area,
    GridTemplate,
    ScreenDetail,
)


@dataclass
class ValidationIssue:
    """Represents a structural issue in a resolved screen.

    Attributes:
        node_id: ID of the area or element with the issue.
        message: Human-readable issue description.
        issue_type: Category of the issue.
    """

    node_id: str
    message: str
    issue_type: str


def validate_screen_detail(detail: ScreenDetail) -> list[ValidationIssue]:
    """Validate a resolved screen for structural issues.

    Performs the following checks:
        - Child references resolve to an area or element
        - No area contains itself through ``@`` references
        - Grid templates are rectangular and name known areas
        - responsiveBehavior keys name declared viewports
        - fieldRef values resolve to a field

    Args:
        detail: The resolved screen to validate.

    Returns:
        list[ValidationIssue]: Issues found (empty if valid).

    Example:
        >>> issues = validate_screen_detail(detail)
        >>> for issue in issues:
        ...     print(f"{issue.node_id}: {issue.message}")
    """
    issues: list[ValidationIssue] = []
    areas = {area.area_id: area for area in detail.areas}

    issues.extend(_check_children(detail, areas))
    issues.extend(_detect_cycles(areas))
    issues.extend(_check_grids(detail, areas))
    issues.extend(_check_viewports(detail))
    issues.extend(_check_field_refs(detail))

    return issues


def is_valid(detail: ScreenDetail) -> bool:
    """Check if a resolved screen has no structural issues."""
    return len(validate_screen_detail(detail)) == 0


def _check_children(detail: ScreenDetail, areas: dict[str, Area]) -> list[ValidationIssue]:
    """Report child refs that are malformed or do not resolve."""
    issues = []
    element_ids = {element.element_id for element in detail.elements}

    for area in detail.areas:
        for ref in area.children or ():
            if ref.startswith(AREA_REF_PREFIX):
                known = ref[1:] in areas
            elif ref.startswith(ELEMENT_REF_PREFIX):
                known = ref[1:] in element_ids
            else:
                issues.append(
                    ValidationIssue(
                        node_id=area.area_id,
                        message=f"Child reference '{ref}' has no @ or $ prefix",
                        issue_type="invalid_child_ref",
                    )
                )
                continue

            if not known:
                issues.append(
                    ValidationIssue(
                        node_id=area.area_id,
                        message=f"Child reference '{ref}' does not resolve",
                        issue_type="unresolved_child",
                    )
                )

    return issues


def _detect_cycles(areas: dict[str, Area]) -> list[ValidationIssue]:
    """Detect areas that are their own ancestor via ``@`` references."""
    issues = []
    reported: set[str] = set()
    done: set[str] = set()

    def visit(area_id: str, path: list[str]) -> None:
        if area_id in path:
            cycle = path[path.index(area_id) :] + [area_id]
            if area_id not in reported:
                reported.add(area_id)
                issues.append(
                    ValidationIssue(
                        node_id=area_id,
                        message=f"Cycle detected: {' -> '.join(cycle)}",
                        issue_type="cycle",
                    )
                )
            return
        if area_id in done or area_id not in areas:
            return

        path.append(area_id)
        for child_id in areas[area_id].area_refs:
            visit(child_id, path)
        path.pop()
        done.add(area_id)

    for area_id in areas:
        visit(area_id, [])

    return issues


def _grid_issues(area: Area, grid: GridTemplate, areas: dict[str, Area], where: str):
    issues = []
    widths = {len(row) for row in grid}
    if len(widths) > 1:
        issues.append(
            ValidationIssue(
                node_id=area.area_id,
                message=f"gridAreas{where} rows differ in length: {sorted(widths)}",
                issue_type="non_rectangular_grid",
            )
        )
    unknown = sorted({cell for row in grid for cell in row if cell not in areas})
    for cell in unknown:
        issues.append(
            ValidationIssue(
                node_id=area.area_id,
                message=f"gridAreas{where} names unknown area '{cell}'",
                issue_type="unknown_grid_area",
            )
        )
    return issues


def _check_grids(detail: ScreenDetail, areas: dict[str, Area]) -> list[ValidationIssue]:
    """Check base and per-viewport grid templates."""
    issues = []
    for area in detail.areas:
        if area.grid_areas:
            issues.extend(_grid_issues(area, area.grid_areas, areas, ""))
        for viewport_id, override in (area.responsive_behavior or {}).items():
            if override.grid_areas:
                issues.extend(
                    _grid_issues(area, override.grid_areas, areas, f" at '{viewport_id}'")
                )
    return issues


def _check_viewports(detail: ScreenDetail) -> list[ValidationIssue]:
    """Report overrides keyed by viewports the site does not declare."""
    if not detail.viewports:
        return []

    declared = {viewport.id for viewport in detail.viewports}
    issues = []
    for entity_id, behavior in [
        *((a.area_id, a.responsive_behavior) for a in detail.areas),
        *((e.element_id, e.responsive_behavior) for e in detail.elements),
    ]:
        for viewport_id in behavior or {}:
            if viewport_id not in declared:
                issues.append(
                    ValidationIssue(
                        node_id=entity_id,
                        message=f"responsiveBehavior names unknown viewport '{viewport_id}'",
                        issue_type="unknown_viewport",
                    )
                )
    return issues


def _check_field_refs(detail: ScreenDetail) -> list[ValidationIssue]:
    """Report elements whose fieldRef found no field."""
    return [
        ValidationIssue(
            node_id=element.element_id,
            message=f"fieldRef '{element.field_ref}' does not resolve",
            issue_type="missing_field",
        )
        for element in detail.elements
        if element.field_ref and element.field is None
    ]


__all__ = ["ValidationIssue", "validate_screen_detail", "is_valid"]
