"""Snap point lookup helpers."""

from __future__ import annotations

import math
from typing import Iterable

from ..entities import Component, ComponentTemplate
from ..value_objects import SnapKind, SnapPoint
from .compatibility import is_compatible
from .transforms import world_position

__all__ = [
    "compatible_snap_points",
    "find_attachment_candidates",
    "find_best_snap_point",
    "free_snap_points",
    "snap_point_distance",
]


def find_best_snap_point(
    owner: Component | ComponentTemplate, kind: SnapKind
) -> SnapPoint | None:
    """Pick the snap point on ``owner`` best suited to a ``kind`` partner.

    Prefers an exact kind match, then a point whose compatibility hint lists
    ``kind``, then the first snap point. Returns None when there are none.
    """
    if not owner.snap_points:
        return None
    for snap_point in owner.snap_points:
        if snap_point.kind is kind:
            return snap_point
    for snap_point in owner.snap_points:
        if kind in snap_point.compatible_kinds:
            return snap_point
    return owner.snap_points[0]


def snap_point_distance(
    component_a: Component,
    snap_point_a: SnapPoint,
    component_b: Component,
    snap_point_b: SnapPoint,
) -> float:
    """World-space distance between two snap points."""
    pa = world_position(component_a, snap_point_a.position)
    pb = world_position(component_b, snap_point_b.position)
    return math.dist(pa, pb)


def free_snap_points(component: Component) -> list[SnapPoint]:
    """Snap points on ``component`` not yet used by a connection."""
    return [sp for sp in component.snap_points if sp.id not in component.connections]


def compatible_snap_points(
    source: Component,
    source_snap_point: SnapPoint,
    template: ComponentTemplate,
) -> list[SnapPoint]:
    """Snap points of ``template`` that may attach to ``source_snap_point``."""
    return [
        sp
        for sp in template.snap_points
        if is_compatible(source_snap_point, source, sp, template)
    ]


def find_attachment_candidates(
    source: Component,
    source_snap_point: SnapPoint,
    templates: Iterable[ComponentTemplate],
) -> list[tuple[ComponentTemplate, SnapPoint]]:
    """All (template, snap point) pairs that may attach at a source snap point.

    Order follows the catalogue order, then the template's snap point order.
    """
    return [
        (template, snap_point)
        for template in templates
        for snap_point in compatible_snap_points(source, source_snap_point, template)
    ]
