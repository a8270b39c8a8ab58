"""Adapter converting configuration models into domain objects.

Configuration files carry rotations in degrees; the domain works in radians.
Conversion happens here and nowhere else.
"""

import math

from luminaire.application.config.schema import (
    AssemblyConfiguration,
    RoomConfig,
    SnapPointConfig,
    TemplateConfig,
)
from luminaire.domain import ComponentTemplate, RoomDimensions, SnapPoint, Vec3


def degrees_to_radians(rotation: tuple[float, float, float]) -> Vec3:
    """Convert an Euler triple from degrees to radians."""
    return (
        math.radians(rotation[0]),
        math.radians(rotation[1]),
        math.radians(rotation[2]),
    )


def radians_to_degrees(rotation: Vec3) -> Vec3:
    """Convert an Euler triple from radians to degrees."""
    return (
        math.degrees(rotation[0]),
        math.degrees(rotation[1]),
        math.degrees(rotation[2]),
    )


def config_to_room(room: RoomConfig) -> RoomDimensions:
    return RoomDimensions(width=room.width, depth=room.depth, height=room.height)


def config_to_snap_point(snap_point: SnapPointConfig) -> SnapPoint:
    return SnapPoint(
        id=snap_point.id,
        kind=snap_point.kind,
        position=snap_point.position,
        rotation=degrees_to_radians(snap_point.rotation),
        compatible_kinds=frozenset(snap_point.compatible_kinds),
        name=snap_point.name,
    )


def config_to_template(template: TemplateConfig) -> ComponentTemplate:
    """Convert a catalogue entry to a domain ComponentTemplate."""
    return ComponentTemplate(
        id=template.id,
        type_tag=template.type,
        snap_points=tuple(config_to_snap_point(sp) for sp in template.snap_points),
        scale=template.scale,
        name=template.name or template.id,
        is_pendant=template.is_pendant,
        is_end_cap=template.is_end_cap,
    )


def config_to_catalogue(config: AssemblyConfiguration) -> dict[str, ComponentTemplate]:
    """Convert the catalogue to domain templates keyed by template id.

    The mapping preserves catalogue order.
    """
    return {template.id: config_to_template(template) for template in config.catalogue}
