"""Domain layer - snap point geometry and placement rules."""

from .entities import CEILING_CONNECTOR_MIN_HEIGHT, Component, ComponentTemplate
from .services import (
    ConstraintResult,
    SolvedPlacement,
    SolverAlignmentError,
    constrain,
    is_compatible,
    solve,
    world_position,
    world_rotation,
)
from .value_objects import (
    Axis,
    ComponentBounds,
    ComponentType,
    Connection,
    Direction,
    PlacementOrigin,
    Pose,
    RoomDimensions,
    SnapKind,
    SnapPoint,
    Vec3,
)

__all__ = [
    "Axis",
    "CEILING_CONNECTOR_MIN_HEIGHT",
    "Component",
    "ComponentBounds",
    "ComponentTemplate",
    "ComponentType",
    "Connection",
    "ConstraintResult",
    "Direction",
    "PlacementOrigin",
    "Pose",
    "RoomDimensions",
    "SnapKind",
    "SnapPoint",
    "SolvedPlacement",
    "SolverAlignmentError",
    "Vec3",
    "constrain",
    "is_compatible",
    "solve",
    "world_position",
    "world_rotation",
]
