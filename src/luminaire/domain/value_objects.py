"""Value objects for the lighting assembly domain.

This module provides the immutable data types shared by the transform,
compatibility, solver and boundary services. Positions are in metres and
rotations are Euler angles (XYZ order) in radians.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

Vec3 = tuple[float, float, float]

ZERO: Vec3 = (0.0, 0.0, 0.0)
UNIT_SCALE: Vec3 = (1.0, 1.0, 1.0)


class SnapKind(str, Enum):
    """Kinds of snap point a catalogue part may expose."""

    POWER = "power"
    MECHANICAL = "mechanical"
    DATA = "data"
    TRACK = "track"
    MOUNTING = "mounting"
    ACCESSORY = "accessory"


class ComponentType(str, Enum):
    """Closed set of component type tags.

    Pendants are spotlights carrying the ``is_pendant`` catalogue flag and
    end caps are parts carrying ``is_end_cap``; neither is a separate tag.
    """

    TRACK = "track"
    PROFILE = "profile"
    CONNECTOR = "connector"
    SPOTLIGHT = "spotlight"
    POWER_SUPPLY = "power-supply"
    ACCESSORY = "accessory"

    @property
    def is_elongated(self) -> bool:
        """True for track-like parts (tracks and profiles)."""
        return self in (ComponentType.TRACK, ComponentType.PROFILE)


class PlacementOrigin(str, Enum):
    """How a placement was derived.

    FREE_PLACEMENT placements are clamped into the room; SNAP_SOLVED
    placements keep the solver's transform untouched.
    """

    FREE_PLACEMENT = "free"
    SNAP_SOLVED = "snap"


class Direction(str, Enum):
    """Nudge directions in room space."""

    LEFT = "left"
    RIGHT = "right"
    FORWARD = "forward"
    BACKWARD = "backward"
    UP = "up"
    DOWN = "down"

    @property
    def vector(self) -> Vec3:
        """Unit vector for this direction (forward is -Z)."""
        return _DIRECTION_VECTORS[self]


_DIRECTION_VECTORS: dict[Direction, Vec3] = {
    Direction.LEFT: (-1.0, 0.0, 0.0),
    Direction.RIGHT: (1.0, 0.0, 0.0),
    Direction.FORWARD: (0.0, 0.0, -1.0),
    Direction.BACKWARD: (0.0, 0.0, 1.0),
    Direction.UP: (0.0, 1.0, 0.0),
    Direction.DOWN: (0.0, -1.0, 0.0),
}


class Axis(str, Enum):
    """Rotation axes."""

    X = "x"
    Y = "y"
    Z = "z"

    @property
    def index(self) -> int:
        return "xyz".index(self.value)


def as_vec3(values: tuple[float, ...] | list[float], name: str) -> Vec3:
    if len(values) != 3:
        raise ValueError(f"{name} must have exactly 3 components")
    return (float(values[0]), float(values[1]), float(values[2]))


@dataclass(frozen=True)
class SnapPoint:
    """A typed attachment location in its owner's local frame.

    Attributes:
        id: Identifier, unique within the owning component.
        kind: The snap point kind used by the compatibility rules.
        position: Local position relative to the component origin.
        rotation: Local Euler rotation (radians).
        compatible_kinds: Optional hint of kinds this point prefers to mate
            with. Used for snap point search, not for the compatibility rules.
        name: Optional human-readable label.
    """

    id: str
    kind: SnapKind
    position: Vec3 = ZERO
    rotation: Vec3 = ZERO
    compatible_kinds: frozenset[SnapKind] = field(default_factory=frozenset)
    name: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Snap point id must not be empty")
        object.__setattr__(self, "position", as_vec3(self.position, "position"))
        object.__setattr__(self, "rotation", as_vec3(self.rotation, "rotation"))
        object.__setattr__(self, "compatible_kinds", frozenset(self.compatible_kinds))


@dataclass(frozen=True)
class RoomDimensions:
    """Axis-aligned room box.

    The room is centred on the origin in X/Z with the floor at y=0 and the
    ceiling at y=height. Dimensions are not validated here so that the
    boundary engine can report degenerate rooms instead of failing.
    """

    width: float
    depth: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        """True when any extent is non-positive (or NaN)."""
        return not (self.width > 0 and self.depth > 0 and self.height > 0)

    @property
    def min_corner(self) -> Vec3:
        return (-self.width / 2, 0.0, -self.depth / 2)

    @property
    def max_corner(self) -> Vec3:
        return (self.width / 2, self.height, self.depth / 2)


@dataclass(frozen=True)
class ComponentBounds:
    """Bounding box offsets from a component origin.

    Attributes:
        min: Offset of the minimum corner (each component <= 0 for sane data).
        max: Offset of the maximum corner.
    """

    min: Vec3
    max: Vec3

    def scaled(self, scale: Vec3) -> ComponentBounds:
        """Return bounds scaled per axis, keeping min <= max."""
        lo = tuple(a * s for a, s in zip(self.min, scale))
        hi = tuple(b * s for b, s in zip(self.max, scale))
        return ComponentBounds(
            min=(min(lo[0], hi[0]), min(lo[1], hi[1]), min(lo[2], hi[2])),
            max=(max(lo[0], hi[0]), max(lo[1], hi[1]), max(lo[2], hi[2])),
        )


@dataclass(frozen=True)
class Pose:
    """A bare world transform (position, rotation, scale)."""

    position: Vec3 = ZERO
    rotation: Vec3 = ZERO
    scale: Vec3 = UNIT_SCALE


@dataclass(frozen=True)
class Connection:
    """A committed pairing of two snap points on two distinct components."""

    source_component_id: str
    source_snap_point_id: str
    target_component_id: str
    target_snap_point_id: str
    kind: SnapKind

    def __post_init__(self) -> None:
        if self.source_component_id == self.target_component_id:
            raise ValueError("A connection must join two distinct components")

    def involves(self, component_id: str) -> bool:
        """Check whether either endpoint belongs to ``component_id``."""
        return component_id in (self.source_component_id, self.target_component_id)

    def endpoints(self) -> tuple[tuple[str, str], tuple[str, str]]:
        """Return ((component_id, snap_point_id), ...) for both ends."""
        return (
            (self.source_component_id, self.source_snap_point_id),
            (self.target_component_id, self.target_snap_point_id),
        )
