"""Room boundary clamping and track orientation rules.

Free placements are kept inside the room by clamping the component's scaled
bounding box to the room volume. Tracks additionally get a zone-based
orientation override: they are always laid horizontal, pulled down from the
ceiling and snapped to a fixed inset along walls.

Snap-solved placements never pass through here; clamping them would break
the exact alignment the connection solver produced.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from ..value_objects import ComponentBounds, ComponentType, RoomDimensions, Vec3

logger = logging.getLogger(__name__)

__all__ = [
    "CORRECTION_TOLERANCE",
    "ConstraintResult",
    "HORIZONTAL_ROTATION",
    "TrackZone",
    "clamp_to_room",
    "component_bounds",
    "constrain",
    "detect_track_zones",
    "is_position_valid",
]

CEILING_ZONE = 0.5
WALL_ZONE = 0.3
WALL_INSET = 0.15
CEILING_DROP = 1.0
MAX_TRACK_HEIGHT = 2.0
CORRECTION_TOLERANCE = 1e-2
VALIDITY_TOLERANCE = 0.01
MAX_SETTLE_PASSES = 8

HORIZONTAL_ROTATION: Vec3 = (math.pi / 2, 0.0, 0.0)

_TRACK_BOUNDS = ComponentBounds(min=(-1.0, -0.05, -0.1), max=(1.0, 0.05, 0.1))

BOUNDS_BY_TYPE: dict[ComponentType, ComponentBounds] = {
    ComponentType.TRACK: _TRACK_BOUNDS,
    ComponentType.PROFILE: _TRACK_BOUNDS,
    ComponentType.SPOTLIGHT: ComponentBounds(
        min=(-0.1, -0.15, -0.1), max=(0.1, 0.15, 0.1)
    ),
    ComponentType.POWER_SUPPLY: ComponentBounds(
        min=(-0.2, -0.1, -0.15), max=(0.2, 0.1, 0.15)
    ),
    ComponentType.CONNECTOR: ComponentBounds(
        min=(-0.075, -0.075, -0.075), max=(0.075, 0.075, 0.075)
    ),
}

DEFAULT_BOUNDS = ComponentBounds(min=(-0.25, -0.25, -0.25), max=(0.25, 0.25, 0.25))


class TrackZone(str, Enum):
    """Room zones that drive the track orientation override."""

    CEILING = "ceiling"
    LEFT_WALL = "left wall"
    RIGHT_WALL = "right wall"
    BACK_WALL = "back wall"
    FRONT_WALL = "front wall"


@dataclass(frozen=True)
class ConstraintResult:
    """Outcome of :func:`constrain`.

    Attributes:
        position: Constrained world position.
        rotation: Constrained world rotation.
        was_corrected: True if position or rotation moved by more than
            ``CORRECTION_TOLERANCE`` on any axis.
        reason: Which rule(s) fired, or None when nothing applied.
    """

    position: Vec3
    rotation: Vec3
    was_corrected: bool
    reason: str | None = None


def component_bounds(type_tag: ComponentType, scale: Vec3 = (1.0, 1.0, 1.0)) -> ComponentBounds:
    """Look up the bounding box of a component type, scaled."""
    return BOUNDS_BY_TYPE.get(type_tag, DEFAULT_BOUNDS).scaled(scale)


def clamp_to_room(
    position: Vec3, room: RoomDimensions, bounds: ComponentBounds
) -> Vec3:
    """Clamp ``position`` so the bounding box stays inside the room.

    When the box is larger than the room on an axis, the lower wall wins.
    """
    lows = room.min_corner
    highs = room.max_corner
    return tuple(
        max(lo - b_min, min(hi - b_max, value))
        for value, lo, hi, b_min, b_max in zip(position, lows, highs, bounds.min, bounds.max)
    )


def is_position_valid(
    position: Vec3,
    room: RoomDimensions,
    bounds: ComponentBounds | None = None,
) -> bool:
    """Check whether a bounding box at ``position`` lies inside the room.

    Args:
        position: Component origin in world space.
        room: Room dimensions.
        bounds: Component bounds; defaults to a small 0.2 x 0.1 x 0.2 box.

    Returns:
        True when every face is within ``VALIDITY_TOLERANCE`` of the room.
    """
    bounds = bounds or ComponentBounds(min=(-0.1, -0.05, -0.1), max=(0.1, 0.05, 0.1))
    for value, lo, hi, b_min, b_max in zip(
        position, room.min_corner, room.max_corner, bounds.min, bounds.max
    ):
        if value + b_min < lo - VALIDITY_TOLERANCE:
            return False
        if value + b_max > hi + VALIDITY_TOLERANCE:
            return False
    return True


def detect_track_zones(position: Vec3, room: RoomDimensions) -> frozenset[TrackZone]:
    """Return every zone ``position`` is close to."""
    x, y, z = position
    half_width = room.width / 2
    half_depth = room.depth / 2
    zones: set[TrackZone] = set()
    if y > room.height - CEILING_ZONE:
        zones.add(TrackZone.CEILING)
    if x < -half_width + WALL_ZONE:
        zones.add(TrackZone.LEFT_WALL)
    if x > half_width - WALL_ZONE:
        zones.add(TrackZone.RIGHT_WALL)
    if z < -half_depth + WALL_ZONE:
        zones.add(TrackZone.BACK_WALL)
    if z > half_depth - WALL_ZONE:
        zones.add(TrackZone.FRONT_WALL)
    return frozenset(zones)


def _track_rule(position: Vec3, room: RoomDimensions) -> tuple[Vec3, str]:
    """Apply the first matching track zone rule.

    Zones are checked as ceiling, left/right wall, back/front wall; a track
    touching two zones is a corner and gets the first rule's placement. The
    rotation is horizontal in every case.
    """
    x, y, z = position
    zones = detect_track_zones(position, room)
    corner = " at corner" if len(zones) >= 2 else ""

    if TrackZone.CEILING in zones:
        drop = min(room.height - CEILING_DROP, MAX_TRACK_HEIGHT)
        return (x, drop, z), f"Track positioned horizontally well below ceiling{corner}"
    if TrackZone.LEFT_WALL in zones:
        return (-room.width / 2 + WALL_INSET, y, z), f"Track forced horizontal along left wall{corner}"
    if TrackZone.RIGHT_WALL in zones:
        return (room.width / 2 - WALL_INSET, y, z), f"Track forced horizontal along right wall{corner}"
    if TrackZone.BACK_WALL in zones:
        return (x, y, -room.depth / 2 + WALL_INSET), f"Track oriented horizontally along back wall{corner}"
    if TrackZone.FRONT_WALL in zones:
        return (x, y, room.depth / 2 - WALL_INSET), f"Track oriented horizontally along front wall{corner}"
    return position, "Track forced horizontal in open space"


def _differs(a: Vec3, b: Vec3) -> bool:
    return any(abs(p - q) > CORRECTION_TOLERANCE for p, q in zip(a, b))


def constrain(
    type_tag: ComponentType,
    position: Vec3,
    rotation: Vec3,
    scale: Vec3,
    room: RoomDimensions,
) -> ConstraintResult:
    """Keep a freely placed component inside the room.

    Algorithm:
    1. Scale the type's bounding box.
    2. Clamp the position so the box stays within the room.
    3. For tracks, apply the zone rule and re-clamp until the position
       settles, forcing a horizontal rotation. Settling makes the result a
       fixed point, so constraining twice equals constraining once.
    4. Report a correction when anything moved by more than 1e-2.

    Degenerate rooms (any non-positive extent) leave the input untouched.

    Args:
        type_tag: Component type, selects the bounds and the track rules.
        position: Proposed world position.
        rotation: Proposed world rotation.
        scale: Component scale.
        room: Room dimensions.

    Returns:
        A ConstraintResult with the constrained transform.
    """
    if room.is_degenerate:
        logger.warning(
            f"Degenerate room {room.width}x{room.depth}x{room.height}; "
            f"leaving {type_tag.value} at {position}"
        )
        return ConstraintResult(
            position=position,
            rotation=rotation,
            was_corrected=False,
            reason=(
                "Degenerate room dimensions "
                f"(width={room.width}, depth={room.depth}, height={room.height}); "
                "position left unchanged"
            ),
        )

    bounds = component_bounds(type_tag, scale)
    constrained = clamp_to_room(position, room, bounds)
    final_rotation = rotation
    reasons: list[str] = []

    if type_tag is ComponentType.TRACK:
        final_rotation = HORIZONTAL_ROTATION
        for _ in range(MAX_SETTLE_PASSES):
            candidate, reason = _track_rule(constrained, room)
            candidate = clamp_to_room(candidate, room, bounds)
            # A pass that changes nothing only names its rule when it is the first.
            settled = candidate == constrained
            if (not settled or not reasons) and reason not in reasons:
                reasons.append(reason)
            if settled:
                break
            constrained = candidate

    position_changed = _differs(constrained, position)
    was_corrected = position_changed or _differs(final_rotation, rotation)
    if not reasons and position_changed:
        reasons.append("Position constrained to room boundaries")

    result = ConstraintResult(
        position=constrained,
        rotation=final_rotation,
        was_corrected=was_corrected,
        reason="; ".join(reasons) or None,
    )
    if was_corrected:
        logger.debug(
            f"Constrained {type_tag.value} {position} -> {result.position}: {result.reason}"
        )
    return result
