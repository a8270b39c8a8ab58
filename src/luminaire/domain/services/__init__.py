"""Domain services: transforms, compatibility, connection solving, boundaries."""

from .boundary import (
    CORRECTION_TOLERANCE,
    ConstraintResult,
    HORIZONTAL_ROTATION,
    TrackZone,
    clamp_to_room,
    component_bounds,
    constrain,
    detect_track_zones,
    is_position_valid,
)
from .compatibility import (
    CompatibilityRule,
    OwnerClass,
    classify_owner,
    is_compatible,
    matching_rule,
)
from .connection_solver import (
    ALIGNMENT_TOLERANCE,
    SolvedPlacement,
    SolverAlignmentError,
    solve,
    target_orientation,
)
from .snap_search import (
    compatible_snap_points,
    find_attachment_candidates,
    find_best_snap_point,
    free_snap_points,
    snap_point_distance,
)
from .transforms import (
    euler_to_matrix,
    local_position,
    local_rotation,
    matrix_to_euler,
    snap_point_world_position,
    snap_point_world_rotation,
    world_position,
    world_rotation,
)

__all__ = [
    "ALIGNMENT_TOLERANCE",
    "CORRECTION_TOLERANCE",
    "CompatibilityRule",
    "ConstraintResult",
    "HORIZONTAL_ROTATION",
    "OwnerClass",
    "SolvedPlacement",
    "SolverAlignmentError",
    "TrackZone",
    "clamp_to_room",
    "classify_owner",
    "compatible_snap_points",
    "component_bounds",
    "constrain",
    "detect_track_zones",
    "euler_to_matrix",
    "find_attachment_candidates",
    "find_best_snap_point",
    "free_snap_points",
    "is_compatible",
    "is_position_valid",
    "local_position",
    "local_rotation",
    "matching_rule",
    "matrix_to_euler",
    "snap_point_distance",
    "snap_point_world_position",
    "snap_point_world_rotation",
    "solve",
    "target_orientation",
    "world_position",
    "world_rotation",
]
