"""Connection solver for snap-point attachments.

Given a placed source component and one of its snap points, the solver
computes where a new component built from a catalogue template must sit so
that a chosen snap point of the template coincides with the source snap point
in world space.

Orientation is policy rather than a free variable: the target rotation is
picked from the (source, target) type pair by :func:`target_orientation`, and
the position is then solved exactly for that rotation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np

from ..entities import Component, ComponentTemplate
from ..value_objects import Pose, SnapPoint, Vec3, ZERO
from .transforms import euler_to_matrix, world_position

logger = logging.getLogger(__name__)

__all__ = [
    "ALIGNMENT_TOLERANCE",
    "SolvedPlacement",
    "SolverAlignmentError",
    "solve",
    "target_orientation",
]

ALIGNMENT_TOLERANCE = 1e-4

HALF_TURN = math.pi
QUARTER_TURN = math.pi / 2


class SolverAlignmentError(Exception):
    """Raised when a solved placement fails its alignment post-check.

    This only happens with malformed snap point or scale data and signals a
    defect in the catalogue rather than a user error.

    Attributes:
        error: Largest per-axis distance between the two snap points.
        source_world: World position of the source snap point.
        target_world: World position reached by the target snap point.
    """

    def __init__(self, error: float, source_world: Vec3, target_world: Vec3) -> None:
        self.error = error
        self.source_world = source_world
        self.target_world = target_world
        super().__init__(
            f"Snap points misaligned by {error} (source {source_world}, "
            f"target {target_world})"
        )


@dataclass(frozen=True)
class SolvedPlacement:
    """Transform for a newly attached component.

    Attributes:
        position: World position for the target component.
        rotation: World rotation for the target component.
        anchor: World position shared by both snap points.
        alignment_error: Largest per-axis residual of the post-check.
    """

    position: Vec3
    rotation: Vec3
    anchor: Vec3
    alignment_error: float = 0.0


def target_orientation(source: Component, target: ComponentTemplate) -> Vec3:
    """Choose the world rotation of an attached component.

    - Track/profile hung from a ceiling connector or an end cap lies flat and
      inherits the source's yaw and roll.
    - End cap attached to a track/profile faces back toward the track.
    - Pendant spotlights hang vertically with their snap point up.
    - Everything else is unrotated.
    """
    _, source_yaw, source_roll = source.rotation
    if target.type_tag.is_elongated and (
        source.is_ceiling_mounted_connector or source.is_end_cap
    ):
        return (QUARTER_TURN, source_yaw, source_roll)
    if source.type_tag.is_elongated and target.is_end_cap:
        return (0.0, source_yaw + HALF_TURN, source_roll)
    if target.is_pendant:
        return (QUARTER_TURN, 0.0, 0.0)
    return ZERO


def solve(
    source: Component,
    source_snap_point: SnapPoint,
    target: ComponentTemplate,
    target_snap_point: SnapPoint,
) -> SolvedPlacement:
    """Solve the placement of ``target`` so both snap points coincide.

    Args:
        source: The fixed, already placed component.
        source_snap_point: Snap point on ``source`` being attached to.
        target: Catalogue template of the component being attached.
        target_snap_point: Snap point on ``target`` that must meet the source.

    Returns:
        The target's world position and rotation.

    Raises:
        SolverAlignmentError: If the solved transform does not bring the two
            snap points within ``ALIGNMENT_TOLERANCE`` of each other.
    """
    anchor = world_position(source, source_snap_point.position)
    rotation = target_orientation(source, target)

    # Rotation and scale only; the translation is what we solve for.
    offset = euler_to_matrix(rotation) @ (
        np.asarray(target.scale, dtype=float)
        * np.asarray(target_snap_point.position, dtype=float)
    )
    solved = np.asarray(anchor, dtype=float) - offset
    position: Vec3 = (float(solved[0]), float(solved[1]), float(solved[2]))

    reached = world_position(
        Pose(position=position, rotation=rotation, scale=target.scale),
        target_snap_point.position,
    )
    residuals = [abs(a - b) for a, b in zip(anchor, reached)]
    # Every axis must pass; a NaN residual fails.
    if not all(r < ALIGNMENT_TOLERANCE for r in residuals):
        error = math.nan if any(math.isnan(r) for r in residuals) else max(residuals)
        logger.debug(
            f"Alignment check failed attaching {target.id}:{target_snap_point.id} "
            f"to {source.id}:{source_snap_point.id} (error={error})"
        )
        raise SolverAlignmentError(error, anchor, reached)

    logger.debug(
        f"Solved {target.id}:{target_snap_point.id} -> {source.id}:"
        f"{source_snap_point.id} at {position} rotation {rotation}"
    )
    return SolvedPlacement(
        position=position, rotation=rotation, anchor=anchor, alignment_error=max(residuals)
    )
