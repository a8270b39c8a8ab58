"""Transform resolution between component-local and world space.

Euler angles use the XYZ convention: the rotation matrix is
``Rx @ Ry @ Rz`` (intrinsic rotations about X, then Y, then Z). A local
point is scaled, then rotated, then translated by the component position.

All functions are pure and accept anything exposing ``position``,
``rotation`` and ``scale`` (a :class:`Component` or a bare :class:`Pose`).
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np

from ..value_objects import SnapPoint, Vec3

__all__ = [
    "Transformable",
    "euler_to_matrix",
    "matrix_to_euler",
    "world_position",
    "world_rotation",
    "local_position",
    "local_rotation",
    "snap_point_world_position",
    "snap_point_world_rotation",
]

# Threshold on |sin(y)| beyond which the XYZ extraction is treated as gimbal locked.
_GIMBAL_THRESHOLD = 0.9999999


class Transformable(Protocol):
    """Anything with a world transform."""

    @property
    def position(self) -> Vec3: ...

    @property
    def rotation(self) -> Vec3: ...

    @property
    def scale(self) -> Vec3: ...


def _vec3(values: np.ndarray) -> Vec3:
    return (float(values[0]), float(values[1]), float(values[2]))


def euler_to_matrix(rotation: Vec3) -> np.ndarray:
    """Build the 3x3 rotation matrix for XYZ Euler angles (radians)."""
    x, y, z = rotation
    cx, sx = math.cos(x), math.sin(x)
    cy, sy = math.cos(y), math.sin(y)
    cz, sz = math.cos(z), math.sin(z)
    rx = np.array([[1.0, 0.0, 0.0], [0.0, cx, -sx], [0.0, sx, cx]])
    ry = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
    rz = np.array([[cz, -sz, 0.0], [sz, cz, 0.0], [0.0, 0.0, 1.0]])
    return rx @ ry @ rz


def matrix_to_euler(matrix: np.ndarray) -> Vec3:
    """Extract XYZ Euler angles from a rotation matrix.

    Near gimbal lock (|m[0, 2]| close to 1) the Z angle is folded into X and
    reported as zero; no further correction is attempted.
    """
    m13 = float(np.clip(matrix[0, 2], -1.0, 1.0))
    y = math.asin(m13)
    if abs(m13) < _GIMBAL_THRESHOLD:
        x = math.atan2(-matrix[1, 2], matrix[2, 2])
        z = math.atan2(-matrix[0, 1], matrix[0, 0])
    else:
        x = math.atan2(matrix[2, 1], matrix[1, 1])
        z = 0.0
    return (float(x), float(y), float(z))


def world_position(component: Transformable, local_point: Vec3) -> Vec3:
    """Map a component-local point into world space.

    Applies scale, then rotation, then translation.

    Args:
        component: The owning component's transform.
        local_point: Point in the component's local frame.

    Returns:
        The point in world coordinates.
    """
    scaled = np.asarray(component.scale, dtype=float) * np.asarray(local_point, dtype=float)
    rotated = euler_to_matrix(component.rotation) @ scaled
    return _vec3(rotated + np.asarray(component.position, dtype=float))


def world_rotation(component: Transformable, local_rotation: Vec3) -> Vec3:
    """Compose a component rotation with a local rotation.

    The child rotation is expressed in the parent's frame:
    ``R_world = R_component @ R_local``.
    """
    combined = euler_to_matrix(component.rotation) @ euler_to_matrix(local_rotation)
    return matrix_to_euler(combined)


def local_position(component: Transformable, world_point: Vec3) -> Vec3:
    """Inverse of :func:`world_position`.

    Axes with zero scale cannot be recovered and map to 0.0.
    """
    offset = np.asarray(world_point, dtype=float) - np.asarray(component.position, dtype=float)
    unrotated = euler_to_matrix(component.rotation).T @ offset
    scale = np.asarray(component.scale, dtype=float)
    safe_scale = np.where(scale == 0.0, 1.0, scale)
    return _vec3(np.where(scale == 0.0, 0.0, unrotated / safe_scale))


def local_rotation(component: Transformable, rotation: Vec3) -> Vec3:
    """Inverse of :func:`world_rotation`: express a world rotation locally."""
    parent = euler_to_matrix(component.rotation)
    return matrix_to_euler(parent.T @ euler_to_matrix(rotation))


def snap_point_world_position(component: Transformable, snap_point: SnapPoint) -> Vec3:
    """World position of a snap point on ``component``."""
    return world_position(component, snap_point.position)


def snap_point_world_rotation(component: Transformable, snap_point: SnapPoint) -> Vec3:
    """World rotation of a snap point on ``component``."""
    return world_rotation(component, snap_point.rotation)
