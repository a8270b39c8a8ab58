"""Result types returned by the placement service."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from luminaire.domain import Component, Connection, ConstraintResult, PlacementOrigin


class PlacementStatus(str, Enum):
    """Outcome of a placement operation."""

    PLACED = "placed"
    ATTACHED = "attached"
    MOVED = "moved"
    REMOVED = "removed"
    INCOMPATIBLE = "incompatible"
    MISSING_COMPONENT = "missing_component"
    MISSING_SNAP_POINT = "missing_snap_point"
    SNAP_POINT_OCCUPIED = "snap_point_occupied"
    ALIGNMENT_FAILURE = "alignment_failure"
    FIRST_COMPONENT_NOT_CONNECTOR = "first_component_not_connector"
    DUPLICATE_ID = "duplicate_id"

    @property
    def is_success(self) -> bool:
        return self in _SUCCESS


_SUCCESS = frozenset(
    {
        PlacementStatus.PLACED,
        PlacementStatus.ATTACHED,
        PlacementStatus.MOVED,
        PlacementStatus.REMOVED,
    }
)


@dataclass(frozen=True)
class PlacementResult:
    """Explicit outcome of a placement request.

    Rejections are values, not exceptions, so an interaction layer can show
    "no valid attachment" without special-casing errors. Nothing is
    committed when ``ok`` is False.

    Attributes:
        status: What happened.
        message: Human-readable explanation.
        component: The committed component snapshot (successes only).
        connection: The recorded connection (attachments only).
        origin: How the committed transform was derived.
        constraint: Boundary engine outcome for free placements.
    """

    status: PlacementStatus
    message: str = ""
    component: Component | None = None
    connection: Connection | None = None
    origin: PlacementOrigin | None = None
    constraint: ConstraintResult | None = None

    @property
    def ok(self) -> bool:
        return self.status.is_success

    @classmethod
    def reject(cls, status: PlacementStatus, message: str) -> PlacementResult:
        """Create a rejection result."""
        return cls(status=status, message=message)
