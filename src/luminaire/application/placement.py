"""Placement service: the single place where placements are committed.

The service turns user interactions (place a part, attach a part to a snap
point, drag/nudge/rotate, remove) into registry mutations. Each request is
answered with a :class:`PlacementResult`; recoverable problems such as
incompatible snap points or stale ids are reported, never raised.

Whether boundary clamping runs is decided in exactly one spot,
:meth:`PlacementService._commit`, from the :class:`PlacementOrigin` of the
transform being committed.
"""

from __future__ import annotations

import logging
from typing import Iterable

from luminaire.domain import (
    Axis,
    Component,
    ComponentTemplate,
    ComponentType,
    Connection,
    Direction,
    PlacementOrigin,
    RoomDimensions,
    SolverAlignmentError,
    Vec3,
    constrain,
    is_compatible,
    solve,
)
from luminaire.domain.services import (
    find_attachment_candidates,
    find_best_snap_point,
    free_snap_points,
)
from luminaire.domain.value_objects import SnapPoint, ZERO

from .registry import ComponentRegistry, RegistryError
from .results import PlacementResult, PlacementStatus

logger = logging.getLogger(__name__)


class PlacementService:
    """Places, attaches, moves and removes components in a room.

    Attributes:
        registry: The authoritative component registry.
        room: Room the assembly lives in.
        require_connector_first: When True the first component of an empty
            assembly must be a connector.
    """

    def __init__(
        self,
        registry: ComponentRegistry,
        room: RoomDimensions,
        require_connector_first: bool = True,
    ) -> None:
        self.registry = registry
        self.room = room
        self.require_connector_first = require_connector_first

    def candidates(
        self,
        source_id: str,
        source_snap_point_id: str,
        templates: Iterable[ComponentTemplate],
    ) -> list[tuple[ComponentTemplate, SnapPoint]]:
        """List catalogue attachments that are legal at a source snap point.

        Returns an empty list when the source is unknown or the snap point is
        missing or already occupied.
        """
        source = self.registry.get(source_id)
        if source is None:
            logger.warning(f"Candidate lookup for unknown component {source_id}")
            return []
        snap_point = source.snap_point(source_snap_point_id)
        if snap_point is None:
            logger.warning(
                f"Candidate lookup for unknown snap point {source_id}:{source_snap_point_id}"
            )
            return []
        if snap_point not in free_snap_points(source):
            return []
        return find_attachment_candidates(source, snap_point, templates)

    def place(
        self,
        template: ComponentTemplate,
        position: Vec3,
        rotation: Vec3 = ZERO,
        component_id: str | None = None,
    ) -> PlacementResult:
        """Place a new, unconnected component (free placement)."""
        if (
            self.require_connector_first
            and len(self.registry) == 0
            and template.type_tag is not ComponentType.CONNECTOR
        ):
            return PlacementResult.reject(
                PlacementStatus.FIRST_COMPONENT_NOT_CONNECTOR,
                f"The first component must be a connector, not {template.type_tag.value}",
            )
        component_id = component_id or self.registry.next_id(template.type_tag.value)
        if component_id in self.registry:
            return PlacementResult.reject(
                PlacementStatus.DUPLICATE_ID, f"Component '{component_id}' already exists"
            )
        component = template.instantiate(component_id, position, rotation)
        return self._commit(
            component, PlacementOrigin.FREE_PLACEMENT, PlacementStatus.PLACED, is_new=True
        )

    def attach(
        self,
        source_id: str,
        source_snap_point_id: str,
        template: ComponentTemplate,
        target_snap_point_id: str | None = None,
        component_id: str | None = None,
    ) -> PlacementResult:
        """Attach a new component so its snap point meets a source snap point.

        Without ``target_snap_point_id`` the template's best snap point for
        the source kind is used (see :func:`find_best_snap_point`).
        """
        source = self.registry.get(source_id)
        if source is None:
            logger.warning(f"Attach to unknown component {source_id}")
            return PlacementResult.reject(
                PlacementStatus.MISSING_COMPONENT, f"Unknown component: {source_id}"
            )
        source_snap_point = source.snap_point(source_snap_point_id)
        if source_snap_point is None:
            logger.warning(f"Attach to unknown snap point {source_id}:{source_snap_point_id}")
            return PlacementResult.reject(
                PlacementStatus.MISSING_SNAP_POINT,
                f"Component '{source_id}' has no snap point '{source_snap_point_id}'",
            )
        if target_snap_point_id is None:
            target_snap_point = find_best_snap_point(template, source_snap_point.kind)
        else:
            target_snap_point = template.snap_point(target_snap_point_id)
        if target_snap_point is None:
            missing = target_snap_point_id or "(any)"
            logger.warning(f"Template {template.id} has no snap point {missing}")
            return PlacementResult.reject(
                PlacementStatus.MISSING_SNAP_POINT,
                f"Template '{template.id}' has no snap point '{missing}'",
            )
        if source.is_occupied(source_snap_point.id):
            return PlacementResult.reject(
                PlacementStatus.SNAP_POINT_OCCUPIED,
                f"Snap point '{source_id}:{source_snap_point.id}' is already connected",
            )
        component_id = component_id or self.registry.next_id(template.type_tag.value)
        if component_id in self.registry:
            return PlacementResult.reject(
                PlacementStatus.DUPLICATE_ID, f"Component '{component_id}' already exists"
            )
        if not is_compatible(source_snap_point, source, target_snap_point, template):
            return PlacementResult.reject(
                PlacementStatus.INCOMPATIBLE,
                f"{template.id}:{target_snap_point.id} cannot attach to "
                f"{source_id}:{source_snap_point.id}",
            )

        try:
            solved = solve(source, source_snap_point, template, target_snap_point)
        except SolverAlignmentError as e:
            logger.error(f"Aborting attachment of {template.id} to {source_id}: {e}")
            return PlacementResult.reject(PlacementStatus.ALIGNMENT_FAILURE, str(e))

        component = template.instantiate(component_id, solved.position, solved.rotation)
        connection = Connection(
            source_component_id=source.id,
            source_snap_point_id=source_snap_point.id,
            target_component_id=component_id,
            target_snap_point_id=target_snap_point.id,
            kind=source_snap_point.kind,
        )
        return self._commit(
            component,
            PlacementOrigin.SNAP_SOLVED,
            PlacementStatus.ATTACHED,
            is_new=True,
            connection=connection,
        )

    def move(self, component_id: str, position: Vec3) -> PlacementResult:
        """Drag a component to a new position (re-constrained)."""
        component = self.registry.get(component_id)
        if component is None:
            logger.warning(f"Move of unknown component {component_id}")
            return PlacementResult.reject(
                PlacementStatus.MISSING_COMPONENT, f"Unknown component: {component_id}"
            )
        return self._commit(
            component.with_transform(position=position),
            PlacementOrigin.FREE_PLACEMENT,
            PlacementStatus.MOVED,
        )

    def nudge(self, component_id: str, direction: Direction, amount: float) -> PlacementResult:
        """Move a component by ``amount`` metres in ``direction``."""
        component = self.registry.get(component_id)
        if component is None:
            logger.warning(f"Nudge of unknown component {component_id}")
            return PlacementResult.reject(
                PlacementStatus.MISSING_COMPONENT, f"Unknown component: {component_id}"
            )
        position = tuple(p + d * amount for p, d in zip(component.position, direction.vector))
        return self.move(component_id, position)

    def rotate(self, component_id: str, axis: Axis, amount: float) -> PlacementResult:
        """Rotate a component by ``amount`` radians about ``axis``."""
        component = self.registry.get(component_id)
        if component is None:
            logger.warning(f"Rotate of unknown component {component_id}")
            return PlacementResult.reject(
                PlacementStatus.MISSING_COMPONENT, f"Unknown component: {component_id}"
            )
        rotation = list(component.rotation)
        rotation[axis.index] += amount
        return self._commit(
            component.with_transform(rotation=tuple(rotation)),
            PlacementOrigin.FREE_PLACEMENT,
            PlacementStatus.MOVED,
        )

    def remove(self, component_id: str) -> PlacementResult:
        """Remove a component and its connections."""
        if component_id not in self.registry:
            logger.warning(f"Remove of unknown component {component_id}")
            return PlacementResult.reject(
                PlacementStatus.MISSING_COMPONENT, f"Unknown component: {component_id}"
            )
        removed = self.registry.remove(component_id)
        return PlacementResult(
            status=PlacementStatus.REMOVED,
            message=f"Removed {component_id}",
            component=removed,
        )

    def _commit(
        self,
        component: Component,
        origin: PlacementOrigin,
        status: PlacementStatus,
        is_new: bool = False,
        connection: Connection | None = None,
    ) -> PlacementResult:
        """Write a component transform (and connection) into the registry."""
        constraint = None
        if origin is PlacementOrigin.FREE_PLACEMENT:
            constraint = constrain(
                component.type_tag,
                component.position,
                component.rotation,
                component.scale,
                self.room,
            )
            component = component.with_transform(constraint.position, constraint.rotation)

        if is_new:
            self.registry.add(component)
        else:
            component = self.registry.replace_transform(
                component.id, component.position, component.rotation
            )

        if connection is not None:
            try:
                self.registry.connect(connection)
            except RegistryError as e:
                self.registry.remove(component.id)
                logger.warning(f"Rolled back {component.id}: {e}")
                return PlacementResult.reject(PlacementStatus.SNAP_POINT_OCCUPIED, str(e))
            component = self.registry.require(component.id)

        message = f"{status.value.capitalize()} {component.id}"
        if constraint is not None and constraint.was_corrected:
            message = f"{message} ({constraint.reason})"
        logger.debug(f"{message} at {component.position} via {origin.value} placement")
        return PlacementResult(
            status=status,
            message=message,
            component=component,
            connection=connection,
            origin=origin,
            constraint=constraint,
        )
