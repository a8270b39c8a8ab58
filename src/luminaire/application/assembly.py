"""Replay a configuration's assembly steps into a registry."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from luminaire.application.config import (
    AssemblyConfiguration,
    AttachStepConfig,
    config_to_catalogue,
    config_to_room,
    degrees_to_radians,
)
from luminaire.domain import Component, ComponentTemplate, Connection, RoomDimensions
from luminaire.domain.services import (
    component_bounds,
    is_position_valid,
    snap_point_distance,
)

from .placement import PlacementService
from .registry import ComponentRegistry
from .results import PlacementResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StepOutcome:
    """Result of one assembly step."""

    index: int
    step_id: str
    action: str
    result: PlacementResult


@dataclass
class AssemblyReport:
    """Everything produced by replaying an assembly.

    Attributes:
        room: Room the assembly was built in.
        catalogue: Domain templates keyed by catalogue id.
        registry: Registry holding the final components and connections.
        steps: Per-step outcomes in configuration order.
        warnings: Snap-solved components whose bounds leave the room.
    """

    room: RoomDimensions
    catalogue: dict[str, ComponentTemplate]
    registry: ComponentRegistry
    steps: list[StepOutcome] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def components(self) -> tuple[Component, ...]:
        return self.registry.components

    @property
    def connections(self) -> tuple[Connection, ...]:
        return self.registry.connections

    @property
    def failures(self) -> list[StepOutcome]:
        return [s for s in self.steps if not s.result.ok]

    @property
    def succeeded(self) -> bool:
        return not self.failures

    def connection_gap(self, connection: Connection) -> float:
        """World distance between the two snap points of a connection.

        Zero for a freshly solved attachment; grows if either end is later
        moved on its own.
        """
        source = self.registry.require(connection.source_component_id)
        target = self.registry.require(connection.target_component_id)
        return snap_point_distance(
            source,
            source.snap_point(connection.source_snap_point_id),
            target,
            target.snap_point(connection.target_snap_point_id),
        )


def run_assembly(config: AssemblyConfiguration) -> AssemblyReport:
    """Build an assembly by replaying every step of ``config``.

    Steps run in order through a fresh :class:`PlacementService`. A failed
    step is recorded and the remaining steps still run; steps that depend on
    a failed one fail in turn with ``MISSING_COMPONENT``.
    """
    room = config_to_room(config.room)
    catalogue = config_to_catalogue(config)
    registry = ComponentRegistry()
    service = PlacementService(
        registry, room, require_connector_first=config.options.require_connector_first
    )
    report = AssemblyReport(room=room, catalogue=catalogue, registry=registry)

    for index, step in enumerate(config.assembly):
        template = catalogue[step.template]
        if isinstance(step, AttachStepConfig):
            result = service.attach(
                step.source,
                step.source_snap_point,
                template,
                step.target_snap_point,
                component_id=step.id,
            )
            if result.ok and result.component is not None:
                bounds = component_bounds(template.type_tag, template.scale)
                if not is_position_valid(result.component.position, room, bounds):
                    report.warnings.append(
                        f"{step.id} was snapped to {step.source} but extends outside the room"
                    )
        else:
            result = service.place(
                template,
                step.position,
                degrees_to_radians(step.rotation),
                component_id=step.id,
            )
        if not result.ok:
            logger.warning(f"Step {index} ({step.id}) failed: {result.message}")
        report.steps.append(
            StepOutcome(index=index, step_id=step.id, action=step.action, result=result)
        )

    logger.info(
        f"Assembled {len(registry)} components with {len(registry.connections)} connections"
    )
    return report
