"""Domain entities: catalogue templates and placed components."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from .value_objects import (
    ComponentType,
    Pose,
    SnapPoint,
    UNIT_SCALE,
    Vec3,
    ZERO,
    as_vec3,
)

# A connector above this height counts as ceiling mounted.
CEILING_CONNECTOR_MIN_HEIGHT = 2.0


def _check_snap_point_ids(snap_points: tuple[SnapPoint, ...]) -> None:
    seen: set[str] = set()
    for snap_point in snap_points:
        if snap_point.id in seen:
            raise ValueError(f"Duplicate snap point id: {snap_point.id}")
        seen.add(snap_point.id)


@dataclass(frozen=True)
class ComponentTemplate:
    """A catalogue part that can be instantiated into the room.

    Attributes:
        id: Catalogue identifier (e.g. "track-1m").
        type_tag: Component type tag.
        snap_points: Ordered snap points in the part's local frame.
        scale: Default scale applied to instances.
        name: Display name. Never used for behaviour.
        is_pendant: Spotlight that hangs from a cable instead of a bracket.
        is_end_cap: Part that terminates a track run.
    """

    id: str
    type_tag: ComponentType
    snap_points: tuple[SnapPoint, ...] = ()
    scale: Vec3 = UNIT_SCALE
    name: str = ""
    is_pendant: bool = False
    is_end_cap: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Template id must not be empty")
        object.__setattr__(self, "snap_points", tuple(self.snap_points))
        object.__setattr__(self, "scale", as_vec3(self.scale, "scale"))
        _check_snap_point_ids(self.snap_points)
        if self.is_pendant and self.type_tag is not ComponentType.SPOTLIGHT:
            raise ValueError("Only spotlights can be pendants")

    def snap_point(self, snap_point_id: str) -> SnapPoint | None:
        """Look up a snap point by id."""
        for snap_point in self.snap_points:
            if snap_point.id == snap_point_id:
                return snap_point
        return None

    def instantiate(
        self,
        component_id: str,
        position: Vec3 = ZERO,
        rotation: Vec3 = ZERO,
    ) -> Component:
        """Create a placed component from this template."""
        return Component(
            id=component_id,
            type_tag=self.type_tag,
            position=position,
            rotation=rotation,
            scale=self.scale,
            snap_points=self.snap_points,
            name=self.name,
            template_id=self.id,
            is_pendant=self.is_pendant,
            is_end_cap=self.is_end_cap,
        )


@dataclass(frozen=True)
class Component:
    """A placed part in the room.

    Components are immutable snapshots; moving or connecting one produces a
    new value via :meth:`with_transform` / :meth:`with_connections`.

    Invariant: ``connections`` is a subset of the snap point ids.
    """

    id: str
    type_tag: ComponentType
    position: Vec3 = ZERO
    rotation: Vec3 = ZERO
    scale: Vec3 = UNIT_SCALE
    snap_points: tuple[SnapPoint, ...] = ()
    connections: frozenset[str] = field(default_factory=frozenset)
    name: str = ""
    template_id: str | None = None
    is_pendant: bool = False
    is_end_cap: bool = False

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("Component id must not be empty")
        object.__setattr__(self, "position", as_vec3(self.position, "position"))
        object.__setattr__(self, "rotation", as_vec3(self.rotation, "rotation"))
        object.__setattr__(self, "scale", as_vec3(self.scale, "scale"))
        object.__setattr__(self, "snap_points", tuple(self.snap_points))
        object.__setattr__(self, "connections", frozenset(self.connections))
        _check_snap_point_ids(self.snap_points)
        unknown = self.connections - {sp.id for sp in self.snap_points}
        if unknown:
            raise ValueError(
                f"Connections reference unknown snap points: {sorted(unknown)}"
            )

    @property
    def pose(self) -> Pose:
        return Pose(position=self.position, rotation=self.rotation, scale=self.scale)

    @property
    def is_ceiling_mounted_connector(self) -> bool:
        """Connector hung high enough to count as ceiling mounted."""
        return (
            self.type_tag is ComponentType.CONNECTOR
            and self.position[1] > CEILING_CONNECTOR_MIN_HEIGHT
        )

    def snap_point(self, snap_point_id: str) -> SnapPoint | None:
        """Look up a snap point by id."""
        for snap_point in self.snap_points:
            if snap_point.id == snap_point_id:
                return snap_point
        return None

    def is_occupied(self, snap_point_id: str) -> bool:
        return snap_point_id in self.connections

    def with_transform(
        self, position: Vec3 | None = None, rotation: Vec3 | None = None
    ) -> Component:
        """Return a copy with a new position and/or rotation."""
        return replace(
            self,
            position=self.position if position is None else position,
            rotation=self.rotation if rotation is None else rotation,
        )

    def with_connections(self, connections: frozenset[str]) -> Component:
        """Return a copy with a new set of occupied snap point ids."""
        return replace(self, connections=connections)
