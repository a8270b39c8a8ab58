"""Component registry holding the authoritative state of an assembly.

The registry is an arena of components keyed by id plus the list of
connection records between them. Every mutation either applies completely
or raises :class:`RegistryError` and leaves the registry untouched; in
particular a connection updates both endpoints together.
"""

from __future__ import annotations

import logging
from typing import Iterator

from luminaire.domain import Component, Connection, Vec3

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Raised when a registry mutation would break an invariant."""

    pass


class ComponentRegistry:
    """Arena of placed components and their connections.

    Example:
        registry = ComponentRegistry()
        registry.add(connector)
        registry.add(track)
        registry.connect(Connection("c1", "out", "t1", "end-a", SnapKind.TRACK))
        registry.remove("t1")  # also frees "out" on c1
    """

    def __init__(self) -> None:
        self._components: dict[str, Component] = {}
        self._connections: list[Connection] = []
        self._counters: dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, component_id: object) -> bool:
        return component_id in self._components

    def __iter__(self) -> Iterator[Component]:
        return iter(list(self._components.values()))

    @property
    def components(self) -> tuple[Component, ...]:
        """Snapshot of all components in insertion order."""
        return tuple(self._components.values())

    @property
    def connections(self) -> tuple[Connection, ...]:
        """Snapshot of all connection records."""
        return tuple(self._connections)

    def get(self, component_id: str) -> Component | None:
        return self._components.get(component_id)

    def require(self, component_id: str) -> Component:
        """Get a component or raise RegistryError."""
        component = self._components.get(component_id)
        if component is None:
            raise RegistryError(f"Unknown component: {component_id}")
        return component

    def next_id(self, prefix: str) -> str:
        """Generate an unused component id such as ``track-3``."""
        while True:
            self._counters[prefix] = self._counters.get(prefix, 0) + 1
            candidate = f"{prefix}-{self._counters[prefix]}"
            if candidate not in self._components:
                return candidate

    def add(self, component: Component) -> None:
        """Add a new, unconnected component.

        Raises:
            RegistryError: If the id is taken or the component claims
                connections that have no record.
        """
        if component.id in self._components:
            raise RegistryError(f"Component '{component.id}' already exists")
        if component.connections:
            raise RegistryError(
                f"Component '{component.id}' cannot be added with occupied snap points"
            )
        self._components[component.id] = component

    def replace_transform(
        self, component_id: str, position: Vec3, rotation: Vec3
    ) -> Component:
        """Move/rotate a component in place and return the new snapshot."""
        updated = self.require(component_id).with_transform(position, rotation)
        self._components[component_id] = updated
        return updated

    def connections_of(self, component_id: str) -> list[Connection]:
        return [c for c in self._connections if c.involves(component_id)]

    def connect(self, connection: Connection) -> None:
        """Record a connection, occupying a snap point on both components.

        Raises:
            RegistryError: If either endpoint is missing or already occupied.
        """
        updated: dict[str, Component] = {}
        for component_id, snap_point_id in connection.endpoints():
            component = self.require(component_id)
            if component.snap_point(snap_point_id) is None:
                raise RegistryError(
                    f"Component '{component_id}' has no snap point '{snap_point_id}'"
                )
            if component.is_occupied(snap_point_id):
                raise RegistryError(
                    f"Snap point '{component_id}:{snap_point_id}' is already connected"
                )
            updated[component_id] = component.with_connections(
                component.connections | {snap_point_id}
            )

        # Both endpoints validated; commit together.
        self._components.update(updated)
        self._connections.append(connection)
        logger.debug(
            f"Connected {connection.source_component_id}:{connection.source_snap_point_id}"
            f" -> {connection.target_component_id}:{connection.target_snap_point_id}"
        )

    def remove(self, component_id: str) -> Component:
        """Remove a component and every connection touching it.

        Partner components get the matching snap points freed.

        Returns:
            The removed component snapshot.
        """
        removed = self.require(component_id)
        kept: list[Connection] = []
        freed: dict[str, set[str]] = {}
        for connection in self._connections:
            if not connection.involves(component_id):
                kept.append(connection)
                continue
            for partner_id, snap_point_id in connection.endpoints():
                if partner_id != component_id:
                    freed.setdefault(partner_id, set()).add(snap_point_id)

        for partner_id, snap_point_ids in freed.items():
            partner = self._components[partner_id]
            self._components[partner_id] = partner.with_connections(
                partner.connections - snap_point_ids
            )
        self._connections = kept
        del self._components[component_id]
        logger.debug(f"Removed {component_id}, freed snap points on {sorted(freed)}")
        return removed
