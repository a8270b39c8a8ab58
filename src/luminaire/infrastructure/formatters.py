"""Output formatters and exporters for lighting assemblies.

Rotations are shown in degrees; positions in metres.
"""

from __future__ import annotations

import json
import math
from typing import Any

from luminaire.application import AssemblyReport, StepOutcome
from luminaire.domain import Component, Connection, ConstraintResult, Vec3


def _degrees(rotation: Vec3) -> Vec3:
    return tuple(math.degrees(r) for r in rotation)


def _fmt_vec(values: Vec3, precision: int = 3) -> str:
    return "(" + ", ".join(f"{v:.{precision}f}" for v in values) + ")"


def _round_vec(values: Vec3, digits: int = 6) -> list[float]:
    # Normalise -0.0 so JSON output is stable.
    return [round(v, digits) + 0.0 for v in values]


class AssemblyTableFormatter:
    """Formats an assembly report as plain-text tables."""

    def format(self, report: AssemblyReport) -> str:
        room = report.room
        lines = [
            f"ROOM {room.width:g} x {room.depth:g} x {room.height:g} m",
            "",
            self.format_components(list(report.components)),
            "",
            self.format_connections(list(report.connections)),
        ]
        failures = report.failures
        if failures:
            lines.append("")
            lines.append(self.format_failures(failures))
        if report.warnings:
            lines.append("")
            lines.append("WARNINGS")
            lines.extend(f"  - {w}" for w in report.warnings)
        return "\n".join(lines)

    def format_components(self, components: list[Component]) -> str:
        if not components:
            return "No components placed."

        lines = [
            "COMPONENTS",
            "=" * 96,
            f"{'Id':<14} {'Type':<13} {'Template':<20} {'Position (m)':<26} {'Rotation (deg)'}",
            "-" * 96,
        ]
        for component in components:
            lines.append(
                f"{component.id:<14} {component.type_tag.value:<13} "
                f"{(component.template_id or ''):<20} {_fmt_vec(component.position):<26} "
                f"{_fmt_vec(_degrees(component.rotation), 1)}"
            )
        lines.append("-" * 96)
        lines.append(f"{len(components)} component(s)")
        return "\n".join(lines)

    def format_connections(self, connections: list[Connection]) -> str:
        if not connections:
            return "No connections."

        lines = ["CONNECTIONS", "=" * 60]
        for c in connections:
            lines.append(
                f"{c.source_component_id}:{c.source_snap_point_id} -> "
                f"{c.target_component_id}:{c.target_snap_point_id} [{c.kind.value}]"
            )
        return "\n".join(lines)

    def format_failures(self, failures: list[StepOutcome]) -> str:
        lines = ["FAILED STEPS", "=" * 60]
        for outcome in failures:
            lines.append(
                f"assembly[{outcome.index}] {outcome.step_id}: "
                f"{outcome.result.status.value} - {outcome.result.message}"
            )
        return "\n".join(lines)


class ConstraintFormatter:
    """Formats a single boundary engine result."""

    def format(self, requested: Vec3, result: ConstraintResult) -> str:
        lines = [
            f"Requested: {_fmt_vec(requested)}",
            f"Position:  {_fmt_vec(result.position)}",
            f"Rotation:  {_fmt_vec(_degrees(result.rotation), 1)} deg",
            f"Corrected: {'yes' if result.was_corrected else 'no'}",
        ]
        if result.reason:
            lines.append(f"Reason:    {result.reason}")
        return "\n".join(lines)


class JsonExporter:
    """Exports an assembly report as JSON."""

    def export(self, report: AssemblyReport) -> str:
        """Export the report as a JSON string."""
        return json.dumps(self.to_dict(report), indent=2)

    def to_dict(self, report: AssemblyReport) -> dict[str, Any]:
        room = report.room
        return {
            "room": {"width": room.width, "depth": room.depth, "height": room.height},
            "components": [self._component(c) for c in report.components],
            "connections": [self._connection(report, c) for c in report.connections],
            "steps": [
                {
                    "index": s.index,
                    "id": s.step_id,
                    "action": s.action,
                    "status": s.result.status.value,
                    "message": s.result.message,
                }
                for s in report.steps
            ],
            "warnings": list(report.warnings),
        }

    def _component(self, component: Component) -> dict[str, Any]:
        return {
            "id": component.id,
            "type": component.type_tag.value,
            "template": component.template_id,
            "position": _round_vec(component.position),
            "rotation_deg": _round_vec(_degrees(component.rotation)),
            "scale": list(component.scale),
            "connections": sorted(component.connections),
        }

    def _connection(self, report: AssemblyReport, connection: Connection) -> dict[str, Any]:
        return {
            "source": connection.source_component_id,
            "source_snap_point": connection.source_snap_point_id,
            "target": connection.target_component_id,
            "target_snap_point": connection.target_snap_point_id,
            "kind": connection.kind.value,
            "gap": round(report.connection_gap(connection), 6) + 0.0,
        }
