"""Typer CLI for assembling modular lighting fixtures."""

import logging
import math
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from luminaire.application import AssemblyReport, PlacementService, run_assembly
from luminaire.application.config import ConfigError, load_config
from luminaire.cli.commands import display_load_error, templates_app, validate_command
from luminaire.domain import ComponentType, RoomDimensions, Vec3, constrain
from luminaire.domain.services import free_snap_points
from luminaire.infrastructure import AssemblyTableFormatter, ConstraintFormatter, JsonExporter


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"


app = typer.Typer(
    name="luminaire",
    help="Snap-point assembly of modular lighting fixtures.",
    no_args_is_help=True,
)

app.command(name="validate")(validate_command)
app.add_typer(templates_app, name="templates")


@app.callback()
def main(
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """Snap-point assembly of modular lighting fixtures."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_vector(value: str, option: str) -> Vec3:
    parts = [p.strip() for p in value.split(",")]
    try:
        if len(parts) != 3:
            raise ValueError(value)
        return (float(parts[0]), float(parts[1]), float(parts[2]))
    except ValueError:
        typer.echo(f"Error: {option} expects three comma-separated numbers, got '{value}'", err=True)
        raise typer.Exit(code=1)


def _parse_room(value: str) -> RoomDimensions:
    parts = value.lower().split("x")
    try:
        if len(parts) != 3:
            raise ValueError(value)
        width, depth, height = (float(p) for p in parts)
    except ValueError:
        typer.echo(f"Error: --room expects WIDTHxDEPTHxHEIGHT, got '{value}'", err=True)
        raise typer.Exit(code=1)
    return RoomDimensions(width=width, depth=depth, height=height)


def _assemble(config_file: Path) -> AssemblyReport:
    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)
    return run_assembly(config)


@app.command()
def assemble(
    config_file: Annotated[Path, typer.Argument(help="Path to the JSON configuration file")],
    output_format: Annotated[
        OutputFormat, typer.Option("--format", "-f", help="Output format")
    ] = OutputFormat.TABLE,
    output_file: Annotated[
        Path | None, typer.Option("--output", "-o", help="Write output to a file")
    ] = None,
) -> None:
    """Replay a configuration's assembly steps and print the layout.

    Exits with code 1 when any step fails; the partial layout is still shown.
    """
    report = _assemble(config_file)

    if output_format is OutputFormat.JSON:
        text = JsonExporter().export(report)
    else:
        text = AssemblyTableFormatter().format(report)

    if output_file is not None:
        try:
            output_file.write_text(text, encoding="utf-8")
        except OSError as e:
            typer.echo(f"Error: Could not write file: {e}", err=True)
            raise typer.Exit(code=1)
        typer.echo(f"Wrote {output_file}")
    else:
        typer.echo(text)

    if not report.succeeded:
        for outcome in report.failures:
            typer.echo(f"Step {outcome.step_id} failed: {outcome.result.message}", err=True)
        raise typer.Exit(code=1)


@app.command()
def candidates(
    config_file: Annotated[Path, typer.Argument(help="Path to the JSON configuration file")],
    component_id: Annotated[str, typer.Argument(help="Placed component to attach to")],
    snap_point_id: Annotated[str, typer.Argument(help="Snap point on that component")],
) -> None:
    """List catalogue parts that may attach at a snap point of the assembly."""
    report = _assemble(config_file)
    component = report.registry.get(component_id)
    if component is None:
        typer.echo(f"Error: Unknown component: {component_id}", err=True)
        raise typer.Exit(code=1)
    snap_point = component.snap_point(snap_point_id)
    if snap_point is None:
        typer.echo(
            f"Error: Component '{component_id}' has no snap point '{snap_point_id}'", err=True
        )
        raise typer.Exit(code=1)
    if snap_point not in free_snap_points(component):
        typer.echo(f"Snap point {component_id}:{snap_point_id} is already connected.")
        return

    service = PlacementService(report.registry, report.room)
    found = service.candidates(component_id, snap_point_id, report.catalogue.values())
    if not found:
        typer.echo(f"No compatible attachments for {component_id}:{snap_point_id}.")
        return

    typer.echo(f"Attachments for {component_id}:{snap_point_id}:")
    for template, candidate in found:
        typer.echo(f"  {template.id}:{candidate.id} ({candidate.kind.value})")


@app.command(name="constrain")
def constrain_command(
    type_tag: Annotated[ComponentType, typer.Option("--type", "-t", help="Component type")],
    position: Annotated[str, typer.Option("--position", "-p", help="Position x,y,z in metres")],
    room: Annotated[str, typer.Option("--room", help="Room as WIDTHxDEPTHxHEIGHT in metres")],
    rotation: Annotated[
        str, typer.Option("--rotation", "-r", help="Rotation x,y,z in degrees")
    ] = "0,0,0",
    scale: Annotated[str, typer.Option("--scale", "-s", help="Scale x,y,z")] = "1,1,1",
) -> None:
    """Run the boundary engine on a single free placement."""
    requested = _parse_vector(position, "--position")
    rotation_rad = tuple(math.radians(r) for r in _parse_vector(rotation, "--rotation"))
    result = constrain(
        type_tag,
        requested,
        rotation_rad,
        _parse_vector(scale, "--scale"),
        _parse_room(room),
    )
    typer.echo(ConstraintFormatter().format(requested, result))


if __name__ == "__main__":
    app()
