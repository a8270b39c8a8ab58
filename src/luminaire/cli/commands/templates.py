"""Templates commands for listing and initializing bundled assemblies."""

from pathlib import Path
from typing import Annotated

import typer

from luminaire.application.templates import TemplateManager, TemplateNotFoundError

templates_app = typer.Typer(
    name="templates",
    help="Manage bundled assembly templates.",
)


@templates_app.command(name="list")
def list_templates() -> None:
    """List the bundled assembly templates.

    Example:
        luminaire templates list
    """
    templates = TemplateManager().list_templates()
    width = max((len(name) for name, _ in templates), default=0)

    typer.echo("Available templates:")
    typer.echo()
    for name, description in templates:
        typer.echo(f"  {name:<{width}}  - {description}")
    typer.echo()
    typer.echo("Use 'luminaire templates init <name>' to start a configuration from one.")


@templates_app.command(name="init")
def init_template(
    name: Annotated[str, typer.Argument(help="Name of the template to copy")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output file path (default: <name>.json)"),
    ] = None,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Write a bundled template to a new configuration file.

    Examples:
        luminaire templates init track-pendant
        luminaire templates init ceiling-spots --output kitchen.json
    """
    manager = TemplateManager()
    target = output or Path(f"{name}.json")

    try:
        manager.init_template(name, target, force=force)
    except TemplateNotFoundError:
        available = ", ".join(n for n, _ in manager.list_templates())
        typer.echo(f"Error: Template not found: {name}", err=True)
        typer.echo(f"Available templates: {available}", err=True)
        raise typer.Exit(code=1)
    except FileExistsError:
        typer.echo(f"Error: File already exists: {target}", err=True)
        typer.echo("Use --force to overwrite.", err=True)
        raise typer.Exit(code=1)
    except OSError as e:
        typer.echo(f"Error: Could not write file: {e}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Created: {target}")
