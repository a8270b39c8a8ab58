"""CLI command implementations for the luminaire application.

This package contains subcommands for the luminaire CLI, including:
- validate: Validate a configuration file
- templates: Manage bundled assembly templates
"""

from luminaire.cli.commands.templates import templates_app
from luminaire.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "templates_app", "validate_command"]
