"""Configuration schema and loading system for lighting assemblies.

This package provides JSON-based configuration loading and validation for
lighting assemblies: Pydantic models for schema validation, a loader with
clear error reporting, semantic checks backed by the domain rules, and an
adapter producing domain objects.

Public API:
    - AssemblyConfiguration: Root configuration model
    - RoomConfig: Room dimensions
    - TemplateConfig: Catalogue part
    - SnapPointConfig: Snap point on a catalogue part
    - PlaceStepConfig / AttachStepConfig: Assembly steps
    - OptionsConfig: Assembly behaviour options
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - ValidationResult: Container for validation results
    - validate_config: Perform full configuration validation
    - config_to_room / config_to_catalogue: Convert to domain objects

Example:
    >>> from pathlib import Path
    >>> from luminaire.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("my-fixture.json"))
    ...     print(f"Room: {config.room.width}x{config.room.depth}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from luminaire.application.config.adapter import (
    config_to_catalogue,
    config_to_room,
    config_to_template,
    degrees_to_radians,
    radians_to_degrees,
)
from luminaire.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from luminaire.application.config.schema import (
    SUPPORTED_VERSIONS,
    AssemblyConfiguration,
    AttachStepConfig,
    OptionsConfig,
    PlaceStepConfig,
    RoomConfig,
    SnapPointConfig,
    TemplateConfig,
)
from luminaire.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "AssemblyConfiguration",
    "AttachStepConfig",
    "ConfigError",
    "OptionsConfig",
    "PlaceStepConfig",
    "RoomConfig",
    "SnapPointConfig",
    "TemplateConfig",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "config_to_catalogue",
    "config_to_room",
    "config_to_template",
    "degrees_to_radians",
    "load_config",
    "load_config_from_dict",
    "radians_to_degrees",
    "validate_config",
]
