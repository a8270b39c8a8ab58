"""Loading of assembly configuration files.

A configuration goes through three stages, each with its own ConfigError
type so the CLI can tell the user exactly which stage failed:

1. reading the file (``file_not_found``, ``permission_denied``,
   ``file_read_error``)
2. parsing JSON (``json_parse``, with line and column)
3. schema validation (``validation``, one detail per Pydantic error, each
   with a JSON path such as ``assembly[2].source``)
"""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from luminaire.application.config.schema import AssemblyConfiguration

# Discriminator values Pydantic inserts into the location of step errors.
_STEP_TAGS = frozenset({"place", "attach"})

ROOT_PATH = "<root>"


class ConfigError(Exception):
    """A configuration file could not be turned into an AssemblyConfiguration.

    Attributes:
        message: Summary shown to the user
        error_type: Stage that failed (file_not_found, permission_denied,
            file_read_error, json_parse, validation)
        path: Configuration file, when loading from disk
        details: Per-problem dictionaries; ``line``/``column``/``message`` for
            JSON errors, ``path``/``message``/``value``/``error_type`` for
            validation errors
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Turn a Pydantic error location into a JSON path.

    Indices are attached to the preceding key and the step discriminator is
    dropped, so ``("assembly", 1, "attach", "source")`` becomes
    ``assembly[1].source``.

    Examples:
        >>> _format_json_path(("catalogue", 0, "snap_points", 1, "kind"))
        'catalogue[0].snap_points[1].kind'
        >>> _format_json_path(())
        '<root>'
    """
    parts: list[str] = []
    previous: str | int | None = None
    for segment in loc:
        if isinstance(segment, int):
            if parts:
                parts[-1] += f"[{segment}]"
            else:
                parts.append(f"[{segment}]")
        elif not (isinstance(previous, int) and segment in _STEP_TAGS):
            parts.append(segment)
        previous = segment
    return ".".join(parts) or ROOT_PATH


def _validation_details(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _validation_summary(details: list[dict[str, Any]]) -> str:
    lines = ["Configuration validation failed:"]
    for detail in details:
        line = f"  - {detail['path']}: {detail['message']}"
        # Whole-object inputs are too noisy to echo back.
        value = detail.get("value")
        if value is not None and not isinstance(value, (dict, list)):
            line += f" (got: {value!r})"
        lines.append(line)
    return "\n".join(lines)


def _validate(data: Any, path: Path | None = None) -> AssemblyConfiguration:
    try:
        return AssemblyConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _validation_details(e)
        raise ConfigError(
            message=_validation_summary(details),
            error_type="validation",
            path=path,
            details=details,
        ) from e


def _read(path: Path) -> str:
    if not path.exists():
        raise ConfigError(
            message=f"Config file not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            message=f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        ) from e
    except OSError as e:
        raise ConfigError(
            message=f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        ) from e


def load_config(path: Path) -> AssemblyConfiguration:
    """Load and validate an assembly configuration file.

    Args:
        path: JSON configuration file

    Returns:
        The validated configuration

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or does
            not match the schema. ``error_type`` names the failing stage.
    """
    content = _read(path)
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=(
                f"Invalid JSON in config file: {path} "
                f"(line {e.lineno}, column {e.colno}): {e.msg}"
            ),
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e
    return _validate(data, path)


def load_config_from_dict(data: dict[str, Any]) -> AssemblyConfiguration:
    """Validate an already parsed configuration.

    Raises:
        ConfigError: With ``error_type`` "validation" if the data does not
            match the schema.
    """
    return _validate(data)
