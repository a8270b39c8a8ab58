"""Infrastructure layer - output formatters."""

from .formatters import AssemblyTableFormatter, ConstraintFormatter, JsonExporter

__all__ = ["AssemblyTableFormatter", "ConstraintFormatter", "JsonExporter"]
