"""Application layer - registry, placement service and configuration."""

from .assembly import AssemblyReport, StepOutcome, run_assembly
from .placement import PlacementService
from .registry import ComponentRegistry, RegistryError
from .results import PlacementResult, PlacementStatus

__all__ = [
    "AssemblyReport",
    "ComponentRegistry",
    "PlacementResult",
    "PlacementService",
    "PlacementStatus",
    "RegistryError",
    "StepOutcome",
    "run_assembly",
]
