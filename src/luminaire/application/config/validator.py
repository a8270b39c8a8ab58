"""Advisory checks for assembly configurations.

The Pydantic schema already guarantees that ids are unique and that every
reference resolves. What it cannot know are the domain rules, so these
checks look at whether the assembly starts with a connector when that is
required, whether each attach step pairs compatible snap points, whether a
catalogue snap point can ever be used, and whether free placements start
inside the room.

Findings are either errors (the assembly would be rejected) or warnings
(it will run but may not do what the author expects).
"""

from dataclasses import dataclass, field
from typing import Any

from luminaire.application.config.adapter import config_to_catalogue, config_to_room
from luminaire.application.config.schema import (
    AssemblyConfiguration,
    AttachStepConfig,
    PlaceStepConfig,
)
from luminaire.domain import ComponentTemplate, ComponentType, is_compatible
from luminaire.domain.services import (
    component_bounds,
    find_best_snap_point,
    is_position_valid,
)


@dataclass
class ValidationError:
    """A finding that would make a step fail when the assembly runs."""

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A finding the assembly survives, with an optional remedy."""

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Errors and warnings collected by the checks.

    ``exit_code`` maps the result onto the CLI convention: 1 when any error
    was found, 2 for warnings only, 0 when clean.
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def exit_code(self) -> int:
        return 1 if self.errors else 2 if self.warnings else 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationError(path, message, value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path, message, suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors += other.errors
        self.warnings += other.warnings
        return self


def check_connector_first(
    config: AssemblyConfiguration, catalogue: dict[str, ComponentTemplate]
) -> ValidationResult:
    """Report a first step that is not a connector when the option requires one."""
    result = ValidationResult()
    if not config.options.require_connector_first or not config.assembly:
        return result
    first = catalogue[config.assembly[0].template]
    if first.type_tag is not ComponentType.CONNECTOR:
        result.add_error(
            path="assembly[0].template",
            message=f"The first component must be a connector, not {first.type_tag.value}",
            value=first.id,
        )
    return result


def check_attachments(
    config: AssemblyConfiguration, catalogue: dict[str, ComponentTemplate]
) -> ValidationResult:
    """Report attach steps whose snap points the compatibility rules reject."""
    result = ValidationResult()
    step_templates: dict[str, ComponentTemplate] = {}
    for index, step in enumerate(config.assembly):
        template = catalogue[step.template]
        if isinstance(step, AttachStepConfig):
            source = step_templates[step.source]
            source_sp = source.snap_point(step.source_snap_point)
            if step.target_snap_point is None:
                target_sp = find_best_snap_point(template, source_sp.kind)
            else:
                target_sp = template.snap_point(step.target_snap_point)
            if target_sp is None:
                result.add_error(
                    path=f"assembly[{index}]",
                    message=f"Template '{template.id}' has no snap points to attach with",
                )
            elif not is_compatible(source_sp, source, target_sp, template):
                result.add_error(
                    path=f"assembly[{index}]",
                    message=(
                        f"Snap point '{template.id}:{target_sp.id}' ({target_sp.kind.value}) "
                        f"cannot attach to '{step.source}:{source_sp.id}' ({source_sp.kind.value})"
                    ),
                    value=step.target_snap_point,
                )
        step_templates[step.id] = template
    return result


def check_unreachable_snap_points(
    catalogue: dict[str, ComponentTemplate],
) -> ValidationResult:
    """Warn about catalogue snap points nothing in the catalogue can connect to."""
    result = ValidationResult()
    templates = list(catalogue.values())
    for t_index, template in enumerate(templates):
        for s_index, snap_point in enumerate(template.snap_points):
            reachable = any(
                is_compatible(snap_point, template, other_sp, other)
                for other in templates
                for other_sp in other.snap_points
            )
            if not reachable:
                result.add_warning(
                    path=f"catalogue[{t_index}].snap_points[{s_index}]",
                    message=(
                        f"Snap point '{template.id}:{snap_point.id}' "
                        f"({snap_point.kind.value}) can never be connected"
                    ),
                    suggestion="Add a compatible part to the catalogue or remove the snap point",
                )
    return result


def check_place_positions(
    config: AssemblyConfiguration, catalogue: dict[str, ComponentTemplate]
) -> ValidationResult:
    """Warn about free placements that start outside the room."""
    result = ValidationResult()
    room = config_to_room(config.room)
    for index, step in enumerate(config.assembly):
        if not isinstance(step, PlaceStepConfig):
            continue
        template = catalogue[step.template]
        bounds = component_bounds(template.type_tag, template.scale)
        if not is_position_valid(step.position, room, bounds):
            result.add_warning(
                path=f"assembly[{index}].position",
                message=f"Position {list(step.position)} lies outside the room",
                suggestion="The position will be clamped to the room boundaries",
            )
    return result


def validate_config(config: AssemblyConfiguration) -> ValidationResult:
    """Perform full validation of an assembly configuration.

    Args:
        config: An AssemblyConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    catalogue = config_to_catalogue(config)
    result = ValidationResult()
    result.merge(check_connector_first(config, catalogue))
    result.merge(check_attachments(config, catalogue))
    result.merge(check_unreachable_snap_points(catalogue))
    result.merge(check_place_positions(config, catalogue))
    return result
