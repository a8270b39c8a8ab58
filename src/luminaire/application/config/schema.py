"""Pydantic configuration schema for lighting assemblies.

A configuration file describes a room, a catalogue of parts with their snap
points, and an ordered list of assembly steps that place parts freely or
attach them to snap points of earlier parts. Rotations in configuration
files are Euler XYZ angles in degrees.

The SnapKind and ComponentType enums are reused from the domain layer so
the JSON values match the domain exactly.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from luminaire.domain.value_objects import ComponentType, SnapKind

# Supported schema versions for configuration files
# Version 1.0: Room, catalogue and assembly steps
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})

Vector3 = tuple[float, float, float]


class SnapPointConfig(BaseModel):
    """Configuration for a snap point on a catalogue part.

    Attributes:
        id: Identifier, unique within the part
        kind: Snap point kind (power, mechanical, data, track, mounting, accessory)
        position: Local position in metres
        rotation: Local Euler XYZ rotation in degrees
        compatible_kinds: Optional hint of preferred partner kinds
        name: Optional display label
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    kind: SnapKind
    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Vector3 = Field(default=(0.0, 0.0, 0.0), description="Degrees")
    compatible_kinds: list[SnapKind] = Field(default_factory=list)
    name: str | None = None


class TemplateConfig(BaseModel):
    """Configuration for a catalogue part.

    Attributes:
        id: Catalogue identifier referenced by assembly steps
        type: Component type tag
        name: Display name
        scale: Per-axis scale applied to placed instances
        is_pendant: Spotlight hanging from a cable (spotlights only)
        is_end_cap: Part terminating a track run
        snap_points: Attachment points in the part's local frame
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1)
    type: ComponentType
    name: str = ""
    scale: Vector3 = (1.0, 1.0, 1.0)
    is_pendant: bool = False
    is_end_cap: bool = False
    snap_points: list[SnapPointConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_template(self) -> "TemplateConfig":
        """Check snap point ids are unique and flags fit the type."""
        seen: set[str] = set()
        for snap_point in self.snap_points:
            if snap_point.id in seen:
                raise ValueError(
                    f"Duplicate snap point id '{snap_point.id}' in template '{self.id}'"
                )
            seen.add(snap_point.id)
        if self.is_pendant and self.type != ComponentType.SPOTLIGHT:
            raise ValueError(f"Template '{self.id}': only spotlights can be pendants")
        return self

    def snap_point_ids(self) -> set[str]:
        return {sp.id for sp in self.snap_points}


class RoomConfig(BaseModel):
    """Room dimensions in metres."""

    model_config = ConfigDict(extra="forbid")

    width: float = Field(gt=0, description="Extent along X")
    depth: float = Field(gt=0, description="Extent along Z")
    height: float = Field(gt=0, description="Floor to ceiling")


class PlaceStepConfig(BaseModel):
    """Free placement of a part at a position.

    Attributes:
        id: Component id for the placed part
        template: Catalogue id of the part
        position: Requested position in metres (clamped into the room)
        rotation: Requested rotation in degrees
    """

    model_config = ConfigDict(extra="forbid")

    action: Literal["place"]
    id: str = Field(min_length=1)
    template: str
    position: Vector3
    rotation: Vector3 = (0.0, 0.0, 0.0)


class AttachStepConfig(BaseModel):
    """Attachment of a part to a snap point of an earlier part.

    Attributes:
        id: Component id for the attached part
        template: Catalogue id of the part
        source: Id of an earlier step's component
        source_snap_point: Snap point on the source component
        target_snap_point: Snap point on the new part that meets the source;
            when omitted the part's best match for the source kind is used
    """

    model_config = ConfigDict(extra="forbid")

    action: Literal["attach"]
    id: str = Field(min_length=1)
    template: str
    source: str
    source_snap_point: str
    target_snap_point: str | None = None


AssemblyStepConfig = Annotated[
    Union[PlaceStepConfig, AttachStepConfig], Field(discriminator="action")
]


class OptionsConfig(BaseModel):
    """Assembly behaviour options."""

    model_config = ConfigDict(extra="forbid")

    require_connector_first: bool = True


class AssemblyConfiguration(BaseModel):
    """Root configuration model.

    Attributes:
        schema_version: Configuration schema version
        room: Room dimensions
        catalogue: Parts available to the assembly
        assembly: Ordered placement steps
        options: Assembly behaviour options
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str
    room: RoomConfig
    catalogue: list[TemplateConfig] = Field(min_length=1)
    assembly: list[AssemblyStepConfig] = Field(default_factory=list)
    options: OptionsConfig = Field(default_factory=OptionsConfig)

    @field_validator("schema_version")
    @classmethod
    def validate_schema_version(cls, v: str) -> str:
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(f"Unsupported schema version '{v}' (supported: {supported})")
        return v

    @model_validator(mode="after")
    def validate_references(self) -> "AssemblyConfiguration":
        """Check ids are unique and every reference resolves."""
        templates: dict[str, TemplateConfig] = {}
        for template in self.catalogue:
            if template.id in templates:
                raise ValueError(f"Duplicate template id '{template.id}'")
            templates[template.id] = template

        step_templates: dict[str, TemplateConfig] = {}
        for index, step in enumerate(self.assembly):
            if step.id in step_templates:
                raise ValueError(f"assembly[{index}]: duplicate component id '{step.id}'")
            template = templates.get(step.template)
            if template is None:
                raise ValueError(f"assembly[{index}]: unknown template '{step.template}'")
            if isinstance(step, AttachStepConfig):
                source_template = step_templates.get(step.source)
                if source_template is None:
                    raise ValueError(
                        f"assembly[{index}]: source '{step.source}' must be an earlier step"
                    )
                if step.source_snap_point not in source_template.snap_point_ids():
                    raise ValueError(
                        f"assembly[{index}]: '{step.source}' has no snap point "
                        f"'{step.source_snap_point}'"
                    )
                if (
                    step.target_snap_point is not None
                    and step.target_snap_point not in template.snap_point_ids()
                ):
                    raise ValueError(
                        f"assembly[{index}]: template '{template.id}' has no snap point "
                        f"'{step.target_snap_point}'"
                    )
            step_templates[step.id] = template
        return self

    def template(self, template_id: str) -> TemplateConfig | None:
        for template in self.catalogue:
            if template.id == template_id:
                return template
        return None
