"""Pytest configuration and shared fixtures for luminaire tests."""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest

from luminaire.domain import (
    ComponentTemplate,
    ComponentType,
    RoomDimensions,
    SnapKind,
    SnapPoint,
)


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end tests through the CLI")
    config.addinivalue_line("markers", "property: property-style checks over sampled inputs")


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def room() -> RoomDimensions:
    """A 4m x 4m room with a 3m ceiling."""
    return RoomDimensions(width=4.0, depth=4.0, height=3.0)


@pytest.fixture
def connector_template() -> ComponentTemplate:
    return ComponentTemplate(
        id="ceiling-connector",
        type_tag=ComponentType.CONNECTOR,
        name="Ceiling Connector",
        snap_points=(
            SnapPoint("track-out", SnapKind.TRACK, (0.0, -0.01, 0.0)),
            SnapPoint("mount", SnapKind.MOUNTING, (0.0, -0.02, 0.0)),
            SnapPoint("power-in", SnapKind.POWER, (0.0, 0.02, 0.0)),
        ),
    )


@pytest.fixture
def track_template() -> ComponentTemplate:
    return ComponentTemplate(
        id="track-1m",
        type_tag=ComponentType.TRACK,
        name="Track 1m",
        snap_points=(
            SnapPoint("end-a", SnapKind.TRACK, (-0.5, 0.0, 0.0)),
            SnapPoint("end-b", SnapKind.TRACK, (0.5, 0.0, 0.0)),
            SnapPoint("mount-1", SnapKind.MOUNTING, (0.0, -0.03, 0.0)),
        ),
    )


@pytest.fixture
def spotlight_template() -> ComponentTemplate:
    return ComponentTemplate(
        id="spot-small",
        type_tag=ComponentType.SPOTLIGHT,
        name="Small Spotlight",
        snap_points=(
            SnapPoint(
                "bracket",
                SnapKind.MECHANICAL,
                (0.0, 0.08, 0.0),
                compatible_kinds=frozenset({SnapKind.MOUNTING}),
            ),
        ),
    )


@pytest.fixture
def pendant_template() -> ComponentTemplate:
    return ComponentTemplate(
        id="pendant-lamp",
        type_tag=ComponentType.SPOTLIGHT,
        name="Pendant Lamp",
        is_pendant=True,
        snap_points=(SnapPoint("cable", SnapKind.MECHANICAL, (0.0, 0.5, 0.0)),),
    )


@pytest.fixture
def end_cap_template() -> ComponentTemplate:
    return ComponentTemplate(
        id="end-cap",
        type_tag=ComponentType.CONNECTOR,
        name="End Cap",
        is_end_cap=True,
        snap_points=(SnapPoint("cap", SnapKind.TRACK, (0.0, 0.0, 0.02)),),
    )


@pytest.fixture
def power_supply_template() -> ComponentTemplate:
    return ComponentTemplate(
        id="driver-20w",
        type_tag=ComponentType.POWER_SUPPLY,
        name="Driver 20W",
        snap_points=(SnapPoint("power-out", SnapKind.POWER, (0.0, 0.1, 0.0)),),
    )


@pytest.fixture
def catalogue(
    connector_template: ComponentTemplate,
    track_template: ComponentTemplate,
    spotlight_template: ComponentTemplate,
    pendant_template: ComponentTemplate,
    end_cap_template: ComponentTemplate,
    power_supply_template: ComponentTemplate,
) -> list[ComponentTemplate]:
    return [
        connector_template,
        track_template,
        spotlight_template,
        pendant_template,
        end_cap_template,
        power_supply_template,
    ]


# =============================================================================
# Configuration fixtures
# =============================================================================


_SAMPLE_CONFIG: dict[str, Any] = {
    "schema_version": "1.0",
    "room": {"width": 4.0, "depth": 4.0, "height": 3.0},
    "catalogue": [
        {
            "id": "ceiling-connector",
            "name": "Ceiling Connector",
            "type": "connector",
            "snap_points": [
                {"id": "track-out", "kind": "track", "position": [0.0, -0.01, 0.0]},
                {"id": "mount", "kind": "mounting", "position": [0.0, -0.02, 0.0]},
            ],
        },
        {
            "id": "track-1m",
            "name": "Track 1m",
            "type": "track",
            "snap_points": [
                {"id": "end-a", "kind": "track", "position": [-0.5, 0.0, 0.0]},
                {"id": "end-b", "kind": "track", "position": [0.5, 0.0, 0.0]},
                {"id": "mount-1", "kind": "mounting", "position": [0.0, -0.03, 0.0]},
            ],
        },
        {
            "id": "spot-small",
            "name": "Small Spotlight",
            "type": "spotlight",
            "snap_points": [
                {"id": "bracket", "kind": "mechanical", "position": [0.0, 0.08, 0.0]},
            ],
        },
    ],
    "assembly": [
        {
            "action": "place",
            "id": "c1",
            "template": "ceiling-connector",
            "position": [0.0, 2.9, 0.0],
        },
        {
            "action": "attach",
            "id": "t1",
            "template": "track-1m",
            "source": "c1",
            "source_snap_point": "track-out",
            "target_snap_point": "end-a",
        },
        {
            "action": "attach",
            "id": "s1",
            "template": "spot-small",
            "source": "t1",
            "source_snap_point": "mount-1",
            "target_snap_point": "bracket",
        },
    ],
}


@pytest.fixture
def sample_config_dict() -> dict[str, Any]:
    """A valid configuration: connector, track and spotlight (deep copy)."""
    return copy.deepcopy(_SAMPLE_CONFIG)


@pytest.fixture
def write_config(tmp_path: Path):
    """Write a configuration dict to a JSON file and return its path."""

    def _write(data: dict[str, Any], name: str = "config.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config_file(write_config, sample_config_dict: dict[str, Any]) -> Path:
    return write_config(sample_config_dict)
