"""Unit tests for assembly output formatters."""

import json
from typing import Any

import pytest

from luminaire.application import run_assembly
from luminaire.application.config import load_config_from_dict
from luminaire.domain import ComponentType, RoomDimensions, constrain
from luminaire.infrastructure import AssemblyTableFormatter, ConstraintFormatter, JsonExporter


@pytest.fixture
def report(sample_config_dict: dict[str, Any]):
    return run_assembly(load_config_from_dict(sample_config_dict))


class TestAssemblyTableFormatter:
    """Tests for the table output."""

    def test_lists_components_and_connections(self, report) -> None:
        """Test that every component and connection is shown."""
        text = AssemblyTableFormatter().format(report)

        assert "ROOM 4 x 4 x 3 m" in text
        assert "COMPONENTS" in text
        for component_id in ("c1", "t1", "s1"):
            assert component_id in text
        assert "c1:track-out -> t1:end-a [track]" in text
        assert "3 component(s)" in text
        assert "FAILED STEPS" not in text

    def test_rotation_shown_in_degrees(self, report) -> None:
        """Test that the track's quarter turn is printed as 90 degrees."""
        text = AssemblyTableFormatter().format(report)

        assert "(90.0, 0.0, 0.0)" in text

    def test_failures_listed(self, sample_config_dict: dict[str, Any]) -> None:
        """Test that failed steps get their own section."""
        sample_config_dict["assembly"][0]["template"] = "spot-small"
        sample_config_dict["assembly"] = sample_config_dict["assembly"][:1]

        text = AssemblyTableFormatter().format(
            run_assembly(load_config_from_dict(sample_config_dict))
        )

        assert "No components placed." in text
        assert "FAILED STEPS" in text
        assert "first_component_not_connector" in text


class TestJsonExporter:
    """Tests for the JSON output."""

    def test_export_structure(self, report) -> None:
        """Test the exported document."""
        data = json.loads(JsonExporter().export(report))

        assert data["room"] == {"width": 4.0, "depth": 4.0, "height": 3.0}
        assert [c["id"] for c in data["components"]] == ["c1", "t1", "s1"]
        track = data["components"][1]
        assert track["type"] == "track"
        assert track["rotation_deg"] == pytest.approx([90.0, 0.0, 0.0])
        assert track["connections"] == ["end-a", "mount-1"]
        assert data["connections"][0] == {
            "source": "c1",
            "source_snap_point": "track-out",
            "target": "t1",
            "target_snap_point": "end-a",
            "kind": "track",
            "gap": 0.0,
        }
        assert [s["status"] for s in data["steps"]] == ["placed", "attached", "attached"]
        assert data["warnings"] == []


class TestConstraintFormatter:
    """Tests for the single-placement output."""

    def test_corrected_track(self) -> None:
        """Test the printed correction details."""
        room = RoomDimensions(width=8.0, depth=6.0, height=3.0)
        result = constrain(ComponentType.TRACK, (0.0, 2.9, 0.0), (0.0, 0.0, 0.0), (1.0, 1.0, 1.0), room)

        text = ConstraintFormatter().format((0.0, 2.9, 0.0), result)

        assert "Position:  (0.000, 2.000, 0.000)" in text
        assert "Rotation:  (90.0, 0.0, 0.0) deg" in text
        assert "Corrected: yes" in text
        assert "well below ceiling" in text

    def test_uncorrected(self) -> None:
        """Test that no reason line is printed when nothing applied."""
        room = RoomDimensions(width=8.0, depth=6.0, height=3.0)
        result = constrain(
            ComponentType.SPOTLIGHT, (0.0, 1.0, 0.0), (0.0, 0.0, 0.0), (1.0, 1.0, 1.0), room
        )

        text = ConstraintFormatter().format((0.0, 1.0, 0.0), result)

        assert "Corrected: no" in text
        assert "Reason" not in text
