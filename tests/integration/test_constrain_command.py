"""Integration tests for the constrain CLI command."""

import pytest
from typer.testing import CliRunner

from luminaire.cli.main import app

runner = CliRunner()

pytestmark = pytest.mark.integration


class TestConstrainCommand:
    """Tests for the constrain command."""

    def test_track_below_ceiling(self) -> None:
        result = runner.invoke(
            app, ["constrain", "--type", "track", "--position", "0,2.9,0", "--room", "8x6x3"]
        )

        assert result.exit_code == 0
        assert "Position:  (0.000, 2.000, 0.000)" in result.output
        assert "Corrected: yes" in result.output
        assert "well below ceiling" in result.output

    def test_track_near_left_wall(self) -> None:
        result = runner.invoke(
            app, ["constrain", "-t", "track", "-p", "-3.8,1.5,0", "--room", "8x6x3"]
        )

        assert result.exit_code == 0
        assert "Position:  (-3.000, 1.500, 0.000)" in result.output
        assert "Rotation:  (90.0, 0.0, 0.0) deg" in result.output

    def test_spotlight_clamped(self) -> None:
        result = runner.invoke(
            app, ["constrain", "-t", "spotlight", "-p", "10,1,0", "--room", "4x4x3"]
        )

        assert result.exit_code == 0
        assert "Position:  (1.900, 1.000, 0.000)" in result.output
        assert "Reason:    Position constrained to room boundaries" in result.output

    def test_rotation_in_degrees_kept(self) -> None:
        result = runner.invoke(
            app,
            ["constrain", "-t", "spotlight", "-p", "0,1,0", "--room", "4x4x3", "-r", "0,45,0"],
        )

        assert result.exit_code == 0
        assert "Rotation:  (0.0, 45.0, 0.0) deg" in result.output
        assert "Corrected: no" in result.output

    def test_bad_room(self) -> None:
        result = runner.invoke(
            app, ["constrain", "-t", "track", "-p", "0,1,0", "--room", "8x6"]
        )

        assert result.exit_code == 1
        assert "WIDTHxDEPTHxHEIGHT" in result.output

    def test_bad_position(self) -> None:
        result = runner.invoke(
            app, ["constrain", "-t", "track", "-p", "0,one,0", "--room", "8x6x3"]
        )

        assert result.exit_code == 1
        assert "--position expects three comma-separated numbers" in result.output
