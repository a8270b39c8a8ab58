"""Integration tests for the templates CLI commands.

This module tests the `templates list` and `templates init` CLI commands
end-to-end using the Typer CliRunner.
"""

import json
import os
from pathlib import Path

import pytest
from typer.testing import CliRunner

from luminaire.cli.main import app

runner = CliRunner()

pytestmark = pytest.mark.integration


@pytest.fixture
def in_tmp_path(tmp_path: Path):
    original_cwd = os.getcwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(original_cwd)


class TestTemplatesListCommand:
    """Test suite for the 'templates list' command."""

    def test_list_shows_all_templates(self) -> None:
        result = runner.invoke(app, ["templates", "list"])

        assert result.exit_code == 0
        assert "Available templates:" in result.output
        for name in ("minimal", "track-pendant", "ceiling-spots"):
            assert name in result.output
        assert "Ceiling connector with a single track" in result.output

    def test_list_shows_usage_hint(self) -> None:
        result = runner.invoke(app, ["templates", "list"])

        assert "luminaire templates init" in result.output


class TestTemplatesInitCommand:
    """Test suite for the 'templates init' command."""

    def test_init_creates_file_with_default_name(self, in_tmp_path: Path) -> None:
        """Test that init writes <name>.json in the working directory."""
        result = runner.invoke(app, ["templates", "init", "minimal"])

        assert result.exit_code == 0
        assert "Created: minimal.json" in result.output
        data = json.loads((in_tmp_path / "minimal.json").read_text())
        assert data["schema_version"] == "1.0"

    def test_init_with_output_option(self, tmp_path: Path) -> None:
        target = tmp_path / "kitchen.json"

        result = runner.invoke(
            app, ["templates", "init", "ceiling-spots", "--output", str(target)]
        )

        assert result.exit_code == 0
        assert target.exists()

    def test_init_refuses_to_overwrite(self, tmp_path: Path) -> None:
        target = tmp_path / "existing.json"
        target.write_text("{}")

        result = runner.invoke(app, ["templates", "init", "minimal", "-o", str(target)])

        assert result.exit_code == 1
        assert "File already exists" in result.output
        assert "--force" in result.output
        assert target.read_text() == "{}"

    def test_init_force_overwrites(self, tmp_path: Path) -> None:
        target = tmp_path / "existing.json"
        target.write_text("{}")

        result = runner.invoke(
            app, ["templates", "init", "minimal", "-o", str(target), "--force"]
        )

        assert result.exit_code == 0
        assert "catalogue" in json.loads(target.read_text())

    def test_init_unknown_template(self, in_tmp_path: Path) -> None:
        result = runner.invoke(app, ["templates", "init", "chandelier"])

        assert result.exit_code == 1
        assert "Template not found: chandelier" in result.output
        assert not (in_tmp_path / "chandelier.json").exists()

    def test_initialised_template_assembles(self, tmp_path: Path) -> None:
        """Test that a bundled template replays without failures."""
        target = tmp_path / "track-pendant.json"
        runner.invoke(app, ["templates", "init", "track-pendant", "-o", str(target)])

        result = runner.invoke(app, ["assemble", str(target)])

        assert result.exit_code == 0
        assert "COMPONENTS" in result.output
