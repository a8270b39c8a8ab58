"""Starter assembly configurations shipped with the package.

Templates are plain configuration files stored in the ``data`` package; a
user copies one with ``luminaire templates init`` and edits it from there.
"""

import json
import logging
from importlib import resources
from pathlib import Path

from luminaire.application.config import AssemblyConfiguration, load_config_from_dict

logger = logging.getLogger(__name__)


class TemplateNotFoundError(Exception):
    """Raised when a requested template does not exist."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Template not found: {name}")


# Bundled templates in listing order, with their one-line descriptions.
TEMPLATE_METADATA: dict[str, str] = {
    "minimal": "Ceiling connector with a single track",
    "track-pendant": "Track with a spotlight plus a pendant on the connector",
    "ceiling-spots": "Track with two spotlights and a free-standing driver",
}


class TemplateManager:
    """Access to the bundled templates.

    Example:
        manager = TemplateManager()
        config = manager.load("track-pendant")
        manager.init_template("track-pendant", Path("living-room.json"))
    """

    DATA_PACKAGE = "luminaire.application.templates.data"

    def list_templates(self) -> list[tuple[str, str]]:
        """(name, description) pairs in listing order."""
        return list(TEMPLATE_METADATA.items())

    def template_exists(self, name: str) -> bool:
        return name in TEMPLATE_METADATA

    def get_template(self, name: str) -> str:
        """Raw JSON text of a template.

        Raises:
            TemplateNotFoundError: If no bundled template has that name.
        """
        if not self.template_exists(name):
            raise TemplateNotFoundError(name)
        resource = resources.files(self.DATA_PACKAGE) / f"{name}.json"
        try:
            return resource.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise TemplateNotFoundError(name) from e

    def load(self, name: str) -> AssemblyConfiguration:
        """Parse a template into a validated configuration."""
        return load_config_from_dict(json.loads(self.get_template(name)))

    def init_template(self, name: str, output_path: Path, force: bool = False) -> None:
        """Copy a template to ``output_path``.

        Raises:
            TemplateNotFoundError: If no bundled template has that name.
            FileExistsError: If ``output_path`` exists and ``force`` is False.
        """
        content = self.get_template(name)
        if output_path.exists() and not force:
            raise FileExistsError(output_path)
        output_path.write_text(content, encoding="utf-8")
        logger.info(f"Wrote template {name} to {output_path}")
