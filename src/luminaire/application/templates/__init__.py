"""Bundled assembly templates.

This package provides starter configurations for common fixture layouts
and a TemplateManager class for accessing them.
"""

from luminaire.application.templates.manager import (
    TemplateManager,
    TemplateNotFoundError,
    TEMPLATE_METADATA,
)

__all__ = [
    "TemplateManager",
    "TemplateNotFoundError",
    "TEMPLATE_METADATA",
]
