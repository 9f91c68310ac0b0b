"""Exceptions raised by the scaffolding engine.

Everything here derives from WaskitError so commands can report any
fatal scaffold failure with a single except clause.
"""

from pathlib import Path
from typing import Optional


class WaskitError(Exception):
    """Base exception for scaffold failures that abort a request."""
    pass


class RegistryError(WaskitError):
    """The template catalog is missing, malformed or inconsistent."""
    pass


class TemplateNotFoundError(WaskitError):
    """Requested template id is not in the catalog."""

    def __init__(self, template_id: str, available: Optional[list] = None):
        message = f'Template "{template_id}" not found.'
        if available:
            message += f" Available: {', '.join(available)}"
        super().__init__(message)
        self.template_id = template_id
        self.available = available or []


class InvalidDestinationError(WaskitError):
    """Target directory cannot be used as a project directory."""
    pass


class CopyError(WaskitError):
    """A file could not be copied while materializing a template."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class ManifestError(WaskitError):
    """The generated package manifest is not a valid JSON object."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path
