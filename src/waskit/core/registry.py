"""Template catalog.

The catalog is a templates.json file that maps each template id to its
display name and description:

    {
      "react-typescript": {"name": "React + TypeScript", "description": "..."}
    }

The template's file tree is the sibling directory named after the id.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from waskit.core.errors import RegistryError, TemplateNotFoundError

logger = logging.getLogger(__name__)

CATALOG_FILE = "templates.json"

# Templates bundled with the package
BUNDLED_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True)
class TemplateDescriptor:
    """One starter project variant."""
    id: str
    name: str
    description: str
    path: Path


class TemplateRegistry:
    """Immutable, ordered collection of template descriptors."""

    def __init__(self, descriptors: List[TemplateDescriptor]):
        self._descriptors: Dict[str, TemplateDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.id in self._descriptors:
                raise RegistryError(f"Duplicate template id: {descriptor.id}")
            self._descriptors[descriptor.id] = descriptor

    @classmethod
    def load(cls, root: Optional[Path] = None) -> "TemplateRegistry":
        """Load the catalog from root/templates.json.

        Args:
            root: Directory holding the catalog and template trees
                (defaults to the bundled templates)

        Raises:
            RegistryError: If the catalog is missing or malformed
        """
        root = Path(root) if root else BUNDLED_TEMPLATES_DIR
        catalog_file = root / CATALOG_FILE

        try:
            data = json.loads(catalog_file.read_text(encoding="utf-8"))
        except FileNotFoundError:
            raise RegistryError(f"Template catalog not found: {catalog_file}")
        except (OSError, json.JSONDecodeError) as e:
            raise RegistryError(f"Cannot read template catalog {catalog_file}: {e}")

        if not isinstance(data, dict):
            raise RegistryError(f"Template catalog {catalog_file} must be a JSON object")

        descriptors = []
        for template_id, entry in data.items():
            if not isinstance(entry, dict):
                raise RegistryError(f"Catalog entry '{template_id}' must be an object")
            name = entry.get("name")
            description = entry.get("description")
            if not isinstance(name, str) or not isinstance(description, str):
                raise RegistryError(
                    f"Catalog entry '{template_id}' needs string 'name' and 'description'"
                )
            descriptors.append(TemplateDescriptor(
                id=template_id,
                name=name,
                description=description,
                path=root / template_id,
            ))

        logger.debug("Loaded %d templates from %s", len(descriptors), catalog_file)
        return cls(descriptors)

    def resolve(self, template_id: str) -> TemplateDescriptor:
        """Look up a template by exact id.

        Raises:
            TemplateNotFoundError: If the id is not catalogued
            RegistryError: If the catalogued template has no file tree
        """
        descriptor = self._descriptors.get(template_id)
        if descriptor is None:
            raise TemplateNotFoundError(template_id, available=self.ids())
        if not descriptor.path.is_dir():
            raise RegistryError(
                f"Template '{template_id}' is catalogued but {descriptor.path} is missing"
            )
        return descriptor

    def list(self) -> List[TemplateDescriptor]:
        """Descriptors in catalog order."""
        return list(self._descriptors.values())

    def ids(self) -> List[str]:
        return list(self._descriptors)

    def __contains__(self, template_id: str) -> bool:
        return template_id in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)
