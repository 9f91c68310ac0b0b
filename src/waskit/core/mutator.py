"""Edits applied to a freshly copied project.

Two kinds of edits:

1. Manifest edit - package.json is parsed as JSON, its name is set to
   the project name and, when the CSS framework is declined, the CSS
   framework packages are removed from the dependency maps.
2. Text rewrites - when the CSS framework is declined, the entry files
   that reference it are rewritten with the regex rules below.

Rewrite rules by file role:

    role         file(s)                        removes
    ----------   ----------------------------   ---------------------------------
    css          src/index.css, src/style.css   @import "tailwindcss";
                                                @tailwind <layer>; lines
    html         index.html                     class="..." attributes
    vite-config  first vite.config.* in root    tailwindcss plugin import,
                                                tailwindcss() plugin call,
                                                dangling commas in plugins: [...]

The targets are small files with a known shape, which is why regexes are
enough here. Each role's rules are a pure function of the file content.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Pattern, Tuple

from waskit.core.config import DEFAULT_CSS_DEPENDENCIES
from waskit.core.errors import ManifestError
from waskit.core.filesystem import FileSystem, get_file_system

logger = logging.getLogger(__name__)

DEPENDENCY_MAPS = ("dependencies", "devDependencies")

CSS_ENTRY_FILES = ("src/index.css", "src/style.css")
HTML_ENTRY_FILE = "index.html"
VITE_CONFIG_PREFIX = "vite.config."

ROLE_CSS = "css"
ROLE_HTML = "html"
ROLE_VITE_CONFIG = "vite-config"

REWRITE_RULES: Dict[str, List[Tuple[Pattern, str]]] = {
    ROLE_CSS: [
        (re.compile(r"""^[ \t]*@import\s+['"]tailwindcss['"][ \t]*;?[ \t]*\r?\n?""", re.MULTILINE), ""),
        (re.compile(r"^[ \t]*@tailwind\s+[\w-]+[ \t]*;?[ \t]*\r?\n?", re.MULTILINE), ""),
    ],
    ROLE_HTML: [
        (re.compile(r'\s+class=".*?"'), ""),
    ],
    ROLE_VITE_CONFIG: [
        (
            re.compile(
                r"^[ \t]*import\s+tailwindcss\s+from\s+"
                r"""['"](?:@tailwindcss/vite(?:-plugin)?|tailwindcss(?:/vite)?)['"]"""
                r"[ \t]*;?[ \t]*\r?\n?",
                re.MULTILINE,
            ),
            "",
        ),
        (re.compile(r"\btailwindcss\(\)\s*,?[ \t]*"), ""),
        (re.compile(r"plugins:\s*\[\s*,?\s*\]"), "plugins: []"),
        (re.compile(r"(plugins:\s*\[[^\]]*?),\s*\]"), r"\1]"),
    ],
}


def rewrite(role: str, content: str) -> str:
    """Apply one role's rewrite rules to file content."""
    for pattern, replacement in REWRITE_RULES[role]:
        content = pattern.sub(replacement, content)
    return content


def rewrite_css(content: str) -> str:
    return rewrite(ROLE_CSS, content)


def rewrite_html(content: str) -> str:
    return rewrite(ROLE_HTML, content)


def rewrite_vite_config(content: str) -> str:
    return rewrite(ROLE_VITE_CONFIG, content)


@dataclass
class MutationReport:
    """Files changed by a mutation step."""
    touched: List[Path] = field(default_factory=list)
    removed_dependencies: List[str] = field(default_factory=list)


class ConfigMutator:
    """Adjusts generated configuration to the user's choices."""

    def __init__(
        self,
        fs: Optional[FileSystem] = None,
        css_dependencies: Optional[Iterable[str]] = None,
        manifest_name: str = "package.json",
    ):
        self.fs = fs or get_file_system()
        self.css_dependencies = list(
            css_dependencies if css_dependencies is not None else DEFAULT_CSS_DEPENDENCIES
        )
        self.manifest_name = manifest_name

    def edit_manifest(
        self,
        project_dir: Path,
        project_name: str,
        strip_css_dependencies: bool,
    ) -> MutationReport:
        """Set the manifest name and optionally drop CSS framework packages.

        Raises:
            ManifestError: If the manifest is not a JSON object
        """
        report = MutationReport()
        manifest_path = project_dir / self.manifest_name
        if not self.fs.exists(manifest_path):
            logger.debug("No manifest at %s, skipping", manifest_path)
            return report

        try:
            manifest = json.loads(self.fs.read_text(manifest_path))
        except OSError as e:
            raise ManifestError(f"Cannot read {manifest_path}: {e}", path=manifest_path) from e
        except ValueError as e:
            raise ManifestError(f"Invalid JSON in {manifest_path}: {e}", path=manifest_path) from e
        if not isinstance(manifest, dict):
            raise ManifestError(f"{manifest_path} must contain a JSON object", path=manifest_path)

        manifest["name"] = project_name

        if strip_css_dependencies:
            for section in DEPENDENCY_MAPS:
                deps = manifest.get(section)
                if not isinstance(deps, dict):
                    continue
                for key in self.css_dependencies:
                    if key in deps:
                        del deps[key]
                        report.removed_dependencies.append(key)

        content = json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"
        try:
            self.fs.write_text(manifest_path, content)
        except OSError as e:
            raise ManifestError(f"Cannot write {manifest_path}: {e}", path=manifest_path) from e
        report.touched.append(manifest_path)
        return report

    def remove_css_framework(self, project_dir: Path) -> MutationReport:
        """Rewrite CSS, HTML and Vite config files without the CSS framework."""
        report = MutationReport()

        for relative in CSS_ENTRY_FILES:
            self._rewrite_file(project_dir / relative, ROLE_CSS, report)

        self._rewrite_file(project_dir / HTML_ENTRY_FILE, ROLE_HTML, report)

        vite_config = self.find_vite_config(project_dir)
        if vite_config is not None:
            self._rewrite_file(vite_config, ROLE_VITE_CONFIG, report)

        return report

    def find_vite_config(self, project_dir: Path) -> Optional[Path]:
        """Return the first vite.config.* file in the project root."""
        if not self.fs.is_dir(project_dir):
            return None
        for entry in self.fs.list_dir(project_dir):
            if entry.name.startswith(VITE_CONFIG_PREFIX) and not self.fs.is_dir(entry):
                return entry
        return None

    def _rewrite_file(self, path: Path, role: str, report: MutationReport) -> None:
        if not self.fs.exists(path):
            return
        original = self.fs.read_text(path)
        updated = rewrite(role, original)
        if updated == original:
            return
        self.fs.write_text(path, updated)
        report.touched.append(path)
        logger.debug("Rewrote %s (%s)", path, role)
