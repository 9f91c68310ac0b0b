"""Shared test fixtures for waskit.

Provides:
- template_root: Temporary catalog with one small "demo" template
- registry: TemplateRegistry loaded from template_root
- bundled_registry: TemplateRegistry for the templates shipped with waskit
- git_identity: Author/committer environment so real git commits work
- cli_runner: Click CliRunner
- isolated_config: Points WASKIT_CONFIG at a missing file (autouse)
"""

import json
import shutil

import pytest
from click.testing import CliRunner

from waskit.core.registry import TemplateRegistry
from waskit.git.utils import run_git

DEMO_MANIFEST = {
    "name": "waskit-demo",
    "private": True,
    "version": "0.0.0",
    "scripts": {"dev": "vite"},
    "dependencies": {"postcss": "^8.5.0"},
    "devDependencies": {
        "@tailwindcss/vite": "^4.1.4",
        "autoprefixer": "^10.4.0",
        "tailwindcss": "^4.1.4",
        "vite": "^6.3.1",
    },
}

DEMO_HTML = """<!doctype html>
<html lang="en">
  <body class="bg-gray-800">
    <div id="app" class="min-h-screen"></div>
    <script type="module" src="/src/main.js"></script>
  </body>
</html>
"""

DEMO_VITE_CONFIG = """import { defineConfig } from "vite";
import tailwindcss from "@tailwindcss/vite";

export default defineConfig({
  plugins: [tailwindcss()],
  base: "/",
});
"""

DEMO_CSS = """@import "tailwindcss";

body {
  margin: 0;
}
"""

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def count_commits(path) -> int:
    """Number of commits reachable from HEAD in the repository at path."""
    result = run_git("rev-list", "--count", "HEAD", cwd=path, check=True)
    return int(result.stdout.strip())


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep the developer's own config file out of every test."""
    missing = tmp_path_factory.mktemp("config") / "config.json"
    monkeypatch.setenv("WASKIT_CONFIG", str(missing))
    return missing


@pytest.fixture
def template_root(tmp_path):
    """Create a catalog directory holding a single "demo" template.

    Returns the catalog root (the directory with templates.json).
    """
    root = tmp_path / "catalog"
    demo = root / "demo"
    (demo / "src").mkdir(parents=True)

    (root / "templates.json").write_text(json.dumps({
        "demo": {"name": "Demo", "description": "Small test template"},
    }))
    (demo / "package.json").write_text(json.dumps(DEMO_MANIFEST, indent=2))
    (demo / "index.html").write_text(DEMO_HTML)
    (demo / "vite.config.js").write_text(DEMO_VITE_CONFIG)
    (demo / "src" / "style.css").write_text(DEMO_CSS)
    (demo / "src" / "main.js").write_text('import "./style.css";\n')
    (demo / "_gitignore").write_text("node_modules\ndist\n")
    return root


@pytest.fixture
def registry(template_root):
    """TemplateRegistry over the demo catalog."""
    return TemplateRegistry.load(template_root)


@pytest.fixture
def bundled_registry():
    """TemplateRegistry over the templates shipped with the package."""
    return TemplateRegistry.load()


@pytest.fixture
def git_identity(monkeypatch):
    """Give git an identity so commits succeed on bare CI machines."""
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@test.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@test.com")


@pytest.fixture
def cli_runner():
    """Click CliRunner for testing CLI commands."""
    return CliRunner()
