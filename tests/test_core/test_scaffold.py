"""Tests for waskit.core.scaffold module."""

import dataclasses
import io
import json
from pathlib import Path

import pytest
from rich.console import Console

from conftest import count_commits, requires_git
from waskit.core.copier import FileTreeCopier
from waskit.core.errors import (
    CopyError,
    InvalidDestinationError,
    ManifestError,
    TemplateNotFoundError,
)
from waskit.core.filesystem import LocalFileSystem
from waskit.core.installer import InstallationOrchestrator
from waskit.core.scaffold import (
    ScaffoldCoordinator,
    ScaffoldRequest,
    ScaffoldState,
)
from waskit.git.utils import GitInitResult
from waskit.ui.theme import THEME


class FailingFileSystem(LocalFileSystem):
    """LocalFileSystem that refuses to write one file name."""

    def __init__(self, fail_on: str):
        self.fail_on = fail_on

    def copy_file(self, source: Path, dest: Path) -> None:
        if source.name == self.fail_on:
            raise OSError(28, "No space left on device", str(dest))
        super().copy_file(source, dest)


def _console() -> Console:
    return Console(theme=THEME, file=io.StringIO(), width=200)


def _failed_git(path, message):
    return GitInitResult(
        succeeded=False,
        completed_steps=["init"],
        failed_step="add",
        error="fatal: pathspec error",
    )


@pytest.fixture
def make_coordinator(registry):
    """Build a coordinator over the demo catalog with quiet output."""
    def factory(**kwargs):
        kwargs.setdefault("console", _console())
        kwargs.setdefault("show_progress", False)
        return ScaffoldCoordinator(registry, **kwargs)
    return factory


@pytest.fixture
def request_for(tmp_path):
    """Build a demo-template request targeting tmp_path/my-app."""
    def factory(**kwargs):
        kwargs.setdefault("skip_install", True)
        return ScaffoldRequest(target_directory=tmp_path / "my-app", template_id="demo", **kwargs)
    return factory


class TestScaffoldRequest:
    """Tests for ScaffoldRequest."""

    def test_project_name_is_last_segment(self, tmp_path):
        request = ScaffoldRequest(target_directory=tmp_path / "apps" / "my-app", template_id="demo")
        assert request.project_name == "my-app"

    def test_relative_target_resolves_against_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        request = ScaffoldRequest(target_directory=Path("my-app"), template_id="demo")
        assert request.project_dir == tmp_path.resolve() / "my-app"

    def test_is_frozen(self, tmp_path):
        request = ScaffoldRequest(target_directory=tmp_path, template_id="demo")
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.force = True


class TestScaffoldRun:
    """Tests for the happy path of ScaffoldCoordinator.run()."""

    def test_keeps_css_framework(self, make_coordinator, request_for):
        result = make_coordinator().run(request_for())
        project = result.project_dir

        assert result.state == ScaffoldState.DONE
        assert result.cancelled is False
        manifest = json.loads((project / "package.json").read_text())
        assert manifest["name"] == "my-app"
        assert "tailwindcss" in manifest["devDependencies"]
        assert 'class="' in (project / "index.html").read_text()
        assert (project / ".gitignore").exists()
        assert not (project / "_gitignore").exists()

    def test_removes_css_framework(self, make_coordinator, request_for):
        result = make_coordinator().run(request_for(include_css_framework=False))
        project = result.project_dir

        manifest = json.loads((project / "package.json").read_text())
        assert manifest["dependencies"] == {}
        assert manifest["devDependencies"] == {"vite": "^6.3.1"}
        assert 'class="' not in (project / "index.html").read_text()
        assert "tailwindcss" not in (project / "vite.config.js").read_text()
        assert "tailwindcss" not in (project / "src" / "style.css").read_text()

    def test_skip_install_runs_no_commands(self, fp, make_coordinator, request_for):
        result = make_coordinator().run(request_for())

        assert result.install is None
        assert result.next_steps[0].startswith("cd ")
        assert result.next_steps[1:] == ["npm install", "npm run dev"]
        assert len(fp.calls) == 0

    def test_install_success_next_steps(self, fp, make_coordinator, request_for):
        fp.register(["bun", "--version"], stdout="1.2.10\n")
        fp.register(["bun", "install"])

        result = make_coordinator().run(request_for(skip_install=False))

        assert result.install.succeeded is True
        assert result.warnings == []
        assert result.next_steps[1:] == ["bun run dev"]

    def test_install_failure_is_a_warning(self, fp, make_coordinator, request_for):
        fp.register(["bun", "--version"], returncode=1)
        fp.register(["npm", "install"], returncode=1)

        result = make_coordinator().run(request_for(skip_install=False))

        assert result.state == ScaffoldState.DONE
        assert result.install.succeeded is False
        assert len(result.warnings) == 1
        assert "npm install" in result.next_steps

    def test_git_failure_is_a_warning(self, make_coordinator, request_for):
        coordinator = make_coordinator(git_initializer=_failed_git)
        result = coordinator.run(request_for(init_version_control=True))

        assert result.state == ScaffoldState.DONE
        assert result.git.failed_step == "add"
        assert "'add'" in result.warnings[0]

    def test_git_initializer_receives_commit_message(self, make_coordinator, request_for):
        calls = []

        def record(path, message):
            calls.append((path, message))
            return GitInitResult(succeeded=True, completed_steps=["init", "add", "commit"])

        coordinator = make_coordinator(git_initializer=record, commit_message="chore: scaffold")
        result = coordinator.run(request_for(init_version_control=True))

        assert calls == [(result.project_dir, "chore: scaffold")]
        assert result.warnings == []

    def test_git_skipped_unless_requested(self, make_coordinator, request_for):
        result = make_coordinator(git_initializer=_failed_git).run(request_for())
        assert result.git is None


class TestConflictCheck:
    """Tests for the existing-directory confirmation."""

    @pytest.fixture
    def existing(self, tmp_path):
        target = tmp_path / "my-app"
        target.mkdir()
        (target / "notes.txt").write_text("mine")
        return target

    def test_declined_leaves_directory_untouched(self, make_coordinator, request_for, existing):
        asked = []

        def decline(path):
            asked.append(path)
            return False

        result = make_coordinator(confirm_overwrite=decline).run(request_for())

        assert asked == [existing.resolve()]
        assert result.cancelled is True
        assert result.state == ScaffoldState.ABORTED
        assert [p.name for p in existing.iterdir()] == ["notes.txt"]

    def test_no_confirmation_callback_declines(self, make_coordinator, request_for, existing):
        result = make_coordinator().run(request_for())
        assert result.cancelled is True
        assert not (existing / "package.json").exists()

    def test_accepted_copies_and_keeps_extra_files(self, make_coordinator, request_for, existing):
        result = make_coordinator(confirm_overwrite=lambda path: True).run(request_for())

        assert result.state == ScaffoldState.DONE
        assert (existing / "package.json").exists()
        assert (existing / "notes.txt").read_text() == "mine"

    def test_force_skips_confirmation(self, make_coordinator, request_for, existing):
        def explode(path):
            raise AssertionError("should not be asked")

        result = make_coordinator(confirm_overwrite=explode).run(request_for(force=True))
        assert result.state == ScaffoldState.DONE

    def test_new_directory_is_not_confirmed(self, make_coordinator, request_for):
        def explode(path):
            raise AssertionError("should not be asked")

        result = make_coordinator(confirm_overwrite=explode).run(request_for())
        assert result.state == ScaffoldState.DONE


class TestAbort:
    """Tests for runs that end in ABORTED with an error."""

    def test_unknown_template(self, make_coordinator, tmp_path):
        coordinator = make_coordinator()
        request = ScaffoldRequest(target_directory=tmp_path / "my-app", template_id="svelte")

        with pytest.raises(TemplateNotFoundError) as exc_info:
            coordinator.run(request)

        assert coordinator.state == ScaffoldState.ABORTED
        assert exc_info.value.available == ["demo"]
        assert not (tmp_path / "my-app").exists()

    def test_copy_failure_leaves_partial_tree(self, make_coordinator, request_for, tmp_path):
        coordinator = make_coordinator(copier=FileTreeCopier(FailingFileSystem("index.html")))

        with pytest.raises(CopyError) as exc_info:
            coordinator.run(request_for())

        project = tmp_path / "my-app"
        assert coordinator.state == ScaffoldState.ABORTED
        assert exc_info.value.path == project.resolve() / "index.html"
        assert (project / "_gitignore").exists()
        assert not (project / "package.json").exists()

    def test_malformed_manifest(self, make_coordinator, request_for, template_root):
        (template_root / "demo" / "package.json").write_text('{"name": ')
        coordinator = make_coordinator()

        with pytest.raises(ManifestError):
            coordinator.run(request_for())

        assert coordinator.state == ScaffoldState.ABORTED

    def test_target_is_a_file(self, make_coordinator, request_for, tmp_path):
        (tmp_path / "my-app").write_text("not a directory")
        coordinator = make_coordinator()

        with pytest.raises(InvalidDestinationError) as exc_info:
            coordinator.run(request_for(force=True))

        assert "not a directory" in str(exc_info.value)
        assert coordinator.state == ScaffoldState.ABORTED


@requires_git
class TestReactTypescriptWithoutCss:
    """End to end: bundled react-typescript template, no CSS, git, no install."""

    def test_scaffold(self, fp, bundled_registry, git_identity, tmp_path, monkeypatch):
        fp.allow_unregistered(True)
        monkeypatch.chdir(tmp_path)
        coordinator = ScaffoldCoordinator(
            bundled_registry,
            installer=InstallationOrchestrator(),
            console=_console(),
            show_progress=False,
        )
        request = ScaffoldRequest(
            target_directory=Path("my-app"),
            template_id="react-typescript",
            include_css_framework=False,
            init_version_control=True,
            skip_install=True,
        )

        result = coordinator.run(request)
        project = tmp_path.resolve() / "my-app"

        assert result.state == ScaffoldState.DONE
        assert result.project_dir == project
        assert result.install is None
        assert result.warnings == []

        manifest = json.loads((project / "package.json").read_text())
        assert manifest["name"] == "my-app"
        for section in ("dependencies", "devDependencies"):
            for key in ("tailwindcss", "@tailwindcss/vite", "postcss", "autoprefixer"):
                assert key not in manifest.get(section, {})

        assert 'class="' not in (project / "index.html").read_text()
        assert "tailwindcss()" not in (project / "vite.config.ts").read_text()
        assert (project / ".gitignore").exists()
        assert count_commits(project) == 1
        assert fp.call_count(["bun", "install"]) == 0
        assert fp.call_count(["npm", "install"]) == 0
