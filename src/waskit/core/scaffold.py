"""Scaffold coordinator.

Runs one scaffold request through these states, strictly in order:

    RESOLVING -> CONFLICT_CHECK -> COPYING -> MUTATING -> CLEANING_FEATURE
              -> GIT_INIT -> INSTALLING -> DONE

RESOLVING, CONFLICT_CHECK, COPYING and MUTATING can end the run in
ABORTED. Resolution, copy and manifest failures raise a WaskitError; a
declined overwrite returns a cancelled result. Git and install failures
only add warnings, the project tree is already usable at that point.

The target directory is assumed to be owned by this run. Running two
scaffolds against the same directory at the same time is not guarded
against.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape
from tqdm import tqdm

from waskit.core.copier import FileTreeCopier
from waskit.core.errors import CopyError, InvalidDestinationError, WaskitError
from waskit.core.installer import InstallationOrchestrator, InstallResult
from waskit.core.mutator import ConfigMutator
from waskit.core.registry import TemplateRegistry
from waskit.git.utils import DEFAULT_COMMIT_MESSAGE, GitInitResult, init_repository
from waskit.ui.theme import Symbols, make_console

logger = logging.getLogger(__name__)


class ScaffoldState(str, Enum):
    RESOLVING = "resolving"
    CONFLICT_CHECK = "conflict_check"
    COPYING = "copying"
    MUTATING = "mutating"
    CLEANING_FEATURE = "cleaning_feature"
    GIT_INIT = "git_init"
    INSTALLING = "installing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class ScaffoldRequest:
    """Validated intent for one scaffold run."""
    target_directory: Path
    template_id: str
    include_css_framework: bool = True
    init_version_control: bool = False
    force: bool = False
    skip_install: bool = False

    @property
    def project_dir(self) -> Path:
        return Path(self.target_directory).expanduser().resolve()

    @property
    def project_name(self) -> str:
        """Final path segment of the target directory."""
        return self.project_dir.name


@dataclass
class ScaffoldResult:
    """What a scaffold run did."""
    state: ScaffoldState
    project_dir: Path
    cancelled: bool = False
    install: Optional[InstallResult] = None
    git: Optional[GitInitResult] = None
    warnings: List[str] = field(default_factory=list)
    next_steps: List[str] = field(default_factory=list)
    exit_code: int = 0


class ScaffoldCoordinator:
    """Sequences template resolution, copy, edits, git and install."""

    def __init__(
        self,
        registry: TemplateRegistry,
        copier: Optional[FileTreeCopier] = None,
        mutator: Optional[ConfigMutator] = None,
        installer: Optional[InstallationOrchestrator] = None,
        confirm_overwrite: Optional[Callable[[Path], bool]] = None,
        git_initializer: Callable[..., GitInitResult] = init_repository,
        commit_message: str = DEFAULT_COMMIT_MESSAGE,
        console: Optional[Console] = None,
        show_progress: bool = True,
    ):
        """Initialize the coordinator.

        Args:
            registry: Template catalog used to resolve request ids
            copier: Tree copier (defaults to one on the local file system)
            mutator: Config mutator (defaults to the standard CSS dependency list)
            installer: Install orchestrator (defaults to bun with npm fallback)
            confirm_overwrite: Asked before writing into an existing directory;
                without it an existing directory is never overwritten unless forced
            git_initializer: Called as git_initializer(path, message)
            commit_message: Message for the initial commit
            console: Console for progress lines
            show_progress: Show a progress bar while copying
        """
        self.registry = registry
        self.copier = copier or FileTreeCopier()
        self.mutator = mutator or ConfigMutator()
        self.installer = installer or InstallationOrchestrator()
        self.confirm_overwrite = confirm_overwrite
        self.git_initializer = git_initializer
        self.commit_message = commit_message
        self.console = console or make_console()
        self.show_progress = show_progress
        self.state = ScaffoldState.RESOLVING

    def run(self, request: ScaffoldRequest) -> ScaffoldResult:
        """Scaffold one project.

        Raises:
            TemplateNotFoundError: Unknown template id
            InvalidDestinationError: Target is unusable as a project directory
            CopyError: Materialization failed (partial tree left on disk)
            ManifestError: Generated manifest is not valid JSON
        """
        project_dir = request.project_dir
        result = ScaffoldResult(state=self.state, project_dir=project_dir)

        try:
            self._enter(ScaffoldState.RESOLVING)
            template = self.registry.resolve(request.template_id)
            self._validate_destination(request)

            self._enter(ScaffoldState.CONFLICT_CHECK)
            if project_dir.exists() and not request.force:
                if not self._confirmed(project_dir):
                    self._enter(ScaffoldState.ABORTED)
                    self.console.print("Project creation cancelled.")
                    result.state = self.state
                    result.cancelled = True
                    return result

            self._enter(ScaffoldState.COPYING)
            self.console.print(
                f"\n[title]Creating project[/] [accent]{escape(request.project_name)}[/] "
                f"from [accent]{template.id}[/]..."
            )
            self._materialize(template.path, project_dir)

            self._enter(ScaffoldState.MUTATING)
            self.mutator.edit_manifest(
                project_dir,
                request.project_name,
                strip_css_dependencies=not request.include_css_framework,
            )
        except WaskitError:
            self._enter(ScaffoldState.ABORTED)
            raise

        self._enter(ScaffoldState.CLEANING_FEATURE)
        if not request.include_css_framework:
            self.console.print("\n[info]Removing Tailwind CSS...[/]")
            try:
                report = self.mutator.remove_css_framework(project_dir)
            except (OSError, UnicodeDecodeError) as e:
                self._warn(result, f"Could not remove Tailwind CSS from every file: {e}")
            else:
                for path in report.touched:
                    self.console.print(
                        f"  [success]{Symbols.COMPLETE}[/] Updated {path.relative_to(project_dir)}"
                    )

        if request.init_version_control:
            self._enter(ScaffoldState.GIT_INIT)
            result.git = self._init_git(project_dir, result)

        if not request.skip_install:
            self._enter(ScaffoldState.INSTALLING)
            result.install = self._install(project_dir, result)

        self._enter(ScaffoldState.DONE)
        result.state = self.state
        result.next_steps = self._next_steps(request, result.install)
        return result

    def _enter(self, state: ScaffoldState) -> None:
        logger.debug("Scaffold state: %s -> %s", self.state.value, state.value)
        self.state = state

    def _validate_destination(self, request: ScaffoldRequest) -> None:
        project_dir = request.project_dir
        if not request.project_name:
            raise InvalidDestinationError(
                f"Cannot derive a project name from '{request.target_directory}'"
            )
        if project_dir.exists() and not project_dir.is_dir():
            raise InvalidDestinationError(f"{project_dir} exists and is not a directory")

    def _confirmed(self, project_dir: Path) -> bool:
        if self.confirm_overwrite is None:
            return False
        return bool(self.confirm_overwrite(project_dir))

    def _materialize(self, source: Path, project_dir: Path) -> None:
        try:
            total = self.copier.count_files(source)
        except OSError as e:
            raise CopyError(f"Cannot read template {source}: {e}", path=source) from e

        with tqdm(
            total=total,
            desc="Copying",
            unit="file",
            disable=not self.show_progress,
            leave=False,
        ) as pbar:
            copied = self.copier.copy(source, project_dir, on_file=lambda _: pbar.update(1))

        self.copier.rename_special_files(project_dir)
        self.console.print(f"  [success]{Symbols.COMPLETE}[/] Copied {copied} files")

    def _init_git(self, project_dir: Path, result: ScaffoldResult) -> GitInitResult:
        self.console.print("\n[info]Initializing git repository...[/]")
        git_result = self.git_initializer(project_dir, self.commit_message)
        if git_result.succeeded:
            self.console.print(f"  [success]{Symbols.COMPLETE}[/] Git repository initialized.")
        else:
            self._warn(
                result,
                f"Git initialization failed at '{git_result.failed_step}': {git_result.error}",
            )
        return git_result

    def _install(self, project_dir: Path, result: ScaffoldResult) -> InstallResult:
        self.console.print("\n[info]Installing dependencies...[/]")
        install = self.installer.install(project_dir)
        if install.succeeded:
            self.console.print(
                f"  [success]{Symbols.COMPLETE}[/] Dependencies installed with {install.manager}."
            )
        else:
            tried = ", ".join(a.manager for a in install.attempts)
            self._warn(
                result,
                f"Failed to install dependencies (tried {tried}). "
                "Run the install manually inside the project.",
            )
        return install

    def _warn(self, result: ScaffoldResult, message: str) -> None:
        result.warnings.append(message)
        self.console.print(f"  [warning]{Symbols.WARNING} {escape(message)}[/]")

    def _next_steps(self, request: ScaffoldRequest, install: Optional[InstallResult]) -> List[str]:
        if install is not None and install.manager:
            manager = install.manager
        else:
            manager = self.installer.fallback

        steps = [f"cd {request.target_directory}"]
        if install is None or not install.succeeded:
            steps.append(f"{manager} install")
        steps.append(f"{manager} run dev")
        return steps
