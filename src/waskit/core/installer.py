"""Dependency installation.

A fast package manager (bun by default) is preferred when it is on PATH;
otherwise the universally available fallback (npm) is used. An install
that fails with the primary manager is retried once with the fallback.
Install output goes straight to the user's terminal.
"""

import logging
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

# Return code recorded when the manager executable cannot be started
NOT_FOUND_RETURNCODE = 127


@dataclass
class InstallAttempt:
    """One `<manager> install` invocation."""
    manager: str
    returncode: int

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


@dataclass
class InstallResult:
    """Outcome of an install, including which manager actually ran."""
    succeeded: bool
    manager: Optional[str] = None
    attempts: List[InstallAttempt] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return len(self.attempts) > 1


def run_command(cmd: List[str], cwd: Optional[Path] = None, quiet: bool = False) -> int:
    """Run a command and return its exit code.

    Output is inherited from this process unless quiet is set. A missing
    executable is reported as NOT_FOUND_RETURNCODE instead of raising.
    """
    logger.debug("Running %s in %s", " ".join(cmd), cwd or Path.cwd())
    try:
        if quiet:
            result = subprocess.run(cmd, cwd=cwd, capture_output=True, text=True)
        else:
            result = subprocess.run(cmd, cwd=cwd)
    except FileNotFoundError:
        logger.debug("Executable not found: %s", cmd[0])
        return NOT_FOUND_RETURNCODE
    return result.returncode


class InstallationOrchestrator:
    """Chooses a package manager and installs project dependencies."""

    def __init__(self, primary: str = "bun", fallback: str = "npm"):
        self.primary = primary
        self.fallback = fallback

    def detect_manager(self) -> str:
        """Return the primary manager if its version probe succeeds, else the fallback."""
        if run_command([self.primary, "--version"], quiet=True) == 0:
            logger.debug("Using %s", self.primary)
            return self.primary
        logger.debug("%s not available, using %s", self.primary, self.fallback)
        return self.fallback

    def install(self, project_dir: Path, manager: Optional[str] = None) -> InstallResult:
        """Install dependencies in project_dir.

        Args:
            project_dir: Directory holding the manifest
            manager: Manager to try first (detected when omitted)

        Returns:
            InstallResult naming the manager that ran last
        """
        manager = manager or self.detect_manager()
        result = InstallResult(succeeded=False)

        attempt = self.try_primary(project_dir, manager)
        result.attempts.append(attempt)
        result.manager = attempt.manager
        if attempt.succeeded:
            result.succeeded = True
            return result

        fallback_attempt = self.try_fallback(project_dir, manager)
        if fallback_attempt is None:
            return result

        result.attempts.append(fallback_attempt)
        result.manager = fallback_attempt.manager
        result.succeeded = fallback_attempt.succeeded
        return result

    def try_primary(self, project_dir: Path, manager: str) -> InstallAttempt:
        return InstallAttempt(manager, run_command([manager, "install"], cwd=project_dir))

    def try_fallback(self, project_dir: Path, failed_manager: str) -> Optional[InstallAttempt]:
        """Retry with the fallback manager, unless it is the one that just failed."""
        if failed_manager == self.fallback:
            return None
        logger.info("%s install failed, retrying with %s", failed_manager, self.fallback)
        return InstallAttempt(self.fallback, run_command([self.fallback, "install"], cwd=project_dir))
