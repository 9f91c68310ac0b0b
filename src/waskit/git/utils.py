"""Git helpers for waskit.

Used to turn a freshly scaffolded project into a repository with a
single initial commit.
"""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

DEFAULT_COMMIT_MESSAGE = "Initial commit"


# =============================================================================
# Exceptions
# =============================================================================

class GitError(Exception):
    """Base exception for Git operations."""
    pass


class GitNotInstalledError(GitError):
    """Git is not installed or not in PATH."""
    pass


class GitCommandError(GitError):
    """Git command failed with non-zero exit code."""

    def __init__(self, message: str, returncode: int, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


# =============================================================================
# Core Functions
# =============================================================================


def run_git(
    *args,
    cwd: Optional[Path] = None,
    check: bool = False,
    capture_output: bool = True,
) -> subprocess.CompletedProcess:
    """Run a git command.

    Args:
        *args: Git command arguments
        cwd: Working directory
        check: Raise exception on failure
        capture_output: Capture stdout/stderr instead of inheriting them

    Returns:
        CompletedProcess result

    Raises:
        GitNotInstalledError: If git is not installed
        GitCommandError: If check=True and command fails
    """
    cmd = ["git"] + list(args)
    cmd_str = " ".join(cmd)

    try:
        if capture_output:
            result = subprocess.run(
                cmd,
                cwd=cwd or Path.cwd(),
                capture_output=True,
                text=True,
            )
        else:
            result = subprocess.run(cmd, cwd=cwd or Path.cwd())
    except FileNotFoundError:
        raise GitNotInstalledError(
            "Git is not installed or not in PATH. "
            "Please install git: https://git-scm.com/downloads"
        )

    if check and result.returncode != 0:
        stderr = result.stderr if capture_output else ""
        raise GitCommandError(
            f"Git command failed: {cmd_str}\n{stderr}".rstrip(),
            returncode=result.returncode,
            stderr=stderr,
        )
    return result


# =============================================================================
# Repository Initialization
# =============================================================================

@dataclass
class GitInitResult:
    """Outcome of init_repository."""
    succeeded: bool
    completed_steps: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None
    error: Optional[str] = None


def init_repository(path: Path, message: str = DEFAULT_COMMIT_MESSAGE) -> GitInitResult:
    """Initialize a repository at path and commit everything in it.

    Runs init, add and commit in order with output shown to the user.
    The first failing step stops the sequence.

    Args:
        path: Project directory
        message: Commit message for the initial commit

    Returns:
        GitInitResult describing which steps ran
    """
    steps = [
        ("init", ["init"]),
        ("add", ["add", "-A"]),
        ("commit", ["commit", "-m", message]),
    ]
    result = GitInitResult(succeeded=False)

    for name, args in steps:
        try:
            run_git(*args, cwd=path, check=True, capture_output=False)
        except GitError as e:
            result.failed_step = name
            result.error = str(e)
            return result
        result.completed_steps.append(name)

    result.succeeded = True
    return result
