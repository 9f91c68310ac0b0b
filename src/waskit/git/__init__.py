"""Git utilities for waskit."""

from waskit.git.utils import (
    run_git,
    init_repository,
    GitInitResult,
    GitError,
    GitNotInstalledError,
    GitCommandError,
    DEFAULT_COMMIT_MESSAGE,
)

__all__ = [
    "run_git",
    "init_repository",
    "GitInitResult",
    "GitError",
    "GitNotInstalledError",
    "GitCommandError",
    "DEFAULT_COMMIT_MESSAGE",
]
