"""File system access for the scaffolding engine.

All reads and writes performed while scaffolding go through a
FileSystem object, so there is exactly one place that decides how files
are touched. LocalFileSystem is the only implementation.
"""

import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional


class FileSystem(ABC):
    """File operations needed to materialize and edit a project tree."""

    @abstractmethod
    def exists(self, path: Path) -> bool:
        ...

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        ...

    @abstractmethod
    def list_dir(self, path: Path) -> List[Path]:
        """Return directory entries sorted by name."""
        ...

    @abstractmethod
    def make_dirs(self, path: Path) -> None:
        """Create a directory and any missing ancestors."""
        ...

    @abstractmethod
    def copy_file(self, source: Path, dest: Path) -> None:
        """Copy file content byte-for-byte, overwriting dest."""
        ...

    @abstractmethod
    def read_text(self, path: Path) -> str:
        ...

    @abstractmethod
    def write_text(self, path: Path, content: str) -> None:
        ...

    @abstractmethod
    def replace(self, source: Path, dest: Path) -> None:
        """Rename source to dest, replacing dest if it exists."""
        ...


class LocalFileSystem(FileSystem):
    """FileSystem backed by the host disk."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def list_dir(self, path: Path) -> List[Path]:
        return sorted(path.iterdir(), key=lambda p: p.name)

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def copy_file(self, source: Path, dest: Path) -> None:
        # Content only; permissions and metadata are not carried over
        shutil.copyfile(source, dest)

    def read_text(self, path: Path) -> str:
        return path.read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        path.write_text(content, encoding="utf-8")

    def replace(self, source: Path, dest: Path) -> None:
        source.replace(dest)


_file_system: Optional[FileSystem] = None


def get_file_system() -> FileSystem:
    """Get the process-wide FileSystem, creating it on first use."""
    global _file_system
    if _file_system is None:
        _file_system = LocalFileSystem()
    return _file_system
