"""Template materialization.

Copies a template tree onto a project directory. The copy is additive:
files with the same relative path are overwritten, files that exist only
in the destination are left alone. A failure part way through leaves the
partially copied tree on disk; nothing is rolled back.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from waskit.core.errors import CopyError
from waskit.core.filesystem import FileSystem, get_file_system

logger = logging.getLogger(__name__)

# Files shipped under a neutral name and renamed once copied
SPECIAL_FILES: Dict[str, str] = {
    "_gitignore": ".gitignore",
}


class FileTreeCopier:
    """Recursive, deterministic directory copy."""

    def __init__(self, fs: Optional[FileSystem] = None):
        self.fs = fs or get_file_system()

    def copy(
        self,
        source_dir: Path,
        dest_dir: Path,
        on_file: Optional[Callable[[Path], None]] = None,
    ) -> int:
        """Copy every file under source_dir into dest_dir.

        Args:
            source_dir: Template tree to copy from
            dest_dir: Destination, created with its ancestors if absent
            on_file: Called with each file's relative path once copied

        Returns:
            Number of files copied

        Raises:
            CopyError: On the first file or directory that cannot be written
        """
        logger.debug("Copying %s -> %s", source_dir, dest_dir)
        return self._copy_dir(source_dir, dest_dir, Path(), on_file)

    def _copy_dir(
        self,
        source_dir: Path,
        dest_dir: Path,
        relative: Path,
        on_file: Optional[Callable[[Path], None]],
    ) -> int:
        try:
            self.fs.make_dirs(dest_dir)
            entries = self.fs.list_dir(source_dir)
        except OSError as e:
            raise CopyError(f"Cannot copy directory {source_dir}: {e}", path=dest_dir) from e

        copied = 0
        for entry in entries:
            target = dest_dir / entry.name
            if self.fs.is_dir(entry):
                copied += self._copy_dir(entry, target, relative / entry.name, on_file)
                continue

            try:
                self.fs.copy_file(entry, target)
            except OSError as e:
                raise CopyError(f"Cannot copy {entry} to {target}: {e}", path=target) from e

            copied += 1
            if on_file is not None:
                on_file(relative / entry.name)

        return copied

    def count_files(self, source_dir: Path) -> int:
        """Count the files copy() would write."""
        total = 0
        for entry in self.fs.list_dir(source_dir):
            if self.fs.is_dir(entry):
                total += self.count_files(entry)
            else:
                total += 1
        return total

    def rename_special_files(self, dest_dir: Path) -> List[Path]:
        """Rename shipped placeholder files to their real names.

        Returns:
            Paths of the renamed files in their final location
        """
        renamed = []
        for shipped, real in SPECIAL_FILES.items():
            source = dest_dir / shipped
            if not self.fs.exists(source):
                continue
            target = dest_dir / real
            try:
                self.fs.replace(source, target)
            except OSError as e:
                raise CopyError(f"Cannot rename {source} to {target}: {e}", path=target) from e
            renamed.append(target)
        return renamed
