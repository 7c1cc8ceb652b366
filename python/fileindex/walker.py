"""
Walker - Lazy recursive directory traversal.

Yields every regular file under a root, depth-first, directory entries
in name order. Symlinks to files are always resolved; symlinked
directories are entered unless follow_symlinks is off. Directories that
cannot be listed are skipped (and counted) unless their error policy
says ABORT.
"""

import logging
import os
from pathlib import Path
from typing import Iterator, List

from .config import get_config, IndexerConfig
from .errors import handle_error, ErrorAction, TraversalError


logger = logging.getLogger(__name__)


class Walker:
    """
    Recursive file walker.

    Each call to ``walk()`` re-reads the filesystem; the returned
    iterator is not restartable.
    """

    def __init__(self, root: Path | str, config: IndexerConfig | None = None):
        self.root = Path(root)
        self.config = config or get_config()
        self.directories_skipped = 0

    def walk(self) -> Iterator[Path]:
        """
        Iterate over regular files under the root.

        A root that is itself a file is yielded as the only entry.
        """
        root = self.root
        if root.is_file():
            yield root
            return

        if not root.is_dir():
            logger.warning(f"Root directory not found: {root}")
            return

        stack: List[Path] = [root]
        while stack:
            directory = stack.pop()
            subdirs: List[Path] = []

            for entry in self._list_directory(directory):
                try:
                    if entry.is_dir(follow_symlinks=self.config.follow_symlinks):
                        subdirs.append(Path(entry.path))
                    elif entry.is_file():
                        yield Path(entry.path)
                except OSError as e:
                    if handle_error(e, Path(entry.path), "walk_entry") is ErrorAction.ABORT:
                        raise

            # Reversed so the first subdirectory is popped first
            stack.extend(reversed(subdirs))

    def _list_directory(self, directory: Path) -> List[os.DirEntry]:
        """List a directory sorted by name, or [] if it cannot be read."""
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            error = TraversalError(directory, e)
            if handle_error(error, directory, "walk_directory") is ErrorAction.ABORT:
                raise error from e
            self.directories_skipped += 1
            return []
        entries.sort(key=lambda entry: entry.name)
        return entries

    def __iter__(self) -> Iterator[Path]:
        return self.walk()


def walk_files(root: Path | str, config: IndexerConfig | None = None) -> Iterator[Path]:
    """
    Convenience function to walk a directory tree.

    Usage:
        for path in walk_files(Path.home() / "Documents"):
            print(path)
    """
    return Walker(root, config).walk()
