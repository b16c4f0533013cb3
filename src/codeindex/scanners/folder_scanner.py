"""Scanner for source folders on the local filesystem."""

import logging
import os
from pathlib import Path
from typing import Iterable

from codeindex.config import DEFAULT_EXCLUDED_DIRS, DEFAULT_EXTENSIONS
from codeindex.errors import InvalidArgumentError, NotFoundError, ReadError

logger = logging.getLogger(__name__)


class FileScanner:
    """Walks a folder and yields files with an allowed extension.

    Extensions are compared case-insensitively. Excluded directory names are
    compared case-sensitively against each directory segment below the root;
    an entry such as ``wwwroot/lib`` matches consecutive segments.
    """

    def __init__(
        self,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        excluded_dirs: Iterable[str] = DEFAULT_EXCLUDED_DIRS,
    ):
        self.extensions = frozenset(ext.lower() for ext in extensions)
        self.excluded_dirs = frozenset(excluded_dirs)
        self._excluded_runs = [
            tuple(entry.strip("/").split("/"))
            for entry in self.excluded_dirs
            if "/" in entry.strip("/")
        ]

    def scan(self, root: Path | str) -> list[Path]:
        """Return absolute paths of matching files, sorted by path.

        Args:
            root: Directory to scan recursively

        Raises:
            NotFoundError: root does not exist
            InvalidArgumentError: root is not a directory
        """
        root_path = Path(root).resolve()
        if not root_path.exists():
            raise NotFoundError(f"Codebase root not found: {root}")
        if not root_path.is_dir():
            raise InvalidArgumentError(f"Codebase root is not a directory: {root}")

        found: list[Path] = []
        for current, dirs, files in os.walk(root_path):
            rel_dir = Path(current).relative_to(root_path)

            # Prune excluded directories so they are never descended into
            dirs[:] = [d for d in dirs if not self._should_skip(rel_dir.parts + (d,))]

            for filename in files:
                if Path(filename).suffix.lower() in self.extensions:
                    found.append(Path(current) / filename)

        found.sort()
        logger.debug("Scanned %s: %d candidate files", root_path, len(found))
        return found

    def _should_skip(self, dir_parts: tuple[str, ...]) -> bool:
        """Check whether a directory (given as segments below root) is excluded."""
        if any(part in self.excluded_dirs for part in dir_parts):
            return True

        for run in self._excluded_runs:
            width = len(run)
            for start in range(len(dir_parts) - width + 1):
                if dir_parts[start : start + width] == run:
                    return True
        return False


def relative_document_name(root: Path | str, path: Path | str) -> str:
    """Return ``path`` relative to ``root`` with ``/`` separators.

    The file path itself is never resolved, so a symlink keeps the name it
    was found under rather than the name of its target.

    Raises:
        ReadError: path does not lie under root
    """
    path = Path(path)
    for base in (Path(root).resolve(), Path(root).absolute()):
        try:
            return path.relative_to(base).as_posix()
        except ValueError:
            continue
    raise ReadError(path, f"not under the indexed root {root}")
