"""Protocol for source tree scanners."""

from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class SourceScanner(Protocol):
    """Protocol for components that list the files to index under a root."""

    def scan(self, root: Path | str) -> list[Path]:
        """Return absolute paths of candidate files in a stable order."""
        ...
