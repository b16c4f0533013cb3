"""Exception hierarchy for codeindex."""

from pathlib import Path


class CodeIndexError(Exception):
    """Base class for all codeindex errors."""


class NotFoundError(CodeIndexError):
    """A required path or collection does not exist."""


class InvalidArgumentError(CodeIndexError, ValueError):
    """An argument is out of range or blank."""


class ReadError(CodeIndexError):
    """A single source file could not be read.

    Raised per file; the indexing pipeline records it and moves on.
    """

    def __init__(self, path: Path | str, reason: str):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"Cannot read {self.path}: {reason}")


class EmbeddingError(CodeIndexError):
    """The embedding backend failed."""


class StoreError(CodeIndexError):
    """The vector store failed or a collection is unavailable."""
