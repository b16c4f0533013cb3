"""Protocols for named, keyed vector collections."""

from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from codeindex.models import Chunk, SearchResult


@runtime_checkable
class VectorCollection(Protocol):
    """Minimal contract the pipeline and query engine rely on.

    Structural subtyping: any object with these methods qualifies.
    """

    def ensure_collection(self, name: str) -> None:
        """Create the collection if it does not exist yet."""
        ...

    def has_collection(self, name: str) -> bool:
        """Whether the collection exists, without creating it."""
        ...

    def upsert(self, name: str, chunks: Sequence[Chunk]) -> None:
        """Insert or overwrite chunks by key."""
        ...

    def search(self, name: str, query_embedding: np.ndarray, limit: int) -> list[SearchResult]:
        """Return up to ``limit`` results, best match first."""
        ...


@runtime_checkable
class EnumerableCollection(VectorCollection, Protocol):
    """A collection that can also list every stored chunk."""

    def all_chunks(self, name: str) -> list[Chunk]:
        """Return every chunk in the collection ordered by key."""
        ...
