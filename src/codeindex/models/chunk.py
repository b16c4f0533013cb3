"""Core data models for indexed chunks and search hits."""

from dataclasses import dataclass, field, replace
from typing import Optional

import numpy as np


@dataclass(frozen=True)
class Chunk:
    """A slice of a source file, keyed for storage in a collection."""

    key: str
    document_name: str  # path relative to the indexed root, "/" separated
    sequence_number: int  # 1-based position within the document
    text: str
    embedding: Optional[np.ndarray] = field(default=None, compare=False, repr=False)

    @property
    def has_embedding(self) -> bool:
        return self.embedding is not None and self.embedding.size > 0

    def with_embedding(self, embedding: np.ndarray) -> "Chunk":
        """Return a copy of this chunk carrying the given vector."""
        return replace(self, embedding=np.asarray(embedding, dtype=np.float32))


@dataclass(frozen=True)
class SearchResult:
    """A chunk paired with its similarity to a query (higher is closer)."""

    chunk: Chunk
    score: float
