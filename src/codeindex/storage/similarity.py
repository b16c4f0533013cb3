"""Brute-force cosine ranking shared by the collection stores."""

from typing import Sequence

import numpy as np

from codeindex.errors import InvalidArgumentError, StoreError
from codeindex.models import Chunk, SearchResult


def check_limit(limit: int) -> None:
    if limit <= 0:
        raise InvalidArgumentError(f"Search limit must be positive, got {limit}")


def rank_by_cosine(chunks: Sequence[Chunk], query_embedding: np.ndarray, limit: int) -> list[SearchResult]:
    """Score every chunk against the query and keep the best ``limit``.

    Ties are broken by chunk key so repeated searches return the same order.
    """
    check_limit(limit)
    if not chunks:
        return []

    query = np.asarray(query_embedding, dtype=np.float32).ravel()
    dimensions = {chunk.embedding.shape[0] for chunk in chunks}
    if dimensions != {query.shape[0]}:
        raise StoreError(
            f"Query dimension {query.shape[0]} does not match stored dimensions {sorted(dimensions)}"
        )

    matrix = np.vstack([chunk.embedding for chunk in chunks])
    norms = np.linalg.norm(matrix, axis=1) * np.linalg.norm(query)
    dots = matrix @ query
    scores = np.divide(dots, norms, out=np.zeros_like(dots), where=norms != 0)

    order = sorted(range(len(chunks)), key=lambda i: (-scores[i], chunks[i].key))
    return [SearchResult(chunk=chunks[i], score=float(scores[i])) for i in order[:limit]]
