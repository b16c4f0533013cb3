"""Helpers shared by everything that calls an embedding provider."""

import numpy as np

from codeindex.errors import EmbeddingError
from codeindex.protocols import EmbeddingProvider


def embed_texts(embedder: EmbeddingProvider, texts: list[str]) -> np.ndarray:
    """Embed ``texts`` and check the provider kept its shape contract.

    Any backend exception is re-raised as EmbeddingError.
    """
    try:
        vectors = np.asarray(embedder.embed(texts), dtype=np.float32)
    except EmbeddingError:
        raise
    except Exception as exc:
        raise EmbeddingError(f"{type(exc).__name__}: {exc}") from exc

    if vectors.ndim != 2 or vectors.shape[0] != len(texts):
        raise EmbeddingError(
            f"Embedder returned shape {vectors.shape} for {len(texts)} texts"
        )
    return vectors


def embed_query(embedder: EmbeddingProvider, text: str) -> np.ndarray:
    """Embed a single query string."""
    return embed_texts(embedder, [text])[0]
