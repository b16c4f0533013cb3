"""SentenceTransformer-based embedding provider."""

import logging

import numpy as np
from sentence_transformers import SentenceTransformer

from codeindex.config import DEFAULT_EMBEDDING_MODEL
from codeindex.errors import EmbeddingError

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder:
    """Embedding provider using sentence-transformers library.

    Uses all-MiniLM-L6-v2 by default - a fast, lightweight model
    that embeds code and prose well enough for navigation queries.
    """

    def __init__(self, model_name: str | None = None, batch_size: int = 32):
        """Initialize the embedder.

        Args:
            model_name: Name of the sentence-transformers model to use.
                       Defaults to all-MiniLM-L6-v2.
            batch_size: Batch size handed to the model's encode call.
        """
        self._model_name = model_name or DEFAULT_EMBEDDING_MODEL
        self._batch_size = batch_size
        self._model: SentenceTransformer | None = None

    @property
    def model(self) -> SentenceTransformer:
        """Lazy-load the model on first access."""
        if self._model is None:
            logger.info("Loading embedding model %s", self._model_name)
            try:
                self._model = SentenceTransformer(self._model_name)
            except Exception as exc:
                raise EmbeddingError(f"Cannot load model {self._model_name}: {exc}") from exc
        return self._model

    @property
    def dimension(self) -> int:
        """Return the embedding dimension."""
        return self.model.get_sentence_embedding_dimension()

    @property
    def model_name(self) -> str:
        """Return identifier for the model used."""
        return self._model_name

    def embed(self, texts: list[str]) -> np.ndarray:
        """Generate embeddings for a batch of texts.

        Args:
            texts: List of text strings to embed

        Returns:
            numpy array of shape (len(texts), embedding_dim)
        """
        if not texts:
            return np.empty((0, self.dimension), dtype=np.float32)

        try:
            embeddings = self.model.encode(
                texts,
                batch_size=self._batch_size,
                convert_to_numpy=True,
                normalize_embeddings=True,  # For cosine similarity
            )
        except EmbeddingError:
            raise
        except Exception as exc:
            raise EmbeddingError(f"Embedding failed: {exc}") from exc
        return embeddings.astype(np.float32)
