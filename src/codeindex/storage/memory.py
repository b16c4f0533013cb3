"""In-process vector collections."""

from typing import Optional, Sequence

import numpy as np

from codeindex.errors import InvalidArgumentError, StoreError
from codeindex.models import Chunk, SearchResult
from codeindex.storage.similarity import check_limit, rank_by_cosine


class InMemoryCollectionStore:
    """Dictionary-backed collections with the same contract as the SQLite store.

    Nothing survives the process; useful for one-shot runs and tests.
    """

    def __init__(self) -> None:
        self._collections: dict[str, dict[str, Chunk]] = {}
        self._metadata: dict[str, str] = {}

    def ensure_collection(self, name: str) -> None:
        self._collections.setdefault(name, {})

    def has_collection(self, name: str) -> bool:
        return name in self._collections

    def drop_collection(self, name: str) -> None:
        self._collections.pop(name, None)

    def list_collections(self) -> list[str]:
        return sorted(self._collections)

    def count(self, name: str) -> int:
        return len(self._get(name))

    def upsert(self, name: str, chunks: Sequence[Chunk]) -> None:
        collection = self._get(name)
        for chunk in chunks:
            if not chunk.has_embedding:
                raise InvalidArgumentError(f"Chunk {chunk.key} has no embedding")
        for chunk in chunks:
            collection[chunk.key] = chunk

    def all_chunks(self, name: str) -> list[Chunk]:
        collection = self._get(name)
        return [collection[key] for key in sorted(collection)]

    def search(self, name: str, query_embedding: np.ndarray, limit: int) -> list[SearchResult]:
        check_limit(limit)
        return rank_by_cosine(self.all_chunks(name), query_embedding, limit)

    def set_metadata(self, key: str, value: str) -> None:
        self._metadata[key] = value

    def get_metadata(self, key: str) -> Optional[str]:
        return self._metadata.get(key)

    def _get(self, name: str) -> dict[str, Chunk]:
        try:
            return self._collections[name]
        except KeyError:
            raise StoreError(f"Collection does not exist: {name}") from None
