"""Vector collection stores for codeindex."""

from codeindex.storage.memory import InMemoryCollectionStore
from codeindex.storage.store import SQLiteCollectionStore

__all__ = ["SQLiteCollectionStore", "InMemoryCollectionStore"]
