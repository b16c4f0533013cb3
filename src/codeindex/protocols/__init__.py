"""Protocol definitions for extensible components."""

from codeindex.protocols.chunker import ChunkingStrategy
from codeindex.protocols.embedder import EmbeddingProvider
from codeindex.protocols.scanner import SourceScanner
from codeindex.protocols.vector_store import EnumerableCollection, VectorCollection

__all__ = [
    "SourceScanner",
    "EmbeddingProvider",
    "ChunkingStrategy",
    "VectorCollection",
    "EnumerableCollection",
]
