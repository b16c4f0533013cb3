"""codeindex - semantic search over a source tree."""

from codeindex.chunkers import LineChunker
from codeindex.config import IndexConfig
from codeindex.indexing import IndexingPipeline
from codeindex.models import Chunk, IndexReport, QueryResult, ResultStatus, SearchResult
from codeindex.query import QueryEngine
from codeindex.scanners import FileScanner
from codeindex.storage import InMemoryCollectionStore, SQLiteCollectionStore

__version__ = "0.1.0"

__all__ = [
    "Chunk",
    "FileScanner",
    "IndexConfig",
    "IndexReport",
    "IndexingPipeline",
    "InMemoryCollectionStore",
    "LineChunker",
    "QueryEngine",
    "QueryResult",
    "ResultStatus",
    "SQLiteCollectionStore",
    "SearchResult",
]
