"""Read-only query operations over an indexed collection."""

import functools
import logging
from typing import Callable, Optional

from codeindex import formatting
from codeindex.config import DEFAULT_COLLECTION
from codeindex.embedders import embed_query
from codeindex.errors import InvalidArgumentError
from codeindex.models import Chunk, QueryResult, ResultStatus
from codeindex.protocols import EmbeddingProvider, EnumerableCollection, VectorCollection

logger = logging.getLogger(__name__)


def _operation(description: str) -> Callable:
    """Turn any exception raised by a query operation into an error result.

    ``description`` completes the message "Error <description>: <cause>".
    """

    def decorator(method: Callable[..., QueryResult]) -> Callable[..., QueryResult]:
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs) -> QueryResult:
            try:
                return method(self, *args, **kwargs)
            except Exception as exc:
                logger.exception("Query operation %s failed", method.__name__)
                return QueryResult.failure(method.__name__, description, exc)

        return wrapper

    return decorator


def _require_text(value: Optional[str], argument: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError(f"{argument} must not be blank")
    return value


class QueryEngine:
    """Search, listing and file reconstruction on top of a vector collection.

    Each public operation returns a QueryResult and never raises. Operations
    only read: a missing collection reads as empty and is not created.
    """

    def __init__(
        self,
        collection: VectorCollection,
        embedder: EmbeddingProvider,
        collection_name: str = DEFAULT_COLLECTION,
        recall_query: str = "code",
        recall_limit: int = 1000,
        related_limit: int = 10,
        max_related_files: int = 5,
    ):
        self.collection = collection
        self.embedder = embedder
        self.collection_name = collection_name
        self.recall_query = recall_query
        self.recall_limit = recall_limit
        self.related_limit = related_limit
        self.max_related_files = max_related_files

    @_operation("searching codebase")
    def search(self, query: str, max_results: int = 5) -> QueryResult:
        """Chunks most similar to a natural-language query, best first."""
        _require_text(query, "query")
        if max_results <= 0:
            raise InvalidArgumentError(f"max_results must be positive, got {max_results}")

        results = []
        if self.collection.has_collection(self.collection_name):
            vector = embed_query(self.embedder, query)
            results = self.collection.search(self.collection_name, vector, max_results)

        if not results:
            return QueryResult.empty("search", "No relevant code found for your query.")
        return QueryResult.success("search", formatting.format_search_results(results))

    @_operation("listing files")
    def list_files(self, directory: Optional[str] = None) -> QueryResult:
        """Indexed document names, optionally restricted to a path prefix."""
        directory = directory.strip() if directory else None
        names = {chunk.document_name for chunk in self._all_chunks()}

        if directory:
            prefix = directory.lower()
            names = {name for name in names if name.lower().startswith(prefix)}

        if not names:
            return QueryResult.empty("list_files", formatting.no_files_message(directory))
        return QueryResult.success("list_files", formatting.format_file_listing(names, directory))

    @_operation("retrieving file information")
    def get_file_info(self, file_name: str) -> QueryResult:
        """Reassembled contents of every document whose name contains ``file_name``."""
        return self._file_info(file_name)

    @_operation("analyzing code structure")
    def analyze_structure(self, file_name: str) -> QueryResult:
        """File contents plus other documents that look related to it."""
        file_info = self._file_info(file_name)
        if file_info.status is ResultStatus.EMPTY:
            return file_info

        vector = embed_query(self.embedder, f"code related to {file_name}")
        results = self.collection.search(self.collection_name, vector, self.related_limit)

        fragment = file_name.lower()
        related: list[str] = []
        for result in results:
            name = result.chunk.document_name
            if fragment in name.lower() or name in related:
                continue
            related.append(name)
            if len(related) >= self.max_related_files:
                break

        return QueryResult.success(
            "analyze_structure",
            formatting.format_structure_analysis(file_name, related, file_info.text),
        )

    def _file_info(self, file_name: str) -> QueryResult:
        """Body of get_file_info; exceptions reach the calling operation."""
        _require_text(file_name, "file_name")
        fragment = file_name.lower()

        files: dict[str, list[Chunk]] = {}
        for chunk in self._all_chunks():
            if fragment in chunk.document_name.lower():
                files.setdefault(chunk.document_name, []).append(chunk)

        if not files:
            return QueryResult.empty("get_file_info", formatting.no_matching_files_message(file_name))
        return QueryResult.success("get_file_info", formatting.format_file_bodies(files, file_name))

    def _all_chunks(self) -> list[Chunk]:
        """Every chunk, or a broad search as a stand-in when the store cannot enumerate."""
        if not self.collection.has_collection(self.collection_name):
            return []
        if isinstance(self.collection, EnumerableCollection):
            return self.collection.all_chunks(self.collection_name)

        vector = embed_query(self.embedder, self.recall_query)
        results = self.collection.search(self.collection_name, vector, self.recall_limit)
        return [result.chunk for result in results]
