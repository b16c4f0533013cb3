"""
Tests for the query engine.

Covers: search, list_files, get_file_info, analyze_structure and the
error-result policy at the operation boundary
"""

import pytest

from codeindex.errors import StoreError
from codeindex.models import Chunk, ResultStatus
from codeindex.query import QueryEngine
from codeindex.storage import InMemoryCollectionStore

from conftest import BrokenEmbedder, HashingEmbedder


def _store_with(chunks: list[Chunk], embedder: HashingEmbedder) -> InMemoryCollectionStore:
    store = InMemoryCollectionStore()
    store.ensure_collection("codebase")
    vectors = embedder.embed([c.text for c in chunks])
    store.upsert("codebase", [c.with_embedding(v) for c, v in zip(chunks, vectors)])
    return store


class SearchOnlyStore:
    """A collection without enumeration, forcing the broad-search fallback."""

    def __init__(self, inner: InMemoryCollectionStore):
        self.inner = inner
        self.limits: list[int] = []

    def ensure_collection(self, name):
        self.inner.ensure_collection(name)

    def has_collection(self, name):
        return self.inner.has_collection(name)

    def upsert(self, name, chunks):
        self.inner.upsert(name, chunks)

    def search(self, name, query_embedding, limit):
        self.limits.append(limit)
        return self.inner.search(name, query_embedding, limit)


class TestSearch:
    """Test suite for QueryEngine.search."""

    def test_empty_collection_reports_no_results(self, embedder):
        engine = QueryEngine(InMemoryCollectionStore(), embedder)

        result = engine.search("anything at all", 5)

        assert result.status is ResultStatus.EMPTY
        assert result.text == "No relevant code found for your query."

    def test_returns_formatted_snippets(self, indexed_engine):
        result = indexed_engine.search("class User name", 2)

        assert result.ok
        assert result.text.startswith("### Relevant code snippets found:")
        assert "**File: src/db/models.py**" in result.text
        assert "```python\n" in result.text

    def test_never_more_than_max_results(self, indexed_engine):
        result = indexed_engine.search("code", 2)
        assert result.text.count("**File: ") == 2

    def test_best_match_first(self, indexed_engine):
        result = indexed_engine.search("SELECT users WHERE id", 4)
        first_heading = result.text.split("**File: ")[1]
        assert first_heading.startswith("src/db/queries.sql")

    def test_blank_query_is_error_result(self, indexed_engine):
        result = indexed_engine.search("   ")

        assert result.status is ResultStatus.ERROR
        assert result.error_kind == "InvalidArgumentError"
        assert result.text.startswith("Error searching codebase:")

    def test_non_positive_max_results_is_error_result(self, indexed_engine):
        result = indexed_engine.search("code", 0)
        assert result.status is ResultStatus.ERROR

    def test_embedder_failure_is_error_result(self, memory_store):
        memory_store.ensure_collection("codebase")
        engine = QueryEngine(memory_store, BrokenEmbedder())

        result = engine.search("login flow")

        assert result.status is ResultStatus.ERROR
        assert result.operation == "search"
        assert result.error_kind == "EmbeddingError"
        assert "embedding service unavailable" in result.text

    def test_store_failure_is_error_result(self, embedder):
        class OfflineStore(InMemoryCollectionStore):
            def search(self, name, query_embedding, limit):
                raise StoreError("connection refused")

        store = OfflineStore()
        store.ensure_collection("codebase")

        result = QueryEngine(store, embedder).search("anything")

        assert result.status is ResultStatus.ERROR
        assert result.text == "Error searching codebase: connection refused"
        assert result.error_message == "connection refused"


class TestListFiles:
    """Test suite for QueryEngine.list_files."""

    def test_lists_every_document_once(self, indexed_engine):
        result = indexed_engine.list_files()

        assert result.ok
        assert result.text.startswith("### Found 4 files in the codebase:")
        assert result.text.count("- models.py") == 1

    def test_groups_by_directory(self, indexed_engine):
        text = indexed_engine.list_files().text

        assert text.index("**Root directory:**") < text.index("**src:**") < text.index("**src/db:**")
        assert "**src/db:**\n- models.py\n- queries.sql\n" in text

    def test_deduplicates_multi_chunk_documents(self, embedder):
        chunks = [
            Chunk(key=f"big.py_{i}", document_name="big.py", sequence_number=i, text=f"part {i}")
            for i in range(1, 4)
        ]
        engine = QueryEngine(_store_with(chunks, embedder), embedder)

        result = engine.list_files()

        assert result.text.startswith("### Found 1 files in the codebase:")
        assert result.text.count("- big.py") == 1

    def test_directory_filter_is_case_insensitive_prefix(self, indexed_engine):
        result = indexed_engine.list_files("SRC/DB")

        assert result.text.startswith("### Found 2 files in directory 'SRC/DB':")
        assert "app.py" not in result.text
        assert "README.md" not in result.text

    def test_no_match_in_directory(self, indexed_engine):
        result = indexed_engine.list_files("docs/")

        assert result.status is ResultStatus.EMPTY
        assert result.text == "No files found in directory: docs/"

    def test_empty_collection(self, embedder):
        result = QueryEngine(InMemoryCollectionStore(), embedder).list_files()
        assert result.text == "No files found in the codebase."

    def test_falls_back_to_broad_search(self, embedder, memory_store, pipeline, sample_tree):
        pipeline.index_codebase(sample_tree)
        fallback = SearchOnlyStore(memory_store)
        engine = QueryEngine(fallback, embedder, recall_limit=1000)

        result = engine.list_files()

        assert result.text.startswith("### Found 4 files in the codebase:")
        assert fallback.limits == [1000]
        assert embedder.calls[-1] == ["code"]


class TestGetFileInfo:
    """Test suite for QueryEngine.get_file_info."""

    def test_chunks_joined_in_sequence_order(self, embedder):
        """Test chunk 1 text precedes chunk 2 text in one code block."""
        chunks = [
            Chunk(key="a.txt_2", document_name="a.txt", sequence_number=2, text="second part\n"),
            Chunk(key="a.txt_1", document_name="a.txt", sequence_number=1, text="first part\n"),
        ]
        engine = QueryEngine(_store_with(chunks, embedder), embedder)

        result = engine.get_file_info("a.txt")

        assert result.ok
        assert result.text.count("```text\n") == 1
        assert "```text\nfirst part\nsecond part\n```\n" in result.text

    def test_matches_substring_case_insensitively(self, indexed_engine):
        result = indexed_engine.get_file_info("MODELS")

        assert "**src/db/models.py**" in result.text
        assert "class User:" in result.text

    def test_one_block_per_matching_file(self, indexed_engine):
        result = indexed_engine.get_file_info("src/")

        assert result.text.startswith("### Found 3 files matching 'src/':")
        assert result.text.count("**src/") == 3

    def test_no_match_is_empty_result(self, indexed_engine):
        result = indexed_engine.get_file_info("missing.rs")

        assert result.status is ResultStatus.EMPTY
        assert result.text == "No files found matching 'missing.rs'"

    def test_embedder_not_needed_with_enumerable_store(self, pipeline, sample_tree, memory_store):
        pipeline.index_codebase(sample_tree)
        engine = QueryEngine(memory_store, BrokenEmbedder())

        assert engine.get_file_info("app.py").ok


class TestAnalyzeStructure:
    """Test suite for QueryEngine.analyze_structure."""

    def test_no_match_returned_verbatim(self, indexed_engine):
        result = indexed_engine.analyze_structure("nothing-here")

        assert result.status is ResultStatus.EMPTY
        assert result.text == "No files found matching 'nothing-here'"

    def test_related_files_exclude_target(self, indexed_engine):
        result = indexed_engine.analyze_structure("models.py")

        assert result.ok
        assert result.text.startswith("### Code Structure Analysis for 'models.py':")
        related = result.text.split("**Related Files:**\n")[1].split("\n\n")[0]
        assert "models.py" not in related
        assert related.count("- ") <= 5
        assert "### Found 1 files matching 'models.py':" in result.text

    def test_related_files_are_distinct_and_capped(self, embedder):
        chunks = [Chunk(key="target.py", document_name="target.py", sequence_number=1, text="target")]
        for doc in range(8):
            for part in range(1, 3):
                chunks.append(
                    Chunk(
                        key=f"lib{doc}.py_{part}",
                        document_name=f"lib{doc}.py",
                        sequence_number=part,
                        text=f"code related to target {doc} {part}",
                    )
                )
        engine = QueryEngine(_store_with(chunks, embedder), embedder, related_limit=20)

        result = engine.analyze_structure("target.py")

        related = result.text.split("**Related Files:**\n")[1].split("\n\n")[0].splitlines()
        assert len(related) == 5
        assert len(set(related)) == 5

    def test_failure_names_operation(self, pipeline, sample_tree, memory_store):
        pipeline.index_codebase(sample_tree)
        engine = QueryEngine(memory_store, BrokenEmbedder())

        result = engine.analyze_structure("app.py")

        assert result.status is ResultStatus.ERROR
        assert result.text.startswith("Error analyzing code structure:")
        assert result.operation == "analyze_structure"


class DiskFullStore(InMemoryCollectionStore):
    """Collection exists but every read fails."""

    def __init__(self):
        super().__init__()
        self.ensure_collection("codebase")

    def all_chunks(self, name):
        raise StoreError("disk full")

    def search(self, name, query_embedding, limit):
        raise StoreError("disk full")


class TestErrorBoundary:
    """Failures are reported under the operation the caller invoked."""

    @pytest.mark.parametrize("operation", ["search", "list_files", "get_file_info", "analyze_structure"])
    def test_store_failure_names_called_operation(self, operation, embedder):
        engine = QueryEngine(DiskFullStore(), embedder)
        args = () if operation == "list_files" else ("app.py",)

        result = getattr(engine, operation)(*args)

        assert result.status is ResultStatus.ERROR
        assert result.operation == operation
        assert result.error_kind == "StoreError"
        assert "disk full" in str(result)

    def test_analyze_reports_its_own_failure(self, embedder):
        result = QueryEngine(DiskFullStore(), embedder).analyze_structure("app.py")

        assert result.text == "Error analyzing code structure: disk full"


class TestReadOnlyOperations:
    """Queries never create the collection they read."""

    @pytest.mark.parametrize("operation", ["search", "list_files", "get_file_info", "analyze_structure"])
    def test_missing_collection_is_empty_and_not_created(self, operation, store, embedder):
        engine = QueryEngine(store, embedder, collection_name="typo")
        args = () if operation == "list_files" else ("app.py",)

        result = getattr(engine, operation)(*args)

        assert result.status is ResultStatus.EMPTY
        assert not store.has_collection("typo")
        assert store.list_collections() == []
