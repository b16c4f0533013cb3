"""
Shared test fixtures for the codeindex test suite.

Provides: deterministic embedders, in-memory and SQLite stores, a sample tree
"""

import hashlib
import re
from pathlib import Path

import numpy as np
import pytest

from codeindex.chunkers import LineChunker
from codeindex.indexing import IndexingPipeline
from codeindex.query import QueryEngine
from codeindex.scanners import FileScanner
from codeindex.storage import InMemoryCollectionStore, SQLiteCollectionStore

_TOKEN = re.compile(r"[A-Za-z0-9]+")


class HashingEmbedder:
    """Bag-of-words embedder: each token bumps one hashed dimension."""

    def __init__(self, dimension: int = 64):
        self._dimension = dimension
        self.calls: list[list[str]] = []

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return "hashing-test"

    def embed(self, texts: list[str]) -> np.ndarray:
        self.calls.append(list(texts))
        vectors = np.zeros((len(texts), self._dimension), dtype=np.float32)
        for row, text in enumerate(texts):
            for token in _TOKEN.findall(text.lower()):
                digest = hashlib.md5(token.encode()).digest()
                vectors[row, digest[0] % self._dimension] += 1.0
        return vectors


class BrokenEmbedder(HashingEmbedder):
    """Embedder whose backend is always down."""

    def embed(self, texts: list[str]) -> np.ndarray:
        raise ConnectionError("embedding service unavailable")


def write_files(root: Path, files: dict[str, str]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


SAMPLE_FILES = {
    "README.md": "# Sample\nA tiny project used in tests.\n",
    "src/app.py": "def main():\n    print('hello world')\n",
    "src/db/models.py": "class User:\n    name = 'user'\n\nclass Order:\n    total = 0\n",
    "src/db/queries.sql": "SELECT * FROM users WHERE id = 1;\n",
    "bin/output.txt": "compiled output that must be skipped\n",
    "node_modules/lib/index.js": "module.exports = {};\n",
    "notes.bin": "not an allowed extension\n",
}


@pytest.fixture
def embedder() -> HashingEmbedder:
    return HashingEmbedder()


@pytest.fixture
def memory_store() -> InMemoryCollectionStore:
    return InMemoryCollectionStore()


@pytest.fixture(params=["memory", "sqlite"])
def store(request, tmp_path):
    """Each store implementation in turn."""
    if request.param == "memory":
        return InMemoryCollectionStore()
    return SQLiteCollectionStore(tmp_path / "param.codeindex")


@pytest.fixture
def sample_tree(tmp_path) -> Path:
    root = tmp_path / "project"
    write_files(root, SAMPLE_FILES)
    return root


@pytest.fixture
def scanner() -> FileScanner:
    return FileScanner(
        extensions={".md", ".py", ".sql", ".txt", ".js"},
        excluded_dirs={"bin", "node_modules"},
    )


@pytest.fixture
def pipeline(memory_store, embedder, scanner) -> IndexingPipeline:
    return IndexingPipeline(memory_store, embedder, scanner, LineChunker(1000))


@pytest.fixture
def indexed_engine(pipeline, sample_tree, memory_store, embedder) -> QueryEngine:
    pipeline.index_codebase(sample_tree)
    return QueryEngine(memory_store, embedder)
