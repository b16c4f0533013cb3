"""SQLite-backed vector collections for .codeindex files."""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, Sequence

import numpy as np

from codeindex.errors import InvalidArgumentError, StoreError
from codeindex.models import Chunk, SearchResult
from codeindex.storage.schema import SCHEMA
from codeindex.storage.similarity import check_limit, rank_by_cosine

logger = logging.getLogger(__name__)


class SQLiteCollectionStore:
    """SQLite-backed storage for named chunk collections.

    Each call opens its own connection, so one store object can be shared by
    a CLI run or an MCP server without connection bookkeeping.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.initialize()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database connections."""
        try:
            conn = sqlite3.connect(self.path)
        except sqlite3.Error as exc:
            raise StoreError(f"Cannot open store {self.path}: {exc}") from exc
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StoreError(f"Store error in {self.path}: {exc}") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def initialize(self) -> None:
        """Create schema if not exists."""
        with self.connection() as conn:
            conn.executescript(SCHEMA)

    # Collection lifecycle

    def ensure_collection(self, name: str) -> None:
        """Create the collection if missing (idempotent)."""
        with self.connection() as conn:
            conn.execute(
                "INSERT OR IGNORE INTO collections (name, created_at) VALUES (?, ?)",
                (name, datetime.now().isoformat()),
            )

    def has_collection(self, name: str) -> bool:
        with self.connection() as conn:
            row = conn.execute("SELECT 1 FROM collections WHERE name = ?", (name,)).fetchone()
            return row is not None

    def drop_collection(self, name: str) -> None:
        """Remove a collection and all of its chunks. Missing is not an error."""
        with self.connection() as conn:
            conn.execute("DELETE FROM chunks WHERE collection = ?", (name,))
            conn.execute("DELETE FROM collections WHERE name = ?", (name,))
        logger.debug("Dropped collection %s", name)

    def list_collections(self) -> list[str]:
        with self.connection() as conn:
            rows = conn.execute("SELECT name FROM collections ORDER BY name").fetchall()
            return [row["name"] for row in rows]

    def count(self, name: str) -> int:
        """Number of chunks stored in a collection."""
        with self.connection() as conn:
            self._require_collection(conn, name)
            row = conn.execute(
                "SELECT COUNT(*) AS n FROM chunks WHERE collection = ?", (name,)
            ).fetchone()
            return row["n"]

    # Chunk access

    def upsert(self, name: str, chunks: Sequence[Chunk]) -> None:
        """Insert chunks, replacing any existing chunk with the same key."""
        for chunk in chunks:
            if not chunk.has_embedding:
                raise InvalidArgumentError(f"Chunk {chunk.key} has no embedding")

        with self.connection() as conn:
            self._require_collection(conn, name)
            conn.executemany(
                """INSERT OR REPLACE INTO chunks
                   (collection, key, document_name, sequence_number, text, embedding, dimension)
                   VALUES (?, ?, ?, ?, ?, ?, ?)""",
                [
                    (
                        name,
                        chunk.key,
                        chunk.document_name,
                        chunk.sequence_number,
                        chunk.text,
                        chunk.embedding.astype(np.float32).tobytes(),
                        chunk.embedding.shape[0],
                    )
                    for chunk in chunks
                ],
            )

    def all_chunks(self, name: str) -> list[Chunk]:
        """Every chunk in the collection, ordered by key."""
        with self.connection() as conn:
            self._require_collection(conn, name)
            cursor = conn.execute(
                """SELECT key, document_name, sequence_number, text, embedding
                   FROM chunks WHERE collection = ? ORDER BY key""",
                (name,),
            )
            return [self._row_to_chunk(row) for row in cursor]

    def search(self, name: str, query_embedding: np.ndarray, limit: int) -> list[SearchResult]:
        """Find the chunks most similar to the query embedding."""
        check_limit(limit)
        return rank_by_cosine(self.all_chunks(name), query_embedding, limit)

    # Metadata

    def set_metadata(self, key: str, value: str) -> None:
        """Store a metadata key-value pair."""
        with self.connection() as conn:
            conn.execute(
                "INSERT OR REPLACE INTO metadata (key, value) VALUES (?, ?)",
                (key, value),
            )

    def get_metadata(self, key: str) -> Optional[str]:
        """Retrieve a metadata value by key."""
        with self.connection() as conn:
            row = conn.execute(
                "SELECT value FROM metadata WHERE key = ?", (key,)
            ).fetchone()
            return row["value"] if row else None

    @staticmethod
    def _require_collection(conn: sqlite3.Connection, name: str) -> None:
        row = conn.execute("SELECT 1 FROM collections WHERE name = ?", (name,)).fetchone()
        if row is None:
            raise StoreError(f"Collection does not exist: {name}")

    @staticmethod
    def _row_to_chunk(row: sqlite3.Row) -> Chunk:
        return Chunk(
            key=row["key"],
            document_name=row["document_name"],
            sequence_number=row["sequence_number"],
            text=row["text"],
            embedding=np.frombuffer(row["embedding"], dtype=np.float32),
        )
