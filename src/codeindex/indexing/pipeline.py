"""Scan, chunk, embed and store a codebase."""

import logging
from pathlib import Path

from codeindex.config import DEFAULT_COLLECTION
from codeindex.embedders import embed_texts
from codeindex.errors import ReadError
from codeindex.models import Chunk, IndexReport
from codeindex.protocols import ChunkingStrategy, EmbeddingProvider, SourceScanner, VectorCollection
from codeindex.scanners import relative_document_name
from codeindex.utils import read_source_file

logger = logging.getLogger(__name__)


class IndexingPipeline:
    """Populates a collection from a source tree.

    A file that cannot be read is logged and skipped. Embedding and store
    failures abort the run since nothing useful can be indexed without them.
    """

    def __init__(
        self,
        collection: VectorCollection,
        embedder: EmbeddingProvider,
        scanner: SourceScanner,
        chunker: ChunkingStrategy,
        collection_name: str = DEFAULT_COLLECTION,
        batch_size: int = 64,
    ):
        self.collection = collection
        self.embedder = embedder
        self.scanner = scanner
        self.chunker = chunker
        self.collection_name = collection_name
        self.batch_size = max(1, batch_size)

    def index_codebase(self, root: Path | str, reset: bool = False) -> IndexReport:
        """Index every matching file under ``root``.

        Args:
            root: Directory to index
            reset: Drop the collection first so chunks of deleted files vanish

        Returns:
            IndexReport with counts, written keys and per-file failures
        """
        root_path = Path(root).resolve()
        logger.info("Starting codebase indexing from: %s", root_path)

        paths = self.scanner.scan(root_path)
        logger.info("Found %d code files to process", len(paths))

        # Collection is only touched once the root has been scanned
        if reset and hasattr(self.collection, "drop_collection"):
            self.collection.drop_collection(self.collection_name)
        self.collection.ensure_collection(self.collection_name)

        report = IndexReport(root=str(root_path), files_scanned=len(paths))

        for path in paths:
            document_name = str(path)
            try:
                document_name = relative_document_name(root_path, path)
                chunks = self.chunker.chunk(read_source_file(path), document_name)
            except ReadError as exc:
                logger.warning("Skipping %s: %s", document_name, exc.reason)
                report.failures.append((document_name, exc.reason))
                continue

            self._store(chunks)
            report.files_indexed += 1
            report.chunks_indexed += len(chunks)
            report.chunk_keys.extend(chunk.key for chunk in chunks)
            logger.debug("  %s (%d chunks)", document_name, len(chunks))

        logger.info(
            "Indexed %d files, %d chunks into '%s' (%d skipped)",
            report.files_indexed,
            report.chunks_indexed,
            self.collection_name,
            report.files_failed,
        )
        return report

    def _store(self, chunks: list[Chunk]) -> None:
        for start in range(0, len(chunks), self.batch_size):
            batch = chunks[start : start + self.batch_size]
            vectors = embed_texts(self.embedder, [chunk.text for chunk in batch])
            self.collection.upsert(
                self.collection_name,
                [chunk.with_embedding(vector) for chunk, vector in zip(batch, vectors)],
            )
