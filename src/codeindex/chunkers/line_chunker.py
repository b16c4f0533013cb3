"""Line-based chunking strategy."""

from codeindex.config import DEFAULT_MAX_CHUNK_SIZE
from codeindex.errors import InvalidArgumentError
from codeindex.models import Chunk


class LineChunker:
    """Default chunking: whole file if small, else pack lines up to a size.

    - Documents no longer than ``max_chunk_size`` become one chunk keyed by
      the document name, text untouched.
    - Larger documents are split on ``\\n`` and lines are packed greedily;
      keys become ``<document>_<n>``.
    - A line is never split, so one longer than the limit gets its own chunk.

    Every packed line is re-terminated with ``\\n``, including the empty
    element after a trailing newline. Joining the chunks therefore returns
    the source lines with one extra terminator at the end.
    """

    def __init__(self, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE):
        if max_chunk_size <= 0:
            raise InvalidArgumentError(f"max_chunk_size must be positive, got {max_chunk_size}")
        self.max_chunk_size = max_chunk_size

    def chunk(self, text: str, document_name: str) -> list[Chunk]:
        """Split text into keyed chunks.

        Args:
            text: The file content to chunk
            document_name: Path of the file relative to the indexed root

        Returns:
            Chunks ordered by sequence number, starting at 1
        """
        if not document_name or not document_name.strip():
            raise InvalidArgumentError("document_name must not be blank")

        if len(text) <= self.max_chunk_size:
            return [
                Chunk(key=document_name, document_name=document_name, sequence_number=1, text=text)
            ]

        chunks: list[Chunk] = []
        buffer: list[str] = []
        buffered = 0

        for line in text.split("\n"):
            if buffered + len(line) > self.max_chunk_size and buffered > 0:
                chunks.append(self._make_chunk(document_name, len(chunks) + 1, buffer))
                buffer = []
                buffered = 0

            buffer.append(line + "\n")
            buffered += len(line) + 1

        # Don't forget trailing buffer
        if buffer:
            chunks.append(self._make_chunk(document_name, len(chunks) + 1, buffer))

        return chunks

    @staticmethod
    def _make_chunk(document_name: str, sequence_number: int, lines: list[str]) -> Chunk:
        return Chunk(
            key=f"{document_name}_{sequence_number}",
            document_name=document_name,
            sequence_number=sequence_number,
            text="".join(lines),
        )
