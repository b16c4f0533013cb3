"""Protocol for text chunking strategies."""

from typing import Protocol, runtime_checkable

from codeindex.models import Chunk


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Protocol for text chunking strategies.

    Implementations must return chunks whose sequence numbers start at 1 and
    follow source order, with keys derived only from the document name and
    the sequence number.
    """

    def chunk(self, text: str, document_name: str) -> list[Chunk]:
        """Split a document into keyed chunks (embeddings left empty)."""
        ...
