"""Chunking strategies for codeindex."""

from codeindex.chunkers.line_chunker import LineChunker

__all__ = ["LineChunker"]
