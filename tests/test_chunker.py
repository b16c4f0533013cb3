"""
Tests for the line-based chunker.

Covers: single-chunk documents, greedy line packing, keys, size validation
"""

import pytest

from codeindex.chunkers import LineChunker
from codeindex.errors import InvalidArgumentError


class TestSingleChunkDocuments:
    """Documents that fit within max_chunk_size."""

    @pytest.mark.parametrize("content", ["", "x", "line one\nline two\n", "a" * 100])
    def test_small_content_is_one_unchanged_chunk(self, content):
        """Test text and key are passed through untouched."""
        chunks = LineChunker(100).chunk(content, "src/a.py")

        assert len(chunks) == 1
        assert chunks[0].text == content
        assert chunks[0].key == "src/a.py"
        assert chunks[0].document_name == "src/a.py"
        assert chunks[0].sequence_number == 1
        assert chunks[0].embedding is None


class TestMultiChunkDocuments:
    """Documents larger than max_chunk_size."""

    def test_hello_world_foo(self):
        """Test the three lines survive a split into several chunks."""
        content = "hello\nworld\nfoo\n"
        chunks = LineChunker(10).chunk(content, "a.txt")

        assert len(chunks) > 1
        joined = "".join(c.text for c in chunks)
        assert joined.split("\n")[:3] == ["hello", "world", "foo"]
        assert [c.text for c in chunks] == ["hello\n", "world\nfoo\n\n"]

    def test_keys_and_sequence_numbers(self):
        """Test keys follow <document>_<n> with contiguous numbering."""
        content = "\n".join(f"line {i:03d}" for i in range(50))
        chunks = LineChunker(40).chunk(content, "pkg/mod.py")

        assert [c.sequence_number for c in chunks] == list(range(1, len(chunks) + 1))
        assert [c.key for c in chunks] == [f"pkg/mod.py_{c.sequence_number}" for c in chunks]
        assert {c.document_name for c in chunks} == {"pkg/mod.py"}

    def test_reconstruction_adds_one_terminator(self):
        """Test joined chunks equal the source plus the re-added final newline."""
        content = "\n".join(f"value = {i}" for i in range(30)) + "\n"
        chunks = LineChunker(25).chunk(content, "v.py")

        assert "".join(c.text for c in chunks) == content + "\n"

    def test_content_without_trailing_newline(self):
        """Test the last line gains a terminator it did not have."""
        content = "alpha\nbeta\ngamma"
        chunks = LineChunker(8).chunk(content, "g.txt")

        assert "".join(c.text for c in chunks) == content + "\n"

    def test_long_line_gets_own_chunk(self):
        """Test a line over the limit is never split."""
        long_line = "x" * 50
        content = f"short\n{long_line}\nend"
        chunks = LineChunker(10).chunk(content, "long.txt")

        assert [c.text for c in chunks] == ["short\n", f"{long_line}\n", "end\n"]

    def test_chunks_respect_limit_when_lines_are_short(self):
        """Test accumulated text stays within limit plus one terminator."""
        content = "\n".join("abcd" for _ in range(100))
        for chunk in LineChunker(30).chunk(content, "a.txt"):
            assert len(chunk.text) <= 30 + 1

    def test_chunking_is_deterministic(self):
        content = "\n".join(str(i) for i in range(200))
        chunker = LineChunker(50)
        assert chunker.chunk(content, "n.txt") == chunker.chunk(content, "n.txt")


class TestValidation:
    """Argument validation."""

    @pytest.mark.parametrize("size", [0, -1])
    def test_non_positive_size_rejected(self, size):
        with pytest.raises(InvalidArgumentError):
            LineChunker(size)

    def test_blank_document_name_rejected(self):
        with pytest.raises(InvalidArgumentError):
            LineChunker(10).chunk("text", "  ")
