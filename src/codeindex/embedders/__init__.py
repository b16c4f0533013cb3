"""Embedding providers for vector generation."""

from codeindex.embedders.base import embed_query, embed_texts
from codeindex.embedders.sentence_transformer import SentenceTransformerEmbedder

__all__ = ["SentenceTransformerEmbedder", "embed_texts", "embed_query"]
