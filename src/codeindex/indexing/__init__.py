"""Indexing pipeline for codeindex."""

from codeindex.indexing.pipeline import IndexingPipeline

__all__ = ["IndexingPipeline"]
