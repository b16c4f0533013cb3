"""Data models for codeindex."""

from codeindex.models.chunk import Chunk, SearchResult
from codeindex.models.results import IndexReport, QueryResult, ResultStatus

__all__ = ["Chunk", "SearchResult", "IndexReport", "QueryResult", "ResultStatus"]
