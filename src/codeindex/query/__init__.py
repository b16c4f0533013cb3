"""Query layer for codeindex."""

from codeindex.query.engine import QueryEngine

__all__ = ["QueryEngine"]
