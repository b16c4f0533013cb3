"""Outcome types returned by indexing runs and query operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class ResultStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class QueryResult:
    """Tagged outcome of a query operation.

    ``text`` is always ready for display. On failure ``error_kind`` holds the
    exception class name and ``error_message`` its message, so callers can
    branch on the failure without inspecting the exception itself.
    """

    operation: str
    status: ResultStatus
    text: str
    error_kind: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, operation: str, text: str) -> "QueryResult":
        return cls(operation=operation, status=ResultStatus.OK, text=text)

    @classmethod
    def empty(cls, operation: str, text: str) -> "QueryResult":
        return cls(operation=operation, status=ResultStatus.EMPTY, text=text)

    @classmethod
    def failure(cls, operation: str, description: str, exc: BaseException) -> "QueryResult":
        return cls(
            operation=operation,
            status=ResultStatus.ERROR,
            text=f"Error {description}: {exc}",
            error_kind=type(exc).__name__,
            error_message=str(exc),
        )

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK

    def __str__(self) -> str:
        return self.text


@dataclass
class IndexReport:
    """Statistics collected during one indexing run."""

    root: str
    files_scanned: int = 0
    files_indexed: int = 0
    chunks_indexed: int = 0
    chunk_keys: list[str] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)  # (document, reason)

    @property
    def files_failed(self) -> int:
        return len(self.failures)
