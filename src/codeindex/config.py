"""Scanning defaults and runtime configuration."""

import os
from dataclasses import dataclass, field

from codeindex.errors import InvalidArgumentError

DEFAULT_COLLECTION = "codebase"
DEFAULT_MAX_CHUNK_SIZE = 1000
DEFAULT_EMBEDDING_MODEL = "all-MiniLM-L6-v2"
DEFAULT_STORE_PATH = "codebase.codeindex"

# Extensions worth indexing (lower-case, leading dot)
DEFAULT_EXTENSIONS = frozenset({
    # .NET
    ".cs", ".csproj", ".sln", ".config", ".xaml", ".cshtml", ".razor",
    # Web
    ".html", ".css", ".js", ".ts", ".jsx", ".tsx",
    # Data / docs
    ".json", ".xml", ".md", ".yml", ".yaml", ".txt", ".toml",
    # Scripting
    ".py", ".rb", ".php", ".sh", ".bat", ".ps1",
    # Other languages
    ".java", ".c", ".cpp", ".h", ".go", ".sql", ".rs",
})

# Directory names that are never descended into
DEFAULT_EXCLUDED_DIRS = frozenset({
    "bin", "obj", "out", "target", "dist", "build", "artifacts",
    "Debug", "Release",
    ".git", ".svn", ".hg",
    ".vs", ".vscode", ".idea",
    "node_modules", "packages", "vendor", ".nuget", "wwwroot/lib",
    "__pycache__", ".venv", "venv", ".tox", ".pytest_cache", ".mypy_cache",
})


def _split_list(value: str) -> frozenset[str]:
    return frozenset(item.strip() for item in value.split(",") if item.strip())


def _normalize_extension(ext: str) -> str:
    ext = ext.lower()
    return ext if ext.startswith(".") else f".{ext}"


@dataclass(frozen=True)
class IndexConfig:
    """Settings shared by the CLI, the pipeline and the MCP server."""

    collection_name: str = DEFAULT_COLLECTION
    max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE
    embedding_model: str = DEFAULT_EMBEDDING_MODEL
    extensions: frozenset[str] = field(default=DEFAULT_EXTENSIONS)
    excluded_dirs: frozenset[str] = field(default=DEFAULT_EXCLUDED_DIRS)

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "IndexConfig":
        """Build a config from CODEINDEX_* environment variables.

        Unset variables keep their defaults. List values are comma separated.
        """
        env = os.environ if environ is None else environ
        kwargs: dict = {}

        if env.get("CODEINDEX_COLLECTION"):
            kwargs["collection_name"] = env["CODEINDEX_COLLECTION"]
        if env.get("CODEINDEX_MAX_CHUNK_SIZE"):
            try:
                kwargs["max_chunk_size"] = int(env["CODEINDEX_MAX_CHUNK_SIZE"])
            except ValueError as exc:
                raise InvalidArgumentError(
                    f"CODEINDEX_MAX_CHUNK_SIZE must be an integer, got {env['CODEINDEX_MAX_CHUNK_SIZE']!r}"
                ) from exc
        if env.get("CODEINDEX_EMBEDDING_MODEL"):
            kwargs["embedding_model"] = env["CODEINDEX_EMBEDDING_MODEL"]
        if env.get("CODEINDEX_EXTENSIONS"):
            kwargs["extensions"] = frozenset(
                _normalize_extension(ext) for ext in _split_list(env["CODEINDEX_EXTENSIONS"])
            )
        if env.get("CODEINDEX_EXCLUDED_DIRS"):
            kwargs["excluded_dirs"] = _split_list(env["CODEINDEX_EXCLUDED_DIRS"])

        return cls(**kwargs)
