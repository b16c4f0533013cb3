"""Markdown rendering of query results.

Everything here is a pure function of its arguments: no store or embedder
access, so the output can be checked directly in tests.
"""

import posixpath
from typing import Iterable, Mapping, Optional, Sequence

from codeindex.models import Chunk, SearchResult

ROOT_DIRECTORY_LABEL = "Root directory"

# Fence language per file extension; anything missing renders as plain text
LANGUAGE_BY_EXTENSION = {
    # .NET
    ".cs": "csharp",
    ".vb": "vb",
    ".fs": "fsharp",
    ".csproj": "xml",
    ".vbproj": "xml",
    ".fsproj": "xml",
    ".sln": "text",
    ".config": "xml",
    ".props": "xml",
    ".targets": "xml",
    ".xaml": "xml",
    ".cshtml": "cshtml",
    ".razor": "razor",
    ".aspx": "aspx",
    # Web
    ".html": "html",
    ".htm": "html",
    ".css": "css",
    ".js": "javascript",
    ".ts": "typescript",
    ".jsx": "jsx",
    ".tsx": "tsx",
    # Markup / data
    ".json": "json",
    ".xml": "xml",
    ".md": "markdown",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    # Scripting
    ".py": "python",
    ".rb": "ruby",
    ".php": "php",
    ".sh": "bash",
    ".ps1": "powershell",
    ".bat": "batch",
    ".cmd": "batch",
    # Other languages
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".h": "cpp",
    ".go": "go",
    ".rs": "rust",
    ".sql": "sql",
    ".r": "r",
    ".txt": "text",
}


def language_for(document_name: str) -> str:
    """Fence language for a document, ``text`` when the extension is unknown."""
    extension = posixpath.splitext(document_name)[1].lower()
    return LANGUAGE_BY_EXTENSION.get(extension, "text")


def _fence(document_name: str, body: str) -> list[str]:
    # Closing fence must start on its own line even if the body lacks a final newline
    if body and not body.endswith("\n"):
        body += "\n"
    return [f"```{language_for(document_name)}\n", body, "```\n"]


def format_search_results(results: Sequence[SearchResult]) -> str:
    """One heading and code block per hit, in the order given."""
    out = ["### Relevant code snippets found:\n", "\n"]
    for result in results:
        chunk = result.chunk
        out.append(
            f"**File: {chunk.document_name}** "
            f"(part {chunk.sequence_number}, score {result.score:.3f})\n"
        )
        out.extend(_fence(chunk.document_name, chunk.text))
        out.append("\n")
    return "".join(out)


def group_by_directory(document_names: Iterable[str]) -> list[tuple[str, list[str]]]:
    """Group names by parent directory.

    Returns (directory, file names) pairs sorted by directory, file names
    sorted within each group. Root-level files have directory ``""``.
    """
    groups: dict[str, set[str]] = {}
    for name in document_names:
        directory, filename = posixpath.split(name)
        groups.setdefault(directory, set()).add(filename)
    return [(directory, sorted(groups[directory])) for directory in sorted(groups)]


def no_files_message(directory: Optional[str] = None) -> str:
    if directory:
        return f"No files found in directory: {directory}"
    return "No files found in the codebase."


def format_file_listing(document_names: Iterable[str], directory: Optional[str] = None) -> str:
    """Count header followed by one section per directory."""
    groups = group_by_directory(document_names)
    total = sum(len(files) for _, files in groups)

    if directory:
        out = [f"### Found {total} files in directory '{directory}':\n", "\n"]
    else:
        out = [f"### Found {total} files in the codebase:\n", "\n"]

    for group_dir, files in groups:
        out.append(f"**{group_dir or ROOT_DIRECTORY_LABEL}:**\n")
        out.extend(f"- {filename}\n" for filename in files)
        out.append("\n")
    return "".join(out)


def no_matching_files_message(file_name: str) -> str:
    return f"No files found matching '{file_name}'"


def reconstruct_text(chunks: Iterable[Chunk]) -> str:
    """Concatenate chunk text in sequence order."""
    return "".join(chunk.text for chunk in sorted(chunks, key=lambda c: c.sequence_number))


def format_file_bodies(files: Mapping[str, Sequence[Chunk]], file_name: str) -> str:
    """One code block per document holding its reassembled text."""
    out = [f"### Found {len(files)} files matching '{file_name}':\n", "\n"]
    for document_name in sorted(files):
        out.append(f"**{document_name}**\n")
        out.extend(_fence(document_name, reconstruct_text(files[document_name])))
        out.append("\n")
    return "".join(out)


def format_structure_analysis(file_name: str, related_files: Sequence[str], file_body: str) -> str:
    """Related file list followed by the already rendered file body."""
    out = [f"### Code Structure Analysis for '{file_name}':\n", "\n"]
    if related_files:
        out.append("**Related Files:**\n")
        out.extend(f"- {name}\n" for name in related_files)
        out.append("\n")
    out.append(file_body)
    return "".join(out)
