"""Source tree scanners for codeindex."""

from codeindex.scanners.folder_scanner import FileScanner, relative_document_name

__all__ = ["FileScanner", "relative_document_name"]
