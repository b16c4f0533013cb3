"""Utility functions for codeindex."""

from codeindex.utils.binary import is_binary_content
from codeindex.utils.files import read_source_file

__all__ = ["is_binary_content", "read_source_file"]
