"""Reading source files for indexing."""

from pathlib import Path

from codeindex.errors import ReadError
from codeindex.utils.binary import is_binary_content


def read_source_file(path: Path | str) -> str:
    """Read a source file as text.

    A UTF-8 byte order mark is dropped and undecodable bytes are replaced
    rather than failing the file.

    Raises:
        ReadError: the file cannot be read or looks binary
    """
    try:
        raw_content = Path(path).read_bytes()
    except OSError as exc:
        raise ReadError(path, exc.strerror or str(exc)) from exc

    if is_binary_content(raw_content):
        raise ReadError(path, "binary content")

    return raw_content.decode("utf-8-sig", errors="replace")
