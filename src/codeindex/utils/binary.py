"""Binary content detection."""

# Printable ASCII plus tab, LF, CR
_TEXT_BYTES = frozenset(range(32, 127)) | {9, 10, 13}


def is_binary_content(content: bytes, sample_size: int = 8192) -> bool:
    """Detect if content is binary by checking for null bytes and control chars.

    Bytes >= 0x80 count as text so UTF-8 sources with non-ASCII identifiers
    or comments are not rejected.

    Args:
        content: Raw file content
        sample_size: Number of bytes to sample from the start

    Returns:
        True if content appears to be binary
    """
    if not content:
        return False

    sample = content[:sample_size]

    # Check for null bytes (strong binary indicator)
    if b"\x00" in sample:
        return True

    control = sum(1 for byte in sample if byte < 128 and byte not in _TEXT_BYTES)

    # If more than 30% control characters, treat as binary
    return (control / len(sample)) > 0.30
