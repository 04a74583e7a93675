"""Hashing utilities for deterministic content and file-set checksums."""

import hashlib
from collections.abc import Iterable

from cardpack.card.layout import METADATA_PATH

CHECKSUM_SEPARATOR = "\n"


def compute_sha256(content: bytes) -> str:
    """Compute SHA-256 hash of content.

    Args:
        content: Bytes to hash

    Returns:
        Hexadecimal hash string
    """
    return hashlib.sha256(content).hexdigest()


def compute_file_set_checksum(
    files: Iterable[tuple[str, bytes]],
    *,
    exclude: Iterable[str] = (METADATA_PATH,),
) -> str:
    """Compute the card checksum over an ordered file set.

    Each file contributes ``"{path}:{sha256(content)}"``; the lines are joined
    with ``CHECKSUM_SEPARATOR`` in the given order and hashed again. Paths in
    ``exclude`` (by default the metadata document, which carries the
    checksum itself) do not contribute.

    Args:
        files: ``(relative_path, content)`` pairs in final archive order
        exclude: Relative paths left out of the digest

    Returns:
        Hexadecimal SHA-256 checksum
    """
    excluded = set(exclude)
    parts = [
        f"{path}:{compute_sha256(content)}"
        for path, content in files
        if path not in excluded
    ]
    return compute_sha256(CHECKSUM_SEPARATOR.join(parts).encode("utf-8"))
