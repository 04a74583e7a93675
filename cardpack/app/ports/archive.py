"""Archive codec port for building and reading card archives."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class ArchiveFile:
    """A file to place in an archive, addressed by forward-slash relative path."""

    path: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """Listing record for one archive member."""

    path: str
    is_dir: bool
    size: int
    compressed_size: int
    stored: bool


class ArchivePort(Protocol):
    """Port interface for the archive codec.

    Works on in-memory byte buffers; reading and writing archive files is
    left to the storage port.
    """

    def create(self, files: Iterable[ArchiveFile], *, store: bool = False) -> bytes:
        """Serialize ``files`` in the given order.

        Args:
            files: Files to add, in final entry order
            store: Write entries without compression

        Returns:
            Archive bytes
        """
        ...

    def extract(self, data: bytes, *, files: Iterable[str] | None = None) -> dict[str, bytes]:
        """Return ``{entry_path: content}`` for file entries (optionally filtered)."""
        ...

    def list_entries(self, data: bytes) -> list[ArchiveEntry]:
        ...

    def validate(self, data: bytes) -> bool:
        """Return True when ``data`` is a readable archive."""
        ...

    def extract_text(self, data: bytes, path: str) -> str:
        """Decode a single entry as UTF-8 without extracting the rest."""
        ...
