"""Storage port interface for filesystem operations."""

from pathlib import Path
from typing import Protocol


class StoragePort(Protocol):
    """Port interface for storage operations.

    Abstracts filesystem I/O so the packer runs against local disk, a
    sandboxed filesystem, or an in-memory tree in tests.

    Side effects: Reads/writes files (offline).
    """

    def read_file(self, path: Path) -> bytes:
        """Read a file as bytes.

        Args:
            path: File path

        Returns:
            File contents
        """
        ...

    def write_file(self, path: Path, data: bytes) -> None:
        """Write bytes to a file, replacing any existing content.

        Args:
            path: File path
            data: Content to write
        """
        ...

    def read_text(self, path: Path) -> str:
        """Read a UTF-8 text file."""
        ...

    def write_text(self, path: Path, content: str) -> None:
        """Write a UTF-8 text file."""
        ...

    def read_dir(self, path: Path) -> list[str]:
        """List the names of the immediate children of a directory.

        Args:
            path: Directory path

        Returns:
            Child names (not paths), sorted
        """
        ...

    def mkdir(self, path: Path, *, recursive: bool = False) -> None:
        """Create a directory; with ``recursive`` also create missing parents."""
        ...

    def exists(self, path: Path) -> bool:
        ...

    def is_dir(self, path: Path) -> bool:
        ...

    def rmdir(self, path: Path, *, recursive: bool = False) -> None:
        """Remove a directory; with ``recursive`` also remove its contents."""
        ...

    def file_size(self, path: Path) -> int:
        """Return the size of a file in bytes."""
        ...
