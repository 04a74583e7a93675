"""Filesystem-backed storage port implementation."""

from __future__ import annotations

import shutil
from pathlib import Path

from cardpack.app.ports import StoragePort


class FileSystemStorageAdapter(StoragePort):
    """Adapter that performs direct filesystem operations."""

    def read_file(self, path: Path) -> bytes:
        return Path(path).read_bytes()

    def write_file(self, path: Path, data: bytes) -> None:
        destination = Path(path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_bytes(data)

    def read_text(self, path: Path) -> str:
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: Path, content: str) -> None:
        destination = Path(path)
        destination.parent.mkdir(parents=True, exist_ok=True)
        destination.write_text(content, encoding="utf-8")

    def read_dir(self, path: Path) -> list[str]:
        return sorted(child.name for child in Path(path).iterdir())

    def mkdir(self, path: Path, *, recursive: bool = False) -> None:
        Path(path).mkdir(parents=recursive, exist_ok=recursive)

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def rmdir(self, path: Path, *, recursive: bool = False) -> None:
        if recursive:
            shutil.rmtree(path)
        else:
            Path(path).rmdir()

    def file_size(self, path: Path) -> int:
        return Path(path).stat().st_size
