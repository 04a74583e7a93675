"""In-memory storage port implementation for tests and sandboxed hosts."""

from __future__ import annotations

import posixpath
from pathlib import Path

from cardpack.app.ports import StoragePort


def _key(path: Path | str) -> str:
    normalized = posixpath.normpath(str(path).replace("\\", "/"))
    if not normalized.startswith("/"):
        normalized = "/" + normalized
    return normalized


class InMemoryStorageAdapter(StoragePort):
    """Dictionary-backed filesystem rooted at ``/``.

    Paths are keyed by their normalized POSIX form. Parent directories are
    created implicitly on write, matching ``FileSystemStorageAdapter``.
    """

    def __init__(self, files: dict[str, bytes | str] | None = None) -> None:
        self._files: dict[str, bytes] = {}
        self._dirs: set[str] = {"/"}
        for path, content in (files or {}).items():
            if isinstance(content, str):
                content = content.encode("utf-8")
            self.write_file(Path(path), content)

    def _ensure_parents(self, key: str) -> None:
        parent = posixpath.dirname(key)
        while parent not in self._dirs:
            if parent in self._files:
                raise NotADirectoryError(parent)
            self._dirs.add(parent)
            parent = posixpath.dirname(parent)

    def read_file(self, path: Path) -> bytes:
        key = _key(path)
        if key in self._dirs:
            raise IsADirectoryError(key)
        try:
            return self._files[key]
        except KeyError:
            raise FileNotFoundError(key) from None

    def write_file(self, path: Path, data: bytes) -> None:
        key = _key(path)
        if key in self._dirs:
            raise IsADirectoryError(key)
        self._ensure_parents(key)
        self._files[key] = bytes(data)

    def read_text(self, path: Path) -> str:
        return self.read_file(path).decode("utf-8")

    def write_text(self, path: Path, content: str) -> None:
        self.write_file(path, content.encode("utf-8"))

    def read_dir(self, path: Path) -> list[str]:
        key = _key(path)
        if key not in self._dirs:
            if key in self._files:
                raise NotADirectoryError(key)
            raise FileNotFoundError(key)
        names = {
            posixpath.basename(entry)
            for entry in (*self._files, *self._dirs)
            if entry != key and posixpath.dirname(entry) == key
        }
        return sorted(names)

    def mkdir(self, path: Path, *, recursive: bool = False) -> None:
        key = _key(path)
        if key in self._files:
            raise FileExistsError(key)
        if key in self._dirs:
            if recursive:
                return
            raise FileExistsError(key)
        parent = posixpath.dirname(key)
        if parent not in self._dirs and not recursive:
            raise FileNotFoundError(parent)
        self._ensure_parents(key)
        self._dirs.add(key)

    def exists(self, path: Path) -> bool:
        key = _key(path)
        return key in self._files or key in self._dirs

    def is_dir(self, path: Path) -> bool:
        return _key(path) in self._dirs

    def rmdir(self, path: Path, *, recursive: bool = False) -> None:
        key = _key(path)
        if key not in self._dirs:
            raise FileNotFoundError(key)
        prefix = key.rstrip("/") + "/"
        nested_files = [entry for entry in self._files if entry.startswith(prefix)]
        nested_dirs = [entry for entry in self._dirs if entry.startswith(prefix)]
        if (nested_files or nested_dirs) and not recursive:
            raise OSError(f"Directory not empty: {key}")
        for entry in nested_files:
            del self._files[entry]
        self._dirs.difference_update(nested_dirs)
        if key != "/":
            self._dirs.discard(key)

    def file_size(self, path: Path) -> int:
        return len(self.read_file(path))
