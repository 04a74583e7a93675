"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .archive import ZipArchiveAdapter
from .memory_storage import InMemoryStorageAdapter
from .storage import FileSystemStorageAdapter
from .yaml_codec import YamlSerializer

__all__ = [
    "FileSystemStorageAdapter",
    "InMemoryStorageAdapter",
    "YamlSerializer",
    "ZipArchiveAdapter",
]
