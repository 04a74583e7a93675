"""Port interfaces for the cardpack application layer.

These protocol interfaces define contracts for adapters.
Domain logic depends on these ports, never on concrete implementations.
"""

__all__ = [
    "ArchiveEntry",
    "ArchiveFile",
    "ArchivePort",
    "SerializerPort",
    "StoragePort",
]

from cardpack.app.ports.archive import ArchiveEntry, ArchiveFile, ArchivePort
from cardpack.app.ports.serializer import SerializerPort
from cardpack.app.ports.storage import StoragePort
