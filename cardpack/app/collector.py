"""Collect a card project's files in archive order."""

from __future__ import annotations

import logging
from pathlib import Path

from cardpack.app.ports import ArchiveFile, StoragePort
from cardpack.card.layout import CONFIG_DIR
from cardpack.errors import ReadError, ResourceTooLargeError
from cardpack.utils.deterministic import deterministic_order_files

logger = logging.getLogger(__name__)


class FileCollector:
    """Depth-first walk of a card project through the storage port.

    Hidden entries (leading ``.``) are skipped unless ``include_hidden``;
    the ``.card`` config directory is always walked.
    """

    def __init__(self, storage: StoragePort, *, max_file_size: int | None = None) -> None:
        self.storage = storage
        self.max_file_size = max_file_size

    def collect(self, root: Path, *, include_hidden: bool = False) -> list[ArchiveFile]:
        """Return every file under ``root`` as ``ArchiveFile`` in archive order."""
        files: list[ArchiveFile] = []
        self._walk(Path(root), "", files, include_hidden)
        return deterministic_order_files(files)

    def _walk(
        self,
        root: Path,
        relative: str,
        files: list[ArchiveFile],
        include_hidden: bool,
    ) -> None:
        current = root / relative if relative else root
        try:
            names = self.storage.read_dir(current)
        except OSError as exc:
            raise ReadError("Failed to list directory", path=current) from exc

        for name in names:
            if not include_hidden and name.startswith(".") and name != CONFIG_DIR:
                continue

            entry_relative = f"{relative}/{name}" if relative else name
            entry_path = root / entry_relative

            if self.storage.is_dir(entry_path):
                self._walk(root, entry_relative, files, include_hidden)
                continue

            content = self._read(entry_path, entry_relative)
            files.append(ArchiveFile(path=entry_relative, content=content))
            logger.debug("Collected %s", entry_relative)

    def _read(self, path: Path, relative: str) -> bytes:
        try:
            if self.max_file_size is not None:
                size = self.storage.file_size(path)
                if size > self.max_file_size:
                    raise ResourceTooLargeError(
                        "File exceeds maximum resource size",
                        path=relative,
                        details={"size": size, "max_size": self.max_file_size},
                    )
            return self.storage.read_file(path)
        except OSError as exc:
            raise ReadError("Failed to read file", path=path) from exc
