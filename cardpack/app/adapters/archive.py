"""Zip-based archive codec for card archives."""

from __future__ import annotations

import io
import logging
from collections.abc import Iterable
from zipfile import ZIP_DEFLATED, ZIP_STORED, BadZipFile, ZipFile, ZipInfo, is_zipfile

from cardpack.app.ports import ArchiveEntry, ArchiveFile, ArchivePort
from cardpack.errors import InvalidFormatError, NotFoundError

logger = logging.getLogger(__name__)

# Fixed entry timestamp so identical inputs produce identical archives.
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
_FILE_MODE = 0o644 << 16


class ZipArchiveAdapter(ArchivePort):
    """Create and read zip archives held in memory.

    Entries are written in the order given; with ``store=True`` every entry
    uses ``ZIP_STORED`` so that individual members can be read without
    inflating the rest of the archive.
    """

    def __init__(self, compresslevel: int = 6) -> None:
        self._compresslevel = compresslevel

    def create(self, files: Iterable[ArchiveFile], *, store: bool = False) -> bytes:
        buffer = io.BytesIO()
        compression = ZIP_STORED if store else ZIP_DEFLATED
        with ZipFile(buffer, "w", compression=compression) as archive:
            for item in files:
                info = ZipInfo(item.path, date_time=ZIP_EPOCH)
                info.compress_type = compression
                info.external_attr = _FILE_MODE
                archive.writestr(
                    info,
                    item.content,
                    compresslevel=None if store else self._compresslevel,
                )
        return buffer.getvalue()

    def _open(self, data: bytes) -> ZipFile:
        try:
            return ZipFile(io.BytesIO(data), "r")
        except (BadZipFile, ValueError) as exc:
            raise InvalidFormatError("Invalid archive (not a valid zip)") from exc

    def extract(self, data: bytes, *, files: Iterable[str] | None = None) -> dict[str, bytes]:
        wanted = set(files) if files is not None else None
        result: dict[str, bytes] = {}
        with self._open(data) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    continue
                if wanted is not None and info.filename not in wanted:
                    continue
                try:
                    result[info.filename] = archive.read(info)
                except (BadZipFile, ValueError, NotImplementedError) as exc:
                    raise InvalidFormatError(
                        "Corrupted archive entry", path=info.filename
                    ) from exc
        return result

    def list_entries(self, data: bytes) -> list[ArchiveEntry]:
        with self._open(data) as archive:
            return [
                ArchiveEntry(
                    path=info.filename,
                    is_dir=info.is_dir(),
                    size=info.file_size,
                    compressed_size=info.compress_size,
                    stored=info.compress_type == ZIP_STORED,
                )
                for info in archive.infolist()
            ]

    def validate(self, data: bytes) -> bool:
        if not data or not is_zipfile(io.BytesIO(data)):
            return False
        try:
            with ZipFile(io.BytesIO(data), "r") as archive:
                archive.infolist()
        except (BadZipFile, ValueError) as exc:
            logger.debug("Zip validation failed: %s", exc)
            return False
        return True

    def extract_text(self, data: bytes, path: str) -> str:
        with self._open(data) as archive:
            try:
                info = archive.getinfo(path)
            except KeyError:
                raise NotFoundError("Archive entry not found", path=path) from None
            try:
                raw = archive.read(info)
            except (BadZipFile, ValueError, NotImplementedError) as exc:
                raise InvalidFormatError("Corrupted archive entry", path=path) from exc
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidFormatError("Archive entry is not UTF-8 text", path=path) from exc
