"""Card packer service: pack, unpack, validate, and inspect card archives.

A card archive is a zip whose entries are all stored without compression,
with ``.card/`` entries first and ``.card/metadata.yaml`` as the very first
entry so that metadata can be read without touching the rest of the file.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from cardpack.app.collector import FileCollector
from cardpack.app.ports import ArchiveFile, ArchivePort, SerializerPort, StoragePort
from cardpack.app.validation_service import CardValidator
from cardpack.card.compat import check_compatibility
from cardpack.card.layout import METADATA_PATH, STRUCTURE_PATH, content_path
from cardpack.card.models import (
    BaseCardContent,
    CardMetadata,
    CardStructure,
    CompatibilityResult,
    OperationError,
    PackOptions,
    PackProgress,
    PackResult,
    UnpackOptions,
    UnpackProgress,
    UnpackResult,
    ValidationOptions,
    ValidationReport,
)
from cardpack.config import Settings
from cardpack.errors import (
    AlreadyExistsError,
    CardPackError,
    InvalidFormatError,
    NotFoundError,
    OperationFailedError,
    PathSecurityViolation,
    ReadError,
    WriteError,
)
from cardpack.utils.hashing import compute_file_set_checksum
from cardpack.utils.paths import resolve_extraction_path

logger = logging.getLogger(__name__)

P = TypeVar("P")
M = TypeVar("M", bound=BaseModel)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000


def _notify(callback: Callable[[P], None] | None, progress: P) -> None:
    if callback is not None:
        callback(progress)


def _as_operation_error(exc: Exception, message: str, path: Path) -> OperationError:
    if isinstance(exc, CardPackError):
        return OperationError(**exc.to_dict())
    wrapped = OperationFailedError(
        f"{message}: {exc}",
        path=path,
        details={"cause": f"{type(exc).__name__}: {exc}"},
    )
    return OperationError(**wrapped.to_dict())


class CardPackerService:
    """Orchestrates conversion between card projects and card archives.

    All I/O goes through the storage and archive ports; the service keeps no
    per-call state, so calls on distinct paths may run concurrently. Calls
    that target the same output path are not coordinated.
    """

    def __init__(
        self,
        storage_port: StoragePort,
        archive_port: ArchivePort,
        serializer_port: SerializerPort,
        *,
        settings: Settings | None = None,
    ) -> None:
        """Initialize packer service.

        Args:
            storage_port: Filesystem operations port
            archive_port: Archive codec port
            serializer_port: Structured-text (YAML) codec port
            settings: Defaults for options not passed explicitly
        """
        self.storage = storage_port
        self.archive = archive_port
        self.serializer = serializer_port
        self.settings = settings or Settings()
        self.validator = CardValidator(storage_port, archive_port, serializer_port)
        self.collector = FileCollector(
            storage_port, max_file_size=self.settings.max_resource_size
        )

    # ------------------------------------------------------------------
    # Pack
    # ------------------------------------------------------------------

    def default_pack_options(self) -> PackOptions:
        return PackOptions(
            validate=self.settings.validate_on_pack,
            include_hidden=self.settings.include_hidden,
        )

    def pack(
        self,
        source_dir: Path,
        target_path: Path,
        options: PackOptions | None = None,
    ) -> PackResult:
        """Pack a card project directory into a card archive.

        Args:
            source_dir: Card project directory (left untouched)
            target_path: Archive file to write; parent directories are created
            options: Validation, checksum, and hidden-file options

        Returns:
            PackResult; on failure ``success`` is False and ``error`` carries
            the error code, message, and details.
        """
        started = time.perf_counter()
        source_dir = Path(source_dir)
        target_path = Path(target_path)
        options = options or self.default_pack_options()

        try:
            result = self._pack(source_dir, target_path, options, started)
        except Exception as exc:  # noqa: BLE001 - converted into a failure result
            logger.error("Pack of %s failed: %s", source_dir, exc)
            return PackResult(
                success=False,
                duration=_elapsed_ms(started),
                error=_as_operation_error(exc, "Pack failed", source_dir),
            )

        logger.info(
            "Packed %s -> %s (%d files, %d bytes)",
            source_dir,
            target_path,
            result.file_count,
            result.file_size,
        )
        return result

    def _pack(
        self,
        source_dir: Path,
        target_path: Path,
        options: PackOptions,
        started: float,
    ) -> PackResult:
        progress = options.on_progress
        _notify(progress, PackProgress(step="preparing", percent=0))

        if not self.storage.exists(source_dir):
            raise NotFoundError("Source directory not found", path=source_dir)
        if not self.storage.is_dir(source_dir):
            raise InvalidFormatError("Source path is not a directory", path=source_dir)

        if options.validate_structure:
            _notify(progress, PackProgress(step="validating", percent=10))
            report = self.validator.validate_directory(source_dir)
            if not report.valid:
                blocking = report.errors
                messages = ", ".join(check.message or check.name for check in blocking)
                raise InvalidFormatError(
                    f"Card structure validation failed: {messages}",
                    path=source_dir,
                    details={"checks": [check.model_dump() for check in blocking]},
                )

        _notify(progress, PackProgress(step="collecting", percent=30))
        files = self.collector.collect(source_dir, include_hidden=options.include_hidden)

        warnings: list[str] = []
        files, checksum = self._refresh_metadata(files, options.checksum, warnings)

        _notify(
            progress,
            PackProgress(step="archiving", percent=60, total_files=len(files)),
        )
        data = self.archive.create(files, store=True)

        _notify(progress, PackProgress(step="writing", percent=80))
        try:
            parent = target_path.parent
            if not self.storage.exists(parent):
                self.storage.mkdir(parent, recursive=True)
            self.storage.write_file(target_path, data)
        except OSError as exc:
            raise WriteError("Failed to write card archive", path=target_path) from exc

        _notify(
            progress,
            PackProgress(
                step="completed",
                percent=100,
                processed_files=len(files),
                total_files=len(files),
            ),
        )

        return PackResult(
            success=True,
            output_path=target_path,
            file_size=len(data),
            file_count=len(files),
            duration=_elapsed_ms(started),
            checksum=checksum,
            warnings=warnings,
        )

    def _refresh_metadata(
        self,
        files: list[ArchiveFile],
        with_checksum: bool,
        warnings: list[str],
    ) -> tuple[list[ArchiveFile], str | None]:
        """Stamp ``modified_at`` and ``file_info`` into the metadata document.

        The checksum covers every file except the metadata document itself,
        so it is computed first and then injected.
        """
        checksum = (
            compute_file_set_checksum((item.path, item.content) for item in files)
            if with_checksum
            else None
        )

        metadata_file = next((item for item in files if item.path == METADATA_PATH), None)
        if metadata_file is None:
            warnings.append(f"{METADATA_PATH} not found; file_info was not written")
            return files, checksum

        try:
            metadata = self.serializer.parse(metadata_file.content.decode("utf-8"))
        except (InvalidFormatError, UnicodeDecodeError) as exc:
            logger.warning("Skipping metadata refresh: %s", exc)
            metadata = None
        if not isinstance(metadata, Mapping):
            warnings.append(f"{METADATA_PATH} is not a valid mapping; file_info was not written")
            return files, checksum

        now = datetime.now(UTC).isoformat()
        others = [item for item in files if item.path != METADATA_PATH]

        refreshed: dict[str, Any] = dict(metadata)
        refreshed["modified_at"] = now

        previous = refreshed.get("file_info")
        file_info: dict[str, Any] = dict(previous) if isinstance(previous, Mapping) else {}
        file_info["total_size"] = sum(item.size for item in others)
        file_info["file_count"] = len(files)
        file_info["generated_at"] = now
        if checksum is not None:
            file_info["checksum"] = checksum
        else:
            file_info.pop("checksum", None)
        refreshed["file_info"] = file_info

        content = self.serializer.stringify(refreshed).encode("utf-8")
        return [
            ArchiveFile(path=METADATA_PATH, content=content) if item.path == METADATA_PATH else item
            for item in files
        ], checksum

    # ------------------------------------------------------------------
    # Unpack
    # ------------------------------------------------------------------

    def unpack(
        self,
        archive_path: Path,
        target_dir: Path,
        options: UnpackOptions | None = None,
    ) -> UnpackResult:
        """Extract a card archive into ``target_dir``.

        Entries that would land outside ``target_dir`` are skipped and
        reported in ``warnings``; they never abort the extraction.
        """
        started = time.perf_counter()
        archive_path = Path(archive_path)
        target_dir = Path(target_dir)
        options = options or UnpackOptions(validate=self.settings.validate_on_unpack)

        try:
            result = self._unpack(archive_path, target_dir, options, started)
        except Exception as exc:  # noqa: BLE001 - converted into a failure result
            logger.error("Unpack of %s failed: %s", archive_path, exc)
            return UnpackResult(
                success=False,
                duration=_elapsed_ms(started),
                error=_as_operation_error(exc, "Unpack failed", archive_path),
            )

        logger.info(
            "Unpacked %s -> %s (%d files, %d skipped)",
            archive_path,
            target_dir,
            result.file_count,
            len(result.warnings),
        )
        return result

    def _unpack(
        self,
        archive_path: Path,
        target_dir: Path,
        options: UnpackOptions,
        started: float,
    ) -> UnpackResult:
        progress = options.on_progress
        _notify(progress, UnpackProgress(step="reading", percent=0))

        if not self.storage.exists(archive_path):
            raise NotFoundError("Card archive not found", path=archive_path)

        target_exists = self.storage.exists(target_dir)
        if target_exists and not options.overwrite:
            raise AlreadyExistsError("Target directory already exists", path=target_dir)

        try:
            data = self.storage.read_file(archive_path)
        except OSError as exc:
            raise ReadError("Failed to read card archive", path=archive_path) from exc

        if not self.archive.validate(data):
            raise InvalidFormatError(
                "Invalid card archive format (not a valid zip)", path=archive_path
            )

        _notify(progress, UnpackProgress(step="extracting", percent=20))
        entries = self.archive.extract(data)

        try:
            if target_exists:
                self.storage.rmdir(target_dir, recursive=True)
            self.storage.mkdir(target_dir, recursive=True)
        except OSError as exc:
            raise WriteError("Failed to prepare target directory", path=target_dir) from exc

        warnings: list[str] = []
        written = 0
        total = len(entries)
        for index, (entry_path, content) in enumerate(entries.items(), start=1):
            try:
                destination = resolve_extraction_path(target_dir, entry_path)
            except PathSecurityViolation as exc:
                logger.warning("Skipping unsafe archive entry %r: %s", entry_path, exc.message)
                warnings.append(f"Skipped unsafe entry {entry_path!r}: {exc.message}")
                continue

            try:
                parent = destination.parent
                if not self.storage.exists(parent):
                    self.storage.mkdir(parent, recursive=True)
                self.storage.write_file(destination, content)
            except OSError as exc:
                raise WriteError("Failed to write extracted file", path=destination) from exc
            written += 1

            _notify(
                progress,
                UnpackProgress(
                    step="writing",
                    percent=20 + int(70 * index / total),
                    current_file=entry_path,
                    processed_files=index,
                    total_files=total,
                ),
            )

        validation: ValidationReport | None = None
        if options.validate_structure:
            _notify(progress, UnpackProgress(step="validating", percent=90))
            validation = self.validator.validate_directory(target_dir)

        _notify(
            progress,
            UnpackProgress(
                step="completed", percent=100, processed_files=total, total_files=total
            ),
        )

        return UnpackResult(
            success=True,
            output_dir=target_dir,
            file_count=written,
            duration=_elapsed_ms(started),
            validation=validation,
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Validation and inspection
    # ------------------------------------------------------------------

    def validate(
        self, path: Path, options: ValidationOptions | None = None
    ) -> ValidationReport:
        """Validate a card project directory or a card archive file."""
        return self.validator.validate(Path(path), options)

    def get_metadata(self, archive_path: Path) -> CardMetadata:
        """Read ``.card/metadata.yaml`` from an archive without full extraction.

        Raises:
            NotFoundError: If the archive or its metadata entry is missing
            ReadError: If the archive cannot be read or the metadata is malformed
        """
        return self._read_document(archive_path, METADATA_PATH, CardMetadata)

    def get_structure(self, archive_path: Path) -> CardStructure:
        """Read ``.card/structure.yaml`` from an archive without full extraction."""
        return self._read_document(archive_path, STRUCTURE_PATH, CardStructure)

    def get_content(self, archive_path: Path, base_card_id: str) -> BaseCardContent:
        """Read one base card's ``content/{id}.yaml`` from an archive."""
        return self._read_document(archive_path, content_path(base_card_id), BaseCardContent)

    def _read_document(self, archive_path: Path, entry_path: str, model: type[M]) -> M:
        archive_path = Path(archive_path)
        if not self.storage.exists(archive_path):
            raise NotFoundError("Card archive not found", path=archive_path)

        try:
            data = self.storage.read_file(archive_path)
        except OSError as exc:
            raise ReadError("Failed to read card archive", path=archive_path) from exc

        try:
            text = self.archive.extract_text(data, entry_path)
            return model.model_validate(self.serializer.parse(text))
        except NotFoundError:
            raise
        except (InvalidFormatError, ValidationError) as exc:
            raise ReadError(
                f"Failed to read {entry_path}",
                path=archive_path,
                details={"entry": entry_path},
            ) from exc

    @staticmethod
    def check_compatibility(card_version: str, system_version: str) -> CompatibilityResult:
        return check_compatibility(card_version, system_version)

    def check_card(self, archive_path: Path) -> CompatibilityResult:
        """Compare an archive's ``standards_version`` with the configured one."""
        metadata = self.get_metadata(archive_path)
        return check_compatibility(
            metadata.standards_version or "", self.settings.standards_version
        )
