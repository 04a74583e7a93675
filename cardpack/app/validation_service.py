"""Structural validation of card projects and card archives.

The same leveled checks run against a live directory (through the storage
port) or against archive bytes (through the archive port's listing and
single-entry text extraction, without extracting the whole archive).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from cardpack.app.ports import ArchivePort, SerializerPort, StoragePort
from cardpack.card.layout import (
    CONFIG_DIR,
    CONTENT_DIR,
    METADATA_FILE,
    METADATA_PATH,
    OPTIONAL_FILES,
    REQUIRED_FILES,
    STRUCTURE_PATH,
    config_path,
    content_path,
    is_config_entry,
)
from cardpack.card.models import CheckItem, ValidationOptions, ValidationReport
from cardpack.errors import CardPackError, InvalidFormatError
from cardpack.utils.ids import is_valid_card_id

logger = logging.getLogger(__name__)


class _CardSource(Protocol):
    """Read-only view over either a project directory or an archive."""

    def has_dir(self, relative: str) -> bool: ...

    def has_file(self, relative: str) -> bool: ...

    def read_text(self, relative: str) -> str: ...


class _DirectorySource:
    def __init__(self, storage: StoragePort, root: Path) -> None:
        self._storage = storage
        self._root = Path(root)

    def has_dir(self, relative: str) -> bool:
        return self._storage.is_dir(self._root / relative)

    def has_file(self, relative: str) -> bool:
        path = self._root / relative
        return self._storage.exists(path) and not self._storage.is_dir(path)

    def read_text(self, relative: str) -> str:
        return self._storage.read_text(self._root / relative)


class _ArchiveSource:
    def __init__(self, archive: ArchivePort, data: bytes) -> None:
        self._archive = archive
        self._data = data
        self.entries = archive.list_entries(data)
        self._files = {entry.path for entry in self.entries if not entry.is_dir}
        self._dir_entries = {entry.path.rstrip("/") for entry in self.entries if entry.is_dir}

    def has_dir(self, relative: str) -> bool:
        prefix = f"{relative}/"
        return relative in self._dir_entries or any(path.startswith(prefix) for path in self._files)

    def has_file(self, relative: str) -> bool:
        return relative in self._files

    def read_text(self, relative: str) -> str:
        return self._archive.extract_text(self._data, relative)


class CardValidator:
    """Run directory, file, and reference checks and aggregate a report."""

    def __init__(
        self,
        storage: StoragePort,
        archive: ArchivePort,
        serializer: SerializerPort,
    ) -> None:
        self.storage = storage
        self.archive = archive
        self.serializer = serializer

    def validate(
        self, path: Path, options: ValidationOptions | None = None
    ) -> ValidationReport:
        """Validate a project directory or an archive file at ``path``.

        Never raises; a missing path or an unexpected failure is reported as
        a failing check.
        """
        path = Path(path)
        started = time.perf_counter()
        try:
            if not self.storage.exists(path):
                return self._report(
                    [
                        CheckItem(
                            name="Path exists",
                            passed=False,
                            category="file",
                            path=str(path),
                            message=f"Path not found: {path}",
                        )
                    ],
                    config_present=False,
                    started=started,
                )
            if self.storage.is_dir(path):
                return self.validate_directory(path, options)
            data = self.storage.read_file(path)
        except Exception as exc:  # noqa: BLE001 - reported as a synthetic check
            return self._aborted(exc, started)
        return self.validate_archive(data, options)

    def validate_directory(
        self, root: Path, options: ValidationOptions | None = None
    ) -> ValidationReport:
        started = time.perf_counter()
        try:
            source = _DirectorySource(self.storage, root)
            checks = self._run_checks(source, options or ValidationOptions())
            return self._report(checks, config_present=source.has_dir(CONFIG_DIR), started=started)
        except Exception as exc:  # noqa: BLE001 - reported as a synthetic check
            return self._aborted(exc, started)

    def validate_archive(
        self, data: bytes, options: ValidationOptions | None = None
    ) -> ValidationReport:
        started = time.perf_counter()
        options = options or ValidationOptions()
        try:
            is_archive = self.archive.validate(data)
            format_check = CheckItem(
                name="Valid archive format",
                passed=is_archive,
                category="format",
                message=None if is_archive else "Invalid card archive (not a valid zip)",
            )
            if not is_archive:
                return self._report([format_check], config_present=False, started=started)

            source = _ArchiveSource(self.archive, data)
            checks = [format_check]
            if options.level in ("file", "full"):
                checks.extend(self._check_archive_layout(source))
            checks.extend(self._run_checks(source, options))
            return self._report(checks, config_present=source.has_dir(CONFIG_DIR), started=started)
        except Exception as exc:  # noqa: BLE001 - reported as a synthetic check
            return self._aborted(exc, started)

    # ------------------------------------------------------------------
    # Check groups
    # ------------------------------------------------------------------

    def _run_checks(self, source: _CardSource, options: ValidationOptions) -> list[CheckItem]:
        checks: list[CheckItem] = []
        level = options.level

        if level in ("directory", "full"):
            checks.extend(self._check_directories(source))

        file_level = level in ("file", "full")
        if file_level:
            checks.extend(self._check_files(source))

        if level in ("reference", "full") and options.check_references:
            checks.extend(self._check_references(source, report_missing_structure=not file_level))

        return checks

    def _check_directories(self, source: _CardSource) -> list[CheckItem]:
        config_exists = source.has_dir(CONFIG_DIR)
        content_exists = source.has_dir(CONTENT_DIR)
        return [
            CheckItem(
                name="Config directory exists",
                passed=config_exists,
                category="directory",
                path=CONFIG_DIR,
                message=None if config_exists else "Missing .card configuration directory",
            ),
            CheckItem(
                name="Content directory exists",
                passed=content_exists,
                category="directory",
                severity="info",
                path=CONTENT_DIR,
                message=None if content_exists else "Missing content directory (optional)",
            ),
        ]

    def _check_files(self, source: _CardSource) -> list[CheckItem]:
        checks: list[CheckItem] = []

        for filename in REQUIRED_FILES:
            relative = config_path(filename)
            present = source.has_file(relative)
            checks.append(
                CheckItem(
                    name=f"Required file: {filename}",
                    passed=present,
                    category="file",
                    path=relative,
                    message=None if present else f"Missing required file: {filename}",
                )
            )
            if not present:
                continue

            document, format_check = self._parse_document(source, relative, filename)
            checks.append(format_check)
            if filename == METADATA_FILE and isinstance(document, Mapping):
                checks.append(self._check_card_id(document))

        for filename in OPTIONAL_FILES:
            relative = config_path(filename)
            if filename.endswith(".yaml") and source.has_file(relative):
                _, format_check = self._parse_document(source, relative, filename)
                checks.append(format_check)

        return checks

    def _check_archive_layout(self, source: _ArchiveSource) -> list[CheckItem]:
        file_entries = [entry for entry in source.entries if not entry.is_dir]
        compressed = [entry.path for entry in file_entries if not entry.stored]
        checks = [
            CheckItem(
                name="Entries stored without compression",
                passed=not compressed,
                category="format",
                message=(
                    None
                    if not compressed
                    else f"Compressed entries found: {', '.join(compressed)}"
                ),
            )
        ]
        if source.has_file(METADATA_PATH):
            first = file_entries[0].path
            checks.append(
                CheckItem(
                    name="Metadata entry first",
                    passed=first == METADATA_PATH,
                    category="format",
                    path=METADATA_PATH,
                    message=(
                        None
                        if first == METADATA_PATH
                        else f"First archive entry is {first}, expected {METADATA_PATH}"
                    ),
                )
            )

        late_config: list[str] = []
        seen_content = False
        for entry in file_entries:
            if not is_config_entry(entry.path):
                seen_content = True
            elif seen_content:
                late_config.append(entry.path)
        checks.append(
            CheckItem(
                name="Config entries first",
                passed=not late_config,
                category="format",
                path=CONFIG_DIR,
                message=(
                    None
                    if not late_config
                    else f"Config entries after content entries: {', '.join(late_config)}"
                ),
            )
        )
        return checks

    def _check_card_id(self, metadata: Mapping[str, Any]) -> CheckItem:
        card_id = metadata.get("card_id")
        valid = is_valid_card_id(card_id)
        return CheckItem(
            name="metadata.card_id",
            passed=valid,
            category="format",
            path=METADATA_PATH,
            message=(
                None
                if valid
                else f"card_id must be 10 base62 characters, got {card_id!r}"
            ),
        )

    def _check_references(
        self, source: _CardSource, *, report_missing_structure: bool
    ) -> list[CheckItem]:
        structure = self._load_structure(source)
        if structure is None:
            if not report_missing_structure:
                return []
            return [
                CheckItem(
                    name="structure.references",
                    passed=False,
                    category="reference",
                    path=STRUCTURE_PATH,
                    message="Cannot resolve references: structure document missing or unreadable",
                )
            ]

        references = structure.get("structure") or []
        if not isinstance(references, list):
            return [
                CheckItem(
                    name="structure.structure",
                    passed=False,
                    category="reference",
                    path=STRUCTURE_PATH,
                    message="structure must be a list of base card references",
                )
            ]

        checks: list[CheckItem] = []
        for index, reference in enumerate(references):
            ref_id = reference.get("id") if isinstance(reference, Mapping) else None
            ref_type = reference.get("type") if isinstance(reference, Mapping) else None
            if not (isinstance(ref_id, str) and ref_id and isinstance(ref_type, str) and ref_type):
                checks.append(
                    CheckItem(
                        name=f"structure.structure[{index}]",
                        passed=False,
                        category="reference",
                        path=STRUCTURE_PATH,
                        message="Base card reference must declare non-empty id and type",
                    )
                )
                continue
            if not is_valid_card_id(ref_id):
                checks.append(
                    CheckItem(
                        name=f"structure.structure[{index}]",
                        passed=False,
                        category="reference",
                        path=STRUCTURE_PATH,
                        message=f"Base card id must be 10 base62 characters, got {ref_id!r}",
                    )
                )
                continue
            checks.extend(self._check_content(source, ref_id, ref_type))
        return checks

    def _check_content(self, source: _CardSource, ref_id: str, ref_type: str) -> list[CheckItem]:
        relative = content_path(ref_id)
        name = f"content.{ref_id}"

        if not source.has_file(relative):
            return [
                CheckItem(
                    name=name,
                    passed=False,
                    category="reference",
                    severity="warning",
                    path=relative,
                    message=f"Missing content document for base card {ref_id}",
                )
            ]

        try:
            content = self.serializer.parse(source.read_text(relative))
        except (InvalidFormatError, UnicodeDecodeError) as exc:
            return [
                CheckItem(
                    name=name,
                    passed=False,
                    category="reference",
                    path=relative,
                    message=f"Invalid content document: {exc}",
                )
            ]

        if not isinstance(content, Mapping):
            return [
                CheckItem(
                    name=name,
                    passed=False,
                    category="reference",
                    path=relative,
                    message="Content document must be a mapping",
                )
            ]

        checks: list[CheckItem] = []
        content_type = content.get("type")
        if not isinstance(content_type, str) or not content_type.strip():
            checks.append(
                CheckItem(
                    name=f"{name}.type",
                    passed=False,
                    category="reference",
                    path=relative,
                    message="Content document must declare a non-empty type",
                )
            )
        elif content_type != ref_type:
            checks.append(
                CheckItem(
                    name=f"{name}.type",
                    passed=False,
                    category="reference",
                    path=relative,
                    message=(
                        f"Type mismatch: structure declares {ref_type!r}, "
                        f"content declares {content_type!r}"
                    ),
                )
            )

        if not isinstance(content.get("data"), Mapping):
            checks.append(
                CheckItem(
                    name=f"{name}.data",
                    passed=False,
                    category="reference",
                    path=relative,
                    message="Content document must contain a data object",
                )
            )

        if not checks:
            checks.append(
                CheckItem(name=name, passed=True, category="reference", path=relative)
            )
        return checks

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _parse_document(
        self, source: _CardSource, relative: str, filename: str
    ) -> tuple[Any, CheckItem]:
        name = f"Format valid: {filename}"
        try:
            document = self.serializer.parse(source.read_text(relative))
        except (InvalidFormatError, UnicodeDecodeError) as exc:
            return None, CheckItem(
                name=name,
                passed=False,
                category="format",
                path=relative,
                message=f"Invalid YAML format: {exc}",
            )

        if not isinstance(document, Mapping):
            return document, CheckItem(
                name=name,
                passed=False,
                category="format",
                path=relative,
                message=f"{filename} must contain a mapping",
            )
        return document, CheckItem(name=name, passed=True, category="format", path=relative)

    def _load_structure(self, source: _CardSource) -> Mapping[str, Any] | None:
        if not source.has_file(STRUCTURE_PATH):
            return None
        try:
            structure = self.serializer.parse(source.read_text(STRUCTURE_PATH))
        except (InvalidFormatError, UnicodeDecodeError):
            return None
        return structure if isinstance(structure, Mapping) else None

    def _report(
        self, checks: list[CheckItem], *, config_present: bool, started: float
    ) -> ValidationReport:
        failures = [check for check in checks if not check.passed]
        error_count = sum(1 for check in failures if check.severity == "error")
        warning_count = len(failures) - error_count
        return ValidationReport(
            valid=config_present and error_count == 0,
            checks=checks,
            error_count=error_count,
            warning_count=warning_count,
            duration=(time.perf_counter() - started) * 1000,
        )

    def _aborted(self, exc: Exception, started: float) -> ValidationReport:
        logger.warning("Validation aborted: %s", exc, exc_info=True)
        path = exc.path if isinstance(exc, CardPackError) else None
        check = CheckItem(
            name="Validation aborted",
            passed=False,
            category="file",
            path=path,
            message=f"Unexpected error during validation: {exc}",
        )
        return self._report([check], config_present=False, started=started)
