"""Card data model and packer request/result types."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

CheckCategory = Literal["directory", "file", "format", "reference"]
CheckSeverity = Literal["error", "warning", "info"]
ValidationLevel = Literal["directory", "file", "reference", "full"]


class FileInfo(BaseModel):
    """Aggregate archive facts written into metadata at pack time."""

    total_size: int | None = Field(default=None, ge=0, description="Sum of file sizes in bytes")
    file_count: int | None = Field(default=None, ge=0, description="Number of archived files")
    checksum: str | None = Field(default=None, description="Integrity checksum of the file set")
    generated_at: str | None = Field(default=None, description="ISO 8601 pack timestamp")


class CardMetadata(BaseModel):
    """Contents of ``.card/metadata.yaml``.

    ``card_id`` is kept as a plain string so that cards with a malformed id
    can still be inspected; the validator reports the id format separately.
    Unquoted YAML numbers (``name: 2024``, ``standards_version: 1.0``) are
    read back as text.
    """

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    card_id: str
    name: str
    standards_version: str | None = None
    created_at: datetime | str | None = None
    modified_at: datetime | str | None = None
    theme: str | None = None
    tags: list[str | list[str]] | None = None
    visibility: Literal["public", "private", "unlisted"] | None = None
    downloadable: bool | None = None
    remixable: bool | None = None
    commentable: bool | None = None
    license: str | None = None
    age_rating: str | None = None
    content_warning: list[str] | None = None
    file_info: FileInfo | None = None


class BaseCardReference(BaseModel):
    """One entry of the structure list."""

    id: str
    type: str


class ResourceManifestItem(BaseModel):
    """Resource listed in the structure manifest."""

    model_config = ConfigDict(extra="allow")

    path: str
    size: int = Field(default=0, ge=0)
    type: str = ""
    duration: float | None = None
    width: int | None = None
    height: int | None = None
    language: str | None = None
    checksum: str | None = None


class StructureManifest(BaseModel):
    card_count: int = 0
    resource_count: int = 0
    resources: list[ResourceManifestItem] = Field(default_factory=list)


class CardStructure(BaseModel):
    """Contents of ``.card/structure.yaml``."""

    model_config = ConfigDict(extra="allow")

    structure: list[BaseCardReference] = Field(default_factory=list)
    manifest: StructureManifest = Field(default_factory=StructureManifest)


class BaseCardContent(BaseModel):
    """Contents of ``content/{id}.yaml``."""

    model_config = ConfigDict(extra="allow")

    type: str
    data: dict[str, Any]


class CheckItem(BaseModel):
    """Single validation check outcome."""

    name: str
    passed: bool
    category: CheckCategory
    severity: CheckSeverity = "error"
    path: str | None = None
    message: str | None = None


class ValidationReport(BaseModel):
    """Aggregated result of a validation run."""

    valid: bool
    checks: list[CheckItem] = Field(default_factory=list)
    error_count: int = 0
    warning_count: int = 0
    duration: float = Field(default=0.0, description="Elapsed time in milliseconds")

    @property
    def failures(self) -> list[CheckItem]:
        return [check for check in self.checks if not check.passed]

    @property
    def errors(self) -> list[CheckItem]:
        return [check for check in self.failures if check.severity == "error"]


class ValidationOptions(BaseModel):
    level: ValidationLevel = "full"
    check_references: bool = True


class PackProgress(BaseModel):
    step: Literal["preparing", "validating", "collecting", "archiving", "writing", "completed"]
    percent: int = Field(ge=0, le=100)
    current_file: str | None = None
    processed_files: int | None = None
    total_files: int | None = None


class UnpackProgress(BaseModel):
    step: Literal["reading", "extracting", "writing", "validating", "completed"]
    percent: int = Field(ge=0, le=100)
    current_file: str | None = None
    processed_files: int | None = None
    total_files: int | None = None


class PackOptions(BaseModel):
    """Options accepted by ``CardPackerService.pack``."""

    validate_structure: bool = Field(default=True, alias="validate")
    checksum: bool = False
    include_hidden: bool = False
    on_progress: Callable[[PackProgress], None] | None = None

    model_config = ConfigDict(populate_by_name=True)


class UnpackOptions(BaseModel):
    """Options accepted by ``CardPackerService.unpack``."""

    overwrite: bool = False
    validate_structure: bool = Field(default=True, alias="validate")
    on_progress: Callable[[UnpackProgress], None] | None = None

    model_config = ConfigDict(populate_by_name=True)


class OperationError(BaseModel):
    code: str
    message: str
    details: dict[str, Any] = Field(default_factory=dict)


class PackResult(BaseModel):
    """Outcome of a pack call; ``error`` is set when ``success`` is false."""

    success: bool
    output_path: Path | None = None
    file_size: int = 0
    file_count: int = 0
    duration: float = 0.0
    checksum: str | None = None
    warnings: list[str] = Field(default_factory=list)
    error: OperationError | None = None


class UnpackResult(BaseModel):
    """Outcome of an unpack call; ``error`` is set when ``success`` is false."""

    success: bool
    output_dir: Path | None = None
    file_count: int = 0
    duration: float = 0.0
    validation: ValidationReport | None = None
    warnings: list[str] = Field(default_factory=list)
    error: OperationError | None = None


class CompatibilityResult(BaseModel):
    compatible: bool
    reason: str | None = None
