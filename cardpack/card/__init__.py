"""Card format: layout constants, data model, and version compatibility."""

from cardpack.card.compat import check_compatibility, parse_version
from cardpack.card.models import (
    BaseCardContent,
    BaseCardReference,
    CardMetadata,
    CardStructure,
    CheckItem,
    CompatibilityResult,
    FileInfo,
    OperationError,
    PackOptions,
    PackProgress,
    PackResult,
    ResourceManifestItem,
    StructureManifest,
    UnpackOptions,
    UnpackProgress,
    UnpackResult,
    ValidationOptions,
    ValidationReport,
)

__all__ = [
    "BaseCardContent",
    "BaseCardReference",
    "CardMetadata",
    "CardStructure",
    "CheckItem",
    "CompatibilityResult",
    "FileInfo",
    "OperationError",
    "PackOptions",
    "PackProgress",
    "PackResult",
    "ResourceManifestItem",
    "StructureManifest",
    "UnpackOptions",
    "UnpackProgress",
    "UnpackResult",
    "ValidationOptions",
    "ValidationReport",
    "check_compatibility",
    "parse_version",
]
