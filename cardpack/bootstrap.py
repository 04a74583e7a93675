"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass

from cardpack.app import CardPackerService
from cardpack.app.adapters import (
    FileSystemStorageAdapter,
    YamlSerializer,
    ZipArchiveAdapter,
)
from cardpack.app.ports import ArchivePort, SerializerPort, StoragePort
from cardpack.config import Settings, get_settings


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    packer_service: CardPackerService
    storage_port: StoragePort
    archive_port: ArchivePort
    serializer_port: SerializerPort


def create_packer(
    *,
    storage: StoragePort | None = None,
    archive: ArchivePort | None = None,
    serializer: SerializerPort | None = None,
    settings: Settings | None = None,
) -> CardPackerService:
    """Build a packer; any adapter left out defaults to the local built-in one."""

    return CardPackerService(
        storage_port=storage or FileSystemStorageAdapter(),
        archive_port=archive or ZipArchiveAdapter(),
        serializer_port=serializer or YamlSerializer(),
        settings=settings or get_settings(),
    )


def bootstrap_application(settings: Settings | None = None) -> ApplicationContainer:
    """Instantiate adapters and services for CLI consumption."""

    active_settings = settings or get_settings()

    storage = FileSystemStorageAdapter()
    archive = ZipArchiveAdapter()
    serializer = YamlSerializer()

    packer_service = create_packer(
        storage=storage,
        archive=archive,
        serializer=serializer,
        settings=active_settings,
    )

    return ApplicationContainer(
        settings=active_settings,
        packer_service=packer_service,
        storage_port=storage,
        archive_port=archive,
        serializer_port=serializer,
    )
