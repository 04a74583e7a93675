"""On-disk and in-archive layout of a card project."""

from __future__ import annotations

CONFIG_DIR = ".card"
CONTENT_DIR = "content"

METADATA_FILE = "metadata.yaml"
STRUCTURE_FILE = "structure.yaml"
COVER_FILE = "cover.html"
THEME_FILE = "theme.yaml"

REQUIRED_FILES: tuple[str, ...] = (METADATA_FILE, STRUCTURE_FILE)
OPTIONAL_FILES: tuple[str, ...] = (COVER_FILE, THEME_FILE)

METADATA_PATH = f"{CONFIG_DIR}/{METADATA_FILE}"
STRUCTURE_PATH = f"{CONFIG_DIR}/{STRUCTURE_FILE}"

CARD_EXTENSION = ".card"


def config_path(filename: str) -> str:
    """Return the archive-relative path of a config document."""
    return f"{CONFIG_DIR}/{filename}"


def content_path(base_card_id: str) -> str:
    """Return the archive-relative path of a base card's content document."""
    return f"{CONTENT_DIR}/{base_card_id}.yaml"


def is_config_entry(relative_path: str) -> bool:
    return relative_path == CONFIG_DIR or relative_path.startswith(f"{CONFIG_DIR}/")
