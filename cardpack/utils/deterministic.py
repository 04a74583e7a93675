"""Deterministic ordering utilities for reproducible card archives."""

from collections.abc import Iterable
from typing import TypeVar

from cardpack.card.layout import METADATA_PATH, is_config_entry

T = TypeVar("T")


def card_path_sort_key(path: str) -> tuple[int, int, str]:
    """Sort key placing ``.card/`` entries first and metadata first among them.

    Example:
        >>> sorted(["content/a.yaml", ".card/structure.yaml", ".card/metadata.yaml"],
        ...        key=card_path_sort_key)
        ['.card/metadata.yaml', '.card/structure.yaml', 'content/a.yaml']
    """
    config_rank = 0 if is_config_entry(path) else 1
    metadata_rank = 0 if path == METADATA_PATH else 1
    return (config_rank, metadata_rank, path)


def deterministic_order_files(files: Iterable[T]) -> list[T]:
    """Sort file records (anything with a ``path`` attribute) in archive order."""

    return sorted(list(files), key=lambda item: card_path_sort_key(getattr(item, "path")))
