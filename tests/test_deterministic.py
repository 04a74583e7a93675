"""Tests for archive entry ordering."""

from __future__ import annotations

from cardpack.app.ports import ArchiveFile
from cardpack.utils.deterministic import card_path_sort_key, deterministic_order_files


def test_metadata_first_then_config_then_rest() -> None:
    paths = [
        "content/b.yaml",
        ".card/theme.yaml",
        "assets/a.png",
        ".card/metadata.yaml",
        ".card/cover.html",
        "content/a.yaml",
    ]
    assert sorted(paths, key=card_path_sort_key) == [
        ".card/metadata.yaml",
        ".card/cover.html",
        ".card/theme.yaml",
        "assets/a.png",
        "content/a.yaml",
        "content/b.yaml",
    ]


def test_lookalike_config_prefix_is_not_config() -> None:
    assert card_path_sort_key(".cardx/a")[0] == 1


def test_order_is_independent_of_input_order() -> None:
    files = [ArchiveFile(path=p, content=b"") for p in ("z", ".card/metadata.yaml", "a")]
    forward = deterministic_order_files(files)
    backward = deterministic_order_files(reversed(files))
    assert [f.path for f in forward] == [f.path for f in backward]
    assert forward[0].path == ".card/metadata.yaml"
