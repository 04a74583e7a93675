"""Tests for file-set checksums."""

from __future__ import annotations

import hashlib

from cardpack.utils.hashing import compute_file_set_checksum, compute_sha256

FILES = [
    (".card/metadata.yaml", b"card_id: abc1234567\n"),
    (".card/structure.yaml", b"structure: []\n"),
    ("content/a.yaml", b"type: Rich\n"),
]


def test_compute_sha256() -> None:
    assert compute_sha256(b"abc") == hashlib.sha256(b"abc").hexdigest()


def test_checksum_matches_documented_construction() -> None:
    structure_hash = compute_sha256(b"structure: []\n")
    content_hash = compute_sha256(b"type: Rich\n")
    lines = [f".card/structure.yaml:{structure_hash}", f"content/a.yaml:{content_hash}"]
    expected = hashlib.sha256("\n".join(lines).encode("utf-8")).hexdigest()
    assert compute_file_set_checksum(FILES) == expected


def test_checksum_is_deterministic() -> None:
    assert compute_file_set_checksum(FILES) == compute_file_set_checksum(list(FILES))


def test_checksum_ignores_metadata_document() -> None:
    changed = [(".card/metadata.yaml", b"card_id: zzz9999999\n"), *FILES[1:]]
    assert compute_file_set_checksum(changed) == compute_file_set_checksum(FILES)


def test_checksum_detects_content_change() -> None:
    changed = [*FILES[:2], ("content/a.yaml", b"type: Rich!\n")]
    assert compute_file_set_checksum(changed) != compute_file_set_checksum(FILES)


def test_checksum_detects_rename() -> None:
    renamed = [*FILES[:2], ("content/b.yaml", b"type: Rich\n")]
    assert compute_file_set_checksum(renamed) != compute_file_set_checksum(FILES)


def test_checksum_with_no_exclusions_covers_metadata() -> None:
    changed = [(".card/metadata.yaml", b"other\n"), *FILES[1:]]
    assert compute_file_set_checksum(changed, exclude=()) != compute_file_set_checksum(
        FILES, exclude=()
    )
