"""Tests for standards-version compatibility."""

from __future__ import annotations

import pytest

from cardpack.card.compat import INVALID_VERSION_REASON, check_compatibility, parse_version


def test_same_major_older_card_is_compatible() -> None:
    result = check_compatibility("1.0.0", "1.2.0")
    assert result.compatible is True
    assert result.reason is None


def test_newer_minor_is_compatible_with_warning() -> None:
    result = check_compatibility("1.3.0", "1.2.0")
    assert result.compatible is True
    assert result.reason is not None
    assert "newer" in result.reason


def test_major_mismatch_is_incompatible() -> None:
    result = check_compatibility("2.0.0", "1.9.9")
    assert result.compatible is False
    assert result.reason == (
        "Major version mismatch: card major version 2 vs system major version 1"
    )


@pytest.mark.parametrize("card_version", ["", "   ", None])
def test_invalid_version_is_incompatible(card_version) -> None:
    result = check_compatibility(card_version, "1.0.0")
    assert result.compatible is False
    assert result.reason == INVALID_VERSION_REASON


def test_patch_differences_are_ignored() -> None:
    assert check_compatibility("1.2.9", "1.2.0").reason is None


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("1.2.3", (1, 2, 3)),
        ("v2.1", (2, 1, 0)),
        ("3", (3, 0, 0)),
        ("1.x.4", (1, 0, 4)),
        ("1.2.3.4", (1, 2, 3)),
    ],
)
def test_parse_version(text: str, expected: tuple[int, int, int]) -> None:
    assert parse_version(text) == expected


def test_parse_version_rejects_empty() -> None:
    with pytest.raises(ValueError):
        parse_version("")
