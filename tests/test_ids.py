"""Tests for base62 card identifiers."""

from __future__ import annotations

import pytest

from cardpack.utils.ids import (
    BASE62_ALPHABET,
    ID_LENGTH,
    decode_base62,
    encode_base62,
    generate_card_id,
    is_valid_card_id,
)


def test_generated_ids_are_valid_and_distinct() -> None:
    ids = {generate_card_id() for _ in range(200)}
    assert len(ids) == 200
    for card_id in ids:
        assert len(card_id) == ID_LENGTH
        assert set(card_id) <= set(BASE62_ALPHABET)
        assert is_valid_card_id(card_id)


def test_encode_pads_to_length() -> None:
    assert encode_base62(0) == "0000000000"
    assert encode_base62(61) == "000000000Z"
    assert encode_base62(62) == "0000000010"


def test_decode_inverts_encode() -> None:
    assert decode_base62(encode_base62(123456789)) == 123456789


def test_encode_rejects_negative() -> None:
    with pytest.raises(ValueError):
        encode_base62(-1)


def test_decode_rejects_foreign_characters() -> None:
    with pytest.raises(ValueError):
        decode_base62("abc-def")


@pytest.mark.parametrize(
    "value",
    ["short", "abc1234567\n", "abc_234567", "abc12345678", 1234567890, None],
)
def test_invalid_card_ids(value) -> None:
    assert not is_valid_card_id(value)
