"""Base62 identifiers for cards and base cards.

Ids are 10 characters over ``0-9a-zA-Z`` (62^10 ≈ 8.4e17 values).
"""

from __future__ import annotations

import re
import secrets

BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
ID_LENGTH = 10
MAX_ID_VALUE = 62**ID_LENGTH

_ID_PATTERN = re.compile(rf"[0-9A-Za-z]{{{ID_LENGTH}}}")


def encode_base62(value: int, length: int = ID_LENGTH) -> str:
    """Encode a non-negative integer, left-padded with ``0`` to ``length``."""
    if value < 0:
        raise ValueError("Cannot encode negative values")

    digits: list[str] = []
    while value > 0:
        value, remainder = divmod(value, 62)
        digits.append(BASE62_ALPHABET[remainder])
    return "".join(reversed(digits)).rjust(length, "0")


def decode_base62(text: str) -> int:
    value = 0
    for char in text:
        index = BASE62_ALPHABET.find(char)
        if index == -1:
            raise ValueError(f"Invalid character in base62 string: {char!r}")
        value = value * 62 + index
    return value


def generate_card_id() -> str:
    """Return a random 10-character base62 id."""
    return encode_base62(secrets.randbelow(MAX_ID_VALUE))


def is_valid_card_id(value: object) -> bool:
    return isinstance(value, str) and _ID_PATTERN.fullmatch(value) is not None
