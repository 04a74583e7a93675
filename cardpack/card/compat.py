"""Standards-version compatibility checks."""

from __future__ import annotations

from cardpack.card.models import CompatibilityResult

INVALID_VERSION_REASON = "invalid version format"


def parse_version(version: str) -> tuple[int, int, int]:
    """Parse ``major.minor.patch``; missing or non-numeric segments become 0.

    Raises:
        ValueError: If ``version`` is not a non-empty string.
    """
    if not isinstance(version, str) or not version.strip():
        raise ValueError(f"Invalid version: {version!r}")

    segments = version.strip().lstrip("vV").split(".")
    numbers: list[int] = []
    for segment in segments[:3]:
        try:
            numbers.append(int(segment))
        except ValueError:
            numbers.append(0)
    while len(numbers) < 3:
        numbers.append(0)
    return numbers[0], numbers[1], numbers[2]


def check_compatibility(card_version: str, system_version: str) -> CompatibilityResult:
    """Decide whether a card written for ``card_version`` runs on ``system_version``.

    A major mismatch is incompatible. A newer card minor is accepted with a
    forward-compatibility warning in ``reason``.
    """
    try:
        card_major, card_minor, _ = parse_version(card_version)
        system_major, system_minor, _ = parse_version(system_version)
    except ValueError:
        return CompatibilityResult(compatible=False, reason=INVALID_VERSION_REASON)

    if card_major != system_major:
        return CompatibilityResult(
            compatible=False,
            reason=(
                f"Major version mismatch: card major version {card_major} "
                f"vs system major version {system_major}"
            ),
        )

    if card_minor > system_minor:
        return CompatibilityResult(
            compatible=True,
            reason=(
                f"Card minor version {card_minor} is newer than system minor version "
                f"{system_minor}; the card may use features this system does not support"
            ),
        )

    return CompatibilityResult(compatible=True)
