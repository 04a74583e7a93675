"""Path utilities: archive path normalization and extraction confinement."""

from __future__ import annotations

import os
import posixpath
import re
from pathlib import Path, PurePosixPath

from cardpack.errors import PathSecurityViolation

_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


def _normalize(path: str) -> str:
    return posixpath.normpath(path.replace(os.sep, "/").replace("\\", "/"))


def resolve_extraction_path(target_dir: Path, entry_path: str) -> Path:
    """Return ``target_dir / entry_path`` if it stays inside ``target_dir``.

    The check is lexical so that it works for any storage backend, including
    in-memory ones where nothing can be resolved on disk.

    Raises:
        PathSecurityViolation: If the entry is absolute, drive-qualified,
            empty, or normalizes to a location outside ``target_dir``.
    """
    raw = entry_path.replace("\\", "/")
    if not raw or raw.startswith("/") or _DRIVE_PREFIX.match(raw) or "\x00" in raw:
        raise PathSecurityViolation(
            "Unsafe archive entry path",
            path=entry_path,
            details={"target_dir": str(target_dir)},
        )

    # Judged on the entry alone so a relative root such as "." cannot hide ".."
    relative = _normalize(raw)
    if relative in (".", "..") or relative.startswith("../"):
        raise PathSecurityViolation(
            "Archive entry escapes extraction root",
            path=entry_path,
            details={"target_dir": str(target_dir), "resolved": relative},
        )

    return Path(target_dir) / PurePosixPath(relative)


def is_safe_entry(target_dir: Path, entry_path: str) -> bool:
    """Return True when ``entry_path`` can be extracted under ``target_dir``."""
    try:
        resolve_extraction_path(target_dir, entry_path)
    except PathSecurityViolation:
        return False
    return True
