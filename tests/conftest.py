"""Pytest configuration and fixtures."""

import gc
import shutil
import tempfile
import time
from collections.abc import Generator
from pathlib import Path

import pytest

from cardpack.config import Settings

CARD_ID = "abc1234567"
BASE_CARD_ID = "bc0000001A"

METADATA_YAML = f"""\
card_id: {CARD_ID}
name: Demo
standards_version: 1.0.0
tags:
- demo
"""

STRUCTURE_YAML = f"""\
structure:
- id: {BASE_CARD_ID}
  type: Rich
"""

CONTENT_YAML = """\
type: Rich
data:
  text: hi
"""


def write_card_project(root: Path) -> Path:
    """Write a minimal valid card project under ``root``."""
    (root / ".card").mkdir(parents=True)
    (root / "content").mkdir()
    (root / ".card" / "metadata.yaml").write_text(METADATA_YAML, encoding="utf-8")
    (root / ".card" / "structure.yaml").write_text(STRUCTURE_YAML, encoding="utf-8")
    (root / "content" / f"{BASE_CARD_ID}.yaml").write_text(CONTENT_YAML, encoding="utf-8")
    return root


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    try:
        yield Path(tmpdir)
    finally:
        # Force garbage collection to release any file handles
        gc.collect()
        # Small delay to allow OS to release file locks
        time.sleep(0.1)
        shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def card_project(temp_dir: Path) -> Path:
    """Create a valid card project with one base card."""
    return write_card_project(temp_dir / "project")


@pytest.fixture
def make_card_project(temp_dir: Path):
    """Factory writing additional card projects under ``temp_dir``."""

    def _make(name: str) -> Path:
        return write_card_project(temp_dir / name)

    return _make


@pytest.fixture
def override_settings(temp_dir: Path) -> Generator[Settings, None, None]:
    """Provide isolated cardpack settings scoped to tests."""

    import cardpack.config as config_module

    original_settings = getattr(config_module, "_settings", None)

    settings = config_module.Settings(standards_version="1.0.0")
    config_module._settings = settings

    try:
        yield settings
    finally:
        config_module._settings = original_settings
