"""CLI integration smoke tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

from cardpack import __version__
from cardpack.cli import _exit_with_error, app

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_pack_then_info_then_unpack(
    temp_dir: Path, card_project: Path, override_settings
) -> None:
    archive = temp_dir / "demo.card"

    packed = runner.invoke(app, ["pack", str(card_project), "-o", str(archive), "--checksum"])
    assert packed.exit_code == 0, packed.output
    assert "Packed 3 files" in packed.output
    assert "Checksum:" in packed.output
    assert archive.exists()

    info = runner.invoke(app, ["info", str(archive)])
    assert info.exit_code == 0, info.output
    assert "Card ID:   abc1234567" in info.output
    assert "Files:     3" in info.output

    info_json = runner.invoke(app, ["info", str(archive), "--json"])
    assert json.loads(info_json.output)["card_id"] == "abc1234567"

    target = temp_dir / "extracted"
    unpacked = runner.invoke(app, ["unpack", str(archive), str(target)])
    assert unpacked.exit_code == 0, unpacked.output
    assert "Unpacked 3 files" in unpacked.output
    assert (target / "content" / "bc0000001A.yaml").exists()


def test_pack_default_output_path(card_project: Path, override_settings) -> None:
    result = runner.invoke(app, ["pack", str(card_project)])

    assert result.exit_code == 0, result.output
    assert (card_project.parent / "project.card").exists()


def test_pack_missing_source_fails(temp_dir: Path, override_settings) -> None:
    result = runner.invoke(app, ["pack", str(temp_dir / "missing")])

    assert result.exit_code == 1
    assert "NOT_FOUND" in result.output


def test_unpack_existing_target_fails(
    temp_dir: Path, card_project: Path, override_settings
) -> None:
    archive = temp_dir / "demo.card"
    assert runner.invoke(app, ["pack", str(card_project), "-o", str(archive)]).exit_code == 0

    result = runner.invoke(app, ["unpack", str(archive), str(card_project)])

    assert result.exit_code == 1
    assert "ALREADY_EXISTS" in result.output


def test_validate_valid_project(card_project: Path, override_settings) -> None:
    result = runner.invoke(app, ["validate", str(card_project)])

    assert result.exit_code == 0, result.output
    assert "valid" in result.output
    assert "Errors: 0" in result.output


def test_validate_invalid_project_json(card_project: Path, override_settings) -> None:
    (card_project / ".card" / "structure.yaml").unlink()

    result = runner.invoke(app, ["validate", str(card_project), "--json"])

    assert result.exit_code == 1
    report = json.loads(result.output)
    assert report["valid"] is False
    assert report["error_count"] == 1


def test_validate_rejects_unknown_level(card_project: Path, override_settings) -> None:
    result = runner.invoke(app, ["validate", str(card_project), "--level", "deep"])

    assert result.exit_code != 0


def test_compat(override_settings) -> None:
    ok = runner.invoke(app, ["compat", "1.0.0"])
    assert ok.exit_code == 0
    assert "compatible" in ok.output

    newer_minor = runner.invoke(app, ["compat", "1.5.0", "1.2.0"])
    assert newer_minor.exit_code == 0
    assert "Warning:" in newer_minor.output

    mismatch = runner.invoke(app, ["compat", "2.0.0", "1.0.0"])
    assert mismatch.exit_code == 1
    assert "Major version mismatch" in mismatch.output


def test_new_id(override_settings) -> None:
    result = runner.invoke(app, ["new-id"])

    assert result.exit_code == 0
    card_id = result.output.strip()
    assert len(card_id) == 10
    assert card_id.isalnum()


def test_pack_follows_validate_on_pack_setting(card_project: Path, override_settings) -> None:
    override_settings.validate_on_pack = False
    (card_project / ".card" / "structure.yaml").unlink()

    skipped = runner.invoke(app, ["pack", str(card_project)])
    forced = runner.invoke(app, ["pack", str(card_project), "--validate"])

    assert skipped.exit_code == 0, skipped.output
    assert forced.exit_code == 1
    assert "INVALID_FORMAT" in forced.output


def test_pack_include_hidden_setting_can_be_overridden(
    temp_dir: Path, card_project: Path, override_settings
) -> None:
    override_settings.include_hidden = True
    (card_project / ".DS_Store").write_bytes(b"junk")

    included = runner.invoke(app, ["pack", str(card_project), "-o", str(temp_dir / "a.card")])
    excluded = runner.invoke(
        app, ["pack", str(card_project), "-o", str(temp_dir / "b.card"), "--exclude-hidden"]
    )

    assert "Packed 4 files" in included.output
    assert "Packed 3 files" in excluded.output


def test_unpack_follows_validate_on_unpack_setting(
    temp_dir: Path, card_project: Path, override_settings
) -> None:
    override_settings.validate_on_unpack = False
    archive = temp_dir / "partial.card"
    (card_project / ".card" / "structure.yaml").unlink()
    packed = runner.invoke(app, ["pack", str(card_project), "-o", str(archive), "--no-validate"])
    assert packed.exit_code == 0, packed.output

    quiet = runner.invoke(app, ["unpack", str(archive), str(temp_dir / "a")])
    checked = runner.invoke(app, ["unpack", str(archive), str(temp_dir / "b"), "--validate"])

    assert "failed validation" not in quiet.output
    assert "failed validation" in checked.output


def test_exit_with_error_without_error_details() -> None:
    with pytest.raises(typer.Exit) as excinfo:
        _exit_with_error(None, "Error: failed to pack demo")

    assert excinfo.value.exit_code == 1
