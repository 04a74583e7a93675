from __future__ import annotations

import pytest
from pydantic import ValidationError

import cardpack.config as config_module
from cardpack.config import Settings, get_settings, set_settings


def test_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    monkeypatch.chdir(tmp_path)
    settings = Settings()

    assert settings.standards_version == "1.0.0"
    assert settings.max_resource_size is None
    assert settings.include_hidden is False
    assert settings.validate_on_pack is True
    assert settings.validate_on_unpack is True
    assert settings.archive_extension == ".card"
    assert settings.log_level == "WARNING"


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CARDPACK_STANDARDS_VERSION", "2.1.0")
    monkeypatch.setenv("CARDPACK_MAX_RESOURCE_SIZE", "1048576")
    monkeypatch.setenv("CARDPACK_INCLUDE_HIDDEN", "true")

    settings = Settings()

    assert settings.standards_version == "2.1.0"
    assert settings.max_resource_size == 1048576
    assert settings.include_hidden is True


def test_dotenv_file(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    (tmp_path / ".env").write_text("CARDPACK_LOG_LEVEL=DEBUG\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert Settings().log_level == "DEBUG"


def test_rejects_non_positive_resource_size() -> None:
    with pytest.raises(ValidationError):
        Settings(max_resource_size=0)


def test_get_and_set_settings(override_settings: Settings) -> None:
    assert get_settings() is override_settings

    replacement = Settings(standards_version="3.0.0")
    set_settings(replacement)
    assert get_settings() is replacement
    assert config_module._settings is replacement
