"""Configuration management with Pydantic settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cardpack.card.layout import CARD_EXTENSION

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseSettings):
    """cardpack configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="CARDPACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    standards_version: str = Field(
        default="1.0.0",
        description="Card standards version implemented by this system",
    )

    max_resource_size: int | None = Field(
        default=None,
        ge=1,
        description="Largest single file (bytes) accepted when packing; unset means no limit",
    )

    include_hidden: bool = Field(
        default=False,
        description="Include dot-files other than .card when packing",
    )

    validate_on_pack: bool = Field(
        default=True,
        description="Run full structural validation before packing",
    )

    validate_on_unpack: bool = Field(
        default=True,
        description="Validate the extracted directory after unpacking",
    )

    archive_extension: str = Field(
        default=CARD_EXTENSION,
        description="File extension used for card archives",
    )

    log_level: LogLevel = Field(
        default="WARNING",
        description="Root log level applied by the CLI",
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
