"""Configuration management for the compendium converter.

Settings are loaded with pydantic-settings from environment variables and an
optional .env file. The rendering core never reads settings; only the batch
driver and the CLI do.

Example:
    >>> from dnd_compendium.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.out_directory
    PosixPath('out')

Environment Variables:
    DND_COMPENDIUM_DATA_DIRECTORY: Root of the 5etools ``data`` directory
    DND_COMPENDIUM_OUT_DIRECTORY: Directory receiving the rendered documents
    DND_COMPENDIUM_OUTPUT_SUFFIX: File suffix for rendered documents
    DND_COMPENDIUM_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DND_COMPENDIUM_JSON_LOGS: Emit JSON log lines instead of console output
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dnd_compendium.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings.

    Attributes:
        data_directory: Root of the source data tree.
        out_directory: Root of the rendered output tree.
        output_suffix: Suffix appended to each document's file base name.
        log_level: Application logging level.
        json_logs: Emit JSON log lines.
        fail_fast: Abort the batch on the first failing source file.
    """

    model_config = SettingsConfigDict(
        env_prefix="DND_COMPENDIUM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_directory: Path = Field(
        default=Path("data"),
        description="Root of the source data tree",
    )
    out_directory: Path = Field(
        default=Path("out"),
        description="Root of the rendered output tree",
    )
    output_suffix: str = Field(
        default=".md",
        description="Suffix for rendered documents",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )
    fail_fast: bool = Field(
        default=False,
        description="Abort the batch on the first failing source file",
    )

    @field_validator("output_suffix", mode="after")
    @classmethod
    def validate_suffix(cls, value: str) -> str:
        """Ensure the suffix is a plain extension such as ``.md``.

        Args:
            value: The configured suffix.

        Returns:
            The validated suffix.

        Raises:
            ValueError: If the suffix does not start with a dot or contains a separator.
        """
        if not value.startswith(".") or "/" in value or "\\" in value:
            msg = f"output_suffix must look like '.md', got {value!r}"
            raise ValueError(msg)
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
