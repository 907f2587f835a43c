"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        CompendiumError: Base exception for all application errors.
        SourceFileError: Whole-file failures (decode errors, empty files).
        DocumentWriteError: A rendered document could not be written.
        RenderError: Unexpected failure rendering a single entity.

    Configuration:
        Settings: Application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
"""

from __future__ import annotations

from dnd_compendium.core.config import Settings, clear_settings_cache, get_settings
from dnd_compendium.core.exceptions import (
    CompendiumError,
    ConfigurationError,
    DocumentWriteError,
    EmptySourceError,
    RenderError,
    SourceDecodeError,
    SourceFileError,
)
from dnd_compendium.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "CompendiumError",
    "DocumentWriteError",
    "ConfigurationError",
    "SourceFileError",
    "SourceDecodeError",
    "EmptySourceError",
    "RenderError",
    # Configuration
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
