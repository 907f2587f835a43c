"""Custom exception hierarchy for the compendium converter.

All exceptions inherit from CompendiumError, enabling unified error handling
at the batch boundary while preserving file- and entity-level context.

Only whole-file failures are raised by the pipeline. Field normalization and
rendering degrade per field and never raise for an unrecognized shape.

Example:
    >>> from dnd_compendium.core.exceptions import SourceDecodeError
    >>> raise SourceDecodeError("Invalid JSON", source_file="spells-phb.json")
"""

from __future__ import annotations

from typing import Any


class CompendiumError(Exception):
    """Base exception for all compendium converter errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(CompendiumError):
    """Raised when settings are missing or invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with the offending key.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Source File Exceptions
# =============================================================================


class SourceFileError(CompendiumError):
    """Base exception for failures that invalidate a whole source file.

    The caller decides whether to abort the batch or skip the file.
    """

    def __init__(
        self,
        message: str,
        *,
        source_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize source file error with file context.

        Args:
            message: Human-readable error description.
            source_file: Path to the file that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source_file:
            combined_details["source_file"] = source_file
        self.source_file = source_file
        super().__init__(message, details=combined_details)


class SourceDecodeError(SourceFileError):
    """Raised when a file is not valid JSON or lacks the expected envelope."""


class EmptySourceError(SourceFileError):
    """Raised when a source file holds no entities of the requested kind."""


# =============================================================================
# Output Exceptions
# =============================================================================


class DocumentWriteError(CompendiumError):
    """Raised when a rendered document cannot be written to disk."""

    def __init__(
        self,
        message: str,
        *,
        output_file: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize write error with the target path.

        Args:
            message: Human-readable error description.
            output_file: Path of the document that could not be written.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if output_file:
            combined_details["output_file"] = output_file
        self.output_file = output_file
        super().__init__(message, details=combined_details)


# =============================================================================
# Rendering Exceptions
# =============================================================================


class RenderError(CompendiumError):
    """Raised when an entity cannot be turned into a document at all.

    Unrecognized field shapes never raise this; they fall back per field.
    """

    def __init__(
        self,
        message: str,
        *,
        entity_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize render error with entity context.

        Args:
            message: Human-readable error description.
            entity_name: Display name of the entity being rendered.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if entity_name:
            combined_details["entity_name"] = entity_name
        super().__init__(message, details=combined_details)


__all__ = [
    "CompendiumError",
    "ConfigurationError",
    "SourceFileError",
    "SourceDecodeError",
    "EmptySourceError",
    "DocumentWriteError",
    "RenderError",
]
