"""Custom exception hierarchy for the tactics combat-unit engine.

Exceptions are reserved for programmer and content errors. Ordinary game
outcomes (an unaffordable ability, a dangling save-file reference) are
reported through return values instead. All exceptions inherit from
TacticsError so callers can catch engine errors at a single boundary while
keeping domain-specific context in ``details``.

Example:
    >>> from tactics_core.core.exceptions import ContentLoadError
    >>> raise ContentLoadError("Malformed ability entry", source_file="abilities.yaml")
"""

from __future__ import annotations

from typing import Any


class TacticsError(Exception):
    """Base exception for all tactics engine errors.

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
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Content Domain Exceptions
# =============================================================================


class ContentError(TacticsError):
    """Base exception for content definition errors.

    Raised when class, ability, or equipment definitions are missing,
    duplicated, or malformed.
    """


class ContentLoadError(ContentError):
    """Raised when a content file cannot be read or parsed."""

    def __init__(
        self,
        message: str,
        *,
        source_file: str | None = None,
        entry_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize content load error with file context.

        Args:
            message: Human-readable error description.
            source_file: Path to the content file that failed.
            entry_id: Identifier of the entry being loaded, if known.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source_file:
            combined_details["source_file"] = source_file
        if entry_id:
            combined_details["entry_id"] = entry_id
        super().__init__(message, details=combined_details)


class DuplicateDefinitionError(ContentError):
    """Raised when two content definitions share the same id."""

    def __init__(
        self,
        message: str,
        *,
        kind: str | None = None,
        definition_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize duplicate definition error.

        Args:
            message: Human-readable error description.
            kind: Content kind (ability, class, equipment).
            definition_id: The id that was registered twice.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if kind:
            combined_details["kind"] = kind
        if definition_id:
            combined_details["definition_id"] = definition_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Progression Domain Exceptions
# =============================================================================


class ProgressionError(TacticsError):
    """Base exception for unit progression errors."""


class ExperienceError(ProgressionError):
    """Raised when an experience amount violates the ledger's preconditions."""

    def __init__(
        self,
        message: str,
        *,
        amount: int | None = None,
        class_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize experience error with ledger context.

        Args:
            message: Human-readable error description.
            amount: The offending experience amount.
            class_id: The class the experience was attributed to.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if amount is not None:
            combined_details["amount"] = amount
        if class_id:
            combined_details["class_id"] = class_id
        super().__init__(message, details=combined_details)


# =============================================================================
# Serialization Exceptions
# =============================================================================


class SerializationError(TacticsError):
    """Raised when a serialized unit record is structurally malformed.

    Dangling references are not errors; they are reported as restore
    warnings. This exception covers records that cannot be read at all.
    """

    def __init__(
        self,
        message: str,
        *,
        unit_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize serialization error.

        Args:
            message: Human-readable error description.
            unit_name: Name of the unit being (de)serialized, if known.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if unit_name:
            combined_details["unit_name"] = unit_name
        super().__init__(message, details=combined_details)


# =============================================================================
# Configuration & Validation Exceptions
# =============================================================================


class ConfigurationError(TacticsError):
    """Raised when application configuration is invalid."""

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


class ValidationError(TacticsError):
    """Raised when domain data fails validation outside of pydantic."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        invalid_value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with field context.

        Args:
            message: Human-readable error description.
            field_name: Name of the field that failed validation.
            invalid_value: The value that failed validation.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        if invalid_value is not None:
            combined_details["invalid_value"] = invalid_value
        super().__init__(message, details=combined_details)


__all__ = [
    "TacticsError",
    "ContentError",
    "ContentLoadError",
    "DuplicateDefinitionError",
    "ProgressionError",
    "ExperienceError",
    "SerializationError",
    "ConfigurationError",
    "ValidationError",
]
