"""Custom exception hierarchy for the delver simulation core.

All exceptions inherit from DelverError, so callers at the application
boundary can handle every failure in one place while still seeing the
domain-specific context carried in ``details``.

Example:
    >>> from delver.core.exceptions import GenerationError
    >>> raise GenerationError("No room fits the grid", attempts=1, accepted=0)
"""

from __future__ import annotations

from typing import Any


class DelverError(Exception):
    """Base exception for all delver errors.

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


class ConfigurationError(DelverError):
    """Raised when settings are missing, invalid or contradict each other."""

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


# =============================================================================
# Game Engine Exceptions
# =============================================================================


class GameEngineError(DelverError):
    """Base exception for all simulation errors.

    Raised for map generation, turn resolution and state consistency
    problems.
    """


class GenerationError(GameEngineError):
    """Raised when dungeon generation accepts no room at all.

    The caller is expected to regenerate with adjusted parameters; a map
    without a start position is never handed out.
    """

    def __init__(
        self,
        message: str,
        *,
        attempts: int | None = None,
        accepted: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize generation error with attempt counters.

        Args:
            message: Human-readable error description.
            attempts: Number of placement attempts that were made.
            accepted: Number of rooms that were carved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if attempts is not None:
            combined_details["attempts"] = attempts
        if accepted is not None:
            combined_details["accepted"] = accepted
        super().__init__(message, details=combined_details)


class InvalidGameStateError(GameEngineError):
    """Raised when the world breaks one of its invariants.

    This is a programming error (bad carving or combat arithmetic) and is
    never recovered from.
    """

    def __init__(
        self,
        message: str,
        *,
        current_state: str | None = None,
        expected_states: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with state context.

        Args:
            message: Human-readable error description.
            current_state: The current invalid state identifier.
            expected_states: List of valid states that were expected.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if current_state:
            combined_details["current_state"] = current_state
        if expected_states:
            combined_details["expected_states"] = expected_states
        super().__init__(message, details=combined_details)


class InvalidIntentError(GameEngineError):
    """Raised when a player intent cannot be carried out.

    Intent handlers raise it; the intent dispatcher always catches it and
    turns it into a message-log entry.
    """

    def __init__(
        self,
        message: str,
        *,
        intent: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid intent error.

        Args:
            message: Player-facing explanation, written to the message log.
            intent: Kind of the rejected intent.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if intent:
            combined_details["intent"] = intent
        super().__init__(message, details=combined_details)


class PersistenceError(GameEngineError):
    """Raised when a saved world record cannot be reconstructed."""


__all__ = [
    # Base exception
    "DelverError",
    # Configuration exceptions
    "ConfigurationError",
    # Game engine exceptions
    "GameEngineError",
    "GenerationError",
    "InvalidGameStateError",
    "InvalidIntentError",
    "PersistenceError",
]
