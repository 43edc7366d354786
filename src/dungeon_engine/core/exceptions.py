"""Custom exception hierarchy for the dungeon engine.

This module defines the exception hierarchy used across the engine. All
exceptions inherit from DungeonEngineError, enabling unified error handling
at the session boundary while preserving domain-specific context.

The hierarchy follows three recovery classes:

* ParseError - the command text could not be understood. Always
  recoverable; surfaced to the player as a plain message.
* ActionValidationError - a command was understood but its preconditions
  failed (missing target, not ready, too heavy). Recoverable; state is
  left unchanged.
* ContractViolationError - internal data is malformed (e.g. an entity
  without a stat block). Never user-facing; it is a defect upstream and
  must fail fast.

Example:
    >>> from dungeon_engine.core.exceptions import InvalidDiceSpecError
    >>> raise InvalidDiceSpecError("Malformed dice notation", expression="2x6")
"""

from __future__ import annotations

from typing import Any


class DungeonEngineError(Exception):
    """Base exception for all dungeon engine errors.

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
# Command Parsing Exceptions
# =============================================================================


class ParseError(DungeonEngineError):
    """Base exception for command parsing failures.

    The parser converts these into a ParseFailure result; they never
    escape to the presentation layer.
    """

    def __init__(
        self,
        message: str,
        *,
        raw_input: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize parse error with the offending input.

        Args:
            message: Human-readable error description.
            raw_input: The raw command text that failed to parse.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if raw_input is not None:
            combined_details["raw_input"] = raw_input
        self.raw_input = raw_input
        super().__init__(message, details=combined_details)


class EmptyInputError(ParseError):
    """Raised when the trimmed command text is empty."""


class UnmatchedCommandError(ParseError):
    """Raised when the verb matches no registered command or alias."""


# =============================================================================
# Action Validation Exceptions
# =============================================================================


class ActionValidationError(DungeonEngineError):
    """Raised when a command's preconditions are not met.

    The message is player-facing narrative text. The executor catches
    this, reports the message and leaves the game state untouched.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation error with command context.

        Args:
            message: Player-facing explanation of why the action failed.
            command: Canonical name of the command being validated.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if command:
            combined_details["command"] = command
        super().__init__(message, details=combined_details)


class NotReadyError(ActionValidationError):
    """Raised when the player acts before their ready_at time has elapsed."""

    def __init__(
        self,
        message: str,
        *,
        ready_at: int,
        elapsed_time: int,
        command: str | None = None,
    ) -> None:
        """Initialize not-ready error with timing context.

        Args:
            message: Player-facing explanation.
            ready_at: Game time at which the player may act again.
            elapsed_time: Current game time.
            command: Canonical name of the rejected command.
        """
        self.ready_at = ready_at
        self.elapsed_time = elapsed_time
        super().__init__(
            message,
            command=command,
            details={"ready_at": ready_at, "elapsed_time": elapsed_time},
        )


# =============================================================================
# Contract Violations
# =============================================================================


class ContractViolationError(DungeonEngineError):
    """Raised when internal data breaks an invariant.

    This indicates a defect in a generator or persistence collaborator,
    not a player mistake. It is never caught by the engine.
    """

    def __init__(
        self,
        message: str,
        *,
        field_name: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize contract violation with field context.

        Args:
            message: Description of the broken invariant.
            field_name: Name of the missing or malformed field.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if field_name:
            combined_details["field_name"] = field_name
        super().__init__(message, details=combined_details)


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(DungeonEngineError):
    """Base exception for game engine errors that are not player mistakes."""


class InvalidGameStateError(GameEngineError):
    """Raised when the game state is inconsistent.

    Typically a room reference that points at nothing.
    """

    def __init__(
        self,
        message: str,
        *,
        room_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid game state error with location context.

        Args:
            message: Human-readable error description.
            room_id: The room identifier involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if room_id:
            combined_details["room_id"] = room_id
        super().__init__(message, details=combined_details)


class CombatError(GameEngineError):
    """Raised when combat resolution encounters an error."""

    def __init__(
        self,
        message: str,
        *,
        combatant: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combatant context.

        Args:
            message: Human-readable error description.
            combatant: Name of the combatant involved.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if combatant:
            combined_details["combatant"] = combatant
        super().__init__(message, details=combined_details)


class DiceRollError(GameEngineError):
    """Raised when dice rolling operations fail."""

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class InvalidDiceSpecError(DiceRollError):
    """Raised when a dice spec is not of the form '<count>d<sides>'."""


class InvalidRangeError(GameEngineError):
    """Raised when a random range has its minimum above its maximum."""

    def __init__(self, message: str, *, minimum: int, maximum: int) -> None:
        """Initialize range error with the offending bounds.

        Args:
            message: Human-readable error description.
            minimum: Requested lower bound.
            maximum: Requested upper bound.
        """
        super().__init__(message, details={"minimum": minimum, "maximum": maximum})


class GenerationError(GameEngineError):
    """Raised when procedural generation receives unusable parameters."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(DungeonEngineError):
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


__all__ = [
    # Base exception
    "DungeonEngineError",
    # Parsing
    "ParseError",
    "EmptyInputError",
    "UnmatchedCommandError",
    # Validation
    "ActionValidationError",
    "NotReadyError",
    # Contract
    "ContractViolationError",
    # Engine
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "DiceRollError",
    "InvalidDiceSpecError",
    "InvalidRangeError",
    "GenerationError",
    # Configuration
    "ConfigurationError",
]
