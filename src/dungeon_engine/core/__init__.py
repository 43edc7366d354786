"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        DungeonEngineError: Base exception for all engine errors.
        ParseError / ActionValidationError / ContractViolationError:
            The three recovery classes of engine failures.

    Configuration:
        Settings, GameSettings: pydantic-settings configuration.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging, get_logger, bind_context, clear_context.
"""

from __future__ import annotations

from dungeon_engine.core.config import (
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from dungeon_engine.core.exceptions import (
    ActionValidationError,
    CombatError,
    ConfigurationError,
    ContractViolationError,
    DiceRollError,
    DungeonEngineError,
    EmptyInputError,
    GameEngineError,
    GenerationError,
    InvalidDiceSpecError,
    InvalidGameStateError,
    InvalidRangeError,
    NotReadyError,
    ParseError,
    UnmatchedCommandError,
)
from dungeon_engine.core.logging import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


__all__ = [
    # Exceptions
    "DungeonEngineError",
    "ParseError",
    "EmptyInputError",
    "UnmatchedCommandError",
    "ActionValidationError",
    "NotReadyError",
    "ContractViolationError",
    "GameEngineError",
    "InvalidGameStateError",
    "CombatError",
    "DiceRollError",
    "InvalidDiceSpecError",
    "InvalidRangeError",
    "GenerationError",
    "ConfigurationError",
    # Configuration
    "Settings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
