"""Configuration management for the dungeon engine.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

Example:
    >>> from dungeon_engine.core.config import get_settings
    >>> settings = get_settings()
    >>> settings.game.difficulty
    1

Environment Variables:
    DUNGEON_ENGINE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    DUNGEON_ENGINE_JSON_LOGS: Emit JSON log lines instead of console output
    DUNGEON_ENGINE_GAME_DEPTH: Dungeon depth used for new sessions
    DUNGEON_ENGINE_GAME_DIFFICULTY: Difficulty used for loot and monsters
    DUNGEON_ENGINE_GAME_LAYOUT: 'graph' (room list) or 'grid' (map matrix)
    DUNGEON_ENGINE_GAME_SEED: Optional RNG seed for reproducible dungeons
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from dungeon_engine.core.exceptions import ConfigurationError


class GameSettings(BaseSettings):
    """Configuration for a game session.

    Attributes:
        player_name: Name given to the player character.
        starting_health: Player health (and maximum) at session start.
        max_carry_weight: Player carry capacity at level 1.
        depth: Dungeon depth; drives room count and room type weights.
        difficulty: Difficulty; drives monsters and key loot.
        room_count: Explicit room count, or None for 5 + 2 * depth.
        layout: Which generator builds the playable dungeon.
        grid_size: Side length of the square grid for the grid layout.
        seed: Optional RNG seed for reproducible sessions.
        monster_chance: Probability a generated room holds a monster.
        loot_drop_chance: Probability a defeated monster drops loot.
        stagger_seconds: Recovery time after a monster's critical hit.
        regeneration_interval: Seconds between monster regeneration ticks.
        regeneration_amount: Health regained per regeneration tick.
        spawn_interval: Seconds between wandering monster checks.
        spawn_chance: Probability a wandering monster check spawns one.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_ENGINE_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    player_name: str = Field(default="Adventurer", min_length=1)
    starting_health: int = Field(default=100, ge=1)
    max_carry_weight: float = Field(default=50.0, gt=0)
    depth: int = Field(default=1, ge=1, le=20)
    difficulty: int = Field(default=1, ge=1, le=20)
    room_count: int | None = Field(default=None, ge=1)
    layout: Literal["graph", "grid"] = Field(default="graph")
    grid_size: int = Field(default=7, ge=3, le=50)
    seed: int | None = Field(default=None)
    monster_chance: float = Field(default=0.25, ge=0.0, le=1.0)
    loot_drop_chance: float = Field(default=0.5, ge=0.0, le=1.0)
    stagger_seconds: int = Field(default=5, ge=0)
    regeneration_interval: int = Field(default=30, ge=1)
    regeneration_amount: int = Field(default=1, ge=0)
    spawn_interval: int = Field(default=300, ge=1)
    spawn_chance: float = Field(default=0.25, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def validate_event_intervals(self) -> "GameSettings":
        """Ensure regeneration ticks more often than wandering spawns.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If regeneration_interval exceeds spawn_interval.
        """
        if self.regeneration_interval > self.spawn_interval:
            raise ConfigurationError(
                f"regeneration_interval ({self.regeneration_interval}) must not exceed "
                f"spawn_interval ({self.spawn_interval})",
                config_key="regeneration_interval",
            )
        return self


class Settings(BaseSettings):
    """Main application settings.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Application logging level.
        json_logs: Render logs as JSON.
        game: Game session settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="DUNGEON_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(default="Dungeon Engine")
    app_version: str = Field(default="0.1.0")
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    json_logs: bool = Field(default=False)

    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If required configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access."""
    get_settings.cache_clear()


__all__ = [
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
