"""Dungeon Engine - text-adventure dungeon game backend.

A command string goes in; the engine parses it, validates it against the
current world, applies it through a single state store and returns
narration plus a frozen snapshot of the game.

ARCHITECTURE:
- GameState is the single source of truth, mutated only by GameStateStore
- All randomness flows through engine.random_selection (dice via d20)
- Presentation layers only ever see frozen GameSnapshot models

Example:
    >>> from dungeon_engine import GameSession, GameSettings
    >>>
    >>> session = GameSession(GameSettings(seed=42, depth=2))
    >>> response = session.initialize()
    >>> print("\\n".join(response.messages))
    >>>
    >>> response = session.process_command("look")
    >>> response.game_state.room.id
    'entrance'

Modules:
    core: Configuration, logging, constants and base exceptions.
    models: Pydantic V2 schemas and components (items, entities, rooms, state).
    generation: Procedural dungeons, rooms, loot and monsters.
    engine: Dice, combat, inventory, parser, executor and the game session.
"""

from __future__ import annotations

# Core
from dungeon_engine.core.config import GameSettings, Settings, get_settings
from dungeon_engine.core.exceptions import DungeonEngineError
from dungeon_engine.core.logging import configure_logging, get_logger

# Models
from dungeon_engine.models import (
    Direction,
    Dungeon,
    GameSnapshot,
    GameState,
    Monster,
    Player,
    Room,
    create_player,
)

# Engine
from dungeon_engine.engine import (
    CommandExecutor,
    CommandParser,
    CommandResponse,
    GameStateStore,
    roll_dice,
)

# Generation
from dungeon_engine.generation import build_map_matrix, dungeon_from_grid, generate_dungeon

# Session
from dungeon_engine.engine.session import GameSession, TurnResponse


__version__ = "0.1.0"
__all__ = [
    # Version info
    "__version__",
    # Core
    "DungeonEngineError",
    "GameSettings",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "Direction",
    "Dungeon",
    "GameSnapshot",
    "GameState",
    "Monster",
    "Player",
    "Room",
    "create_player",
    # Engine
    "CommandExecutor",
    "CommandParser",
    "CommandResponse",
    "GameStateStore",
    "roll_dice",
    # Generation
    "build_map_matrix",
    "dungeon_from_grid",
    "generate_dungeon",
    # Session
    "GameSession",
    "TurnResponse",
]
