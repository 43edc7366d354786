"""Game session facade.

A :class:`GameSession` owns one game: it builds the dungeon and player,
wires the parser, state store and executor together, and turns each line
of player input into a :class:`TurnResponse`. Commands on one session
are serialized by a per-session lock; sessions share nothing.

Example:
    >>> session = GameSession(GameSettings(seed=7))
    >>> session.initialize().success
    True
    >>> session.process_command("look").game_state.room.id
    'entrance'
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from uuid import uuid4

from dungeon_engine.core.config import GameSettings, get_settings
from dungeon_engine.core.exceptions import InvalidGameStateError
from dungeon_engine.core.logging import bind_context, clear_context, get_logger
from dungeon_engine.engine.commands import Command, create_default_registry
from dungeon_engine.engine.events import schedule_default_events
from dungeon_engine.engine.executor import CommandExecutor
from dungeon_engine.engine.handlers import describe_room
from dungeon_engine.engine.parser import CommandParser
from dungeon_engine.engine.random_selection import seed_random
from dungeon_engine.engine.state import GameStateStore
from dungeon_engine.generation import build_map_matrix, dungeon_from_grid, generate_dungeon
from dungeon_engine.models.dungeon import Dungeon
from dungeon_engine.models.entities import create_player
from dungeon_engine.models.game_state import GameSnapshot, GameState


logger = get_logger(__name__)

NOT_STARTED_MESSAGE = "The game has not started yet."


@dataclass
class TurnResponse:
    """What the presentation layer receives after every call.

    Attributes:
        success: Whether the call did what was asked.
        messages: Narrative lines to show the player.
        game_state: Frozen snapshot of the game after the call.
    """

    success: bool
    messages: list[str] = field(default_factory=list)
    game_state: GameSnapshot | None = None


class GameSession:
    """One player's game, from dungeon generation to game over."""

    def __init__(self, settings: GameSettings | None = None, session_id: str | None = None) -> None:
        self.settings = settings or get_settings().game
        self.session_id = session_id or uuid4().hex[:12]
        self._lock = threading.Lock()
        self._registry = create_default_registry()
        self._parser = CommandParser(self._registry)
        self._store: GameStateStore | None = None
        self._executor: CommandExecutor | None = None

    @property
    def is_initialized(self) -> bool:
        return self._store is not None

    @property
    def store(self) -> GameStateStore:
        """The session's state store.

        Raises:
            InvalidGameStateError: If the session was never initialized.
        """
        if self._store is None:
            raise InvalidGameStateError("Session has not been initialized")
        return self._store

    def build_dungeon(self) -> Dungeon:
        """Generate the dungeon with the configured layout."""
        settings = self.settings
        if settings.layout == "grid":
            grid = build_map_matrix(settings.grid_size)
            return dungeon_from_grid(grid, depth=settings.depth, difficulty=settings.difficulty)
        return generate_dungeon(
            depth=settings.depth,
            room_count=settings.room_count,
            difficulty=settings.difficulty,
            monster_chance=settings.monster_chance,
        )

    def initialize(self) -> TurnResponse:
        """Start a new game, replacing any game already in progress."""
        with self._lock:
            bind_context(session_id=self.session_id)
            try:
                if self.settings.seed is not None:
                    seed_random(self.settings.seed)

                dungeon = self.build_dungeon()
                player = create_player(
                    name=self.settings.player_name,
                    health=self.settings.starting_health,
                    max_carry_weight=self.settings.max_carry_weight,
                )
                state = GameState(player=player, dungeon=dungeon, current_room_id=dungeon.start_room_id)
                self._store = GameStateStore(state)
                self._executor = CommandExecutor(self._store, self.settings, self._registry)
                schedule_default_events(self._store, self.settings)

                logger.info(
                    "Session initialized",
                    layout=self.settings.layout,
                    rooms=dungeon.room_count,
                    depth=dungeon.depth,
                )
                messages = [
                    f"Welcome to {dungeon.name}, {player.name}!",
                    "Type commands to interact with the game.",
                    "Try typing 'help' for a list of commands.",
                    "",
                    *describe_room(self._store.current_room),
                ]
                return TurnResponse(success=True, messages=messages, game_state=self._store.snapshot())
            finally:
                clear_context()

    def process_command(self, raw_input: str) -> TurnResponse:
        """Parse and execute one line of player input.

        Parse failures and rejected actions come back as unsuccessful
        responses; the game state is left as it was.
        """
        with self._lock:
            if self._store is None or self._executor is None:
                return TurnResponse(success=False, messages=[NOT_STARTED_MESSAGE])

            bind_context(session_id=self.session_id)
            try:
                parsed = self._parser.parse(raw_input)
                if not isinstance(parsed, Command):
                    return TurnResponse(
                        success=False,
                        messages=[parsed.message],
                        game_state=self._store.snapshot(),
                    )

                response = self._executor.execute(parsed)
                return TurnResponse(
                    success=response.success,
                    messages=response.messages,
                    game_state=self._store.snapshot(),
                )
            finally:
                clear_context()

    def snapshot(self) -> GameSnapshot | None:
        with self._lock:
            return self._store.snapshot() if self._store is not None else None


__all__ = ["NOT_STARTED_MESSAGE", "TurnResponse", "GameSession"]
