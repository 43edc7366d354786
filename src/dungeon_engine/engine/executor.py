"""Command executor.

Runs a parsed :class:`Command` against a :class:`GameStateStore`:

1. Context validation: a finished game only accepts free commands, and
   commands that need readiness are refused while the player is
   staggered.
2. The registered handler checks its own preconditions and applies the
   effects.
3. Game time advances by the command's cost and due time events fire.

Every outcome, including rejected commands, is returned as a
:class:`CommandResponse`.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dungeon_engine.core.config import GameSettings, get_settings
from dungeon_engine.core.exceptions import (
    ActionValidationError,
    InvalidGameStateError,
    NotReadyError,
)
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.commands import Command, CommandRegistry, create_default_registry
from dungeon_engine.engine.events import run_time_event
from dungeon_engine.engine.handlers import HandlerContext, get_handler
from dungeon_engine.engine.state import GameStateStore


logger = get_logger(__name__)

GAME_OVER_MESSAGE = "Your adventure is over. Only 'inventory', 'stats' and 'help' still work."


@dataclass
class CommandResponse:
    """Uniform result of executing one command.

    Attributes:
        success: Whether the command was carried out.
        messages: Narrative lines for the player.
        elapsed_time: Game time after the command.
        time_spent: Game seconds the command consumed.
        location_changed: Whether the player moved.
        game_over: Whether the game has ended.
    """

    success: bool
    messages: list[str] = field(default_factory=list)
    elapsed_time: int = 0
    time_spent: int = 0
    location_changed: bool = False
    game_over: bool = False


class CommandExecutor:
    """Validates and applies commands against one game state."""

    def __init__(
        self,
        store: GameStateStore,
        settings: GameSettings | None = None,
        registry: CommandRegistry | None = None,
    ) -> None:
        self.store = store
        self.settings = settings or get_settings().game
        self.registry = registry or create_default_registry()
        self._context = HandlerContext(store=store, settings=self.settings, registry=self.registry)

    def validate_context(self, command: Command) -> None:
        """Check that the command may run right now.

        Raises:
            ActionValidationError: If the game is over and the command
                would consume time.
            NotReadyError: If the command needs readiness and the player
                is still recovering.
        """
        store = self.store
        if store.game_over and command.time_cost > 0:
            raise ActionValidationError(GAME_OVER_MESSAGE, command=command.verb)

        ready_at = store.player.ready_at
        if command.definition.requires_ready and not store.player.is_ready(store.elapsed_time):
            remaining = ready_at - store.elapsed_time
            raise NotReadyError(
                f"You are still recovering. Wait {remaining} more seconds.",
                ready_at=ready_at,
                elapsed_time=store.elapsed_time,
                command=command.verb,
            )

    def execute(self, command: Command) -> CommandResponse:
        """Execute a command and report what happened.

        Raises:
            InvalidGameStateError: If no handler is registered for the
                command's handler ID.
        """
        handler = get_handler(command.definition.handler_id)
        if handler is None:
            raise InvalidGameStateError(f"No handler registered for '{command.definition.handler_id}'")

        try:
            self.validate_context(command)
            result = handler(command, self._context)
        except ActionValidationError as e:
            logger.debug("Command rejected", verb=command.verb, reason=e.message)
            return self._response(success=False, messages=[e.message])

        time_spent = result.time_spent if result.time_spent is not None else command.time_cost
        messages = list(result.messages)
        due_events = self.store.advance_time(time_spent)
        self.store.record_turn()
        for event_name in due_events:
            messages.extend(run_time_event(event_name, self.store, self.settings))

        logger.info(
            "Command executed",
            verb=command.verb,
            time_spent=time_spent,
            elapsed_time=self.store.elapsed_time,
            turn=self.store.turn,
        )
        return self._response(
            success=True,
            messages=messages,
            time_spent=time_spent,
            location_changed=result.location_changed,
        )

    def _response(
        self,
        *,
        success: bool,
        messages: list[str],
        time_spent: int = 0,
        location_changed: bool = False,
    ) -> CommandResponse:
        return CommandResponse(
            success=success,
            messages=messages,
            elapsed_time=self.store.elapsed_time,
            time_spent=time_spent,
            location_changed=location_changed,
            game_over=self.store.game_over,
        )


__all__ = ["GAME_OVER_MESSAGE", "CommandResponse", "CommandExecutor"]
