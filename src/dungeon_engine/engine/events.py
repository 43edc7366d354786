"""Time-triggered events.

Events are registered by name with the ``@time_event`` decorator and
scheduled on the game state with an interval. After every command the
executor advances the clock and runs each event whose threshold was
crossed, collecting the narration it produces.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from dungeon_engine.core.config import GameSettings
from dungeon_engine.core.exceptions import InvalidGameStateError
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.random_selection import chance, random_element
from dungeon_engine.engine.state import GameStateStore
from dungeon_engine.generation.monsters import generate_monster


logger = get_logger(__name__)

EventHandler = Callable[[GameStateStore, GameSettings], list[str]]

MONSTER_REGENERATION = "monster_regeneration"
WANDERING_MONSTER = "wandering_monster"


@dataclass(frozen=True)
class TimeEventDefinition:
    name: str
    handler: EventHandler


_event_registry: dict[str, TimeEventDefinition] = {}


def time_event(name: str) -> Callable[[EventHandler], EventHandler]:
    """Decorator registering a function as the handler of a named event."""

    def decorator(func: EventHandler) -> EventHandler:
        _event_registry[name] = TimeEventDefinition(name=name, handler=func)
        return func

    return decorator


def get_time_event(name: str) -> TimeEventDefinition | None:
    return _event_registry.get(name)


def get_all_time_events() -> list[TimeEventDefinition]:
    return list(_event_registry.values())


def run_time_event(name: str, store: GameStateStore, settings: GameSettings) -> list[str]:
    """Fire one due event.

    Raises:
        InvalidGameStateError: If the state schedules an unknown event.
    """
    definition = get_time_event(name)
    if definition is None:
        raise InvalidGameStateError(f"Unknown time event: {name}")
    messages = definition.handler(store, settings)
    logger.debug("Time event fired", event_name=name, elapsed_time=store.elapsed_time)
    return messages


def schedule_default_events(store: GameStateStore, settings: GameSettings) -> None:
    store.schedule_event(MONSTER_REGENERATION, settings.regeneration_interval)
    store.schedule_event(WANDERING_MONSTER, settings.spawn_interval)


# =============================================================================
# Built-in Events
# =============================================================================


@time_event(MONSTER_REGENERATION)
def regenerate_monsters(store: GameStateStore, settings: GameSettings) -> list[str]:
    """Wounded monsters everywhere recover a little health. Silent."""
    healed = 0
    for monster in store.living_monsters():
        healed += store.heal_monster(monster, settings.regeneration_amount)
    if healed:
        logger.debug("Monsters regenerated", total_healed=healed)
    return []


@time_event(WANDERING_MONSTER)
def spawn_wandering_monster(store: GameStateStore, settings: GameSettings) -> list[str]:
    """Maybe place a new monster in an empty room away from the player."""
    if not chance(settings.spawn_chance):
        return []

    candidates = [
        room.id
        for room in store.dungeon.rooms.values()
        if room.id != store.current_room.id and not room.living_monsters
    ]
    room_id = random_element(candidates)
    if room_id is None:
        return []

    store.add_monster(room_id, generate_monster(store.dungeon.difficulty))
    return ["You hear something stirring in the distance."]


__all__ = [
    "EventHandler",
    "MONSTER_REGENERATION",
    "WANDERING_MONSTER",
    "TimeEventDefinition",
    "time_event",
    "get_time_event",
    "get_all_time_events",
    "run_time_event",
    "schedule_default_events",
]
