"""Room-graph dungeon generator.

Produces the playable room list: an entrance followed by rooms of
depth-weighted thematic types, chained together with reciprocal exits
and then cross-linked with a few extra connections.
"""

from __future__ import annotations

from dungeon_engine.core.constants import (
    BASE_ROOM_COUNT,
    EXTRA_CONNECTION_DIVISOR,
    ROOMS_PER_DEPTH,
)
from dungeon_engine.core.exceptions import GenerationError
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.random_selection import (
    WeightedChoice,
    chance,
    random_element,
    weighted_random,
)
from dungeon_engine.generation.monsters import generate_monster
from dungeon_engine.generation.rooms import ENTRANCE_ROOM_ID, build_room
from dungeon_engine.models.dungeon import Dungeon, Room, connect_rooms
from dungeon_engine.models.enums import RoomType


logger = get_logger(__name__)


def default_room_count(depth: int) -> int:
    return BASE_ROOM_COUNT + ROOMS_PER_DEPTH * depth


def room_type_weights(depth: int) -> list[WeightedChoice[RoomType]]:
    """Thematic room weights; the dangerous types grow with depth."""
    return [
        WeightedChoice(RoomType.CHAMBER, 10),
        WeightedChoice(RoomType.CORRIDOR, 8),
        WeightedChoice(RoomType.CAVERN, 5),
        WeightedChoice(RoomType.CRYPT, 3 + depth),
        WeightedChoice(RoomType.TREASURY, 2),
        WeightedChoice(RoomType.ARMORY, 3),
        WeightedChoice(RoomType.LIBRARY, 3),
        WeightedChoice(RoomType.PRISON, 2 + depth),
        WeightedChoice(RoomType.FORGE, 2),
        WeightedChoice(RoomType.RITUAL, 1 + depth),
        WeightedChoice(RoomType.LABORATORY, 1 + depth),
    ]


def _chain_rooms(rooms: list[Room]) -> None:
    """Link each room to the next through a random free direction."""
    for current, following in zip(rooms, rooms[1:]):
        direction = random_element(current.free_directions())
        connect_rooms(current, following, direction)


def _add_extra_connections(rooms: list[Room], attempts: int) -> int:
    """Try to cross-link non-adjacent rooms; returns how many were added.

    A pair is only linked when the first room has a free direction whose
    opposite is free on the second. Failed attempts are skipped, not
    retried.
    """
    candidates = [
        (i, j)
        for i in range(len(rooms))
        for j in range(len(rooms))
        if abs(i - j) > 1
    ]
    if not candidates:
        return 0

    added = 0
    for _ in range(attempts):
        i, j = random_element(candidates)
        first, second = rooms[i], rooms[j]
        if second.id in first.exits.values():
            continue
        usable = [
            direction
            for direction in first.free_directions()
            if direction.opposite not in second.exits
        ]
        if not usable:
            continue
        connect_rooms(first, second, random_element(usable))
        added += 1
    return added


def generate_dungeon(
    depth: int = 1,
    room_count: int | None = None,
    difficulty: int = 1,
    monster_chance: float = 0.0,
) -> Dungeon:
    """Generate a connected room-graph dungeon.

    Args:
        depth: Dungeon depth; shifts room type weights toward danger.
        room_count: Total rooms including the entrance. Defaults to
            ``5 + 2 * depth``.
        difficulty: Drives item categories and monster strength.
        monster_chance: Probability each non-entrance room holds a monster.

    Returns:
        A dungeon whose every room is reachable from the entrance.

    Raises:
        GenerationError: If ``room_count`` is below 1.
    """
    if room_count is None:
        room_count = default_room_count(depth)
    if room_count < 1:
        raise GenerationError(
            f"Room count must be at least 1, got {room_count}",
            details={"room_count": room_count},
        )

    weights = room_type_weights(depth)
    rooms = [build_room(ENTRANCE_ROOM_ID, RoomType.ENTRANCE, difficulty)]
    for index in range(1, room_count):
        room = build_room(f"room_{depth}_{index:02d}", weighted_random(weights), difficulty)
        if chance(monster_chance):
            room.monsters.append(generate_monster(difficulty))
        rooms.append(room)

    _chain_rooms(rooms)
    extra = _add_extra_connections(rooms, room_count // EXTRA_CONNECTION_DIVISOR)

    dungeon = Dungeon(
        name=f"Level {depth}",
        depth=depth,
        difficulty=difficulty,
        rooms={room.id: room for room in rooms},
        start_room_id=ENTRANCE_ROOM_ID,
    )
    logger.info(
        "Dungeon generated",
        depth=depth,
        difficulty=difficulty,
        rooms=len(rooms),
        extra_connections=extra,
    )
    return dungeon


__all__ = [
    "default_room_count",
    "room_type_weights",
    "generate_dungeon",
]
