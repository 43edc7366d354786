"""Room construction shared by both dungeon layouts."""

from __future__ import annotations

from dungeon_engine.engine.random_selection import random_element
from dungeon_engine.generation.loot import generate_room_items
from dungeon_engine.generation.templates import OBJECT_DESCRIPTIONS, ROOM_DESCRIPTIONS
from dungeon_engine.models.dungeon import Room
from dungeon_engine.models.enums import RoomType


ENTRANCE_ROOM_ID = "entrance"

_SPECIAL_ROOM_NAMES = {
    RoomType.ENTRANCE: "Dungeon Entrance",
    RoomType.LAIR: "Monster Lair",
}


def random_room_description(room_type: RoomType) -> str:
    descriptions = ROOM_DESCRIPTIONS.get(room_type) or ROOM_DESCRIPTIONS[RoomType.CHAMBER]
    return random_element(descriptions)


def random_object_description() -> str:
    category = random_element(list(OBJECT_DESCRIPTIONS))
    return random_element(OBJECT_DESCRIPTIONS[category])


def room_name(room_type: RoomType) -> str:
    return _SPECIAL_ROOM_NAMES.get(room_type, room_type.value.capitalize())


def build_room(room_id: str, room_type: RoomType, difficulty: int) -> Room:
    """Create a furnished room.

    The entrance gets only a description; every other room also gets a
    scenery detail and a roll for items.
    """
    if room_type == RoomType.ENTRANCE:
        return Room(
            id=room_id,
            name=room_name(room_type),
            type=room_type,
            description=random_room_description(room_type),
        )
    return Room(
        id=room_id,
        name=room_name(room_type),
        type=room_type,
        description=random_room_description(room_type),
        detail=random_object_description(),
        items=generate_room_items(difficulty),
    )


__all__ = [
    "ENTRANCE_ROOM_ID",
    "random_room_description",
    "random_object_description",
    "room_name",
    "build_room",
]
