"""Dungeon topology models: rooms and the dungeon that contains them."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dungeon_engine.core.exceptions import InvalidGameStateError
from dungeon_engine.models.entities import Monster
from dungeon_engine.models.enums import Direction, GridCell, RoomType
from dungeon_engine.models.items import Item


class Room(BaseModel):
    """A location in the dungeon.

    Exits map a direction to the ID of the neighbouring room; a dict
    guarantees at most one exit per direction.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
    )

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    type: RoomType
    description: str = Field(default="")
    detail: str = Field(default="", description="Extra text shown on 'look'")
    exits: dict[Direction, str] = Field(default_factory=dict)
    items: list[Item] = Field(default_factory=list)
    monsters: list[Monster] = Field(default_factory=list)
    visited: bool = Field(default=False)

    @model_validator(mode="after")
    def validate_no_self_exit(self) -> Self:
        for direction, target in self.exits.items():
            if target == self.id:
                raise ValueError(f"room {self.id} has an exit {direction} to itself")
        return self

    @property
    def living_monsters(self) -> list[Monster]:
        return [monster for monster in self.monsters if monster.is_alive]

    def free_directions(self) -> list[Direction]:
        return [direction for direction in Direction if direction not in self.exits]

    def find_item(self, name: str) -> Item | None:
        """Case-insensitive item lookup, exact name first then partial."""
        needle = name.strip().lower()
        if not needle:
            return None
        for item in self.items:
            if item.name.lower() == needle:
                return item
        for item in self.items:
            if needle in item.name.lower():
                return item
        return None

    def find_monster(self, name: str) -> Monster | None:
        """Find a living monster by name or archetype, partial match allowed."""
        needle = name.strip().lower()
        living = self.living_monsters
        if not needle:
            return living[0] if living else None
        for monster in living:
            if needle in (monster.name.lower(), monster.monster_type.lower()):
                return monster
        for monster in living:
            if needle in monster.name.lower():
                return monster
        return None


class Dungeon(BaseModel):
    """A generated dungeon.

    Attributes:
        name: Display name.
        depth: Depth the dungeon was generated for.
        difficulty: Difficulty the dungeon was generated for.
        rooms: Rooms keyed by ID.
        start_room_id: Room the player starts in.
        grid: Source grid when built by the grid generator.
    """

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
    )

    name: str = Field(default="The Dungeon")
    depth: int = Field(default=1, ge=1)
    difficulty: int = Field(default=1, ge=1)
    rooms: dict[str, Room] = Field(default_factory=dict)
    start_room_id: str
    grid: list[list[GridCell | None]] | None = Field(default=None)

    @model_validator(mode="after")
    def validate_topology(self) -> Self:
        """Check room keys, the start room and that every exit resolves."""
        for room_id, room in self.rooms.items():
            if room_id != room.id:
                raise ValueError(f"room keyed as {room_id} has id {room.id}")
            for direction, target in room.exits.items():
                if target not in self.rooms:
                    raise ValueError(f"exit {direction} of {room_id} leads to unknown room {target}")
        if self.start_room_id not in self.rooms:
            raise ValueError(f"start room {self.start_room_id} is not in the dungeon")
        return self

    def get_room(self, room_id: str) -> Room:
        """Look up a room.

        Raises:
            InvalidGameStateError: If no room has that ID.
        """
        room = self.rooms.get(room_id)
        if room is None:
            raise InvalidGameStateError(f"Unknown room: {room_id}", room_id=room_id)
        return room

    @property
    def start_room(self) -> Room:
        return self.get_room(self.start_room_id)

    @property
    def room_count(self) -> int:
        return len(self.rooms)


def connect_rooms(room_a: Room, room_b: Room, direction: Direction) -> None:
    """Link two rooms with reciprocal exits.

    ``direction`` leads from ``room_a`` to ``room_b``.
    """
    room_a.exits[direction] = room_b.id
    room_b.exits[direction.opposite] = room_a.id


__all__ = [
    "Room",
    "Dungeon",
    "connect_rooms",
]
