"""Game state and the read-only snapshots handed to the presentation layer.

``GameState`` is the single mutable aggregate of a session. It is only
changed through ``GameStateStore``; everything outside the engine sees
frozen ``GameSnapshot`` copies instead.
"""

from __future__ import annotations

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dungeon_engine.models.dungeon import Dungeon, Room
from dungeon_engine.models.entities import Monster, Player
from dungeon_engine.models.items import Item


# =============================================================================
# Mutable State
# =============================================================================


class TimedEvent(BaseModel):
    """A recurring event fired by game time.

    Attributes:
        name: Registered event handler name.
        interval: Seconds between firings.
        next_at: Game time of the next firing.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    name: str
    interval: int = Field(ge=1)
    next_at: int = Field(ge=0)


class GameState(BaseModel):
    """Everything a session knows about the world.

    Attributes:
        player: The player character.
        dungeon: The dungeon being explored.
        current_room_id: Room the player stands in.
        elapsed_time: Game seconds since the session started.
        turn: Number of commands that consumed time.
        flags: Free-form progress flags (``game_over`` and the like).
        events: Scheduled time events.
    """

    model_config = ConfigDict(validate_assignment=True, extra="ignore")

    player: Player
    dungeon: Dungeon
    current_room_id: str
    elapsed_time: int = Field(default=0, ge=0)
    turn: int = Field(default=0, ge=0)
    flags: dict[str, Any] = Field(default_factory=dict)
    events: list[TimedEvent] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_location(self) -> Self:
        if self.current_room_id not in self.dungeon.rooms:
            raise ValueError(f"current room {self.current_room_id} is not in the dungeon")
        return self

    @property
    def current_room(self) -> Room:
        return self.dungeon.get_room(self.current_room_id)

    @property
    def game_over(self) -> bool:
        return bool(self.flags.get("game_over")) or not self.player.is_alive


# =============================================================================
# Snapshots
# =============================================================================


class Snapshot(BaseModel):
    """Base for frozen snapshot records."""

    model_config = ConfigDict(frozen=True, extra="ignore")


class ItemSnapshot(Snapshot):
    """Flat record of any item kind.

    Fields that belong to other kinds stay ``None``.
    """

    id: str
    name: str
    type: str
    weight: float
    value: int
    description: str
    takeable: bool
    slot: str | None
    equipable: bool
    equipped: bool
    damage: str | None = None
    attack_bonus: int | None = None
    protection: int | None = None
    effect: str | None = None
    power: int | None = None

    @classmethod
    def from_item(cls, item: Item) -> ItemSnapshot:
        return cls.model_validate(item.model_dump(mode="json"))


class MonsterSnapshot(Snapshot):
    id: str
    name: str
    monster_type: str
    level: int
    health: int
    max_health: int

    @classmethod
    def from_monster(cls, monster: Monster) -> MonsterSnapshot:
        return cls(
            id=monster.id,
            name=monster.name,
            monster_type=monster.monster_type,
            level=monster.level,
            health=monster.health.current,
            max_health=monster.health.maximum,
        )


class RoomSnapshot(Snapshot):
    id: str
    name: str
    type: str
    description: str
    detail: str
    exits: dict[str, str]
    items: tuple[ItemSnapshot, ...]
    monsters: tuple[MonsterSnapshot, ...]
    visited: bool

    @classmethod
    def from_room(cls, room: Room) -> RoomSnapshot:
        return cls(
            id=room.id,
            name=room.name,
            type=str(room.type),
            description=room.description,
            detail=room.detail,
            exits={str(direction): target for direction, target in room.exits.items()},
            items=tuple(ItemSnapshot.from_item(item) for item in room.items),
            monsters=tuple(MonsterSnapshot.from_monster(m) for m in room.living_monsters),
            visited=room.visited,
        )


class PlayerSnapshot(Snapshot):
    name: str
    level: int
    experience: int
    experience_to_next_level: int
    health: int
    max_health: int
    stats: dict[str, int]
    skills: dict[str, int]
    inventory: tuple[ItemSnapshot, ...]
    equipment: dict[str, str | None]
    current_weight: float
    max_carry_weight: float
    ready_at: int

    @classmethod
    def from_player(cls, player: Player) -> PlayerSnapshot:
        return cls(
            name=player.name,
            level=player.level,
            experience=player.experience,
            experience_to_next_level=player.experience_to_next_level,
            health=player.health.current,
            max_health=player.health.maximum,
            stats=player.stats.model_dump() if player.stats is not None else {},
            skills=player.skills.model_dump(),
            inventory=tuple(ItemSnapshot.from_item(item) for item in player.inventory.items),
            equipment={str(slot): item_id for slot, item_id in player.inventory.equipment.items()},
            current_weight=player.inventory.current_weight,
            max_carry_weight=player.inventory.max_carry_weight,
            ready_at=player.ready_at,
        )


class GameSnapshot(Snapshot):
    """Read-only view of a session after a turn."""

    dungeon_name: str
    depth: int
    player: PlayerSnapshot
    room: RoomSnapshot
    elapsed_time: int
    turn: int
    game_over: bool
    visited_rooms: tuple[str, ...]

    @classmethod
    def from_state(cls, state: GameState) -> GameSnapshot:
        return cls(
            dungeon_name=state.dungeon.name,
            depth=state.dungeon.depth,
            player=PlayerSnapshot.from_player(state.player),
            room=RoomSnapshot.from_room(state.current_room),
            elapsed_time=state.elapsed_time,
            turn=state.turn,
            game_over=state.game_over,
            visited_rooms=tuple(room.id for room in state.dungeon.rooms.values() if room.visited),
        )


__all__ = [
    "TimedEvent",
    "GameState",
    "Snapshot",
    "ItemSnapshot",
    "MonsterSnapshot",
    "RoomSnapshot",
    "PlayerSnapshot",
    "GameSnapshot",
]
