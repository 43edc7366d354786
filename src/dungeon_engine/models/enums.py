"""Enumeration types for the dungeon engine.

All enumerations are string enums so they serialize directly into the
snapshot records handed to the presentation layer.
"""

from __future__ import annotations

from enum import StrEnum


class Ability(StrEnum):
    """The four ability scores of an entity's stat block."""

    STRENGTH = "strength"
    DEXTERITY = "dexterity"
    INTELLIGENCE = "intelligence"
    CONSTITUTION = "constitution"


class Skill(StrEnum):
    """Trainable player skills."""

    COMBAT = "combat"
    MAGIC = "magic"
    STEALTH = "stealth"
    PERCEPTION = "perception"


class ItemType(StrEnum):
    """Item kinds; the discriminator of the Item union."""

    WEAPON = "weapon"
    ARMOR = "armor"
    POTION = "potion"
    TREASURE = "treasure"
    KEY = "key"


class EquipmentSlot(StrEnum):
    """Equipment slots carried by every combatant."""

    WEAPON = "weapon"
    ARMOR = "armor"
    ACCESSORY = "accessory"


class PotionEffect(StrEnum):
    """What drinking a potion does."""

    HEAL = "heal"
    STRENGTH = "strength"
    CURE = "cure"


class Direction(StrEnum):
    """Cardinal exit directions."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def opposite(self) -> Direction:
        """The direction leading back."""
        return _OPPOSITES[self]

    @property
    def offset(self) -> tuple[int, int]:
        """Grid offset as (dy, dx); north is towards row 0."""
        return _OFFSETS[self]

    @classmethod
    def from_text(cls, text: str) -> Direction | None:
        """Resolve 'north' or 'n' (any case) to a Direction, else None."""
        key = text.strip().lower()
        for direction in cls:
            if key in (direction.value, direction.value[0]):
                return direction
        return None


_OPPOSITES = {
    Direction.NORTH: Direction.SOUTH,
    Direction.SOUTH: Direction.NORTH,
    Direction.EAST: Direction.WEST,
    Direction.WEST: Direction.EAST,
}

_OFFSETS = {
    Direction.NORTH: (-1, 0),
    Direction.SOUTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}


class RoomType(StrEnum):
    """Thematic room types of the playable dungeon."""

    ENTRANCE = "entrance"
    CORRIDOR = "corridor"
    CHAMBER = "chamber"
    TREASURY = "treasury"
    ARMORY = "armory"
    LIBRARY = "library"
    RITUAL = "ritual"
    PRISON = "prison"
    CRYPT = "crypt"
    CAVERN = "cavern"
    FORGE = "forge"
    LABORATORY = "laboratory"
    LAIR = "lair"


class GridCell(StrEnum):
    """Cell values of the grid layout produced by build_map_matrix."""

    ENTRANCE = "entrance"
    BOSS = "boss"
    CORRIDOR = "corridor"
    MISC_ROOM = "miscRoom"
    ARMORY = "armory"
    TREASURE_ROOM = "treasureRoom"
    TRAP_ROOM = "trapRoom"
    ENEMY_ROOM = "enemyRoom"
    PUZZLE_ROOM = "puzzleRoom"


SIDE_ROOM_CELLS: tuple[GridCell, ...] = (
    GridCell.MISC_ROOM,
    GridCell.ARMORY,
    GridCell.TREASURE_ROOM,
    GridCell.TRAP_ROOM,
    GridCell.ENEMY_ROOM,
    GridCell.PUZZLE_ROOM,
)
"""Cell types a side branch may be filled with."""


class CommandCategory(StrEnum):
    """Handler categories used for precondition checks and help grouping."""

    MOVEMENT = "movement"
    INTERACTION = "interaction"
    COMBAT = "combat"
    SYSTEM = "system"


__all__ = [
    "Ability",
    "Skill",
    "ItemType",
    "EquipmentSlot",
    "PotionEffect",
    "Direction",
    "RoomType",
    "GridCell",
    "SIDE_ROOM_CELLS",
    "CommandCategory",
]
