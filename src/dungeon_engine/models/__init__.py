"""Pydantic V2 data model for the dungeon engine.

Submodules:
    enums: Enumeration types (Direction, RoomType, ItemType, ...)
    items: The Item tagged union
    components: Stats, Skills, Health and Inventory components
    entities: Player and Monster
    dungeon: Room and Dungeon
    game_state: GameState and frozen snapshots

Example:
    >>> from dungeon_engine.models import Room, RoomType, WeaponItem
    >>> room = Room(id="entrance", name="Entrance", type=RoomType.ENTRANCE)
    >>> room.items.append(WeaponItem(name="Short Sword", damage="1d6"))
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from dungeon_engine.models.enums import (
    SIDE_ROOM_CELLS,
    Ability,
    CommandCategory,
    Direction,
    EquipmentSlot,
    GridCell,
    ItemType,
    PotionEffect,
    RoomType,
    Skill,
)

# =============================================================================
# Items
# =============================================================================
from dungeon_engine.models.items import (
    ArmorItem,
    BaseItem,
    Item,
    KeyItem,
    PotionItem,
    TreasureItem,
    WeaponItem,
    item_from_dict,
)

# =============================================================================
# Components
# =============================================================================
from dungeon_engine.models.components import (
    Component,
    HealthComponent,
    InventoryComponent,
    SkillsComponent,
    StatsComponent,
)

# =============================================================================
# Entities
# =============================================================================
from dungeon_engine.models.entities import (
    Combatant,
    Monster,
    Player,
    create_player,
    require_stats,
)

# =============================================================================
# Dungeon and State
# =============================================================================
from dungeon_engine.models.dungeon import Dungeon, Room, connect_rooms
from dungeon_engine.models.game_state import (
    GameSnapshot,
    GameState,
    ItemSnapshot,
    MonsterSnapshot,
    PlayerSnapshot,
    RoomSnapshot,
    TimedEvent,
)


__all__ = [
    # Enums
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
    # Items
    "BaseItem",
    "WeaponItem",
    "ArmorItem",
    "PotionItem",
    "TreasureItem",
    "KeyItem",
    "Item",
    "item_from_dict",
    # Components
    "Component",
    "StatsComponent",
    "SkillsComponent",
    "HealthComponent",
    "InventoryComponent",
    # Entities
    "Combatant",
    "Player",
    "Monster",
    "require_stats",
    "create_player",
    # Dungeon
    "Room",
    "Dungeon",
    "connect_rooms",
    # State
    "TimedEvent",
    "GameState",
    "GameSnapshot",
    "PlayerSnapshot",
    "RoomSnapshot",
    "ItemSnapshot",
    "MonsterSnapshot",
]
