"""Procedural dungeon generation.

Two layouts are available:

    build_map_matrix / dungeon_from_grid: a square grid carved by a biased
        walk from an entrance to a boss, with side branches.
    generate_dungeon: an ordered room list chained by reciprocal exits
        with extra cross-links.

Example:
    >>> from dungeon_engine.generation import generate_dungeon
    >>> dungeon = generate_dungeon(depth=2, difficulty=1)
    >>> dungeon.start_room_id
    'entrance'
"""

from __future__ import annotations

from dungeon_engine.generation.dungeon_generator import (
    default_room_count,
    generate_dungeon,
    room_type_weights,
)
from dungeon_engine.generation.loot import (
    create_item,
    create_item_by_name,
    generate_loot,
    generate_room_items,
)
from dungeon_engine.generation.map_matrix import (
    build_map_matrix,
    dungeon_from_grid,
    find_cell,
)
from dungeon_engine.generation.monsters import generate_monster


__all__ = [
    # Room graph
    "generate_dungeon",
    "default_room_count",
    "room_type_weights",
    # Grid
    "build_map_matrix",
    "dungeon_from_grid",
    "find_cell",
    # Contents
    "generate_room_items",
    "generate_loot",
    "create_item",
    "create_item_by_name",
    "generate_monster",
]
