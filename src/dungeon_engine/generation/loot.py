"""Procedural item placement: room contents and monster drops."""

from __future__ import annotations

from dungeon_engine.core.constants import ROOM_ITEM_CHANCE, ROOM_ITEM_MAX, ROOM_ITEM_MIN
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.random_selection import (
    WeightedChoice,
    chance,
    random_element,
    random_int,
    weighted_random,
)
from dungeon_engine.generation.templates import ITEM_TEMPLATES
from dungeon_engine.models.enums import ItemType
from dungeon_engine.models.items import Item, item_from_dict


logger = get_logger(__name__)


def item_category_weights(difficulty: int) -> list[WeightedChoice[ItemType]]:
    """Category weights for generated items; keys only appear past difficulty 2."""
    return [
        WeightedChoice(ItemType.WEAPON, 3),
        WeightedChoice(ItemType.ARMOR, 2),
        WeightedChoice(ItemType.POTION, 4),
        WeightedChoice(ItemType.TREASURE, 5),
        WeightedChoice(ItemType.KEY, 1 if difficulty > 2 else 0),
    ]


def create_item(item_type: ItemType, template: dict | None = None) -> Item:
    """Instantiate an item from a template, picking one at random if not given."""
    if template is None:
        template = random_element(ITEM_TEMPLATES[item_type])
    return item_from_dict({"type": str(item_type), **template})


def create_item_by_name(name: str) -> Item | None:
    """Instantiate the template with the given name, or None if unknown."""
    for item_type, templates in ITEM_TEMPLATES.items():
        for template in templates:
            if template["name"].lower() == name.lower():
                return create_item(item_type, template)
    return None


def _random_item(difficulty: int) -> Item:
    item_type = weighted_random(item_category_weights(difficulty))
    return create_item(item_type)


def generate_room_items(difficulty: int) -> list[Item]:
    """Roll the contents of a room.

    With probability 0.3 the room gets one or two items; each item's
    category is a weighted draw and its template is uniform within the
    category.
    """
    if not chance(ROOM_ITEM_CHANCE):
        return []
    count = random_int(ROOM_ITEM_MIN, ROOM_ITEM_MAX)
    return [_random_item(difficulty) for _ in range(count)]


def generate_loot(difficulty: int) -> list[Item]:
    """Roll what a defeated monster drops: always one or two items."""
    count = random_int(ROOM_ITEM_MIN, ROOM_ITEM_MAX)
    items = [_random_item(difficulty) for _ in range(count)]
    logger.debug("Loot generated", difficulty=difficulty, items=[item.name for item in items])
    return items


__all__ = [
    "item_category_weights",
    "create_item",
    "create_item_by_name",
    "generate_room_items",
    "generate_loot",
]
