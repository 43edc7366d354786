"""Inventory system: weight limits, lookup, grouping and item transfer.

These functions work on plain item lists so the same rules apply to a
room floor, the player's pack or a monster's belongings.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from dungeon_engine.core.logging import get_logger
from dungeon_engine.models.enums import ItemType, PotionEffect
from dungeon_engine.models.items import ArmorItem, Item, PotionItem, WeaponItem


logger = get_logger(__name__)

MISC_CATEGORY = "misc"

POTION_EFFECT_DESCRIPTIONS = {
    PotionEffect.HEAL: "Restores health",
    PotionEffect.STRENGTH: "Increases strength",
    PotionEffect.CURE: "Cures poison",
}


@dataclass
class TransferResult:
    """Result of moving an item between two containers.

    Attributes:
        success: Whether the item moved.
        message: Player-facing outcome.
        item: The moved item, when successful.
    """

    success: bool
    message: str
    item: Item | None = None


def format_weight(weight: float) -> str:
    """Render a weight without float noise: 2.0 -> '2', 0.30000000000000004 -> '0.3'."""
    return f"{round(weight, 2):g}"


def calculate_total_weight(items: Sequence[Item]) -> float:
    return sum(item.weight for item in items)


def would_exceed_weight_limit(items: Sequence[Item], new_item: Item, max_weight: float) -> bool:
    """Check whether adding ``new_item`` would go over ``max_weight``."""
    return calculate_total_weight(items) + new_item.weight > max_weight


def organize_by_category(items: Sequence[Item]) -> dict[str, list[Item]]:
    """Group items by type, in a fixed category order.

    Returns an empty dict for an empty sequence; otherwise every category
    key is present, including ``misc`` for unknown types.
    """
    if not items:
        return {}

    categories: dict[str, list[Item]] = {str(item_type): [] for item_type in ItemType}
    categories[MISC_CATEGORY] = []
    for item in items:
        key = item.type if item.type in categories else MISC_CATEGORY
        categories[key].append(item)
    return categories


def find_item_by_name(
    items: Sequence[Item],
    name: str,
    prefer: Callable[[Item], bool] | None = None,
) -> Item | None:
    """Case-insensitive lookup; an exact name wins over a partial match.

    Args:
        items: Items to search.
        name: Full or partial item name.
        prefer: Optional test that breaks ties among equally good
            matches, e.g. picking an unequipped copy over an equipped one.

    Returns:
        The best match, or None.
    """
    needle = name.strip().lower()
    if not items or not needle:
        return None
    exact = [item for item in items if item.name.lower() == needle]
    partial = [item for item in items if needle in item.name.lower()]
    for matches in (exact, partial):
        if not matches:
            continue
        if prefer is not None:
            for item in matches:
                if prefer(item):
                    return item
        return matches[0]
    return None


def get_item_description(item: Item | None) -> str:
    """One-line summary of an item's name and properties."""
    if item is None:
        return "Nothing special."

    description = item.name
    if item.weight:
        description += f" (Weight: {format_weight(item.weight)})"
    if item.value:
        description += f" (Value: {item.value} gold)"

    if isinstance(item, WeaponItem):
        description += f" (Damage: {item.damage})"
    elif isinstance(item, ArmorItem) and item.protection:
        description += f" (Protection: {item.protection})"
    elif isinstance(item, PotionItem):
        effect = POTION_EFFECT_DESCRIPTIONS.get(item.effect, str(item.effect))
        description += f" (Effect: {effect})"

    if item.equipped:
        description += " [Equipped]"
    return description


def transfer_item(
    source: list[Item],
    destination: list[Item],
    item_id: str,
    max_weight: float | None = None,
) -> TransferResult:
    """Move an item from ``source`` to ``destination``.

    Args:
        source: Container currently holding the item.
        destination: Container receiving it.
        item_id: ID of the item to move.
        max_weight: Weight capacity of the destination, or None for unlimited.

    Returns:
        TransferResult describing the outcome. Neither list changes on failure.
    """
    for index, item in enumerate(source):
        if item.id == item_id:
            break
    else:
        return TransferResult(success=False, message="Item not found in source inventory.")

    if max_weight is not None and would_exceed_weight_limit(destination, item, max_weight):
        return TransferResult(success=False, message="That would exceed your weight limit.")

    source.pop(index)
    destination.append(item)
    logger.debug("Item transferred", item=item.name, item_id=item.id)
    return TransferResult(success=True, message=f"Transferred {item.name}.", item=item)


__all__ = [
    "TransferResult",
    "POTION_EFFECT_DESCRIPTIONS",
    "format_weight",
    "calculate_total_weight",
    "would_exceed_weight_limit",
    "organize_by_category",
    "find_item_by_name",
    "get_item_description",
    "transfer_item",
]
