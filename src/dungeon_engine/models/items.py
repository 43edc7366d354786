"""Item models.

Items form a tagged union on ``type``. Every item lives in exactly one
container at a time: a room's floor, the player's pack or a monster's
inventory. Moving an item between containers is done by the engine,
never by copying.
"""

from __future__ import annotations

from typing import Annotated, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field

from dungeon_engine.models.enums import EquipmentSlot, PotionEffect


DiceSpec = Annotated[str, Field(pattern=r"^\d+d\d+$", description="Dice notation like '1d6'")]


def _new_item_id() -> str:
    return f"item_{uuid4().hex[:8]}"


class BaseItem(BaseModel):
    """Fields shared by every item kind."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
    )

    id: str = Field(default_factory=_new_item_id, description="Unique item ID")
    name: str = Field(min_length=1, description="Display name")
    weight: float = Field(default=0.0, ge=0.0, description="Carry weight")
    value: int = Field(default=0, ge=0, description="Value in gold")
    description: str = Field(default="", description="Flavor text")
    takeable: bool = Field(default=True, description="Can be picked up")
    slot: EquipmentSlot | None = Field(default=None, description="Equipment slot if equipable")
    equipped: bool = Field(default=False, description="Currently worn or wielded")

    @computed_field(description="Whether the item can be equipped")
    @property
    def equipable(self) -> bool:
        return self.slot is not None


class WeaponItem(BaseItem):
    type: Literal["weapon"] = "weapon"
    slot: EquipmentSlot | None = EquipmentSlot.WEAPON
    damage: DiceSpec = Field(default="1d4", description="Damage dice")
    attack_bonus: int = Field(default=0, description="Bonus added to attack rolls")


class ArmorItem(BaseItem):
    type: Literal["armor"] = "armor"
    slot: EquipmentSlot | None = EquipmentSlot.ARMOR
    protection: int = Field(default=0, ge=0, description="Bonus added to defense")


class PotionItem(BaseItem):
    type: Literal["potion"] = "potion"
    effect: PotionEffect = Field(description="What drinking it does")
    power: int = Field(default=0, ge=0, description="Effect magnitude")


class TreasureItem(BaseItem):
    type: Literal["treasure"] = "treasure"


class KeyItem(BaseItem):
    type: Literal["key"] = "key"


Item = Annotated[
    WeaponItem | ArmorItem | PotionItem | TreasureItem | KeyItem,
    Field(discriminator="type"),
]
"""Any item, discriminated by its ``type`` field."""

_item_adapter: TypeAdapter[Item] = TypeAdapter(Item)


def item_from_dict(data: dict) -> Item:
    """Build the right item class from a plain dict with a ``type`` key."""
    return _item_adapter.validate_python(data)


__all__ = [
    "DiceSpec",
    "BaseItem",
    "WeaponItem",
    "ArmorItem",
    "PotionItem",
    "TreasureItem",
    "KeyItem",
    "Item",
    "item_from_dict",
]
