"""Component models composed into players and monsters.

Components are small data containers attached to entities:

    StatsComponent: Ability scores with a modifier helper.
    SkillsComponent: Trainable skill ranks.
    HealthComponent: Current and maximum health.
    InventoryComponent: Carried items, equipment slots and carry limit.

Entities hold components rather than inheriting behaviour, so the combat
and inventory systems can work on any entity that carries the pieces
they need.
"""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from dungeon_engine.core.constants import DEFAULT_ABILITY_SCORE
from dungeon_engine.core.exceptions import ContractViolationError
from dungeon_engine.models.enums import Ability, EquipmentSlot, Skill
from dungeon_engine.models.items import Item


# =============================================================================
# Base Component
# =============================================================================


class Component(BaseModel):
    """Base class for all components."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",
    )


# =============================================================================
# Core Components
# =============================================================================


class StatsComponent(Component):
    """Ability scores.

    Scores have no upper bound; strength potions stack.
    """

    strength: int = Field(default=DEFAULT_ABILITY_SCORE, ge=1, description="Physical power")
    dexterity: int = Field(default=DEFAULT_ABILITY_SCORE, ge=1, description="Agility and reflexes")
    intelligence: int = Field(default=DEFAULT_ABILITY_SCORE, ge=1, description="Reasoning")
    constitution: int = Field(default=DEFAULT_ABILITY_SCORE, ge=1, description="Toughness")

    @staticmethod
    def calc_modifier(score: int) -> int:
        """Calculate ability modifier from score."""
        return (score - 10) // 2

    def modifier(self, ability: Ability) -> int:
        return self.calc_modifier(getattr(self, ability.value))

    def boost(self, ability: Ability, amount: int) -> int:
        """Raise an ability score and return the new value."""
        new_value = getattr(self, ability.value) + amount
        setattr(self, ability.value, new_value)
        return new_value


class SkillsComponent(Component):
    """Skill ranks, all starting at zero."""

    combat: int = Field(default=0, ge=0)
    magic: int = Field(default=0, ge=0)
    stealth: int = Field(default=0, ge=0)
    perception: int = Field(default=0, ge=0)

    def get(self, skill: Skill) -> int:
        return getattr(self, skill.value)

    def improve(self, skill: Skill, amount: int = 1) -> int:
        """Raise a skill rank and return the new rank."""
        new_value = self.get(skill) + amount
        setattr(self, skill.value, new_value)
        return new_value


class HealthComponent(Component):
    """Current and maximum health.

    ``current`` always stays within ``[0, maximum]``; damage and healing
    clamp rather than fail.
    """

    current: int = Field(default=100, ge=0, description="Current health")
    maximum: int = Field(default=100, ge=1, description="Maximum health")

    @model_validator(mode="after")
    def validate_current_within_maximum(self) -> Self:
        if self.current > self.maximum:
            raise ValueError(f"current health {self.current} exceeds maximum {self.maximum}")
        return self

    @computed_field(description="Whether the entity is alive")
    @property
    def is_alive(self) -> bool:
        return self.current > 0

    def apply_damage(self, amount: int) -> int:
        """Apply damage and return the health actually lost."""
        if amount <= 0:
            return 0
        actual = min(self.current, amount)
        self.current -= actual
        return actual

    def apply_healing(self, amount: int) -> int:
        """Apply healing and return the health actually restored."""
        if amount <= 0:
            return 0
        before = self.current
        self.current = min(self.maximum, self.current + amount)
        return self.current - before

    def raise_maximum(self, amount: int) -> None:
        self.maximum += amount

    def restore_full(self) -> None:
        self.current = self.maximum


def _empty_equipment() -> dict[EquipmentSlot, str | None]:
    return {slot: None for slot in EquipmentSlot}


class InventoryComponent(Component):
    """Carried items and equipment.

    Equipment slots hold item IDs; the items themselves stay in ``items``
    and carry an ``equipped`` flag.
    """

    items: list[Item] = Field(default_factory=list)
    equipment: dict[EquipmentSlot, str | None] = Field(default_factory=_empty_equipment)
    max_carry_weight: float = Field(default=50.0, gt=0)

    @computed_field(description="Total weight of carried items")
    @property
    def current_weight(self) -> float:
        return sum(item.weight for item in self.items)

    def find_item(self, item_id: str) -> Item | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def find_by_name(self, name: str) -> Item | None:
        """Find an item by name, exact match first, then partial match.

        Matching is case-insensitive.
        """
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

    def get_equipped(self, slot: EquipmentSlot) -> Item | None:
        item_id = self.equipment.get(slot)
        if item_id is None:
            return None
        return self.find_item(item_id)

    def add_item(self, item: Item) -> None:
        self.items.append(item)

    def remove_item(self, item_id: str) -> Item | None:
        """Remove an item, clearing its equipment slot if it was equipped."""
        for index, item in enumerate(self.items):
            if item.id == item_id:
                if item.equipped and item.slot is not None:
                    self.equipment[item.slot] = None
                    item.equipped = False
                return self.items.pop(index)
        return None

    def equip(self, item: Item) -> Item | None:
        """Equip a carried item and return whatever it replaced."""
        if item.slot is None:
            raise ContractViolationError(f"Item {item.name!r} has no equipment slot", field_name="slot")
        previous = self.get_equipped(item.slot)
        if previous is not None:
            previous.equipped = False
        self.equipment[item.slot] = item.id
        item.equipped = True
        return previous

    def unequip(self, slot: EquipmentSlot) -> Item | None:
        item = self.get_equipped(slot)
        self.equipment[slot] = None
        if item is not None:
            item.equipped = False
        return item


__all__ = [
    "Component",
    "StatsComponent",
    "SkillsComponent",
    "HealthComponent",
    "InventoryComponent",
]
