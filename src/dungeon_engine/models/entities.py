"""Game entities: the player and monsters.

Player and Monster share no identity, only capabilities: each embeds the
same stat, health and inventory components, so combat and inventory
code can accept either one.
"""

from __future__ import annotations

import math
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, computed_field

from dungeon_engine.core.constants import (
    EXPERIENCE_THRESHOLD_GROWTH,
    LEVEL_UP_BASE_HEALTH,
    LEVEL_UP_CARRY_WEIGHT,
    STARTING_EXPERIENCE_THRESHOLD,
)
from dungeon_engine.core.exceptions import ContractViolationError
from dungeon_engine.core.logging import get_logger
from dungeon_engine.models.components import (
    HealthComponent,
    InventoryComponent,
    SkillsComponent,
    StatsComponent,
)


logger = get_logger(__name__)


_ENTITY_CONFIG = ConfigDict(
    validate_assignment=True,
    extra="ignore",
)


class Player(BaseModel):
    """The player character.

    ``stats`` is optional at the type level so that a malformed record can
    be loaded and then rejected by whichever system needs the stat block.

    Attributes:
        name: Display name.
        level: Character level, starting at 1.
        experience: Experience earned toward the next level.
        experience_to_next_level: Threshold for the next level up.
        stats: Ability scores.
        skills: Trainable skill ranks.
        health: Current and maximum health.
        inventory: Carried items and equipment.
        ready_at: Game time (seconds) before which the player cannot act.
    """

    model_config = _ENTITY_CONFIG

    id: str = "player"
    name: str = Field(default="Adventurer", min_length=1)
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    experience_to_next_level: int = Field(default=STARTING_EXPERIENCE_THRESHOLD, ge=1)
    stats: StatsComponent | None = Field(default_factory=StatsComponent)
    skills: SkillsComponent = Field(default_factory=SkillsComponent)
    health: HealthComponent = Field(default_factory=HealthComponent)
    inventory: InventoryComponent = Field(default_factory=InventoryComponent)
    ready_at: int = Field(default=0, ge=0)

    @computed_field(description="Whether the player is alive")
    @property
    def is_alive(self) -> bool:
        return self.health.is_alive

    def is_ready(self, elapsed_time: int) -> bool:
        return elapsed_time >= self.ready_at

    def add_experience(self, amount: int) -> bool:
        """Add experience, levelling up as many times as it covers.

        Returns:
            True if at least one level was gained.
        """
        if amount <= 0:
            return False
        self.experience += amount
        leveled = False
        while self.experience >= self.experience_to_next_level:
            self.level_up()
            leveled = True
        return leveled

    def level_up(self) -> None:
        """Advance one level.

        Subtracts the current threshold, grows the next one by 1.5x,
        raises maximum health by 10 plus half constitution, restores
        health to full and adds 5 carry capacity.
        """
        stats = require_stats(self)
        self.experience -= self.experience_to_next_level
        self.experience_to_next_level = math.floor(
            self.experience_to_next_level * EXPERIENCE_THRESHOLD_GROWTH
        )
        self.level += 1

        self.health.raise_maximum(LEVEL_UP_BASE_HEALTH + stats.constitution // 2)
        self.health.restore_full()
        self.inventory.max_carry_weight += LEVEL_UP_CARRY_WEIGHT

        logger.info(
            "Player leveled up",
            level=self.level,
            max_health=self.health.maximum,
            next_threshold=self.experience_to_next_level,
        )


class Monster(BaseModel):
    """A hostile creature.

    Attributes:
        monster_type: Archetype name (Goblin, Orc, ...).
        experience: Experience awarded for defeating it.
        inventory: Holds the monster's natural weapon, equipped.
    """

    model_config = _ENTITY_CONFIG

    id: str = Field(default_factory=lambda: f"monster_{uuid4().hex[:8]}")
    name: str = Field(min_length=1)
    monster_type: str = Field(default="Goblin")
    description: str = Field(default="")
    level: int = Field(default=1, ge=1)
    experience: int = Field(default=0, ge=0)
    stats: StatsComponent | None = Field(default_factory=StatsComponent)
    health: HealthComponent = Field(default_factory=HealthComponent)
    inventory: InventoryComponent = Field(default_factory=InventoryComponent)

    @computed_field(description="Whether the monster is alive")
    @property
    def is_alive(self) -> bool:
        return self.health.is_alive


Combatant = Player | Monster
"""Anything the combat resolver accepts."""


def require_stats(entity: Combatant) -> StatsComponent:
    """Return an entity's stat block, failing fast if it is missing.

    Raises:
        ContractViolationError: If the entity has no stats.
    """
    if entity.stats is None:
        raise ContractViolationError(
            f"{entity.name} has no stat block",
            field_name="stats",
        )
    return entity.stats


def create_player(
    name: str = "Adventurer",
    health: int = 100,
    max_carry_weight: float = 50.0,
    stats: dict[str, int] | None = None,
) -> Player:
    """Create a fresh level 1 player."""
    return Player(
        name=name,
        stats=StatsComponent(**(stats or {})),
        health=HealthComponent(current=health, maximum=health),
        inventory=InventoryComponent(max_carry_weight=max_carry_weight),
    )


__all__ = [
    "Player",
    "Monster",
    "Combatant",
    "require_stats",
    "create_player",
]
