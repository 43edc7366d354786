"""Monster generation scaled by difficulty."""

from __future__ import annotations

from dungeon_engine.core.constants import (
    EXPERIENCE_PER_DIFFICULTY,
    MONSTER_BASE_HEALTH,
    MONSTER_HEALTH_PER_DIFFICULTY,
)
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.random_selection import random_element
from dungeon_engine.generation.templates import MONSTER_ADJECTIVES, MONSTER_ARCHETYPES
from dungeon_engine.models.components import HealthComponent, InventoryComponent, StatsComponent
from dungeon_engine.models.entities import Monster
from dungeon_engine.models.items import WeaponItem


logger = get_logger(__name__)

MONSTER_MINOR_ABILITY = 8


def generate_monster(difficulty: int = 1) -> Monster:
    """Create a random monster scaled to ``difficulty``.

    Health is ``20 + 10 * difficulty``, strength ``10 + difficulty // 2``
    and dexterity ``10 + difficulty // 3``, each shifted by the chosen
    archetype. The monster wields equipped claws whose damage die and
    attack bonus grow with difficulty, and is worth ``10 * difficulty``
    experience.

    Args:
        difficulty: Difficulty level, at least 1.

    Returns:
        A new Monster at level ``difficulty``.
    """
    difficulty = max(1, difficulty)
    base_health = MONSTER_BASE_HEALTH + difficulty * MONSTER_HEALTH_PER_DIFFICULTY
    base_strength = 10 + difficulty // 2
    base_dexterity = 10 + difficulty // 3

    archetype, health_mod, strength_mod, dexterity_mod = random_element(MONSTER_ARCHETYPES)
    adjective = random_element(MONSTER_ADJECTIVES)
    name = f"{adjective} {archetype}"
    health = base_health + health_mod

    claws = WeaponItem(
        name="Claws",
        damage=f"1d{4 + difficulty // 2}",
        attack_bonus=difficulty // 2,
        takeable=False,
        description="Natural weapons.",
    )
    inventory = InventoryComponent(items=[claws])
    inventory.equip(claws)

    monster = Monster(
        name=name,
        monster_type=archetype,
        description=f"A {adjective.lower()} {archetype.lower()} watches you with hostile eyes.",
        level=difficulty,
        experience=EXPERIENCE_PER_DIFFICULTY * difficulty,
        stats=StatsComponent(
            strength=base_strength + strength_mod,
            dexterity=base_dexterity + dexterity_mod,
            intelligence=MONSTER_MINOR_ABILITY,
            constitution=MONSTER_MINOR_ABILITY,
        ),
        health=HealthComponent(current=health, maximum=health),
        inventory=inventory,
    )
    logger.debug("Monster generated", name=monster.name, difficulty=difficulty, health=health)
    return monster


__all__ = ["generate_monster"]
