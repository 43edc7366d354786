"""Combat resolution.

Combat is a series of independent rounds. Each round is a function of
the two participants' current stats plus dice, and its only side effect
is damage applied to the defender's health.

All probability resolution goes through ``roll_dice`` (d20 library).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from dungeon_engine.core.constants import (
    ATTACK_DIE,
    BASE_DEFENSE,
    COMBAT_SKILL_DIVISOR,
    CRITICAL_DAMAGE_MULTIPLIER,
    HIGHER_LEVEL_XP_BONUS,
    LOWER_LEVEL_THRESHOLD,
    LOWER_LEVEL_XP_MULTIPLIER,
    MINIMUM_DAMAGE,
    NATURAL_CRITICAL,
    UNARMED_DAMAGE,
    UNARMED_NAME,
)
from dungeon_engine.core.exceptions import CombatError
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.random_selection import roll_dice
from dungeon_engine.generation.monsters import generate_monster
from dungeon_engine.models.entities import Combatant, Monster, Player, require_stats
from dungeon_engine.models.enums import EquipmentSlot
from dungeon_engine.models.items import ArmorItem, WeaponItem


logger = get_logger(__name__)

DEFAULT_MONSTER_EXPERIENCE = 10


# =============================================================================
# Result Records
# =============================================================================


@dataclass
class AttackRoll:
    """Breakdown of an attack roll.

    Attributes:
        roll: The natural d20 result.
        strength_mod: Attacker's strength modifier.
        weapon_bonus: Equipped weapon's attack bonus.
        skill_bonus: Combat skill bonus.
        total: Sum of all of the above.
        critical: True on a natural 20.
    """

    roll: int
    strength_mod: int
    weapon_bonus: int
    skill_bonus: int
    total: int
    critical: bool


@dataclass
class Defense:
    base_defense: int
    dexterity_mod: int
    armor_bonus: int
    total: int


@dataclass
class Damage:
    weapon: str
    damage_dice: str
    damage_roll: int
    strength_mod: int
    critical: bool
    total: int


@dataclass
class CombatRoundResult:
    """Outcome of one attacker-versus-defender round."""

    attacker_name: str
    defender_name: str
    hit: bool
    critical: bool
    attack_roll: AttackRoll
    defense: Defense
    damage: Damage | None
    defender_health: int
    defender_alive: bool


@dataclass
class ExperienceResult:
    xp_awarded: int
    leveled_up: bool


# =============================================================================
# Equipment Lookups
# =============================================================================


def _equipped_weapon(entity: Combatant) -> WeaponItem | None:
    item = entity.inventory.get_equipped(EquipmentSlot.WEAPON)
    return item if isinstance(item, WeaponItem) else None


def _equipped_armor(entity: Combatant) -> ArmorItem | None:
    item = entity.inventory.get_equipped(EquipmentSlot.ARMOR)
    return item if isinstance(item, ArmorItem) else None


def _combat_skill(entity: Combatant) -> int:
    if isinstance(entity, Player):
        return entity.skills.combat
    return 0


# =============================================================================
# Round Mechanics
# =============================================================================


def calculate_attack_roll(attacker: Combatant) -> AttackRoll:
    """Roll to hit: 1d20 + strength mod + weapon bonus + combat skill / 5.

    Raises:
        ContractViolationError: If the attacker has no stat block.
    """
    stats = require_stats(attacker)
    roll = roll_dice(ATTACK_DIE)
    strength_mod = stats.calc_modifier(stats.strength)
    weapon = _equipped_weapon(attacker)
    weapon_bonus = weapon.attack_bonus if weapon is not None else 0
    skill_bonus = _combat_skill(attacker) // COMBAT_SKILL_DIVISOR

    return AttackRoll(
        roll=roll,
        strength_mod=strength_mod,
        weapon_bonus=weapon_bonus,
        skill_bonus=skill_bonus,
        total=roll + strength_mod + weapon_bonus + skill_bonus,
        critical=roll == NATURAL_CRITICAL,
    )


def calculate_defense(defender: Combatant) -> Defense:
    """Defense: 10 + dexterity mod + armor protection.

    Raises:
        ContractViolationError: If the defender has no stat block.
    """
    stats = require_stats(defender)
    dexterity_mod = stats.calc_modifier(stats.dexterity)
    armor = _equipped_armor(defender)
    armor_bonus = armor.protection if armor is not None else 0

    return Defense(
        base_defense=BASE_DEFENSE,
        dexterity_mod=dexterity_mod,
        armor_bonus=armor_bonus,
        total=BASE_DEFENSE + dexterity_mod + armor_bonus,
    )


def calculate_damage(attacker: Combatant, critical: bool = False) -> Damage:
    """Roll damage for a hit.

    The weapon's dice (1d4 unarmed) are rolled once and the rolled value
    doubled on a critical, then the strength modifier is added. A hit
    always does at least 1 damage.

    Raises:
        ContractViolationError: If the attacker has no stat block.
    """
    stats = require_stats(attacker)
    weapon = _equipped_weapon(attacker)
    damage_dice = weapon.damage if weapon is not None else UNARMED_DAMAGE
    weapon_name = weapon.name if weapon is not None else UNARMED_NAME

    damage_roll = roll_dice(damage_dice)
    if critical:
        damage_roll *= CRITICAL_DAMAGE_MULTIPLIER
    strength_mod = stats.calc_modifier(stats.strength)

    return Damage(
        weapon=weapon_name,
        damage_dice=damage_dice,
        damage_roll=damage_roll,
        strength_mod=strength_mod,
        critical=critical,
        total=max(MINIMUM_DAMAGE, damage_roll + strength_mod),
    )


def process_combat_round(attacker: Combatant, defender: Combatant) -> CombatRoundResult:
    """Resolve one attack of ``attacker`` against ``defender``.

    The attack hits when its total meets the defense or on a natural 20.
    Damage is applied to the defender, whose health never drops below 0.

    Raises:
        CombatError: If either combatant is already defeated.
    """
    for combatant in (attacker, defender):
        if not combatant.health.is_alive:
            raise CombatError(f"{combatant.name} is already defeated", combatant=combatant.name)

    attack_roll = calculate_attack_roll(attacker)
    defense = calculate_defense(defender)
    hit = attack_roll.total >= defense.total or attack_roll.critical

    damage = None
    if hit:
        damage = calculate_damage(attacker, attack_roll.critical)
        defender.health.apply_damage(damage.total)

    logger.debug(
        "Combat round resolved",
        attacker=attacker.name,
        defender=defender.name,
        roll=attack_roll.roll,
        attack_total=attack_roll.total,
        defense_total=defense.total,
        hit=hit,
        damage=damage.total if damage else 0,
    )

    return CombatRoundResult(
        attacker_name=attacker.name,
        defender_name=defender.name,
        hit=hit,
        critical=attack_roll.critical,
        attack_roll=attack_roll,
        defense=defense,
        damage=damage,
        defender_health=defender.health.current,
        defender_alive=defender.health.is_alive,
    )


def describe_combat_round(result: CombatRoundResult) -> list[str]:
    """Narrate a combat round as plain sentences."""
    if not result.hit or result.damage is None:
        return [f"{result.attacker_name} misses {result.defender_name}!"]

    if result.critical:
        opening = (
            f"{result.attacker_name} lands a critical hit on {result.defender_name} "
            f"with {result.damage.weapon}!"
        )
    else:
        opening = f"{result.attacker_name} hits {result.defender_name} with {result.damage.weapon}."

    messages = [opening, f"{result.defender_name} takes {result.damage.total} damage."]
    if result.defender_alive:
        messages.append(f"{result.defender_name} has {result.defender_health} health remaining.")
    else:
        messages.append(f"{result.defender_name} has been defeated!")
    return messages


# =============================================================================
# Rewards
# =============================================================================


def experience_multiplier(player_level: int, monster_level: int) -> float:
    level_diff = monster_level - player_level
    if level_diff > 0:
        return 1.0 + level_diff * HIGHER_LEVEL_XP_BONUS
    if level_diff < -LOWER_LEVEL_THRESHOLD:
        return LOWER_LEVEL_XP_MULTIPLIER
    return 1.0


def award_experience(player: Player, monster: Monster) -> ExperienceResult:
    """Grant experience for a defeated monster.

    Higher-level monsters are worth 20% more per level of difference;
    monsters more than two levels below the player are worth half. The
    award is floored and may trigger one or more level ups.
    """
    base_xp = monster.experience or DEFAULT_MONSTER_EXPERIENCE
    xp_awarded = math.floor(base_xp * experience_multiplier(player.level, monster.level))
    leveled_up = player.add_experience(xp_awarded)

    logger.info(
        "Experience awarded",
        monster=monster.name,
        xp=xp_awarded,
        leveled_up=leveled_up,
        level=player.level,
    )
    return ExperienceResult(xp_awarded=xp_awarded, leveled_up=leveled_up)


__all__ = [
    # Results
    "AttackRoll",
    "Defense",
    "Damage",
    "CombatRoundResult",
    "ExperienceResult",
    # Mechanics
    "calculate_attack_roll",
    "calculate_defense",
    "calculate_damage",
    "process_combat_round",
    "describe_combat_round",
    # Monsters and rewards
    "generate_monster",
    "experience_multiplier",
    "award_experience",
]
