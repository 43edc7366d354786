"""Tests for combat resolution.

Dice are forced through the ``force_rolls`` fixture so every outcome is
exact.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from dungeon_engine.core.exceptions import CombatError, ContractViolationError
from dungeon_engine.engine.combat import (
    award_experience,
    calculate_attack_roll,
    calculate_damage,
    calculate_defense,
    describe_combat_round,
    experience_multiplier,
    generate_monster,
    process_combat_round,
)
from dungeon_engine.generation.templates import MONSTER_ARCHETYPES
from dungeon_engine.models import (
    ArmorItem,
    EquipmentSlot,
    HealthComponent,
    Monster,
    Player,
    StatsComponent,
    WeaponItem,
)


ForceRolls = Callable[..., None]


def _arm(entity: Player | Monster, item: WeaponItem | ArmorItem) -> None:
    entity.inventory.add_item(item)
    entity.inventory.equip(item)


class TestAttackRoll:
    """Tests for calculate_attack_roll."""

    def test_components(self, sample_player: Player, force_rolls: ForceRolls) -> None:
        force_rolls(15)
        roll = calculate_attack_roll(sample_player)

        assert roll.roll == 15
        assert roll.strength_mod == 2
        assert roll.total == 17
        assert not roll.critical

    def test_weapon_and_skill_bonus(
        self, sample_player: Player, force_rolls: ForceRolls
    ) -> None:
        _arm(sample_player, WeaponItem(name="Fine Sword", damage="1d8", attack_bonus=1))
        sample_player.skills.combat = 10
        force_rolls(10)

        roll = calculate_attack_roll(sample_player)

        assert roll.weapon_bonus == 1
        assert roll.skill_bonus == 2
        assert roll.total == 10 + 2 + 1 + 2

    def test_monster_has_no_skill_bonus(self, sample_monster: Monster, force_rolls: ForceRolls) -> None:
        force_rolls(12)
        assert calculate_attack_roll(sample_monster).skill_bonus == 0

    def test_natural_twenty_is_critical(self, sample_player: Player, force_rolls: ForceRolls) -> None:
        force_rolls(20)
        assert calculate_attack_roll(sample_player).critical

    def test_missing_stats(self) -> None:
        with pytest.raises(ContractViolationError):
            calculate_attack_roll(Player(stats=None))


class TestDefense:
    """Tests for calculate_defense."""

    def test_base(self, sample_monster: Monster) -> None:
        assert calculate_defense(sample_monster).total == 10

    def test_dexterity_and_armor(self, sample_player: Player) -> None:
        _arm(sample_player, ArmorItem(name="Chainmail", protection=2, weight=20))
        defense = calculate_defense(sample_player)

        assert defense.dexterity_mod == 1
        assert defense.armor_bonus == 2
        assert defense.total == 13


class TestDamage:
    """Tests for calculate_damage."""

    def test_unarmed(self, sample_player: Player, force_rolls: ForceRolls) -> None:
        force_rolls(3)
        damage = calculate_damage(sample_player)

        assert damage.damage_dice == "1d4"
        assert damage.weapon == "unarmed strike"
        assert damage.total == 5

    def test_weapon_dice(self, sample_player: Player, force_rolls: ForceRolls) -> None:
        _arm(sample_player, WeaponItem(name="Battleaxe", damage="1d8"))
        force_rolls(7)
        damage = calculate_damage(sample_player)

        assert damage.damage_dice == "1d8"
        assert damage.weapon == "Battleaxe"
        assert damage.total == 9

    def test_critical_doubles_roll_not_modifier(
        self, sample_player: Player, force_rolls: ForceRolls
    ) -> None:
        force_rolls(3)
        damage = calculate_damage(sample_player, critical=True)

        assert damage.damage_roll == 6
        assert damage.total == 8

    def test_minimum_one(self, force_rolls: ForceRolls) -> None:
        weakling = Player(stats=StatsComponent(strength=1))
        force_rolls(1)
        assert calculate_damage(weakling).total == 1


class TestCombatRound:
    """Tests for process_combat_round."""

    def test_hit_applies_damage(
        self, sample_player: Player, sample_monster: Monster, force_rolls: ForceRolls
    ) -> None:
        force_rolls(10, 4)
        result = process_combat_round(sample_player, sample_monster)

        assert result.hit
        assert result.damage is not None
        assert result.damage.total == 6
        assert sample_monster.health.current == 24
        assert result.defender_health == 24
        assert result.defender_alive

    def test_miss_changes_nothing(
        self, sample_monster: Monster, sample_player: Player, force_rolls: ForceRolls
    ) -> None:
        force_rolls(1)
        result = process_combat_round(sample_monster, sample_player)

        assert not result.hit
        assert result.damage is None
        assert sample_player.health.current == 100

    def test_total_equal_to_defense_hits(
        self, sample_monster: Monster, sample_player: Player, force_rolls: ForceRolls
    ) -> None:
        force_rolls(11, 1)
        assert process_combat_round(sample_monster, sample_player).hit

    def test_natural_twenty_always_hits(self, force_rolls: ForceRolls) -> None:
        attacker = Monster(name="Feeble Rat", stats=StatsComponent(strength=1))
        defender = Monster(name="Nimble Ghost", stats=StatsComponent(dexterity=30))
        force_rolls(20, 2)

        result = process_combat_round(attacker, defender)

        assert result.attack_roll.total < result.defense.total
        assert result.hit
        assert result.critical
        assert result.damage is not None
        assert result.damage.total == 1

    def test_health_clamped_at_zero(
        self, sample_player: Player, force_rolls: ForceRolls
    ) -> None:
        victim = Monster(name="Tiny Rat", health=HealthComponent(current=3, maximum=3))
        force_rolls(19, 4)

        result = process_combat_round(sample_player, victim)

        assert victim.health.current == 0
        assert result.defender_health == 0
        assert not result.defender_alive

    def test_defeated_combatant_cannot_fight(self, sample_player: Player, sample_monster: Monster) -> None:
        sample_monster.health.current = 0

        with pytest.raises(CombatError) as exc_info:
            process_combat_round(sample_player, sample_monster)
        assert exc_info.value.details["combatant"] == "Fierce Goblin"

        with pytest.raises(CombatError):
            process_combat_round(sample_monster, sample_player)
        assert sample_player.health.current == 100


class TestDescribeCombatRound:
    """Tests for combat narration."""

    def test_miss(self, sample_player: Player, sample_monster: Monster, force_rolls: ForceRolls) -> None:
        force_rolls(1)
        result = process_combat_round(sample_player, sample_monster)
        assert describe_combat_round(result) == ["Adventurer misses Fierce Goblin!"]

    def test_hit(self, sample_player: Player, sample_monster: Monster, force_rolls: ForceRolls) -> None:
        force_rolls(12, 2)
        messages = describe_combat_round(process_combat_round(sample_player, sample_monster))

        assert messages == [
            "Adventurer hits Fierce Goblin with unarmed strike.",
            "Fierce Goblin takes 4 damage.",
            "Fierce Goblin has 26 health remaining.",
        ]

    def test_critical_kill(self, sample_player: Player, force_rolls: ForceRolls) -> None:
        victim = Monster(name="Tiny Rat", health=HealthComponent(current=2, maximum=2))
        force_rolls(20, 1)
        messages = describe_combat_round(process_combat_round(sample_player, victim))

        assert messages[0] == "Adventurer lands a critical hit on Tiny Rat with unarmed strike!"
        assert messages[-1] == "Tiny Rat has been defeated!"


class TestGenerateMonster:
    """Tests for difficulty-scaled monsters."""

    @pytest.mark.parametrize("difficulty", [1, 2, 3, 6])
    def test_scaling(self, difficulty: int, seeded_rng: int) -> None:
        monster = generate_monster(difficulty)
        archetypes = {name: (hp, st, dx) for name, hp, st, dx in MONSTER_ARCHETYPES}
        health_mod, strength_mod, dexterity_mod = archetypes[monster.monster_type]

        assert monster.level == difficulty
        assert monster.experience == 10 * difficulty
        assert monster.health.maximum == 20 + 10 * difficulty + health_mod
        assert monster.health.current == monster.health.maximum
        assert monster.stats is not None
        assert monster.stats.strength == 10 + difficulty // 2 + strength_mod
        assert monster.stats.dexterity == 10 + difficulty // 3 + dexterity_mod
        assert monster.name.endswith(monster.monster_type)

    def test_claws_equipped(self, seeded_rng: int) -> None:
        monster = generate_monster(4)
        claws = monster.inventory.get_equipped(EquipmentSlot.WEAPON)

        assert isinstance(claws, WeaponItem)
        assert claws.name == "Claws"
        assert claws.damage == "1d6"
        assert claws.attack_bonus == 2
        assert not claws.takeable


class TestExperience:
    """Tests for experience awards."""

    @pytest.mark.parametrize(
        ("player_level", "monster_level", "expected"),
        [(1, 1, 1.0), (1, 3, 1.4), (5, 3, 1.0), (5, 2, 0.5)],
    )
    def test_multiplier(self, player_level: int, monster_level: int, expected: float) -> None:
        assert experience_multiplier(player_level, monster_level) == pytest.approx(expected)

    def test_award(self, sample_player: Player, sample_monster: Monster) -> None:
        result = award_experience(sample_player, sample_monster)

        assert result.xp_awarded == 10
        assert not result.leveled_up
        assert sample_player.experience == 10

    def test_default_reward(self, sample_player: Player) -> None:
        monster = Monster(name="Nameless Thing", experience=0)
        assert award_experience(sample_player, monster).xp_awarded == 10

    def test_higher_level_bonus_floored(self, sample_player: Player) -> None:
        monster = Monster(name="Old Orc", level=2, experience=13)
        assert award_experience(sample_player, monster).xp_awarded == 15

    def test_level_up(self, sample_player: Player) -> None:
        sample_player.health.current = 40
        monster = Monster(name="Great Troll", experience=100)

        result = award_experience(sample_player, monster)

        assert result.leveled_up
        assert sample_player.level == 2
        assert sample_player.experience == 0
        assert sample_player.experience_to_next_level == 150
        assert sample_player.health.maximum == 115
        assert sample_player.health.current == 115
        assert sample_player.inventory.max_carry_weight == 55
