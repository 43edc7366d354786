"""Tests for the player and monster entities."""

from __future__ import annotations

import pytest

from dungeon_engine.core.exceptions import ContractViolationError
from dungeon_engine.models import HealthComponent, Monster, Player, create_player
from dungeon_engine.models.entities import require_stats


class TestCreatePlayer:
    """Tests for the player factory."""

    def test_defaults(self) -> None:
        """A new player starts at level 1 with full health."""
        player = create_player()

        assert player.name == "Adventurer"
        assert player.level == 1
        assert player.experience == 0
        assert player.experience_to_next_level == 100
        assert player.health.current == player.health.maximum == 100
        assert player.inventory.max_carry_weight == 50
        assert player.ready_at == 0
        assert player.is_alive

    def test_custom_stats(self) -> None:
        player = create_player(name="Mira", health=80, max_carry_weight=40, stats={"constitution": 16})

        assert player.health.maximum == 80
        assert player.inventory.max_carry_weight == 40
        assert player.stats is not None
        assert player.stats.constitution == 16
        assert player.stats.strength == 10

    def test_readiness(self, sample_player: Player) -> None:
        sample_player.ready_at = 15
        assert not sample_player.is_ready(14)
        assert sample_player.is_ready(15)


class TestExperience:
    """Tests for experience and levelling."""

    def test_below_threshold(self, sample_player: Player) -> None:
        assert not sample_player.add_experience(99)
        assert sample_player.level == 1
        assert sample_player.experience == 99

    def test_non_positive_ignored(self, sample_player: Player) -> None:
        assert not sample_player.add_experience(0)
        assert not sample_player.add_experience(-10)
        assert sample_player.experience == 0

    def test_level_up(self, sample_player: Player) -> None:
        """Levelling keeps the overflow and grows the next threshold by half."""
        sample_player.health.current = 40

        assert sample_player.add_experience(120)

        assert sample_player.level == 2
        assert sample_player.experience == 20
        assert sample_player.experience_to_next_level == 150
        assert sample_player.health.maximum == 115
        assert sample_player.health.current == 115
        assert sample_player.inventory.max_carry_weight == 55

    def test_multiple_levels_at_once(self, sample_player: Player) -> None:
        assert sample_player.add_experience(260)

        assert sample_player.level == 3
        assert sample_player.experience == 10
        assert sample_player.experience_to_next_level == 225

    def test_level_up_needs_stats(self) -> None:
        player = Player(name="Hollow", stats=None)
        with pytest.raises(ContractViolationError):
            player.add_experience(100)


class TestMonster:
    """Tests for the monster entity."""

    def test_alive_follows_health(self, sample_monster: Monster) -> None:
        assert sample_monster.is_alive
        sample_monster.health.apply_damage(30)
        assert not sample_monster.is_alive

    def test_unique_ids(self) -> None:
        first = Monster(name="Goblin")
        second = Monster(name="Goblin")
        assert first.id != second.id

    def test_dump_includes_liveness(self) -> None:
        monster = Monster(name="Troll", health=HealthComponent(current=0, maximum=45))
        assert monster.model_dump()["is_alive"] is False


class TestRequireStats:
    """Tests for the stat block guard."""

    def test_present(self, sample_player: Player) -> None:
        assert require_stats(sample_player) is sample_player.stats

    def test_missing(self) -> None:
        monster = Monster(name="Wisp", stats=None)
        with pytest.raises(ContractViolationError) as exc_info:
            require_stats(monster)
        assert exc_info.value.details["field_name"] == "stats"
