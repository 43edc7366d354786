"""Tests for the command executor and its handlers.

Commands run against the three-room sample dungeon:
entrance -north-> hall (goblin) -east-> armory.
"""

from __future__ import annotations

from collections.abc import Callable

import pytest

from dungeon_engine.core.config import GameSettings
from dungeon_engine.core.exceptions import InvalidGameStateError
from dungeon_engine.engine.commands import Command, CommandDefinition
from dungeon_engine.engine.events import schedule_default_events
from dungeon_engine.engine.executor import GAME_OVER_MESSAGE, CommandExecutor, CommandResponse
from dungeon_engine.engine.parser import CommandParser
from dungeon_engine.engine.state import GameStateStore
from dungeon_engine.models import (
    CommandCategory,
    KeyItem,
    PotionEffect,
    PotionItem,
    TreasureItem,
    WeaponItem,
)


Run = Callable[[str], CommandResponse]
ForceRolls = Callable[..., None]


def _runner(executor: CommandExecutor) -> Run:
    parser = CommandParser(executor.registry)

    def _run(text: str) -> CommandResponse:
        command = parser.parse(text)
        assert isinstance(command, Command)
        return executor.execute(command)

    return _run


@pytest.fixture
def executor(store: GameStateStore, game_settings: GameSettings) -> CommandExecutor:
    return CommandExecutor(store, game_settings)


@pytest.fixture
def run(executor: CommandExecutor) -> Run:
    return _runner(executor)


class TestGo:
    """Tests for movement."""

    def test_move(self, run: Run, store: GameStateStore) -> None:
        response = run("go north")

        assert response.success
        assert response.location_changed
        assert response.time_spent == 10
        assert response.elapsed_time == 10
        assert response.messages[:3] == ["You go north.", "Chamber", "A large chamber with a high ceiling."]
        assert "A Fierce Goblin is here, ready to fight!" in response.messages
        assert store.current_room.id == "hall"
        assert store.turn == 1

    def test_shorthand(self, run: Run, store: GameStateStore) -> None:
        assert run("n").success
        assert store.current_room.id == "hall"

    def test_no_exit(self, run: Run, store: GameStateStore) -> None:
        response = run("go west")

        assert not response.success
        assert response.messages == ["You can't go west from here."]
        assert response.elapsed_time == 0
        assert response.time_spent == 0
        assert store.current_room.id == "entrance"
        assert store.turn == 0

    def test_no_direction(self, run: Run) -> None:
        response = run("go")
        assert response.messages == ["Go where? Specify a direction (north, south, east, west)."]

    def test_nonsense_direction(self, run: Run) -> None:
        assert run("go upward").messages == ["You can't go upward from here."]


class TestLook:
    """Tests for looking around."""

    def test_room(self, run: Run) -> None:
        response = run("look")

        assert response.messages == [
            "Dungeon Entrance",
            "A dark opening leads into the depths.",
            "Exits: north",
            "You see: Short Sword, Health Potion",
        ]
        assert response.time_spent == 1

    def test_direction(self, run: Run) -> None:
        assert run("look north").messages == ["You see a path leading north."]
        assert run("look w").messages == ["There is no path leading west."]

    def test_item(self, run: Run) -> None:
        assert run("look sword").messages == ["Short Sword", "Nothing special about it.", "It weighs 2 units."]

    def test_carried_item(self, run: Run) -> None:
        run("take potion")
        assert run("examine potion").messages[-1] == "It weighs 0.5 units."

    def test_monster(self, run: Run, store: GameStateStore) -> None:
        store.move_to("hall")
        response = run("look goblin")

        assert response.messages[0] == "Fierce Goblin"
        assert response.messages[-1] == "It has 30/30 health."

    def test_unknown(self, run: Run) -> None:
        response = run("look unicorn")

        assert not response.success
        assert response.messages == ["You don't see any 'unicorn' here."]


class TestTakeAndDrop:
    """Tests for picking up and dropping items."""

    def test_take(self, run: Run, store: GameStateStore) -> None:
        response = run("take sword")

        assert response.messages == ["You take the Short Sword."]
        assert response.time_spent == 2
        assert store.player.inventory.find_by_name("sword") is not None

    def test_take_nothing(self, run: Run) -> None:
        assert run("take").messages == ["Take what?"]

    def test_take_unknown(self, run: Run) -> None:
        assert run("take unicorn").messages == ["You don't see any 'unicorn' here."]

    def test_take_in_empty_room(self, run: Run, store: GameStateStore) -> None:
        store.move_to("armory")
        assert run("take sword").messages == ["There's nothing here to take."]

    def test_take_fixed_item(self, run: Run, store: GameStateStore) -> None:
        store.add_room_items([TreasureItem(name="Stone Altar", takeable=False)])
        assert run("take altar").messages == ["You cannot take the Stone Altar."]

    def test_take_too_heavy(self, run: Run, store: GameStateStore) -> None:
        store.add_room_items([TreasureItem(name="Iron Anvil", weight=60)])
        response = run("take anvil")

        assert not response.success
        assert response.messages == ["The Iron Anvil is too heavy to carry with your current load."]

    def test_drop(self, run: Run, store: GameStateStore) -> None:
        run("take sword")
        store.move_to("armory")

        assert run("drop sword").messages == ["You drop the Short Sword."]
        assert store.current_room.find_item("sword") is not None

    def test_drop_empty_handed(self, run: Run) -> None:
        assert run("drop sword").messages == ["You aren't carrying anything."]

    def test_drop_not_carried(self, run: Run) -> None:
        run("take sword")
        assert run("drop shield").messages == ["You don't have any 'shield'."]

    def test_drop_equipped(self, run: Run) -> None:
        run("take sword")
        run("equip sword")
        assert run("drop sword").messages == ["You need to unequip the Short Sword first."]


class TestEquipment:
    """Tests for equip and unequip."""

    def test_equip(self, run: Run, store: GameStateStore) -> None:
        run("take sword")
        response = run("wield sword")

        assert response.messages == ["You equip the Short Sword."]
        assert response.time_spent == 3
        assert store.player.inventory.find_by_name("sword").equipped

    def test_equip_twice(self, run: Run) -> None:
        run("take sword")
        run("equip sword")
        assert run("equip sword").messages == ["You already have the Short Sword equipped."]

    def test_equip_replaces(self, run: Run, store: GameStateStore) -> None:
        store.add_room_items([WeaponItem(name="Rusty Dagger", weight=1)])
        run("take sword")
        run("take dagger")
        run("equip sword")

        assert run("equip dagger").messages == ["You put away the Short Sword.", "You equip the Rusty Dagger."]

    def test_matching_copies(self, run: Run, store: GameStateStore) -> None:
        """With two identical swords, each command picks the copy it can act on."""
        store.add_room_items([WeaponItem(name="Short Sword", damage="1d6", weight=2)])
        run("take sword")
        run("take sword")
        first, second = store.player.inventory.items

        store.equip_item(second.id)
        assert run("unequip sword").messages == ["You unequip the Short Sword."]
        assert not second.equipped

        run("equip sword")
        assert first.equipped
        assert run("equip sword").messages == ["You put away the Short Sword.", "You equip the Short Sword."]
        assert second.equipped
        assert not first.equipped

        assert run("drop sword").messages == ["You drop the Short Sword."]
        assert store.player.inventory.items == [second]

    def test_equip_potion(self, run: Run) -> None:
        run("take potion")
        assert run("equip potion").messages == ["You cannot equip the Health Potion."]

    def test_equip_empty_handed(self, run: Run) -> None:
        assert run("equip sword").messages == ["You have nothing to equip."]

    def test_unequip(self, run: Run, store: GameStateStore) -> None:
        run("take sword")
        run("equip sword")

        assert run("unequip sword").messages == ["You unequip the Short Sword."]
        assert not store.player.inventory.find_by_name("sword").equipped
        assert run("unequip sword").messages == ["The Short Sword is not equipped."]


class TestUse:
    """Tests for using items."""

    def test_healing_potion(self, run: Run, store: GameStateStore) -> None:
        store.player.health.current = 50
        run("take potion")

        response = run("use potion")

        assert response.messages == ["You use the Health Potion.", "You feel refreshed and recover 20 health."]
        assert store.player.health.current == 70
        assert store.player.inventory.items == []

    def test_healing_reports_actual_amount(self, run: Run, store: GameStateStore) -> None:
        store.player.health.current = 95
        run("take potion")
        assert run("drink potion").messages[-1] == "You feel refreshed and recover 5 health."

    def test_strength_potion(self, run: Run, store: GameStateStore) -> None:
        store.player.inventory.add_item(
            PotionItem(name="Strength Potion", effect=PotionEffect.STRENGTH, power=5)
        )
        response = run("use strength")

        assert response.messages[-1] == "You feel stronger! Your strength increases by 5."
        assert store.player.stats is not None
        assert store.player.stats.strength == 19

    def test_antidote(self, run: Run, store: GameStateStore) -> None:
        store.player.inventory.add_item(PotionItem(name="Antidote", effect=PotionEffect.CURE, power=1))
        assert run("use antidote").messages[-1] == "You feel purified. Any poison has been neutralized."

    def test_key(self, run: Run, store: GameStateStore) -> None:
        store.player.inventory.add_item(KeyItem(name="Iron Key"))
        response = run("use key")

        assert response.success
        assert response.messages == ["You try to use the Iron Key, but there's nothing to unlock here."]
        assert store.player.inventory.find_by_name("key") is not None

    def test_unusable(self, run: Run) -> None:
        run("take sword")
        response = run("use sword")

        assert not response.success
        assert response.messages == ["You can't figure out how to use the Short Sword."]

    def test_nothing_to_use(self, run: Run) -> None:
        assert run("use potion").messages == ["You have nothing to use."]


class TestReports:
    """Tests for inventory, stats and help."""

    def test_empty_inventory(self, run: Run) -> None:
        response = run("i")

        assert response.success
        assert response.messages == ["Your inventory is empty."]
        assert response.time_spent == 0
        assert response.elapsed_time == 0

    def test_inventory_listing(self, run: Run) -> None:
        run("take sword")
        run("take potion")
        run("equip sword")

        assert run("inventory").messages == [
            "You are carrying:",
            "Weapon:",
            "- Short Sword (equipped) (2 weight)",
            "Potion:",
            "- Health Potion (0.5 weight)",
            "Total weight: 2.5/50",
        ]

    def test_stats(self, run: Run) -> None:
        messages = run("stats").messages

        assert messages[:4] == ["Name: Adventurer", "Level: 1", "Experience: 0/100", "Health: 100/100"]
        assert "Strength: 14" in messages
        assert "Combat: 0" in messages

    def test_help(self, run: Run) -> None:
        messages = run("help").messages

        assert messages[0] == "Available commands:"
        assert len(messages) == 13
        assert "- go <direction> - Move in a direction (north, south, east, west)" in messages

    def test_help_for_command(self, run: Run) -> None:
        assert run("help go").messages == [
            "GO command:",
            "- go <direction> - Move in a direction (north, south, east, west)",
            "Example: 'go north'",
        ]

    def test_help_by_alias(self, run: Run) -> None:
        assert run("help i").messages[0] == "INVENTORY command:"

    def test_help_unknown(self, run: Run) -> None:
        assert run("help dance").messages == ["No help available for 'dance'. Type 'help' for all commands."]


class TestAttack:
    """Tests for combat through the executor."""

    def test_nothing_to_fight(self, run: Run) -> None:
        response = run("attack")

        assert not response.success
        assert response.messages == ["There is nothing here to fight."]

    def test_unknown_target(self, run: Run, store: GameStateStore) -> None:
        store.move_to("hall")
        assert run("attack dragon").messages == ["There is no 'dragon' here to attack."]

    def test_kill(self, run: Run, store: GameStateStore, force_rolls: ForceRolls) -> None:
        store.move_to("hall")
        store.current_room.monsters[0].health.current = 1
        force_rolls(15, 1)

        response = run("attack goblin")

        assert response.success
        assert response.time_spent == 6
        assert "Fierce Goblin has been defeated!" in response.messages
        assert "You gain 10 experience." in response.messages
        assert store.current_room.monsters == []
        assert store.current_room.items == []
        assert store.player.experience == 10
        assert store.player.skills.combat == 1

    def test_kill_drops_loot(
        self, store: GameStateStore, force_rolls: ForceRolls, seeded_rng: int
    ) -> None:
        run = _runner(CommandExecutor(store, GameSettings(loot_drop_chance=1.0, spawn_chance=0.0)))
        store.move_to("hall")
        store.current_room.monsters[0].health.current = 1
        force_rolls(15, 1)

        response = run("attack")

        assert response.messages[-1].startswith("The Fierce Goblin dropped: ")
        assert 1 <= len(store.current_room.items) <= 2

    def test_counterattack(self, run: Run, store: GameStateStore, force_rolls: ForceRolls) -> None:
        store.move_to("hall")
        force_rolls(1, 15, 3)

        response = run("attack goblin")

        assert response.messages == [
            "Adventurer misses Fierce Goblin!",
            "Fierce Goblin hits Adventurer with unarmed strike.",
            "Adventurer takes 3 damage.",
            "Adventurer has 97 health remaining.",
        ]
        assert store.player.ready_at == 0

    def test_critical_counterattack_staggers(
        self, run: Run, store: GameStateStore, force_rolls: ForceRolls
    ) -> None:
        store.move_to("hall")
        force_rolls(1, 20, 2)

        response = run("attack goblin")

        assert response.messages[-1] == "You are staggered by the blow!"
        assert store.player.health.current == 96
        assert store.player.ready_at == 11
        assert store.elapsed_time == 6

        blocked = run("go south")
        assert not blocked.success
        assert blocked.messages == ["You are still recovering. Wait 5 more seconds."]
        assert store.elapsed_time == 6

        assert run("look").success
        recovered = run("wait")
        assert recovered.messages == ["You catch your breath and steady yourself."]
        assert recovered.time_spent == 4
        assert store.elapsed_time == 11

        assert run("go south").success

    def test_player_death(self, run: Run, store: GameStateStore, force_rolls: ForceRolls) -> None:
        store.move_to("hall")
        store.player.health.current = 1
        force_rolls(1, 15, 3)

        response = run("attack goblin")

        assert response.game_over
        assert response.messages[-1] == "You have been defeated. Your adventure ends here."
        assert store.get_flag("game_over") is True

        refused = run("go south")
        assert not refused.success
        assert refused.messages == [GAME_OVER_MESSAGE]
        assert refused.game_over
        assert run("stats").success


class TestWaitAndEvents:
    """Tests for time passing."""

    def test_wait(self, run: Run) -> None:
        response = run("wait")

        assert response.messages == ["Time passes."]
        assert response.time_spent == 10

    def test_regeneration_fires(self, run: Run, store: GameStateStore, game_settings: GameSettings) -> None:
        schedule_default_events(store, game_settings)
        goblin = store.get_room("hall").monsters[0]
        goblin.health.current = 20

        run("wait")
        run("wait")
        assert goblin.health.current == 20
        run("wait")
        assert goblin.health.current == 21
        assert store.turn == 3
        assert store.elapsed_time == 30

    def test_spawn_message(self, store: GameStateStore, seeded_rng: int) -> None:
        settings = GameSettings(spawn_chance=1.0, spawn_interval=30, regeneration_interval=30)
        run = _runner(CommandExecutor(store, settings))
        schedule_default_events(store, settings)

        run("wait")
        run("wait")
        response = run("wait")

        assert response.messages[-1] == "You hear something stirring in the distance."
        assert len(store.get_room("armory").monsters) == 1


class TestExecutorContract:
    """Tests for executor-level behaviour."""

    def test_missing_handler(self, executor: CommandExecutor) -> None:
        definition = CommandDefinition(
            name="dance",
            handler_id="dance",
            category=CommandCategory.SYSTEM,
            time_cost=1,
            description="Dance",
            usage="dance",
        )
        command = Command(verb="dance", args="", definition=definition, raw_input="dance")

        with pytest.raises(InvalidGameStateError):
            executor.execute(command)

    def test_failed_command_keeps_clock(self, run: Run, store: GameStateStore) -> None:
        run("go north")
        run("take unicorn")

        assert store.elapsed_time == 10
        assert store.turn == 1
