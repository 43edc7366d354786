"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the dungeon engine test suite.
"""

from __future__ import annotations

from collections.abc import Callable, Generator

import pytest

from dungeon_engine.core.config import GameSettings, clear_settings_cache
from dungeon_engine.engine.random_selection import seed_random
from dungeon_engine.engine.state import GameStateStore
from dungeon_engine.models import (
    Direction,
    Dungeon,
    GameState,
    HealthComponent,
    Monster,
    Player,
    PotionEffect,
    PotionItem,
    Room,
    RoomType,
    WeaponItem,
    create_player,
)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def seeded_rng() -> int:
    """Seed the shared RNG so generation tests are reproducible.

    Returns:
        The seed that was applied.
    """
    seed = 1234
    seed_random(seed)
    return seed


@pytest.fixture
def game_settings() -> GameSettings:
    """Settings with every random side effect of play switched off."""
    return GameSettings(
        loot_drop_chance=0.0,
        spawn_chance=0.0,
        monster_chance=0.0,
    )


# =============================================================================
# Model Fixtures
# =============================================================================


@pytest.fixture
def sample_player() -> Player:
    """A level 1 player with strength 14 (+2) and dexterity 12 (+1)."""
    return create_player(
        name="Adventurer",
        stats={"strength": 14, "dexterity": 12, "intelligence": 10, "constitution": 10},
    )


@pytest.fixture
def sample_monster() -> Monster:
    """A plain goblin with average stats and no weapon."""
    return Monster(
        name="Fierce Goblin",
        monster_type="Goblin",
        level=1,
        experience=10,
        health=HealthComponent(current=30, maximum=30),
    )


@pytest.fixture
def sample_sword() -> WeaponItem:
    return WeaponItem(name="Short Sword", damage="1d6", weight=2, value=10)


@pytest.fixture
def sample_potion() -> PotionItem:
    return PotionItem(name="Health Potion", effect=PotionEffect.HEAL, power=20, weight=0.5, value=50)


@pytest.fixture
def sample_dungeon(
    sample_monster: Monster,
    sample_sword: WeaponItem,
    sample_potion: PotionItem,
) -> Dungeon:
    """Three rooms in an L: entrance -north-> hall -east-> armory.

    The entrance holds a sword and a potion; the goblin waits in the hall.
    """
    entrance = Room(
        id="entrance",
        name="Dungeon Entrance",
        type=RoomType.ENTRANCE,
        description="A dark opening leads into the depths.",
        exits={Direction.NORTH: "hall"},
        items=[sample_sword, sample_potion],
    )
    hall = Room(
        id="hall",
        name="Chamber",
        type=RoomType.CHAMBER,
        description="A large chamber with a high ceiling.",
        exits={Direction.SOUTH: "entrance", Direction.EAST: "armory"},
        monsters=[sample_monster],
    )
    armory = Room(
        id="armory",
        name="Armory",
        type=RoomType.ARMORY,
        description="Weapon racks line the walls.",
        exits={Direction.WEST: "hall"},
    )
    return Dungeon(
        name="Level 1",
        rooms={room.id: room for room in (entrance, hall, armory)},
        start_room_id="entrance",
    )


@pytest.fixture
def sample_state(sample_player: Player, sample_dungeon: Dungeon) -> GameState:
    return GameState(player=sample_player, dungeon=sample_dungeon, current_room_id="entrance")


@pytest.fixture
def store(sample_state: GameState) -> GameStateStore:
    """A state store over the sample dungeon, player at the entrance."""
    return GameStateStore(sample_state)


# =============================================================================
# Dice Fixtures
# =============================================================================


@pytest.fixture
def force_rolls(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Force the combat resolver's dice to return the given values in order.

    Returns:
        Function taking the roll results to hand out, one per roll.
    """

    def _force(*values: int) -> None:
        rolls = iter(values)
        monkeypatch.setattr(
            "dungeon_engine.engine.combat.roll_dice",
            lambda spec: next(rolls),
        )

    return _force
