"""Tests for the inventory system."""

from __future__ import annotations

import pytest

from dungeon_engine.engine.inventory import (
    calculate_total_weight,
    find_item_by_name,
    format_weight,
    get_item_description,
    organize_by_category,
    transfer_item,
    would_exceed_weight_limit,
)
from dungeon_engine.models import (
    ArmorItem,
    KeyItem,
    PotionEffect,
    PotionItem,
    TreasureItem,
    WeaponItem,
)


class TestWeights:
    """Tests for weight totals and limits."""

    def test_total(self) -> None:
        items = [TreasureItem(name="Gem", weight=0.1), WeaponItem(name="Mace", weight=4)]
        assert calculate_total_weight(items) == pytest.approx(4.1)
        assert calculate_total_weight([]) == 0

    def test_limit_is_inclusive(self) -> None:
        carried = [ArmorItem(name="Chainmail", weight=20)]
        assert not would_exceed_weight_limit(carried, WeaponItem(name="Mace", weight=5), 25)
        assert would_exceed_weight_limit(carried, WeaponItem(name="Mace", weight=5.5), 25)

    def test_format_weight(self) -> None:
        assert format_weight(2.0) == "2"
        assert format_weight(0.1 + 0.2) == "0.3"
        assert format_weight(10.5) == "10.5"


class TestOrganizeByCategory:
    """Tests for grouping items by type."""

    def test_empty(self) -> None:
        assert organize_by_category([]) == {}

    def test_grouped(self) -> None:
        sword = WeaponItem(name="Short Sword")
        potion = PotionItem(name="Antidote", effect=PotionEffect.CURE)
        key = KeyItem(name="Iron Key")

        groups = organize_by_category([sword, potion, key])

        assert list(groups) == ["weapon", "armor", "potion", "treasure", "key", "misc"]
        assert groups["weapon"] == [sword]
        assert groups["potion"] == [potion]
        assert groups["key"] == [key]
        assert groups["armor"] == []


class TestFindItemByName:
    """Tests for name lookups."""

    def test_exact_beats_partial(self) -> None:
        longer = WeaponItem(name="Sword of Dawn")
        exact = WeaponItem(name="Sword")
        assert find_item_by_name([longer, exact], "sword") is exact

    def test_partial_case_insensitive(self) -> None:
        potion = PotionItem(name="Health Potion", effect=PotionEffect.HEAL)
        assert find_item_by_name([potion], "HEALTH") is potion

    def test_missing(self) -> None:
        assert find_item_by_name([WeaponItem(name="Mace")], "axe") is None
        assert find_item_by_name([], "mace") is None

    def test_prefer_breaks_ties(self) -> None:
        worn = WeaponItem(name="Short Sword", equipped=True)
        spare = WeaponItem(name="Short Sword")
        items = [worn, spare]

        assert find_item_by_name(items, "sword") is worn
        assert find_item_by_name(items, "sword", prefer=lambda item: not item.equipped) is spare
        assert find_item_by_name([worn], "sword", prefer=lambda item: not item.equipped) is worn

    def test_prefer_never_beats_exact(self) -> None:
        exact = WeaponItem(name="Sword", equipped=True)
        longer = WeaponItem(name="Short Sword")
        assert find_item_by_name([exact, longer], "sword", prefer=lambda item: not item.equipped) is exact


class TestItemDescription:
    """Tests for one-line item summaries."""

    def test_weapon(self) -> None:
        sword = WeaponItem(name="Short Sword", damage="1d6", weight=2, value=10)
        assert get_item_description(sword) == "Short Sword (Weight: 2) (Value: 10 gold) (Damage: 1d6)"

    def test_armor_equipped(self) -> None:
        armor = ArmorItem(name="Shield", protection=1, weight=6, equipped=True)
        assert get_item_description(armor) == "Shield (Weight: 6) (Protection: 1) [Equipped]"

    def test_potion(self) -> None:
        potion = PotionItem(name="Antidote", effect=PotionEffect.CURE, weight=0.5, value=25)
        assert get_item_description(potion) == "Antidote (Weight: 0.5) (Value: 25 gold) (Effect: Cures poison)"

    def test_none(self) -> None:
        assert get_item_description(None) == "Nothing special."


class TestTransferItem:
    """Tests for moving items between containers."""

    def test_success(self) -> None:
        gem = TreasureItem(name="Gemstone", weight=0.1)
        source, destination = [gem], []

        result = transfer_item(source, destination, gem.id)

        assert result.success
        assert result.item is gem
        assert source == []
        assert destination == [gem]

    def test_missing_item(self) -> None:
        result = transfer_item([], [], "item_missing")
        assert not result.success
        assert result.item is None

    def test_weight_limit_leaves_both_lists(self) -> None:
        anvil = TreasureItem(name="Anvil", weight=60)
        source, destination = [anvil], []

        result = transfer_item(source, destination, anvil.id, max_weight=50)

        assert not result.success
        assert source == [anvil]
        assert destination == []
