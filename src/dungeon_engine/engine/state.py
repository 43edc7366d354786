"""Game state store.

:class:`GameStateStore` owns a session's :class:`GameState`. Handlers
read through its accessors and change the world only through its
mutation methods; everything that leaves the engine is a frozen
:class:`GameSnapshot`.
"""

from __future__ import annotations

from dungeon_engine.core.exceptions import InvalidGameStateError
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.combat import (
    CombatRoundResult,
    ExperienceResult,
    award_experience,
    process_combat_round,
)
from dungeon_engine.engine.inventory import transfer_item
from dungeon_engine.models.dungeon import Dungeon, Room
from dungeon_engine.models.entities import Monster, Player, require_stats
from dungeon_engine.models.enums import Ability, EquipmentSlot, Skill
from dungeon_engine.models.game_state import GameSnapshot, GameState, TimedEvent
from dungeon_engine.models.items import Item


logger = get_logger(__name__)


class GameStateStore:
    """Exclusive owner of one session's game state.

    Example:
        >>> store = GameStateStore(state)
        >>> store.move_to("room_1_01")
        >>> store.snapshot().room.id
        'room_1_01'
    """

    def __init__(self, state: GameState) -> None:
        self._state = state
        self.current_room.visited = True

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def player(self) -> Player:
        return self._state.player

    @property
    def dungeon(self) -> Dungeon:
        return self._state.dungeon

    @property
    def current_room(self) -> Room:
        return self._state.current_room

    @property
    def elapsed_time(self) -> int:
        return self._state.elapsed_time

    @property
    def turn(self) -> int:
        return self._state.turn

    @property
    def game_over(self) -> bool:
        return self._state.game_over

    @property
    def events(self) -> list[TimedEvent]:
        return list(self._state.events)

    def get_room(self, room_id: str) -> Room:
        return self.dungeon.get_room(room_id)

    def get_flag(self, name: str, default: object = None) -> object:
        return self._state.flags.get(name, default)

    def snapshot(self) -> GameSnapshot:
        """Deep, frozen copy of the presentation-relevant state."""
        return GameSnapshot.from_state(self._state)

    # =========================================================================
    # Movement
    # =========================================================================

    def move_to(self, room_id: str) -> Room:
        """Move the player and mark the destination visited.

        Raises:
            InvalidGameStateError: If the room does not exist.
        """
        room = self.get_room(room_id)
        self._state.current_room_id = room.id
        room.visited = True
        logger.info("Room entered", room_id=room.id, elapsed_time=self.elapsed_time)
        return room

    # =========================================================================
    # Items
    # =========================================================================

    def take_item(self, item_id: str) -> Item:
        """Move an item from the current room into the player's pack.

        Raises:
            InvalidGameStateError: If the item is not in the room or would
                break the carry limit.
        """
        inventory = self.player.inventory
        result = transfer_item(
            self.current_room.items,
            inventory.items,
            item_id,
            max_weight=inventory.max_carry_weight,
        )
        if not result.success or result.item is None:
            raise InvalidGameStateError(result.message, room_id=self.current_room.id)
        return result.item

    def drop_item(self, item_id: str) -> Item:
        """Move an item from the player's pack to the current room floor."""
        item = self.player.inventory.remove_item(item_id)
        if item is None:
            raise InvalidGameStateError(f"Item {item_id} is not carried")
        self.current_room.items.append(item)
        return item

    def equip_item(self, item_id: str) -> Item | None:
        """Equip a carried item; returns the item it replaced, if any."""
        item = self.player.inventory.find_item(item_id)
        if item is None:
            raise InvalidGameStateError(f"Item {item_id} is not carried")
        return self.player.inventory.equip(item)

    def unequip_slot(self, slot: EquipmentSlot) -> Item | None:
        return self.player.inventory.unequip(slot)

    def consume_item(self, item_id: str) -> Item:
        """Remove a used-up item from the player's pack."""
        item = self.player.inventory.remove_item(item_id)
        if item is None:
            raise InvalidGameStateError(f"Item {item_id} is not carried")
        return item

    def add_room_items(self, items: list[Item], room_id: str | None = None) -> None:
        room = self.get_room(room_id) if room_id else self.current_room
        room.items.extend(items)

    # =========================================================================
    # Player
    # =========================================================================

    def heal_player(self, amount: int) -> int:
        return self.player.health.apply_healing(amount)

    def boost_player_stat(self, ability: Ability, amount: int) -> int:
        return require_stats(self.player).boost(ability, amount)

    def improve_skill(self, skill: Skill, amount: int = 1) -> int:
        return self.player.skills.improve(skill, amount)

    def award_experience(self, monster: Monster) -> ExperienceResult:
        return award_experience(self.player, monster)

    def set_ready_at(self, ready_at: int) -> None:
        self.player.ready_at = max(0, ready_at)

    # =========================================================================
    # Monsters and Combat
    # =========================================================================

    def player_attacks(self, monster: Monster) -> CombatRoundResult:
        return process_combat_round(self.player, monster)

    def monster_attacks(self, monster: Monster) -> CombatRoundResult:
        return process_combat_round(monster, self.player)

    def living_monsters(self) -> list[Monster]:
        """Every living monster in the dungeon, room by room."""
        return [
            monster
            for room in self.dungeon.rooms.values()
            for monster in room.living_monsters
        ]

    def heal_monster(self, monster: Monster, amount: int) -> int:
        return monster.health.apply_healing(amount)

    def add_monster(self, room_id: str, monster: Monster) -> None:
        self.get_room(room_id).monsters.append(monster)
        logger.info("Monster placed", room_id=room_id, monster=monster.name)

    def remove_monster(self, monster_id: str) -> Monster:
        """Take a monster out of the current room.

        Raises:
            InvalidGameStateError: If no such monster is in the room.
        """
        room = self.current_room
        for index, monster in enumerate(room.monsters):
            if monster.id == monster_id:
                return room.monsters.pop(index)
        raise InvalidGameStateError(f"Monster {monster_id} is not here", room_id=room.id)

    # =========================================================================
    # Flags, Time and Events
    # =========================================================================

    def set_flag(self, name: str, value: object = True) -> None:
        self._state.flags[name] = value

    def schedule_event(self, name: str, interval: int) -> TimedEvent:
        """Register a recurring event, first due one interval from now."""
        event = TimedEvent(name=name, interval=interval, next_at=self.elapsed_time + interval)
        self._state.events.append(event)
        return event

    def advance_time(self, seconds: int) -> list[str]:
        """Advance the game clock and collect the events that fell due.

        An event whose threshold was crossed several times appears once
        per crossing, in chronological order.

        Returns:
            Names of the due events.
        """
        if seconds <= 0:
            return []

        self._state.elapsed_time += seconds
        now = self._state.elapsed_time

        due: list[tuple[int, str]] = []
        for event in self._state.events:
            while event.next_at <= now:
                due.append((event.next_at, event.name))
                event.next_at += event.interval
        due.sort(key=lambda entry: entry[0])
        return [name for _, name in due]

    def record_turn(self) -> None:
        self._state.turn += 1


__all__ = ["GameStateStore"]
