"""Command handlers.

One handler per command, registered with the ``@handler`` decorator
under the handler ID named in the command registry. A handler checks its
preconditions, raising :class:`ActionValidationError` with a
player-facing message when they fail, then changes the world through the
:class:`GameStateStore` and returns plain narrative lines.

Handlers:
    look: Describe the room, a direction, a monster or an item
    go: Move through an exit
    take / drop: Move items between the room and the pack
    equip / unequip: Manage weapon and armor slots
    use: Drink potions, try keys
    inventory / stats / help: Report on the player and the game
    attack: Fight one round against a monster
    wait: Let time pass
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from dungeon_engine.core.config import GameSettings
from dungeon_engine.core.exceptions import ActionValidationError
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.combat import describe_combat_round
from dungeon_engine.engine.commands import Command, CommandRegistry
from dungeon_engine.engine.inventory import (
    find_item_by_name,
    format_weight,
    get_item_description,
    organize_by_category,
    would_exceed_weight_limit,
)
from dungeon_engine.engine.random_selection import chance
from dungeon_engine.engine.state import GameStateStore
from dungeon_engine.generation.loot import generate_loot
from dungeon_engine.models.dungeon import Room
from dungeon_engine.models.enums import Ability, Direction, PotionEffect, Skill
from dungeon_engine.models.items import Item, KeyItem, PotionItem


logger = get_logger(__name__)


# =============================================================================
# Handler Registry
# =============================================================================


@dataclass
class HandlerContext:
    """What a handler may use besides the command itself."""

    store: GameStateStore
    settings: GameSettings
    registry: CommandRegistry


@dataclass
class HandlerResult:
    """Outcome of a successful handler.

    Attributes:
        messages: Narrative lines, in order.
        location_changed: Whether the player moved.
        time_spent: Overrides the command's time cost when set.
    """

    messages: list[str] = field(default_factory=list)
    location_changed: bool = False
    time_spent: int | None = None


Handler = Callable[[Command, HandlerContext], HandlerResult]

_handler_registry: dict[str, Handler] = {}


def handler(handler_id: str) -> Callable[[Handler], Handler]:
    """Decorator to register a function as a command handler."""

    def decorator(func: Handler) -> Handler:
        _handler_registry[handler_id] = func
        return func

    return decorator


def get_handler(handler_id: str) -> Handler | None:
    return _handler_registry.get(handler_id)


def get_all_handler_ids() -> list[str]:
    return list(_handler_registry)


# =============================================================================
# Shared Helpers
# =============================================================================


def _reject(message: str, command: Command) -> ActionValidationError:
    return ActionValidationError(message, command=command.verb)


def _require_args(command: Command, prompt: str) -> str:
    args = command.args.strip()
    if not args:
        raise _reject(prompt, command)
    return args


def _find_carried(
    command: Command,
    context: HandlerContext,
    empty_message: str,
    prefer: Callable[[Item], bool] | None = None,
) -> Item:
    args = command.args.strip()
    items = context.store.player.inventory.items
    if not items:
        raise _reject(empty_message, command)
    item = find_item_by_name(items, args, prefer)
    if item is None:
        raise _reject(f"You don't have any '{args}'.", command)
    return item


def _describe_item(item: Item) -> list[str]:
    return [
        item.name,
        item.description or "Nothing special about it.",
        f"It weighs {format_weight(item.weight)} units.",
    ]


def describe_room(room: Room) -> list[str]:
    """Full description of a room as shown on entering or looking."""
    messages = [room.name, room.description]
    if room.detail:
        messages.append(room.detail)

    if room.exits:
        messages.append(f"Exits: {', '.join(str(direction) for direction in room.exits)}")
    else:
        messages.append("There are no obvious exits.")

    if room.items:
        messages.append(f"You see: {', '.join(item.name for item in room.items)}")

    for monster in room.living_monsters:
        messages.append(f"A {monster.name} is here, ready to fight!")
    return messages


# =============================================================================
# Movement
# =============================================================================


@handler("go")
def go(command: Command, context: HandlerContext) -> HandlerResult:
    args = _require_args(command, "Go where? Specify a direction (north, south, east, west).")
    store = context.store
    direction = Direction.from_text(args)
    if direction is None or direction not in store.current_room.exits:
        raise _reject(f"You can't go {args.lower()} from here.", command)

    destination = store.move_to(store.current_room.exits[direction])
    messages = [f"You go {direction}.", destination.name, destination.description]
    for monster in destination.living_monsters:
        messages.append(f"A {monster.name} is here, ready to fight!")
    return HandlerResult(messages=messages, location_changed=True)


# =============================================================================
# Interaction
# =============================================================================


@handler("look")
def look(command: Command, context: HandlerContext) -> HandlerResult:
    store = context.store
    room = store.current_room
    args = command.args.strip()

    if not args:
        return HandlerResult(messages=describe_room(room))

    direction = Direction.from_text(args)
    if direction is not None:
        if direction in room.exits:
            return HandlerResult(messages=[f"You see a path leading {direction}."])
        return HandlerResult(messages=[f"There is no path leading {direction}."])

    monster = room.find_monster(args)
    if monster is not None:
        return HandlerResult(
            messages=[
                monster.name,
                monster.description or f"A hostile {monster.monster_type.lower()}.",
                f"It has {monster.health.current}/{monster.health.maximum} health.",
            ]
        )

    item = room.find_item(args)
    if item is None:
        item = find_item_by_name(store.player.inventory.items, args)
    if item is not None:
        return HandlerResult(messages=_describe_item(item))

    raise _reject(f"You don't see any '{args}' here.", command)


@handler("take")
def take(command: Command, context: HandlerContext) -> HandlerResult:
    args = _require_args(command, "Take what?")
    store = context.store
    room = store.current_room
    if not room.items:
        raise _reject("There's nothing here to take.", command)

    item = room.find_item(args)
    if item is None:
        raise _reject(f"You don't see any '{args}' here.", command)
    if not item.takeable:
        raise _reject(f"You cannot take the {item.name}.", command)

    inventory = store.player.inventory
    if would_exceed_weight_limit(inventory.items, item, inventory.max_carry_weight):
        raise _reject(f"The {item.name} is too heavy to carry with your current load.", command)

    store.take_item(item.id)
    return HandlerResult(messages=[f"You take the {item.name}."])


@handler("drop")
def drop(command: Command, context: HandlerContext) -> HandlerResult:
    _require_args(command, "Drop what?")
    item = _find_carried(
        command, context, "You aren't carrying anything.", prefer=lambda carried: not carried.equipped
    )
    if item.equipped:
        raise _reject(f"You need to unequip the {item.name} first.", command)

    context.store.drop_item(item.id)
    return HandlerResult(messages=[f"You drop the {item.name}."])


@handler("equip")
def equip(command: Command, context: HandlerContext) -> HandlerResult:
    _require_args(command, "Equip what?")
    item = _find_carried(
        command, context, "You have nothing to equip.", prefer=lambda carried: not carried.equipped
    )
    if not item.equipable:
        raise _reject(f"You cannot equip the {item.name}.", command)
    if item.equipped:
        raise _reject(f"You already have the {item.name} equipped.", command)

    replaced = context.store.equip_item(item.id)
    messages = []
    if replaced is not None:
        messages.append(f"You put away the {replaced.name}.")
    messages.append(f"You equip the {item.name}.")
    return HandlerResult(messages=messages)


@handler("unequip")
def unequip(command: Command, context: HandlerContext) -> HandlerResult:
    _require_args(command, "Unequip what?")
    item = _find_carried(
        command, context, "You have nothing equipped.", prefer=lambda carried: carried.equipped
    )
    if not item.equipped or item.slot is None:
        raise _reject(f"The {item.name} is not equipped.", command)

    context.store.unequip_slot(item.slot)
    return HandlerResult(messages=[f"You unequip the {item.name}."])


def _drink(potion: PotionItem, store: GameStateStore) -> list[str]:
    messages = [f"You use the {potion.name}."]
    if potion.effect == PotionEffect.HEAL:
        healed = store.heal_player(potion.power)
        messages.append(f"You feel refreshed and recover {healed} health.")
    elif potion.effect == PotionEffect.STRENGTH:
        store.boost_player_stat(Ability.STRENGTH, potion.power)
        messages.append(f"You feel stronger! Your strength increases by {potion.power}.")
    elif potion.effect == PotionEffect.CURE:
        messages.append("You feel purified. Any poison has been neutralized.")
    store.consume_item(potion.id)
    return messages


@handler("use")
def use(command: Command, context: HandlerContext) -> HandlerResult:
    _require_args(command, "Use what?")
    item = _find_carried(command, context, "You have nothing to use.")

    if isinstance(item, PotionItem):
        return HandlerResult(messages=_drink(item, context.store))
    if isinstance(item, KeyItem):
        return HandlerResult(
            messages=[f"You try to use the {item.name}, but there's nothing to unlock here."]
        )
    raise _reject(f"You can't figure out how to use the {item.name}.", command)


# =============================================================================
# Reports
# =============================================================================


@handler("inventory")
def inventory(command: Command, context: HandlerContext) -> HandlerResult:
    carried = context.store.player.inventory
    if not carried.items:
        return HandlerResult(messages=["Your inventory is empty."])

    messages = ["You are carrying:"]
    for category, items in organize_by_category(carried.items).items():
        if not items:
            continue
        messages.append(f"{category.capitalize()}:")
        for item in items:
            equipped_text = " (equipped)" if item.equipped else ""
            messages.append(f"- {item.name}{equipped_text} ({format_weight(item.weight)} weight)")
    messages.append(
        f"Total weight: {format_weight(carried.current_weight)}/{format_weight(carried.max_carry_weight)}"
    )
    return HandlerResult(messages=messages)


@handler("stats")
def stats(command: Command, context: HandlerContext) -> HandlerResult:
    player = context.store.player
    messages = [
        f"Name: {player.name}",
        f"Level: {player.level}",
        f"Experience: {player.experience}/{player.experience_to_next_level}",
        f"Health: {player.health.current}/{player.health.maximum}",
    ]
    if player.stats is not None:
        messages.extend(
            [
                "",
                "Stats:",
                f"Strength: {player.stats.strength}",
                f"Dexterity: {player.stats.dexterity}",
                f"Intelligence: {player.stats.intelligence}",
                f"Constitution: {player.stats.constitution}",
            ]
        )
    messages.extend(
        [
            "",
            "Skills:",
            f"Combat: {player.skills.combat}",
            f"Magic: {player.skills.magic}",
            f"Stealth: {player.skills.stealth}",
            f"Perception: {player.skills.perception}",
        ]
    )
    for item in player.inventory.items:
        if item.equipped:
            messages.append(f"Equipped: {get_item_description(item)}")
    return HandlerResult(messages=messages)


@handler("help")
def help_command(command: Command, context: HandlerContext) -> HandlerResult:
    topic = command.args.strip().lower()
    if not topic:
        messages = ["Available commands:"]
        messages.extend(
            f"- {definition.usage} - {definition.description}"
            for definition in context.registry.all()
        )
        return HandlerResult(messages=messages)

    definition = context.registry.lookup(topic)
    if definition is None:
        return HandlerResult(
            messages=[f"No help available for '{topic}'. Type 'help' for all commands."]
        )
    lines = list(definition.help_lines) or [f"- {definition.usage} - {definition.description}"]
    return HandlerResult(messages=[f"{definition.name.upper()} command:", *lines])


# =============================================================================
# Combat and Time
# =============================================================================


@handler("attack")
def attack(command: Command, context: HandlerContext) -> HandlerResult:
    store = context.store
    settings = context.settings
    room = store.current_room
    if not room.living_monsters:
        raise _reject("There is nothing here to fight.", command)

    target = command.args.strip()
    monster = room.find_monster(target)
    if monster is None:
        raise _reject(f"There is no '{target}' here to attack.", command)

    player_round = store.player_attacks(monster)
    messages = describe_combat_round(player_round)

    if not player_round.defender_alive:
        store.remove_monster(monster.id)
        reward = store.award_experience(monster)
        messages.append(f"You gain {reward.xp_awarded} experience.")
        if reward.leveled_up:
            messages.append(f"You have reached level {store.player.level}!")
        store.improve_skill(Skill.COMBAT)

        if chance(settings.loot_drop_chance):
            loot = generate_loot(store.dungeon.difficulty)
            store.add_room_items(loot)
            messages.append(f"The {monster.name} dropped: {', '.join(item.name for item in loot)}.")
        return HandlerResult(messages=messages)

    counter = store.monster_attacks(monster)
    messages.extend(describe_combat_round(counter))

    if not store.player.is_alive:
        store.set_flag("game_over", True)
        messages.append("You have been defeated. Your adventure ends here.")
        logger.info("Player defeated", monster=monster.name, elapsed_time=store.elapsed_time)
    elif counter.critical:
        store.set_ready_at(store.elapsed_time + command.time_cost + settings.stagger_seconds)
        messages.append("You are staggered by the blow!")
    return HandlerResult(messages=messages)


@handler("wait")
def wait(command: Command, context: HandlerContext) -> HandlerResult:
    store = context.store
    remaining = store.player.ready_at - store.elapsed_time
    if remaining > 0:
        return HandlerResult(
            messages=["You catch your breath and steady yourself."],
            time_spent=remaining,
        )
    return HandlerResult(messages=["Time passes."])


__all__ = [
    "HandlerContext",
    "HandlerResult",
    "Handler",
    "handler",
    "get_handler",
    "get_all_handler_ids",
    "describe_room",
]
