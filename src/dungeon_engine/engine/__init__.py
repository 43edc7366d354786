"""Game engine module for the dungeon engine.

This module provides the rules and the command pipeline: random
selection and dice, combat resolution, inventory helpers, the command
registry and parser, the state store, handlers, time events and the
executor that ties them together.

Submodules:
    random_selection: Seeded RNG helpers and dice rolling (d20 library)
    combat: Attack, defense, damage and experience rules
    inventory: Weight, grouping and item transfer helpers
    commands: Command definitions and the verb/alias registry
    parser: Raw text to Command
    state: GameStateStore, the only writer of GameState
    handlers: One handler per command
    events: Time-triggered world events
    executor: Validation, handler dispatch and time advancement
    session: GameSession facade (import from ``dungeon_engine.engine.session``)

Example:
    >>> from dungeon_engine.engine import CommandParser, CommandExecutor
    >>> command = CommandParser().parse("go north")
    >>> response = CommandExecutor(store).execute(command)
    >>> response.time_spent
    10
"""

from __future__ import annotations

# =============================================================================
# Random Selection
# =============================================================================
from dungeon_engine.engine.random_selection import (
    WeightedChoice,
    chance,
    parse_dice_spec,
    random_element,
    random_int,
    roll_dice,
    seed_random,
    shuffle,
    weighted_random,
    weighted_random_multiple,
)

# =============================================================================
# Rules
# =============================================================================
from dungeon_engine.engine.combat import (
    AttackRoll,
    CombatRoundResult,
    Damage,
    Defense,
    ExperienceResult,
    award_experience,
    calculate_attack_roll,
    calculate_damage,
    calculate_defense,
    describe_combat_round,
    experience_multiplier,
    generate_monster,
    process_combat_round,
)
from dungeon_engine.engine.inventory import (
    TransferResult,
    calculate_total_weight,
    find_item_by_name,
    get_item_description,
    organize_by_category,
    transfer_item,
    would_exceed_weight_limit,
)

# =============================================================================
# Command Pipeline
# =============================================================================
from dungeon_engine.engine.commands import (
    Command,
    CommandDefinition,
    CommandRegistry,
    ParseFailure,
    ParseFailureReason,
    ParseResult,
    create_default_registry,
)
from dungeon_engine.engine.parser import CommandParser
from dungeon_engine.engine.state import GameStateStore
from dungeon_engine.engine.handlers import HandlerContext, HandlerResult, get_handler, handler
from dungeon_engine.engine.events import (
    MONSTER_REGENERATION,
    WANDERING_MONSTER,
    run_time_event,
    schedule_default_events,
    time_event,
)
from dungeon_engine.engine.executor import CommandExecutor, CommandResponse


__all__ = [
    # Random selection
    "WeightedChoice",
    "chance",
    "parse_dice_spec",
    "random_element",
    "random_int",
    "roll_dice",
    "seed_random",
    "shuffle",
    "weighted_random",
    "weighted_random_multiple",
    # Combat
    "AttackRoll",
    "CombatRoundResult",
    "Damage",
    "Defense",
    "ExperienceResult",
    "award_experience",
    "calculate_attack_roll",
    "calculate_damage",
    "calculate_defense",
    "describe_combat_round",
    "experience_multiplier",
    "generate_monster",
    "process_combat_round",
    # Inventory
    "TransferResult",
    "calculate_total_weight",
    "find_item_by_name",
    "get_item_description",
    "organize_by_category",
    "transfer_item",
    "would_exceed_weight_limit",
    # Commands
    "Command",
    "CommandDefinition",
    "CommandRegistry",
    "ParseFailure",
    "ParseFailureReason",
    "ParseResult",
    "create_default_registry",
    "CommandParser",
    # State and execution
    "GameStateStore",
    "HandlerContext",
    "HandlerResult",
    "get_handler",
    "handler",
    "MONSTER_REGENERATION",
    "WANDERING_MONSTER",
    "run_time_event",
    "schedule_default_events",
    "time_event",
    "CommandExecutor",
    "CommandResponse",
]
