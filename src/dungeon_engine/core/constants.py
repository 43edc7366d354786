"""Engine-wide constants for the dungeon engine.

This module defines the fixed numbers of the game rules: generation
probabilities, combat baselines and progression factors.
"""

from __future__ import annotations

# =============================================================================
# Generation
# =============================================================================

VERTICAL_STEP_BIAS = 0.7
"""Chance the grid main-path walk steps vertically toward the boss."""

BRANCH_CHANCE = 0.3
"""Chance a main-path cell sprouts a side branch."""

BRANCH_MIN_LENGTH = 2
BRANCH_MAX_LENGTH = 4

ROOM_ITEM_CHANCE = 0.3
"""Chance a non-entrance room receives procedural items."""

ROOM_ITEM_MIN = 1
ROOM_ITEM_MAX = 2

BASE_ROOM_COUNT = 5
ROOMS_PER_DEPTH = 2

EXTRA_CONNECTION_DIVISOR = 3
"""Extra graph connections attempted = room count // this value."""

BOSS_DIFFICULTY_BONUS = 2

# =============================================================================
# Combat
# =============================================================================

MAX_DICE_COUNT = 1000
"""Most dice a single roll may throw; d20 refuses more."""

ATTACK_DIE = "1d20"
NATURAL_CRITICAL = 20
BASE_DEFENSE = 10
UNARMED_DAMAGE = "1d4"
UNARMED_NAME = "unarmed strike"
MINIMUM_DAMAGE = 1
CRITICAL_DAMAGE_MULTIPLIER = 2
COMBAT_SKILL_DIVISOR = 5
"""Combat skill points per +1 attack bonus."""

MONSTER_BASE_HEALTH = 20
MONSTER_HEALTH_PER_DIFFICULTY = 10
EXPERIENCE_PER_DIFFICULTY = 10

HIGHER_LEVEL_XP_BONUS = 0.2
LOWER_LEVEL_XP_MULTIPLIER = 0.5
LOWER_LEVEL_THRESHOLD = 2

# =============================================================================
# Progression
# =============================================================================

STARTING_EXPERIENCE_THRESHOLD = 100
EXPERIENCE_THRESHOLD_GROWTH = 1.5
LEVEL_UP_BASE_HEALTH = 10
LEVEL_UP_CARRY_WEIGHT = 5
DEFAULT_ABILITY_SCORE = 10


__all__ = [
    # Generation
    "VERTICAL_STEP_BIAS",
    "BRANCH_CHANCE",
    "BRANCH_MIN_LENGTH",
    "BRANCH_MAX_LENGTH",
    "ROOM_ITEM_CHANCE",
    "ROOM_ITEM_MIN",
    "ROOM_ITEM_MAX",
    "BASE_ROOM_COUNT",
    "ROOMS_PER_DEPTH",
    "EXTRA_CONNECTION_DIVISOR",
    "BOSS_DIFFICULTY_BONUS",
    # Combat
    "MAX_DICE_COUNT",
    "ATTACK_DIE",
    "NATURAL_CRITICAL",
    "BASE_DEFENSE",
    "UNARMED_DAMAGE",
    "UNARMED_NAME",
    "MINIMUM_DAMAGE",
    "CRITICAL_DAMAGE_MULTIPLIER",
    "COMBAT_SKILL_DIVISOR",
    "MONSTER_BASE_HEALTH",
    "MONSTER_HEALTH_PER_DIFFICULTY",
    "EXPERIENCE_PER_DIFFICULTY",
    "HIGHER_LEVEL_XP_BONUS",
    "LOWER_LEVEL_XP_MULTIPLIER",
    "LOWER_LEVEL_THRESHOLD",
    # Progression
    "STARTING_EXPERIENCE_THRESHOLD",
    "EXPERIENCE_THRESHOLD_GROWTH",
    "LEVEL_UP_BASE_HEALTH",
    "LEVEL_UP_CARRY_WEIGHT",
    "DEFAULT_ABILITY_SCORE",
]
