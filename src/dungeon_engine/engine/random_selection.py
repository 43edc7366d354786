"""Random selection primitives shared by generation and combat.

Dice are rolled through the d20 library; every other primitive draws
from the same process-wide ``random`` generator that d20 uses, so a
single ``seed_random`` call makes a whole session reproducible.
"""

from __future__ import annotations

import random
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

import d20

from dungeon_engine.core.constants import MAX_DICE_COUNT
from dungeon_engine.core.exceptions import (
    ContractViolationError,
    DiceRollError,
    InvalidDiceSpecError,
    InvalidRangeError,
)
from dungeon_engine.core.logging import get_logger


logger = get_logger(__name__)

T = TypeVar("T")

_DICE_SPEC = re.compile(r"^\s*(\d+)d(\d+)\s*$", re.IGNORECASE)


@dataclass(frozen=True)
class WeightedChoice(Generic[T]):
    """A candidate paired with its non-negative selection weight.

    Attributes:
        item: The value returned when this entry is drawn.
        weight: Relative likelihood; zero means never drawn unless every
            weight in the pool is zero.
    """

    item: T
    weight: float


def seed_random(seed: int | None) -> None:
    """Seed the process RNG used by dice and selection helpers.

    Args:
        seed: Seed value, or None to reseed from system entropy.
    """
    random.seed(seed)
    logger.debug("Random generator seeded", seed=seed)


def random_int(minimum: int, maximum: int) -> int:
    """Return a uniform integer in ``[minimum, maximum]`` inclusive.

    Raises:
        InvalidRangeError: If minimum is greater than maximum.
    """
    if minimum > maximum:
        raise InvalidRangeError(
            f"Invalid range: {minimum} > {maximum}",
            minimum=minimum,
            maximum=maximum,
        )
    return random.randint(minimum, maximum)


def chance(probability: float) -> bool:
    """Return True with the given probability."""
    return random.random() < probability


def random_element(items: Sequence[T]) -> T | None:
    """Pick a uniformly random element, or None for an empty sequence."""
    if not items:
        return None
    return items[random.randrange(len(items))]


def parse_dice_spec(spec: str) -> tuple[int, int]:
    """Split a ``<count>d<sides>`` spec into its two integers.

    Args:
        spec: Dice notation such as "2d6".

    Returns:
        Tuple of (count, sides).

    Raises:
        InvalidDiceSpecError: If the spec is malformed, has a zero part or
            throws more than ``MAX_DICE_COUNT`` dice.
    """
    if not isinstance(spec, str):
        raise InvalidDiceSpecError("Dice spec must be a string", expression=repr(spec))

    match = _DICE_SPEC.match(spec)
    if match is None:
        raise InvalidDiceSpecError(f"Malformed dice spec: {spec!r}", expression=spec)

    count, sides = int(match.group(1)), int(match.group(2))
    if count < 1 or sides < 1:
        raise InvalidDiceSpecError(
            "Dice count and sides must both be at least 1",
            expression=spec,
        )
    if count > MAX_DICE_COUNT:
        raise InvalidDiceSpecError(
            f"Cannot roll more than {MAX_DICE_COUNT} dice at once",
            expression=spec,
        )
    return count, sides


def roll_dice(spec: str) -> int:
    """Roll ``<count>d<sides>`` and return the sum.

    The result is always within ``[count, count * sides]``.

    Args:
        spec: Dice notation such as "1d20" or "2d6".

    Returns:
        Sum of the rolled dice.

    Raises:
        InvalidDiceSpecError: If the spec is malformed.
        DiceRollError: If the d20 library rejects the roll.
    """
    count, sides = parse_dice_spec(spec)

    try:
        result = d20.roll(f"{count}d{sides}")
    except d20.errors.RollError as exc:
        raise DiceRollError(f"Dice roll failed: {exc}", expression=spec) from exc

    logger.debug("Dice rolled", expression=spec, total=result.total)
    return result.total


def shuffle(items: Sequence[T]) -> list[T]:
    """Return a Fisher-Yates shuffled copy; the input is not mutated."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = random.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def _weighted_index(entries: Sequence[WeightedChoice[T]]) -> int | None:
    """Draw an index with probability proportional to entry weight."""
    if not entries:
        return None

    for entry in entries:
        if entry.weight < 0:
            raise ContractViolationError(
                f"Negative selection weight for {entry.item!r}",
                field_name="weight",
            )

    total_weight = sum(entry.weight for entry in entries)
    if total_weight == 0:
        return random.randrange(len(entries))

    threshold = random.random() * total_weight
    cumulative = 0.0
    for index, entry in enumerate(entries):
        cumulative += entry.weight
        if threshold < cumulative:
            return index

    # Float rounding can leave threshold at the very top; use the last
    # entry that can actually be drawn.
    for index in range(len(entries) - 1, -1, -1):
        if entries[index].weight > 0:
            return index
    return len(entries) - 1


def weighted_random(entries: Sequence[WeightedChoice[T]]) -> T | None:
    """Select one item with probability proportional to its weight.

    An all-zero pool degrades to a uniform choice. An empty pool returns
    None rather than raising.

    Raises:
        ContractViolationError: If any weight is negative.
    """
    index = _weighted_index(entries)
    if index is None:
        return None
    return entries[index].item


def weighted_random_multiple(entries: Sequence[WeightedChoice[T]], count: int) -> list[T]:
    """Sample ``count`` distinct entries without replacement.

    Each draw is weight-proportional over the entries still in the pool;
    the drawn entry is removed before the next draw so the total weight is
    recomputed every time. When ``count`` covers the whole pool every item
    is returned in shuffled order.
    """
    if not entries or count <= 0:
        return []

    if count >= len(entries):
        return shuffle([entry.item for entry in entries])

    pool = list(entries)
    selected: list[T] = []
    for _ in range(count):
        index = _weighted_index(pool)
        if index is None:
            break
        selected.append(pool.pop(index).item)
    return selected


__all__ = [
    "WeightedChoice",
    "seed_random",
    "random_int",
    "chance",
    "random_element",
    "parse_dice_spec",
    "roll_dice",
    "shuffle",
    "weighted_random",
    "weighted_random_multiple",
]
