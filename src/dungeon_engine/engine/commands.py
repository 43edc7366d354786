"""Command registry.

Each player verb is described by a :class:`CommandDefinition` naming its
handler, category, game-time cost and aliases. The parser resolves raw
text against this registry; the executor uses the definition to gate
and time the command.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from dungeon_engine.core.logging import get_logger
from dungeon_engine.models.enums import CommandCategory


logger = get_logger(__name__)


# =============================================================================
# Types
# =============================================================================


@dataclass(frozen=True)
class CommandDefinition:
    """Registry entry for one command.

    Attributes:
        name: Canonical verb.
        handler_id: Key of the handler function that executes it.
        category: Handler category.
        time_cost: Game seconds the command consumes on success.
        description: One-line summary for the help listing.
        usage: Usage string, e.g. ``go <direction>``.
        aliases: Alternative verbs resolving to this command.
        requires_ready: Whether the player must be ready to issue it.
        help_lines: Extra lines shown by ``help <command>``.
    """

    name: str
    handler_id: str
    category: CommandCategory
    time_cost: int
    description: str
    usage: str
    aliases: tuple[str, ...] = ()
    requires_ready: bool = True
    help_lines: tuple[str, ...] = ()


@dataclass(frozen=True)
class Command:
    """A successfully parsed command.

    Attributes:
        verb: Canonical verb of the matched definition.
        args: Argument tail with internal spacing preserved.
        definition: The matched registry entry.
        raw_input: The text the player typed.
    """

    verb: str
    args: str
    definition: CommandDefinition
    raw_input: str

    @property
    def time_cost(self) -> int:
        return self.definition.time_cost


class ParseFailureReason(StrEnum):
    EMPTY_INPUT = "empty_input"
    UNMATCHED = "unmatched"


@dataclass(frozen=True)
class ParseFailure:
    reason: ParseFailureReason
    raw_input: str
    message: str


ParseResult = Command | ParseFailure


# =============================================================================
# Registry
# =============================================================================


@dataclass
class CommandRegistry:
    """Verb and alias lookup table; lookups are case-insensitive."""

    _commands: dict[str, CommandDefinition] = field(default_factory=dict)
    _aliases: dict[str, str] = field(default_factory=dict)

    def register(self, definition: CommandDefinition) -> CommandDefinition:
        name = definition.name.lower()
        self._commands[name] = definition
        for alias in definition.aliases:
            self._aliases[alias.lower()] = name
        return definition

    def lookup(self, verb: str) -> CommandDefinition | None:
        """Find a definition by canonical name or alias."""
        key = verb.lower()
        if key in self._commands:
            return self._commands[key]
        name = self._aliases.get(key)
        return self._commands.get(name) if name is not None else None

    def all(self) -> list[CommandDefinition]:
        return list(self._commands.values())

    def by_category(self, category: CommandCategory) -> list[CommandDefinition]:
        return [definition for definition in self._commands.values() if definition.category == category]

    def __contains__(self, verb: str) -> bool:
        return self.lookup(verb) is not None

    def __len__(self) -> int:
        return len(self._commands)


DEFAULT_COMMANDS: tuple[CommandDefinition, ...] = (
    CommandDefinition(
        name="look",
        handler_id="look",
        category=CommandCategory.INTERACTION,
        time_cost=1,
        description="Examine your surroundings or a specific object",
        usage="look [object]",
        aliases=("examine", "inspect"),
        requires_ready=False,
        help_lines=(
            "- look - Examine your current surroundings",
            "- look <object> - Examine a specific object or item",
            "- look <direction> - Look in a specific direction",
        ),
    ),
    CommandDefinition(
        name="go",
        handler_id="go",
        category=CommandCategory.MOVEMENT,
        time_cost=10,
        description="Move in a direction (north, south, east, west)",
        usage="go <direction>",
        aliases=("move", "walk"),
        help_lines=(
            "- go <direction> - Move in a direction (north, south, east, west)",
            "Example: 'go north'",
        ),
    ),
    CommandDefinition(
        name="take",
        handler_id="take",
        category=CommandCategory.INTERACTION,
        time_cost=2,
        description="Pick up an item",
        usage="take <item>",
        aliases=("get", "grab"),
        help_lines=(
            "- take <item> - Pick up an item from your surroundings",
            "Example: 'take sword'",
        ),
    ),
    CommandDefinition(
        name="drop",
        handler_id="drop",
        category=CommandCategory.INTERACTION,
        time_cost=1,
        description="Drop an item from your inventory",
        usage="drop <item>",
        aliases=("discard",),
        help_lines=(
            "- drop <item> - Drop an item from your inventory",
            "Example: 'drop potion'",
        ),
    ),
    CommandDefinition(
        name="inventory",
        handler_id="inventory",
        category=CommandCategory.SYSTEM,
        time_cost=0,
        description="Check what you're carrying",
        usage="inventory (or inv, i)",
        aliases=("inv", "i"),
        requires_ready=False,
        help_lines=(
            "- inventory - List all items you're carrying",
            "You can also use 'inv' or 'i' as shortcuts",
        ),
    ),
    CommandDefinition(
        name="stats",
        handler_id="stats",
        category=CommandCategory.SYSTEM,
        time_cost=0,
        description="Show your character stats",
        usage="stats",
        aliases=("status", "character"),
        requires_ready=False,
        help_lines=("- stats - Show your character's statistics and attributes",),
    ),
    CommandDefinition(
        name="equip",
        handler_id="equip",
        category=CommandCategory.INTERACTION,
        time_cost=3,
        description="Equip a weapon or armor",
        usage="equip <item>",
        aliases=("wield", "wear"),
        help_lines=(
            "- equip <item> - Equip a weapon or armor from your inventory",
            "Example: 'equip sword'",
        ),
    ),
    CommandDefinition(
        name="unequip",
        handler_id="unequip",
        category=CommandCategory.INTERACTION,
        time_cost=2,
        description="Stop using an equipped weapon or armor",
        usage="unequip <item>",
        aliases=("remove",),
        help_lines=(
            "- unequip <item> - Put away an equipped weapon or armor",
            "Example: 'unequip chainmail'",
        ),
    ),
    CommandDefinition(
        name="use",
        handler_id="use",
        category=CommandCategory.INTERACTION,
        time_cost=3,
        description="Use an item from your inventory",
        usage="use <item>",
        aliases=("drink", "quaff"),
        help_lines=(
            "- use <item> - Use a consumable item from your inventory",
            "Example: 'use health potion'",
        ),
    ),
    CommandDefinition(
        name="attack",
        handler_id="attack",
        category=CommandCategory.COMBAT,
        time_cost=6,
        description="Attack a monster in the room",
        usage="attack [monster]",
        aliases=("fight", "hit", "kill"),
        help_lines=(
            "- attack <monster> - Attack a monster in the room",
            "- attack - Attack the first monster you see",
            "Example: 'attack goblin'",
        ),
    ),
    CommandDefinition(
        name="wait",
        handler_id="wait",
        category=CommandCategory.SYSTEM,
        time_cost=10,
        description="Let time pass and recover your footing",
        usage="wait",
        aliases=("rest",),
        requires_ready=False,
        help_lines=("- wait - Let time pass; recovers from being staggered",),
    ),
    CommandDefinition(
        name="help",
        handler_id="help",
        category=CommandCategory.SYSTEM,
        time_cost=0,
        description="Show this help menu or help for a specific command",
        usage="help [command]",
        aliases=("?", "commands"),
        requires_ready=False,
    ),
)


def create_default_registry() -> CommandRegistry:
    """Build a registry holding every built-in command."""
    registry = CommandRegistry()
    for definition in DEFAULT_COMMANDS:
        registry.register(definition)
    logger.debug("Command registry built", commands=len(registry))
    return registry


__all__ = [
    "CommandDefinition",
    "Command",
    "ParseFailureReason",
    "ParseFailure",
    "ParseResult",
    "CommandRegistry",
    "DEFAULT_COMMANDS",
    "create_default_registry",
]
