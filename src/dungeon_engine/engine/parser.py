"""Command parser.

Turns a line of player text into a :class:`Command` or a
:class:`ParseFailure`. Parsing goes through four stages: the text is
tokenized into a verb and an argument tail, shorthand verbs are
expanded, the verb is matched against the registry, and the result is
returned. ``parse`` never raises.
"""

from __future__ import annotations

import re

from dungeon_engine.core.exceptions import EmptyInputError, ParseError, UnmatchedCommandError
from dungeon_engine.core.logging import get_logger
from dungeon_engine.engine.commands import (
    Command,
    CommandRegistry,
    ParseFailure,
    ParseFailureReason,
    ParseResult,
    create_default_registry,
)


logger = get_logger(__name__)

_TOKENS = re.compile(r"(\S+)\s*(.*)", re.DOTALL)

# shorthand verb -> (canonical verb, implied argument)
SHORTHAND_ALIASES: dict[str, tuple[str, str]] = {
    "n": ("go", "north"),
    "s": ("go", "south"),
    "e": ("go", "east"),
    "w": ("go", "west"),
    "north": ("go", "north"),
    "south": ("go", "south"),
    "east": ("go", "east"),
    "west": ("go", "west"),
    "i": ("inventory", ""),
    "inv": ("inventory", ""),
    "l": ("look", ""),
    "x": ("look", ""),
}

EMPTY_INPUT_MESSAGE = "Please enter a command. Type 'help' for available commands."


def tokenize(text: str) -> tuple[str, str]:
    """Split trimmed text into a verb and the untouched argument tail.

    Raises:
        EmptyInputError: If the text is empty after trimming.
    """
    stripped = text.strip()
    match = _TOKENS.match(stripped)
    if match is None:
        raise EmptyInputError("Empty command", raw_input=text)
    return match.group(1), match.group(2)


def expand_shorthand(verb: str, args: str) -> tuple[str, str]:
    """Expand a shorthand verb; an implied argument comes before the tail."""
    shorthand = SHORTHAND_ALIASES.get(verb.lower())
    if shorthand is None:
        return verb, args
    canonical, implied = shorthand
    return canonical, " ".join(part for part in (implied, args) if part)


class CommandParser:
    """Resolves raw text against a command registry.

    Example:
        >>> parser = CommandParser()
        >>> parser.parse("n").args
        'north'
    """

    def __init__(self, registry: CommandRegistry | None = None) -> None:
        self.registry = registry or create_default_registry()

    def resolve(self, text: str) -> Command:
        """Parse text, raising on failure.

        Raises:
            EmptyInputError: If the text is blank.
            UnmatchedCommandError: If no command or alias matches the verb.
        """
        verb, args = tokenize(text)
        verb, args = expand_shorthand(verb, args)

        definition = self.registry.lookup(verb)
        if definition is None:
            raise UnmatchedCommandError(f"Unknown command: {verb}", raw_input=text)

        return Command(
            verb=definition.name,
            args=args,
            definition=definition,
            raw_input=text,
        )

    def parse(self, text: str) -> ParseResult:
        """Parse text into a Command, or a ParseFailure describing why not."""
        try:
            command = self.resolve(text)
        except EmptyInputError:
            return ParseFailure(
                reason=ParseFailureReason.EMPTY_INPUT,
                raw_input=text,
                message=EMPTY_INPUT_MESSAGE,
            )
        except ParseError:
            logger.debug("Command not recognized", raw_input=text)
            return ParseFailure(
                reason=ParseFailureReason.UNMATCHED,
                raw_input=text,
                message=f"Command not recognized: '{text.strip()}'. Type 'help' for available commands.",
            )

        logger.debug("Command parsed", verb=command.verb, args=command.args)
        return command


__all__ = [
    "SHORTHAND_ALIASES",
    "EMPTY_INPUT_MESSAGE",
    "tokenize",
    "expand_shorthand",
    "CommandParser",
]
