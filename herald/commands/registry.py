"""Command registration system."""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from ..core.errors import KeywordCollisionError, UnknownArgTypeError
from .argument_types import Command
from .grammar import parse_command_string
from .parsers import ArgumentParserFactory
from .validation import validate_command

logger = logging.getLogger(__name__)

CommandHandler = Callable[..., Any] | Mapping[str, Any]


class CommandRegistry:
    """Holds validated commands and resolves invocation keywords.

    The registry is built in one go: every command is validated before any is
    stored, so an invalid command means no registry at all.
    """

    def __init__(
        self,
        commands: Iterable[Command],
        parser_factory: ArgumentParserFactory | None = None,
        reject_alias_collisions: bool = False,
    ) -> None:
        self.parser_factory = parser_factory or ArgumentParserFactory()
        commands = list(commands)

        for cmd in commands:
            validate_command(cmd)
            self._check_arg_types(cmd)

        if reject_alias_collisions:
            self._check_keyword_collisions(commands)

        self._commands: tuple[Command, ...] = tuple(commands)
        for cmd in self._commands:
            logger.info(f"Registered command: {cmd.name} (aliases: {list(cmd.aliases)})")

    @classmethod
    def from_definitions(
        cls,
        definitions: Mapping[str, CommandHandler],
        parser_factory: ArgumentParserFactory | None = None,
        reject_alias_collisions: bool = False,
    ) -> "CommandRegistry":
        """
        Build a registry from ``definition -> handler`` pairs.

        A handler is either the execute callable itself or a mapping with an
        ``execute`` key and an optional ``guard`` key.
        """
        commands = []
        for definition, handler in definitions.items():
            if isinstance(handler, Mapping):
                execute = handler.get("execute")
                guard = handler.get("guard")
            else:
                execute, guard = handler, None

            if not callable(execute):
                raise TypeError(f"Command {definition!r} has no callable execute")
            commands.append(parse_command_string(definition, execute=execute, guard=guard))

        return cls(
            commands,
            parser_factory=parser_factory,
            reject_alias_collisions=reject_alias_collisions,
        )

    def lookup(self, keyword: str) -> Command | None:
        """Return the first command answering to ``keyword``."""
        for cmd in self._commands:
            if cmd.matches(keyword):
                return cmd
        return None

    def _check_arg_types(self, cmd: Command) -> None:
        for arg in cmd.args:
            if not self.parser_factory.has_parser(arg.type):
                raise UnknownArgTypeError(arg.name, arg.type)

    @staticmethod
    def _check_keyword_collisions(commands: list[Command]) -> None:
        owners: dict[str, str] = {}
        for cmd in commands:
            for keyword in cmd.keywords:
                if keyword in owners:
                    raise KeywordCollisionError(keyword, owners[keyword], cmd.name)
                owners[keyword] = cmd.name

    @property
    def commands(self) -> tuple[Command, ...]:
        return self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self):
        return iter(self._commands)
