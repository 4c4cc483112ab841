"""Command and command argument definitions."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class CommandArg:
    """A single positional argument slot of a command."""

    name: str
    required: bool = True
    rest: bool = False
    type: str | None = None


@dataclass(frozen=True, slots=True)
class Command:
    """A registered command: keywords, argument slots and its callbacks."""

    name: str
    aliases: tuple[str, ...] = ()
    args: tuple[CommandArg, ...] = ()
    execute: Callable[..., Any] | None = field(default=None, compare=False, repr=False)
    guard: Callable[..., Any] | None = field(default=None, compare=False, repr=False)

    @property
    def keywords(self) -> tuple[str, ...]:
        return (self.name, *self.aliases)

    def matches(self, keyword: str) -> bool:
        return keyword in self.keywords
