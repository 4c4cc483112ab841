"""Argument parsers using strategy pattern.

Each declared arg type (``Int``, ``Float``, ``Date``, ``GuildMember``) maps to
an :class:`ArgumentParser`. Hosts can register additional type tags on an
:class:`ArgumentParserFactory` without touching the resolver.
"""

import logging
import math
import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import datetime
from typing import Any, Protocol

from ..core.errors import (
    ArgumentConversionError,
    InvalidArgumentValueError,
    MissingRequiredArgumentError,
)
from ..core.utils import call_maybe_async
from .argument_types import CommandArg

logger = logging.getLogger(__name__)

INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
MENTION_PATTERN = re.compile(r"^<@!?(\d+)>$")

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%m/%d/%Y",
    "%d.%m.%Y",
)


class _InvalidDate:
    """Placeholder bound to a lenient ``Date`` arg whose token did not parse."""

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "INVALID_DATE"


INVALID_DATE = _InvalidDate()


class MemberResolver(Protocol):
    """Host collaborator that looks up a guild member by id."""

    def resolve(self, member_id: str, message: Any) -> Any:
        """Return the member, or ``None`` if it cannot be found. May be async."""


class ArgumentParser(ABC):
    """Base class for argument parsers."""

    @abstractmethod
    async def parse(self, token: str, definition: CommandArg, message: Any) -> Any:
        """Coerce a raw token, raising ArgumentConversionError on failure."""


class StringArgumentParser(ArgumentParser):
    """Parser for untyped arguments."""

    async def parse(self, token: str, definition: CommandArg, message: Any) -> Any:
        return token


class IntegerArgumentParser(ArgumentParser):
    """Parser for ``Int`` arguments."""

    async def parse(self, token: str, definition: CommandArg, message: Any) -> Any:
        if not INTEGER_PATTERN.match(token):
            raise ArgumentConversionError(f"{token!r} is not an integer")
        return int(token)


class FloatArgumentParser(ArgumentParser):
    """Parser for ``Float`` arguments."""

    async def parse(self, token: str, definition: CommandArg, message: Any) -> Any:
        try:
            value = float(token)
        except ValueError as e:
            raise ArgumentConversionError(f"{token!r} is not a number") from e
        if not math.isfinite(value) or "_" in token:
            raise ArgumentConversionError(f"{token!r} is not a number")
        return value


class DateArgumentParser(ArgumentParser):
    """Parser for ``Date`` arguments.

    In lenient mode an unparseable token yields :data:`INVALID_DATE` instead
    of failing the invocation.
    """

    def __init__(self, strict: bool = True, formats: Sequence[str] = DATE_FORMATS) -> None:
        self.strict = strict
        self.formats = tuple(formats)

    async def parse(self, token: str, definition: CommandArg, message: Any) -> Any:
        for fmt in self.formats:
            try:
                return datetime.strptime(token, fmt)
            except ValueError:
                continue

        if self.strict:
            raise ArgumentConversionError(f"{token!r} is not a date")

        logger.debug(f"Lenient date parsing: {token!r} bound as invalid date")
        return INVALID_DATE


class GuildMemberArgumentParser(ArgumentParser):
    """Parser for ``GuildMember`` arguments, delegating lookup to the host."""

    def __init__(self, resolver: MemberResolver | None = None) -> None:
        self.resolver = resolver

    async def parse(self, token: str, definition: CommandArg, message: Any) -> Any:
        match = MENTION_PATTERN.match(token)
        if not match:
            raise ArgumentConversionError(f"{token!r} is not a member mention")

        if self.resolver is None:
            raise ArgumentConversionError("No member resolver configured")

        member = await call_maybe_async(self.resolver.resolve, match.group(1), message)
        if member is None:
            raise ArgumentConversionError(f"Member {match.group(1)} not found")
        return member


class ArgumentParserFactory:
    """Registry mapping arg type tags to parsers."""

    def __init__(
        self,
        member_resolver: MemberResolver | None = None,
        strict_dates: bool = True,
    ) -> None:
        self._default = StringArgumentParser()
        self._parsers: dict[str, ArgumentParser] = {
            "Int": IntegerArgumentParser(),
            "Float": FloatArgumentParser(),
            "Date": DateArgumentParser(strict=strict_dates),
            "GuildMember": GuildMemberArgumentParser(member_resolver),
        }

    def register(self, type_name: str, parser: ArgumentParser) -> None:
        """Add or replace the parser for a type tag."""
        self._parsers[type_name] = parser
        logger.debug(f"Registered argument parser for type {type_name}: {type(parser).__name__}")

    def has_parser(self, type_name: str | None) -> bool:
        return type_name is None or type_name in self._parsers

    def get_parser(self, type_name: str | None) -> ArgumentParser:
        """Get the parser for a type tag; untyped args use the string parser."""
        if type_name is None:
            return self._default
        return self._parsers[type_name]

    @property
    def type_names(self) -> list[str]:
        return sorted(self._parsers)


async def resolve_arguments(
    arg_tokens: Sequence[str],
    command_args: Sequence[CommandArg],
    message: Any = None,
    factory: ArgumentParserFactory | None = None,
) -> dict[str, Any]:
    """
    Bind message tokens to command arg slots, left to right.

    Args:
        arg_tokens: Tokens following the command keyword
        command_args: The command's arg slots in positional order
        message: The incoming message, passed through to parsers
        factory: Type tag registry; a default one is used if omitted

    Returns:
        Mapping of arg name to coerced value. Optional args that received no
        token are absent.

    Raises:
        InvalidArgumentValueError: A token failed coercion (first one wins)
        MissingRequiredArgumentError: A required arg received no token
    """
    factory = factory or ArgumentParserFactory()
    resolved: dict[str, Any] = {}

    token_index = 0
    arg_index = 0
    while arg_index < len(command_args) and token_index < len(arg_tokens):
        arg = command_args[arg_index]

        if arg.rest:
            resolved[arg.name] = " ".join(arg_tokens[token_index:])
            token_index = len(arg_tokens)
            arg_index += 1
            continue

        token = arg_tokens[token_index]
        parser = factory.get_parser(arg.type)
        try:
            resolved[arg.name] = await parser.parse(token, arg, message)
        except ArgumentConversionError as e:
            logger.debug(f"Error parsing argument {arg.name}: {e}")
            raise InvalidArgumentValueError(arg, token) from e
        except Exception as e:
            logger.warning(f"Error parsing argument {arg.name}: {e}")
            raise InvalidArgumentValueError(arg, token) from e

        token_index += 1
        arg_index += 1

    for arg in command_args[arg_index:]:
        if arg.required:
            raise MissingRequiredArgumentError(arg)

    return resolved
