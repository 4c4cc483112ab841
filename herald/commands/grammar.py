"""Parser for the command definition grammar.

A definition looks like ``name[|alias...] [<arg>|[arg]]*`` where each arg body
is either ``...name`` (rest arg) or ``name[:Type]``::

    parse_command_string("pet|p <name> [times:Int]")
    parse_command_string("say <channel> <...text>")
"""

import logging
from collections.abc import Callable
from typing import Any

from ..core.errors import InvalidArgDelimiters, MissingCommandName, RestArgTypeNotAllowed
from .argument_types import Command, CommandArg

logger = logging.getLogger(__name__)

REST_MARKER = "..."

# opening char -> (closing char, required)
ARG_DELIMITERS = {
    "<": (">", True),
    "[": ("]", False),
}


def parse_command_string(
    definition: str,
    execute: Callable[..., Any] | None = None,
    guard: Callable[..., Any] | None = None,
) -> Command:
    """Parse a definition string into a :class:`Command`."""
    parts = definition.strip().split(maxsplit=1)
    if not parts:
        raise MissingCommandName(definition)

    name, *aliases = parts[0].split("|")
    if not name:
        raise MissingCommandName(definition)

    arg_tokens = parts[1].split() if len(parts) > 1 else []
    args = tuple(parse_arg_token(token) for token in arg_tokens)

    logger.debug(f"Parsed command definition {definition!r}: {name} {aliases} {args}")
    return Command(
        name=name,
        aliases=tuple(aliases),
        args=args,
        execute=execute,
        guard=guard,
    )


def parse_arg_token(token: str) -> CommandArg:
    """Parse a single ``<...>`` or ``[...]`` arg token."""
    if len(token) < 2 or token[0] not in ARG_DELIMITERS:
        raise InvalidArgDelimiters(token)

    closing, required = ARG_DELIMITERS[token[0]]
    if token[-1] != closing:
        raise InvalidArgDelimiters(token)

    body = token[1:-1]
    if body.startswith(REST_MARKER):
        name = body[len(REST_MARKER):]
        if ":" in name:
            raise RestArgTypeNotAllowed(token)
        if not name:
            raise InvalidArgDelimiters(token)
        return CommandArg(name=name, required=required, rest=True)

    name, _, type_name = body.partition(":")
    if not name:
        raise InvalidArgDelimiters(token)
    return CommandArg(name=name, required=required, type=type_name or None)


def format_arg(arg: CommandArg) -> str:
    body = f"{REST_MARKER}{arg.name}" if arg.rest else arg.name
    if arg.type:
        body = f"{body}:{arg.type}"
    return f"<{body}>" if arg.required else f"[{body}]"


def format_command(command: Command) -> str:
    """Render a command back into its canonical definition string."""
    head = "|".join(command.keywords)
    return " ".join([head, *(format_arg(arg) for arg in command.args)])
