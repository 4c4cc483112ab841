"""Structural validation of parsed commands."""

import logging

from ..core.errors import ArgPositionError, DuplicateArgError
from .argument_types import Command, CommandArg

logger = logging.getLogger(__name__)


def validate_command(command: Command) -> None:
    """Raise if the command's args break positional or naming rules."""
    validate_command_args(command.args)
    logger.debug(f"Validated command {command.name}")


def validate_command_args(args: tuple[CommandArg, ...] | list[CommandArg]) -> None:
    optional_seen = False
    rest_seen = False
    seen_names: set[str] = set()

    for arg in args:
        if rest_seen:
            raise ArgPositionError(f"Invalid arg {arg.name} positioned after rest arg")

        if optional_seen and arg.required:
            raise ArgPositionError(
                f"Invalid required arg {arg.name} positioned after optional arg"
            )

        if arg.name in seen_names:
            raise DuplicateArgError(arg.name)

        rest_seen = rest_seen or arg.rest
        optional_seen = optional_seen or not arg.required
        seen_names.add(arg.name)
