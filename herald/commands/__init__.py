"""Command grammar, validation, argument parsing and registration."""

from .argument_types import Command, CommandArg
from .decorators import collect_commands, command
from .grammar import format_command, parse_command_string
from .parsers import INVALID_DATE, ArgumentParser, ArgumentParserFactory, resolve_arguments
from .registry import CommandRegistry
from .validation import validate_command

__all__ = [
    "Command",
    "CommandArg",
    "command",
    "collect_commands",
    "parse_command_string",
    "format_command",
    "validate_command",
    "ArgumentParser",
    "ArgumentParserFactory",
    "resolve_arguments",
    "INVALID_DATE",
    "CommandRegistry",
]
