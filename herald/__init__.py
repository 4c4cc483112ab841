"""Declarative command dispatch for chat bots."""

from .commands import Command, CommandArg, CommandRegistry, command, parse_command_string
from .core import COMMAND_FINISHED, Authorized, Denied
from .core.dispatcher import CommandDispatcher, ExecutePayload
from .core.options import DispatcherOptions

__all__ = [
    "Command",
    "CommandArg",
    "CommandRegistry",
    "command",
    "parse_command_string",
    "CommandDispatcher",
    "DispatcherOptions",
    "ExecutePayload",
    "Authorized",
    "Denied",
    "COMMAND_FINISHED",
]
