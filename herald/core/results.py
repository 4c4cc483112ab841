"""Structured outcome of processing one message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal, Union

if TYPE_CHECKING:
    from ..commands.argument_types import Command, CommandArg


@dataclass(frozen=True, slots=True)
class CooldownInEffect:
    type: ClassVar[str] = "cooldown-in-effect"


@dataclass(frozen=True, slots=True)
class MissingRequiredArg:
    command_arg: CommandArg
    type: ClassVar[str] = "missing-required-arg"


@dataclass(frozen=True, slots=True)
class InvalidArgValue:
    command_arg: CommandArg
    provided_value: str
    type: ClassVar[str] = "invalid-arg-value"


@dataclass(frozen=True, slots=True)
class BlockedByGuard:
    reason: Any = None
    type: ClassVar[str] = "blocked-by-guard"


@dataclass(frozen=True, slots=True)
class UnhandledCommandExecutionError:
    error: BaseException
    type: ClassVar[str] = "unhandled-command-execution-error"


CommandInvocationError = Union[
    CooldownInEffect,
    MissingRequiredArg,
    InvalidArgValue,
    BlockedByGuard,
    UnhandledCommandExecutionError,
]


@dataclass(frozen=True, slots=True)
class NoCommandInvoked:
    message: Any
    prelude_matched: bool
    success: Literal[True] = True
    command_invoked: Literal[False] = False


@dataclass(frozen=True, slots=True)
class CommandInvokedSuccess:
    message: Any
    command: Command
    success: Literal[True] = True
    command_invoked: Literal[True] = True


@dataclass(frozen=True, slots=True)
class CommandInvokedFailure:
    message: Any
    command: Command
    error: CommandInvocationError
    success: Literal[False] = False
    command_invoked: Literal[True] = True


InvocationResult = Union[NoCommandInvoked, CommandInvokedSuccess, CommandInvokedFailure]
