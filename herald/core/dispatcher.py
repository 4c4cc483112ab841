"""Routes incoming messages to registered commands.

Per message the dispatcher tokenizes the text, looks up the command, checks
its cooldown, resolves arguments, runs the guard and finally the command
body. The first failing step decides the :mod:`result <herald.core.results>`;
nothing raised on the way escapes :meth:`CommandDispatcher.process_message`.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol

from ..commands.argument_types import Command
from ..commands.decorators import collect_commands
from ..commands.parsers import ArgumentParserFactory, MemberResolver, resolve_arguments
from ..commands.registry import CommandRegistry
from ..middleware import ErrorHandlerMiddleware, LoggingMiddleware
from .cooldown import CooldownTracker
from .errors import InvalidArgumentValueError, MissingRequiredArgumentError
from .event_system import COMMAND_FINISHED, EventSystem
from .guards import Denied, evaluate_guard
from .options import DispatcherOptions
from .results import (
    BlockedByGuard,
    CommandInvocationError,
    CommandInvokedFailure,
    CommandInvokedSuccess,
    CooldownInEffect,
    InvalidArgValue,
    InvocationResult,
    MissingRequiredArg,
    NoCommandInvoked,
    UnhandledCommandExecutionError,
)
from .tokenizer import ParsedInvocation, parse_command_message
from .utils import call_maybe_async

logger = logging.getLogger(__name__)


class IncomingMessage(Protocol):
    content: str

    def reply(self, text: str) -> Any:
        """Send a reply; may be a coroutine function."""


@dataclass(slots=True)
class ExecutePayload:
    """What a command's execute callback receives."""

    args: dict[str, Any]
    message: Any
    command: Command

    async def reply(self, text: str) -> Any:
        return await call_maybe_async(self.message.reply, text)


class CommandDispatcher:
    def __init__(
        self,
        commands: Mapping[str, Any] | CommandRegistry | Iterable[Command],
        options: DispatcherOptions | None = None,
        *,
        member_resolver: MemberResolver | None = None,
        parser_factory: ArgumentParserFactory | None = None,
        event_system: EventSystem | None = None,
        clock: Callable[[], float] | None = None,
        **overrides: Any,
    ) -> None:
        if options is None:
            options = DispatcherOptions.from_settings(**overrides)
        elif overrides:
            options = DispatcherOptions(**{**options.model_dump(), **overrides})
        self.options = options

        self.parser_factory = parser_factory or ArgumentParserFactory(
            member_resolver=member_resolver,
            strict_dates=options.strict_dates,
        )
        self.registry = self._build_registry(commands)

        tracker_kwargs = {"clock": clock} if clock else {}
        self.cooldowns = CooldownTracker(
            window_ms=options.cooldown,
            track_in_flight=options.track_in_flight,
            **tracker_kwargs,
        )

        if event_system is None:
            event_system = EventSystem()
            event_system.add_middleware(LoggingMiddleware())
            event_system.add_middleware(ErrorHandlerMiddleware())
        self.events = event_system

    @classmethod
    def from_object(cls, obj: Any, options: DispatcherOptions | None = None, **kwargs: Any) -> "CommandDispatcher":
        """Build a dispatcher from the ``@command`` methods of ``obj``."""
        return cls(collect_commands(obj), options, **kwargs)

    def _build_registry(self, commands: Any) -> CommandRegistry:
        if isinstance(commands, CommandRegistry):
            return commands
        if isinstance(commands, Mapping):
            return CommandRegistry.from_definitions(
                commands,
                parser_factory=self.parser_factory,
                reject_alias_collisions=self.options.reject_alias_collisions,
            )
        return CommandRegistry(
            commands,
            parser_factory=self.parser_factory,
            reject_alias_collisions=self.options.reject_alias_collisions,
        )

    @property
    def prelude(self) -> str:
        return self.options.prelude

    def on(self, event_name: str, callback: Callable) -> None:
        self.events.add_listener(event_name, callback)

    async def process_message(self, message: IncomingMessage) -> InvocationResult:
        """Dispatch one message and return what happened."""
        parsed = parse_command_message(getattr(message, "content", None), self.prelude)
        if parsed is None:
            return NoCommandInvoked(message=message, prelude_matched=False)

        command = self.registry.lookup(parsed.name)
        if command is None:
            return NoCommandInvoked(message=message, prelude_matched=True)

        logger.info(f"Command called: {self.prelude}{parsed.name} -> {command.name}")
        result = await self._invoke(command, parsed, message)
        await self.events.emit(COMMAND_FINISHED, result)
        return result

    async def _invoke(self, command: Command, parsed: ParsedInvocation, message: Any) -> InvocationResult:
        if self.cooldowns.is_blocked(command):
            return self._failure(message, command, CooldownInEffect())

        self.cooldowns.begin(command)
        try:
            try:
                args = await resolve_arguments(
                    parsed.arg_tokens, command.args, message, self.parser_factory
                )
            except MissingRequiredArgumentError as e:
                await self._reply_with_error(message, e)
                return self._failure(message, command, MissingRequiredArg(e.command_arg))
            except InvalidArgumentValueError as e:
                await self._reply_with_error(message, e)
                return self._failure(message, command, InvalidArgValue(e.command_arg, e.provided_value))

            if command.guard is not None:
                decision = await evaluate_guard(command.guard, command.name, args, message)
                if isinstance(decision, Denied):
                    return self._failure(message, command, BlockedByGuard(decision.reason))

            payload = ExecutePayload(args=args, message=message, command=command)
            try:
                await call_maybe_async(command.execute, payload)
            except Exception as e:
                logger.error(f"Error executing command {command.name}: {e}")
                return self._failure(message, command, UnhandledCommandExecutionError(e))

            self.cooldowns.record_run(command)
            return CommandInvokedSuccess(message=message, command=command)
        finally:
            self.cooldowns.end(command)

    @staticmethod
    def _failure(message: Any, command: Command, error: CommandInvocationError) -> CommandInvokedFailure:
        return CommandInvokedFailure(message=message, command=command, error=error)

    async def _reply_with_error(self, message: Any, error: Exception) -> None:
        if not self.options.reply_on_argument_errors:
            return
        reply = getattr(message, "reply", None)
        if reply is None:
            return
        try:
            await call_maybe_async(reply, str(error))
        except Exception as e:
            logger.error(f"Failed to reply with argument error: {e}")
