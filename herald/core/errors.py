"""Registration-time exceptions.

Everything here is raised synchronously while commands are being parsed,
validated or registered. Dispatch-time problems never surface as exceptions;
see :mod:`herald.core.results` for those.
"""


class HeraldError(Exception):
    """Base class for all herald exceptions."""


class CommandDefinitionError(HeraldError):
    """A command definition string could not be parsed."""


class MissingCommandName(CommandDefinitionError):
    def __init__(self, definition: str) -> None:
        super().__init__(f"Invalid command string {definition!r}: missing name")
        self.definition = definition


class InvalidArgDelimiters(CommandDefinitionError):
    def __init__(self, token: str) -> None:
        super().__init__(
            f"Invalid arg {token!r}: args must be wrapped in <...> or [...]"
        )
        self.token = token


class RestArgTypeNotAllowed(CommandDefinitionError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid arg {token!r}: rest args cannot declare a type")
        self.token = token


class CommandValidationError(HeraldError):
    """A parsed command breaks a structural rule."""


class ArgPositionError(CommandValidationError):
    pass


class DuplicateArgError(CommandValidationError):
    def __init__(self, arg_name: str) -> None:
        super().__init__(f"Duplicate arg name {arg_name}")
        self.arg_name = arg_name


class UnknownArgTypeError(CommandValidationError):
    def __init__(self, arg_name: str, type_name: str) -> None:
        super().__init__(f"Arg {arg_name} declares unknown type {type_name!r}")
        self.arg_name = arg_name
        self.type_name = type_name


class KeywordCollisionError(CommandValidationError):
    def __init__(self, keyword: str, first: str, second: str) -> None:
        super().__init__(
            f"Keyword {keyword!r} of command {second} is already used by command {first}"
        )
        self.keyword = keyword
        self.first = first
        self.second = second


class ArgumentResolutionError(HeraldError):
    """Raised by the argument resolver; converted to a result by the dispatcher."""

    def __init__(self, message: str, command_arg) -> None:
        super().__init__(message)
        self.command_arg = command_arg


class MissingRequiredArgumentError(ArgumentResolutionError):
    def __init__(self, command_arg) -> None:
        super().__init__(f"Missing required argument {command_arg.name}", command_arg)


class InvalidArgumentValueError(ArgumentResolutionError):
    def __init__(self, command_arg, provided_value: str) -> None:
        super().__init__(
            f"Invalid value {provided_value!r} for argument {command_arg.name}",
            command_arg,
        )
        self.provided_value = provided_value


class ArgumentConversionError(ValueError):
    """Raised by an argument parser when a token cannot be coerced."""
