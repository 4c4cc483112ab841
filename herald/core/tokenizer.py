"""Turns raw message text into an invocation keyword and argument tokens.

    parse_command_message("!trivia c", "!")  ->  ParsedInvocation("trivia", ["c"])
    parse_command_message("!trivia c")       ->  ParsedInvocation("!trivia", ["c"])
"""

from dataclasses import dataclass, field


@dataclass(slots=True)
class ParsedInvocation:
    name: str
    arg_tokens: list[str] = field(default_factory=list)


def extract_command_tokens(content: str, prelude: str = "") -> list[str]:
    if not content.startswith(prelude):
        return []
    # str.split() with no separator drops empty tokens from whitespace runs
    return content[len(prelude):].split()


def parse_command_message(content: str | None, prelude: str = "") -> ParsedInvocation | None:
    """Return the parsed invocation, or ``None`` if the text is not a command."""
    tokens = extract_command_tokens(content or "", prelude)
    if not tokens:
        return None

    name, *arg_tokens = tokens
    return ParsedInvocation(name=name, arg_tokens=arg_tokens)
