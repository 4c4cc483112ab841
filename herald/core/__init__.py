from .cooldown import CooldownTracker, RunLog
from .event_system import COMMAND_FINISHED, EventSystem
from .guards import Authorized, Denied, GuardPayload
from .tokenizer import ParsedInvocation, parse_command_message

__all__ = [
    "CooldownTracker",
    "RunLog",
    "EventSystem",
    "COMMAND_FINISHED",
    "Authorized",
    "Denied",
    "GuardPayload",
    "ParsedInvocation",
    "parse_command_message",
]
