"""Guard evaluation.

A guard runs after argument resolution and before execution. It may return
:class:`Authorized` or :class:`Denied`, or use the ``ok()`` / ``error()``
callbacks on the payload. Any denial wins over any approval, and a guard that
decides nothing is treated as a denial.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from .utils import call_maybe_async

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Authorized:
    pass


@dataclass(frozen=True, slots=True)
class Denied:
    reason: Any = None


GuardResult = Authorized | Denied


@dataclass
class GuardPayload:
    args: dict[str, Any]
    message: Any
    _approved: bool = field(default=False, repr=False)
    _denied: bool = field(default=False, repr=False)
    _reason: Any = field(default=None, repr=False)

    def ok(self) -> None:
        self._approved = True

    def error(self, reason: Any = None) -> None:
        # The first denial reason is kept
        if not self._denied:
            self._reason = reason
        self._denied = True

    def decide(self, returned: Any = None) -> GuardResult | None:
        """Combine callback calls and the guard's return value."""
        if self._denied:
            return Denied(self._reason)
        if isinstance(returned, Denied):
            return returned
        if self._approved or isinstance(returned, Authorized):
            return Authorized()
        return None


async def evaluate_guard(guard, command_name: str, args: dict[str, Any], message: Any) -> GuardResult:
    """Run ``guard`` and reduce its outcome to Authorized or Denied."""
    payload = GuardPayload(args=args, message=message)

    try:
        returned = await call_maybe_async(guard, payload)
    except Exception as e:
        logger.exception(f"guard() for command {command_name} raised, defaulting to no access")
        return Denied(e)

    decision = payload.decide(returned)
    if decision is None:
        logger.warning(
            f"guard() function for command {command_name} did not call ok() or error(), "
            "defaulting to no access"
        )
        return Denied()

    if isinstance(decision, Denied):
        logger.info(f"Command {command_name} blocked by guard: {decision.reason!r}")
    return decision
