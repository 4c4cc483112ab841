"""Per-command cooldown tracking."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from .utils import now_ms

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunLog:
    command: object
    timestamp: float  # milliseconds


class CooldownTracker:
    """Remembers the last successful run of each command.

    Cooldowns are global per command, not per user, and are measured from the
    last successful completion. With ``track_in_flight`` enabled a command that
    is still executing also counts as cooling down.
    """

    def __init__(
        self,
        window_ms: float | None = None,
        clock: Callable[[], float] = now_ms,
        track_in_flight: bool = False,
    ) -> None:
        self.window_ms = window_ms or 0
        self.clock = clock
        self.track_in_flight = track_in_flight
        self._latest: dict[str, RunLog] = {}
        self._in_flight: dict[str, int] = {}

    @property
    def enabled(self) -> bool:
        return self.window_ms > 0

    def latest_run(self, command) -> RunLog | None:
        return self._latest.get(command.name)

    def is_blocked(self, command) -> bool:
        if not self.enabled:
            return False

        if self.track_in_flight and self._in_flight.get(command.name):
            logger.debug(f"Command {command.name} blocked: already in flight")
            return True

        last_run = self._latest.get(command.name)
        if last_run is None:
            return False

        elapsed = self.clock() - last_run.timestamp
        return elapsed < self.window_ms

    def begin(self, command) -> None:
        self._in_flight[command.name] = self._in_flight.get(command.name, 0) + 1

    def end(self, command) -> None:
        remaining = self._in_flight.get(command.name, 0) - 1
        if remaining > 0:
            self._in_flight[command.name] = remaining
        else:
            self._in_flight.pop(command.name, None)

    def record_run(self, command) -> RunLog:
        log = RunLog(command=command, timestamp=self.clock())
        self._latest[command.name] = log
        return log

    def reset(self) -> None:
        self._latest.clear()
        self._in_flight.clear()
