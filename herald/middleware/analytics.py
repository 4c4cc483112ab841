import logging
from collections import Counter
from typing import Any

from .logging import describe, result_from

logger = logging.getLogger(__name__)


class AnalyticsMiddleware:
    """Counts invocations per command and outcome for the process lifetime."""

    def __init__(self) -> None:
        self.outcome_counts: Counter[tuple[str, str]] = Counter()

    async def __call__(self, event_context: dict[str, Any], phase: str) -> None:
        if phase != "pre":
            return

        result = result_from(event_context)
        command = getattr(result, "command", None)
        if command is None:
            return

        key = (command.name, describe(result))
        self.outcome_counts[key] += 1
        logger.debug(f"Analytics: {command.name} -> {key[1]} (total: {self.outcome_counts[key]})")

    def get_stats(self) -> dict[str, dict[str, int]]:
        stats: dict[str, dict[str, int]] = {}
        for (name, outcome), count in self.outcome_counts.items():
            stats.setdefault(name, {})[outcome] = count
        return stats

    def reset_stats(self) -> None:
        self.outcome_counts.clear()
