import logging
import time
from typing import Any

logger = logging.getLogger(__name__)


def result_from(event_context: dict[str, Any]) -> Any:
    args = event_context.get("args") or ()
    return args[0] if args else None


def describe(result: Any) -> str:
    if result is None:
        return "unknown"
    if result.success:
        return "success"
    return result.error.type


class LoggingMiddleware:
    """Logs each event's outcome and how long its listeners took.

    The start time lives in the event context, so events stopped by later
    middleware leave nothing behind.
    """

    async def __call__(self, event_context: dict[str, Any], phase: str) -> None:
        event_name = event_context.get("event_name")

        if phase == "pre":
            event_context["started_at"] = time.time()
            logger.debug(f"Event started: {event_name}")

        elif phase == "post":
            result = result_from(event_context)
            command = getattr(result, "command", None)
            outcome = describe(result)

            start_time = event_context.pop("started_at", None)
            took = f" (listeners took {time.time() - start_time:.3f}s)" if start_time else ""

            if command is None:
                logger.debug(f"Event completed: {event_name}{took}")
            elif result.success:
                logger.info(f"Command {command.name} finished: {outcome}{took}")
            else:
                logger.warning(f"Command {command.name} failed: {outcome}{took}")
