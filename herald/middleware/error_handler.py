import logging
import traceback
from typing import Any

from ..core.results import UnhandledCommandExecutionError
from .logging import result_from

logger = logging.getLogger(__name__)


class ErrorHandlerMiddleware:
    """Logs tracebacks of commands that raised and of failing listeners."""

    async def __call__(self, event_context: dict[str, Any], phase: str) -> None:
        if phase != "post":
            return

        event_name = event_context.get("event_name", "unknown")
        result = result_from(event_context)
        error = getattr(result, "error", None)

        if isinstance(error, UnhandledCommandExecutionError):
            exc = error.error
            logger.error(f"Unhandled error in command {result.command.name}: {exc}")
            logger.error(
                "Traceback: " + "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
            )

        for listener_error in event_context.get("errors", []):
            logger.error(f"Listener error in event {event_name}: {listener_error!r}")
