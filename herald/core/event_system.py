import asyncio
import logging
from collections.abc import Callable
from typing import Any

from .utils import call_maybe_async

logger = logging.getLogger(__name__)

COMMAND_FINISHED = "command_finished"


class EventSystem:
    """Notifies listeners about dispatch outcomes.

    Middleware is called with ``(event_context, phase)`` before ("pre") and
    after ("post") the listeners run. A middleware returning ``False`` in the
    pre phase suppresses the event. Errors in listeners or middleware are
    logged and never reach the emitter. Middleware runs even when an event
    has no listeners.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Callable]] = {}
        self._middleware: list[Callable] = []

    def add_middleware(self, middleware: Callable) -> None:
        self._middleware.append(middleware)
        logger.debug(f"Added middleware: {_name_of(middleware)}")

    def remove_middleware(self, middleware: Callable) -> None:
        if middleware in self._middleware:
            self._middleware.remove(middleware)
            logger.debug(f"Removed middleware: {_name_of(middleware)}")

    def listen(self, event_name: str) -> Callable:
        def decorator(func: Callable) -> Callable:
            self.add_listener(event_name, func)
            return func

        return decorator

    def add_listener(self, event_name: str, callback: Callable) -> None:
        self._listeners.setdefault(event_name, []).append(callback)
        logger.debug(f"Added listener for {event_name}: {_name_of(callback)}")

    def remove_listener(self, event_name: str, callback: Callable) -> None:
        try:
            self._listeners.get(event_name, []).remove(callback)
            logger.debug(f"Removed listener for {event_name}: {_name_of(callback)}")
        except ValueError:
            logger.warning(f"Listener {_name_of(callback)} not found for {event_name}")

    def get_listeners(self, event_name: str) -> list[Callable]:
        return self._listeners.get(event_name, []).copy()

    async def emit(self, event_name: str, *args: Any, **kwargs: Any) -> None:
        listeners = self.get_listeners(event_name)

        event_context = {
            "event_name": event_name,
            "args": args,
            "kwargs": kwargs,
            "stopped": False,
        }

        for middleware in self._middleware:
            try:
                result = await call_maybe_async(middleware, event_context, "pre")
                if result is False or event_context.get("stopped"):
                    logger.debug(f"Event {event_name} stopped by middleware")
                    return
            except Exception as e:
                logger.error(f"Error in middleware {_name_of(middleware)}: {e}")

        results = await asyncio.gather(
            *(call_maybe_async(listener, *args, **kwargs) for listener in listeners),
            return_exceptions=True,
        )
        for listener, result in zip(listeners, results):
            if isinstance(result, Exception):
                logger.error(f"Error in listener {_name_of(listener)} for {event_name}: {result}")
                event_context.setdefault("errors", []).append(result)

        for middleware in self._middleware:
            try:
                await call_maybe_async(middleware, event_context, "post")
            except Exception as e:
                logger.error(f"Error in middleware {_name_of(middleware)} (post): {e}")


def _name_of(func: Callable) -> str:
    return getattr(func, "__name__", type(func).__name__)
