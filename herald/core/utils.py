"""Utility functions shared across the dispatch engine."""

import inspect
import logging
import time
from collections.abc import Callable
from typing import Any

from config.settings import settings


def setup_logging(level: str | None = None) -> None:
    """Setup logging configuration, defaulting to the configured log level."""
    level = level or settings.log_level
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


async def call_maybe_async(func: Callable, *args: Any, **kwargs: Any) -> Any:
    """
    Call a sync or async callable and return its result.

    Hooks supplied by the host (execute, guard, reply, resolvers) may be
    plain functions or coroutine functions.
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        return await result
    return result


def now_ms() -> float:
    """Current wall-clock time in milliseconds."""
    return time.time() * 1000
