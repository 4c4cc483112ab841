"""Command decorators for declaring commands on plain objects."""

from collections.abc import Callable, Mapping
from typing import Any


def command(definition: str, guard: Callable[..., Any] | str | None = None):
    """
    Mark a function or method as the execute callback of a command.

    ``guard`` may be a callable or the name of another attribute on the same
    object, which is looked up when the commands are collected.
    """

    def decorator(func):
        func._command_definition = {
            "definition": definition,
            "guard": guard,
        }
        return func

    return decorator


def _namespaces(obj: Any) -> list[Mapping[str, Any]]:
    # Instance attributes first, then each class body in MRO order
    namespaces = [vars(obj)] if hasattr(obj, "__dict__") else []
    namespaces.extend(vars(cls) for cls in type(obj).__mro__)
    return namespaces


def collect_commands(obj: Any) -> dict[str, dict[str, Any]]:
    """
    Collect ``@command`` decorated attributes into a definitions mapping.

    Commands keep their declaration order, which decides which command wins
    a keyword shared by several of them.
    """
    definitions: dict[str, dict[str, Any]] = {}
    seen: set[str] = set()
    for namespace in _namespaces(obj):
        for attr_name in list(namespace):
            if attr_name in seen:
                continue
            seen.add(attr_name)

            attr = getattr(obj, attr_name, None)
            meta = getattr(attr, "_command_definition", None)
            if not meta:
                continue

            guard = meta["guard"]
            if isinstance(guard, str):
                guard = getattr(obj, guard)

            definitions[meta["definition"]] = {"execute": attr, "guard": guard}
    return definitions
