"""Small helpers shared across the bash toolkit."""

import inspect
from typing import Any


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it as-is.

    Lets callers accept both plain and ``async`` callables (hooks, backend
    methods) behind one call site.
    """
    if inspect.isawaitable(value):
        return await value
    return value
