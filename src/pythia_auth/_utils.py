"""Internal utility functions for pythia-auth."""

from __future__ import annotations

import inspect
from typing import Any


async def maybe_await(value: Any) -> Any:
    """Return *value*, awaiting it first if it is awaitable."""
    if inspect.isawaitable(value):
        return await value
    return value
