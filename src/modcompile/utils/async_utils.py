"""
Async utilities for modcompile.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Iterable
from typing import Any, Awaitable, Callable, TypeVar, overload

T = TypeVar("T")


def dual(func: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """
    Decorator: makes an async function callable both synchronously and asynchronously.

    Usage:
        @dual
        async def bundle():
            await ...

        # Both work:
        bundle()          # blocks in sync context
        await bundle()    # works in async context
    """
    if not inspect.iscoroutinefunction(func):
        raise TypeError("@dual can only be applied to async def functions")

    @overload
    def sync_or_async_call(*args: Any, **kwargs: Any) -> T: ...

    @overload
    async def sync_or_async_call(*args: Any, **kwargs: Any) -> T: ...

    @functools.wraps(func)
    def sync_or_async_call(*args: Any, **kwargs: Any) -> Any:
        coro = func(*args, **kwargs)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(coro)
        return coro if loop.is_running() else asyncio.run(coro)

    sync_or_async_call = functools.update_wrapper(sync_or_async_call, func)  # type: ignore
    return sync_or_async_call  # type: ignore


async def sequence(items: Iterable[T], func: Callable[[T], Awaitable[Any]]) -> None:
    """
    Apply an async function to each item, one at a time, in iteration order.

    ``func(item)`` is not called until the awaitable returned for the previous
    item has completed. The first exception stops the run and propagates; later
    items are never started.

    Args:
        items: Items to process, in order
        func: Async callable applied to each item
    """
    for item in items:
        await func(item)
