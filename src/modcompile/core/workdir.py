"""
Scoped working-directory switching for single-file compiles.

The working directory is process-wide state. Guarded scopes running on the
same event loop are serialized by a per-loop lock, so two concurrent
single-file compiles cannot interleave their directory switches.
"""

from __future__ import annotations

import asyncio
import os
import weakref
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path
from typing import TypeVar

from modcompile.exceptions import OutputError
from modcompile.utils.logging import get_logger

logger = get_logger("modcompile.workdir")

T = TypeVar("T")

_scope_locks: weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncio.Lock] = weakref.WeakKeyDictionary()


def _scope_lock() -> asyncio.Lock:
    loop = asyncio.get_running_loop()
    lock = _scope_locks.get(loop)
    if lock is None:
        lock = _scope_locks[loop] = asyncio.Lock()
    return lock


@asynccontextmanager
async def working_directory(path: str | os.PathLike[str]) -> AsyncIterator[Path]:
    """
    Switch the working directory to ``path`` for the duration of the block.

    ``path`` is created (with parents) if missing. The previous directory is
    restored on every exit path before the exception, if any, leaves the block.
    """
    target = Path(path)
    async with _scope_lock():
        try:
            previous = os.getcwd()
        except FileNotFoundError as e:
            raise OutputError(str(target), "the current working directory no longer exists") from e
        await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        os.chdir(target)
        logger.debug(f"Working directory switched to {target}")
        try:
            yield target
        finally:
            os.chdir(previous)
            logger.debug(f"Working directory restored to {previous}")


async def run_scoped(path: str | os.PathLike[str], func: Callable[[], Awaitable[T]]) -> T:
    """Run ``func()`` with the working directory switched to ``path``."""
    async with working_directory(path):
        return await func()
