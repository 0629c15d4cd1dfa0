"""
deliver — run a lazy result and hand it to a one-shot callback.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from scoops._types import LazyCoroResult, Result

# the loop keeps only weak references to tasks
_pending: set[asyncio.Task[None]] = set()


def deliver[T, E](
    result: LazyCoroResult[T, E],
    callback: Callable[[Result[T, E]], None],
) -> asyncio.Task[None]:
    """
    Await `result` on the running loop and call `callback` exactly once.

    Example:
        deliver(client.fetch_menu(), lambda r: print(r))
    """

    async def run() -> None:
        callback(await result)

    task = asyncio.get_running_loop().create_task(run())
    _pending.add(task)
    task.add_done_callback(_pending.discard)
    return task


__all__ = ("deliver",)
