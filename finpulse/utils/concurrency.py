"""Async fan-out helpers"""

import asyncio
from typing import Any, Awaitable, List


async def join_all(*awaitables: Awaitable[Any]) -> List[Any]:
    """
    Run awaitables concurrently and return their results in argument order.

    All-or-nothing: the first failure cancels whatever is still running and is
    re-raised. No partial results are returned.
    """
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    if not tasks:
        return []

    try:
        done, _ = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
        # Argument order keeps the reported error deterministic
        errors = [
            task.exception()
            for task in tasks
            if task in done and not task.cancelled()
        ]
        for error in errors:
            if error is not None:
                raise error
        return [task.result() for task in tasks]
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
