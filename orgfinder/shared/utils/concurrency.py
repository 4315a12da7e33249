"""Fail-fast fan-out for independent coroutines."""

import asyncio
from collections.abc import Awaitable, Sequence
from typing import TypeVar

T = TypeVar("T")


async def gather_fail_fast(aws: Sequence[Awaitable[T]]) -> list[T]:
    """Run awaitables concurrently; return all results in input order.

    On the first failure the remaining tasks are cancelled and awaited, then
    the earliest failing task's exception (in input order) is raised. Callers
    never see a partial result list. If the caller is cancelled, every task
    is cancelled too.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    if not tasks:
        return []
    try:
        _, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    except asyncio.CancelledError:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    if pending:
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

    errors = [
        task.exception()
        for task in tasks
        if task.done() and not task.cancelled() and task.exception() is not None
    ]
    if errors:
        raise errors[0]
    return [task.result() for task in tasks]
