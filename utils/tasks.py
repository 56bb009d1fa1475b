"""
Task helpers.
"""
import asyncio
from typing import Any, Awaitable, List


async def gather_or_cancel(*aws: Awaitable[Any]) -> List[Any]:
    """
    Like asyncio.gather, but when one awaitable fails the others are
    cancelled and awaited before the error propagates.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
