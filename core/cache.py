"""
Time-boxed cache for scan cycle results.
"""
import asyncio
import time
from typing import Any, Awaitable, Callable, Dict, List, Optional

import structlog

from models.opportunity import Opportunity

logger = structlog.get_logger()


class OpportunityCache:
    """
    Keeps the last cycle result for a fixed TTL.

    Recomputation is single-flight: readers that find the result expired
    while a cycle is already running wait for that cycle instead of
    starting their own.
    """

    def __init__(
        self,
        compute: Callable[[], Awaitable[List[Opportunity]]],
        ttl: float = 30,
        clock: Callable[[], float] = time.monotonic
    ):
        """
        Initialize opportunity cache.

        Args:
            compute: Coroutine function running one full cycle
            ttl: Result lifetime in seconds, 0 recomputes on every read
            clock: Monotonic time source in seconds
        """
        if ttl < 0:
            raise ValueError("ttl must be non-negative")

        self.ttl = ttl
        self._compute = compute
        self._clock = clock

        # Swapped together, never observed half-updated
        self._result: Optional[List[Opportunity]] = None
        self._computed_at: Optional[float] = None

        self._inflight: Optional[asyncio.Future] = None

        self._stats = {"hits": 0, "misses": 0, "recomputes": 0, "failures": 0}

    def _is_fresh(self, now: float) -> bool:
        return (
            self._result is not None
            and self._computed_at is not None
            and now - self._computed_at < self.ttl
        )

    async def read(self, now: Optional[float] = None) -> List[Opportunity]:
        """Current result, running a new cycle when the cached one expired."""
        if now is None:
            now = self._clock()

        if self._is_fresh(now):
            self._stats["hits"] += 1
            return self._result

        self._stats["misses"] += 1

        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._recompute(now))
            self._inflight.add_done_callback(self._clear_inflight)
        else:
            logger.debug("Joining in-flight recompute")

        return await asyncio.shield(self._inflight)

    def _clear_inflight(self, future: asyncio.Future):
        if self._inflight is future:
            self._inflight = None
        # Retrieve so an unawaited failure is not reported as never retrieved
        if not future.cancelled():
            future.exception()

    async def _recompute(self, started_at: float) -> List[Opportunity]:
        self._stats["recomputes"] += 1
        try:
            result = await self._compute()
        except Exception as e:
            self._stats["failures"] += 1
            logger.error("Cycle failed, keeping previous result", error=str(e))
            raise

        self._result, self._computed_at = result, started_at
        return result

    @property
    def last_computed_at(self) -> Optional[float]:
        return self._computed_at

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total = self._stats["hits"] + self._stats["misses"]
        return {
            "ttl": self.ttl,
            "cached_opportunities": len(self._result) if self._result is not None else None,
            "age_seconds": (
                round(self._clock() - self._computed_at, 3)
                if self._computed_at is not None else None
            ),
            **self._stats,
            "hit_rate": self._stats["hits"] / total if total > 0 else 0
        }
