"""
Rate limiting utilities.
"""
import asyncio
import time


class RateLimiter:
    """Token bucket rate limiter for async functions."""

    def __init__(self, rate: float = 10.0, capacity: int = 10):
        """
        Initialize rate limiter.

        Args:
            rate: Tokens added per second
            capacity: Maximum token capacity
        """
        if rate <= 0 or capacity < 1:
            raise ValueError("rate must be positive and capacity at least 1")
        self.rate = rate
        self.capacity = capacity
        self.tokens = capacity
        self.last_update = time.monotonic()
        self._lock = asyncio.Lock()

    async def acquire(self):
        """Acquire a token, waiting if necessary."""
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self.last_update
            self.tokens = min(
                self.capacity,
                self.tokens + elapsed * self.rate
            )
            self.last_update = now

            if self.tokens < 1:
                wait_time = (1 - self.tokens) / self.rate
                await asyncio.sleep(wait_time)
                self.last_update = time.monotonic()
                self.tokens = 0
            else:
                self.tokens -= 1

