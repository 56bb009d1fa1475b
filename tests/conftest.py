"""
Shared fixtures and fakes.

Nothing here touches the network: quoters get fake sessions and the
pipeline tests use in-memory quoters.
"""
import asyncio
from datetime import datetime, timezone
from typing import Dict, Optional

import pytest

from models.quote import ExchangeType, Quote, QuoteResult, QuoteStatus
from models.opportunity import Opportunity


class FakeResponse:
    """Minimal stand-in for aiohttp.ClientResponse used as a context manager."""

    def __init__(self, status: int = 200, body: bytes = b"", error: Optional[BaseException] = None):
        self.status = status
        self._body = body
        self._error = error
        self.request_info = None
        self.history = ()

    async def __aenter__(self):
        if self._error is not None:
            raise self._error
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False

    async def read(self) -> bytes:
        return self._body

    async def text(self) -> str:
        return self._body.decode("utf-8", errors="replace")


class FakeSession:
    """Records GET calls and replays a canned response."""

    def __init__(self, response=None, error: Optional[BaseException] = None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []
        self.closed = False

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        self.closed = True


class FakeQuoter:
    """In-memory quoter returning fixed prices per pair."""

    def __init__(
        self,
        name: str,
        prices: Dict[str, float],
        fee: float = 0.1,
        delay: float = 0.0,
        exchange_type: ExchangeType = ExchangeType.BINANCE,
        raise_on: Optional[set] = None
    ):
        self.name = name
        self.prices = prices
        self.fee = fee
        self.delay = delay
        self.exchange_type = exchange_type
        self.raise_on = raise_on or set()
        self.calls = []
        self.initialized = False
        self.closed = False
        self.active = 0
        self.max_active = 0
        self.completed = 0

    async def fetch(self, pair: str) -> QuoteResult:
        self.calls.append(pair)
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if pair in self.raise_on:
                raise RuntimeError(f"boom on {pair}")
            self.completed += 1
            price = self.prices.get(pair)
            if price is None:
                return QuoteResult.failure(self.name, pair, QuoteStatus.UNSUPPORTED, "no price")
            return QuoteResult.success(pair, Quote(source=self.name, price=price, fee=self.fee))
        finally:
            self.active -= 1

    async def initialize(self):
        self.initialized = True

    async def close(self):
        self.closed = True

    def get_stats(self):
        return {"exchange": self.exchange_type.value, "calls": len(self.calls)}


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_quote(source: str, price: float, fee: float = 0.1) -> Quote:
    return Quote(source=source, price=price, fee=fee)


def make_opportunity(pair: str = "BTC", profit: float = 0.8, **overrides) -> Opportunity:
    fields = dict(
        pair=pair,
        buy_exchange="Binance",
        sell_exchange="Bybit",
        buy_price=100.0,
        sell_price=101.0,
        spread_percent=profit + 0.2,
        net_profit_percent=profit,
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    fields.update(overrides)
    return Opportunity(**fields)


@pytest.fixture
def clock():
    return FakeClock()
