"""
ArbitrageService wiring tests.
"""
import pytest

from config.settings import Settings
from core.engine import ArbitrageService
from models.quote import ExchangeType
from tests.conftest import FakeQuoter


def make_settings(**overrides) -> Settings:
    values = dict(PAIRS=["BTC", "ETH"], MIN_PROFIT=0.3, CACHE_TTL_SEC=30, HISTORY_SIZE=10)
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def quoters():
    return [
        FakeQuoter("A", {"BTC": 100.0, "ETH": 100.0}, exchange_type=ExchangeType.BINANCE),
        FakeQuoter("B", {"BTC": 101.0, "ETH": 100.1}, exchange_type=ExchangeType.KRAKEN),
    ]


class TestArbitrageService:

    @pytest.mark.asyncio
    async def test_lifecycle(self, quoters):
        service = ArbitrageService(make_settings(), quoters=quoters)

        await service.initialize()
        await service.close()

        assert all(q.initialized and q.closed for q in quoters)

    @pytest.mark.asyncio
    async def test_opportunities_are_cached(self, quoters):
        service = ArbitrageService(make_settings(), quoters=quoters)

        first = await service.get_opportunities()
        second = await service.get_opportunities()

        assert first is second
        assert [o.pair for o in first] == ["BTC"]
        assert sorted(quoters[0].calls) == ["BTC", "ETH"]

    @pytest.mark.asyncio
    async def test_history_filled_by_cycles_only(self, quoters):
        service = ArbitrageService(make_settings(), quoters=quoters)

        assert service.get_history() == []

        await service.get_opportunities()
        await service.get_opportunities()

        assert [o.pair for o in service.get_history()] == ["BTC"]

    @pytest.mark.asyncio
    async def test_zero_ttl_rescans_every_read(self, quoters):
        service = ArbitrageService(make_settings(CACHE_TTL_SEC=0), quoters=quoters)

        await service.get_opportunities()
        await service.get_opportunities()

        assert len(quoters[0].calls) == 4
        assert len(service.get_history()) == 2

    @pytest.mark.asyncio
    async def test_show_all_setting(self, quoters):
        service = ArbitrageService(make_settings(SHOW_ALL=True), quoters=quoters)

        result = await service.get_opportunities()

        assert [o.pair for o in result] == ["BTC", "ETH"]

    @pytest.mark.asyncio
    async def test_stats(self, quoters):
        service = ArbitrageService(make_settings(), quoters=quoters)
        await service.get_opportunities()

        stats = service.get_stats()

        assert stats["cache"]["recomputes"] == 1
        assert stats["history"] == {"entries": 1, "capacity": 10}
        assert set(stats["exchanges"]) == {"binance", "kraken"}
        assert stats["cycle"]["cycles"] == 1

    def test_builds_real_quoters_from_settings(self):
        service = ArbitrageService(make_settings(ENABLED_EXCHANGES=["okx", "binance"]))

        assert [q.exchange_type for q in service.quoters] == [ExchangeType.OKX, ExchangeType.BINANCE]
