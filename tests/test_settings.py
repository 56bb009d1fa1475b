"""
Settings and quoter factory tests.
"""
import pytest
from pydantic import ValidationError

from config.settings import EXCHANGE_CONFIG, Settings
from exchanges import KrakenQuoter, build_quoters
from tests.conftest import FakeSession


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.MIN_PROFIT == 0.3
        assert settings.SHOW_ALL is False
        assert settings.CACHE_TTL_SEC == 30
        assert settings.HISTORY_SIZE == 100
        assert settings.REQUEST_TIMEOUT_SEC == 5.0
        assert settings.PORT == 3000
        assert len(settings.PAIRS) == 15
        assert settings.ENABLED_EXCHANGES == ["binance", "coinbase", "bybit", "kucoin", "okx", "kraken"]

    def test_pairs_normalized(self):
        settings = Settings(PAIRS=[" btc", "ETH", "btc", ""])

        assert settings.PAIRS == ["BTC", "ETH"]

    def test_empty_pairs_rejected(self):
        with pytest.raises(ValidationError):
            Settings(PAIRS=[])

    def test_unknown_exchange_rejected(self):
        with pytest.raises(ValidationError):
            Settings(ENABLED_EXCHANGES=["binance", "ftx"])

    def test_fee_override(self):
        settings = Settings(EXCHANGE_FEES={"Kraken": 0.16})

        assert settings.fee_for("kraken") == 0.16
        assert settings.fee_for("binance") == EXCHANGE_CONFIG["binance"]["fee"]

    @pytest.mark.parametrize("fees", [{"kraken": -0.1}, {"ftx": 0.1}])
    def test_bad_fee_override_rejected(self, fees):
        with pytest.raises(ValidationError):
            Settings(EXCHANGE_FEES=fees)

    @pytest.mark.parametrize("field,value", [
        ("HISTORY_SIZE", 0),
        ("CACHE_TTL_SEC", -1),
        ("REQUEST_TIMEOUT_SEC", 0),
        ("MAX_CONCURRENT_PAIRS", 0),
    ])
    def test_bounds(self, field, value):
        with pytest.raises(ValidationError):
            Settings(**{field: value})

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MIN_PROFIT", "0.5")
        monkeypatch.setenv("SHOW_ALL", "true")
        monkeypatch.setenv("PAIRS", '["SOL", "ADA"]')

        settings = Settings()

        assert settings.MIN_PROFIT == 0.5
        assert settings.SHOW_ALL is True
        assert settings.PAIRS == ["SOL", "ADA"]


class TestBuildQuoters:

    def test_order_and_configuration(self):
        settings = Settings(
            PAIRS=["BTC", "AVAX"],
            ENABLED_EXCHANGES=["kraken", "binance"],
            EXCHANGE_FEES={"binance": 0.075},
            REQUEST_TIMEOUT_SEC=2.5
        )

        quoters = build_quoters(settings, session=FakeSession())

        assert [q.name for q in quoters] == ["Kraken", "Binance"]
        assert isinstance(quoters[0], KrakenQuoter)
        assert quoters[1].fee == 0.075
        assert all(q.timeout == 2.5 for q in quoters)
        assert quoters[0].symbols.supports("BTC")
        assert not quoters[0].symbols.supports("AVAX")
        assert quoters[1].symbols.supports("AVAX")
