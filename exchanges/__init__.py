"""
Exchange quoters package.
"""
from typing import List

from config.settings import EXCHANGE_CONFIG, Settings
from exchanges.base import BaseQuoter
from exchanges.symbols import SymbolMap
from exchanges.binance.client import BinanceQuoter
from exchanges.coinbase.client import CoinbaseQuoter
from exchanges.bybit.client import BybitQuoter
from exchanges.kucoin.client import KuCoinQuoter
from exchanges.okx.client import OKXQuoter
from exchanges.kraken.client import KrakenQuoter
from utils.decorators import RateLimiter

QUOTER_CLASSES = {
    "binance": BinanceQuoter,
    "coinbase": CoinbaseQuoter,
    "bybit": BybitQuoter,
    "kucoin": KuCoinQuoter,
    "okx": OKXQuoter,
    "kraken": KrakenQuoter,
}


def build_quoters(settings: Settings, session=None) -> List[BaseQuoter]:
    """
    Create quoters for every enabled exchange.

    The returned order is ENABLED_EXCHANGES order and decides which exchange
    wins a price tie.
    """
    quoters: List[BaseQuoter] = []
    for key in settings.ENABLED_EXCHANGES:
        config = EXCHANGE_CONFIG[key]
        quoters.append(QUOTER_CLASSES[key](
            pairs=settings.PAIRS,
            fee=settings.fee_for(key),
            timeout=settings.REQUEST_TIMEOUT_SEC,
            rate_limiter=RateLimiter(rate=config["rate"], capacity=config["burst"]),
            session=session
        ))
    return quoters


__all__ = [
    "BaseQuoter",
    "SymbolMap",
    "BinanceQuoter",
    "CoinbaseQuoter",
    "BybitQuoter",
    "KuCoinQuoter",
    "OKXQuoter",
    "KrakenQuoter",
    "QUOTER_CLASSES",
    "build_quoters",
]
