"""
Kraken Exchange Quoter.
Spot last trade price via the public Ticker endpoint.
"""
from typing import Any, Dict, Iterable, Optional, Tuple

from config.settings import EXCHANGE_CONFIG
from models.quote import ExchangeType
from exchanges.base import BaseQuoter
from exchanges.symbols import SymbolMap

# Kraken keeps legacy X/Z prefixed names for its oldest markets
KRAKEN_PAIRS = {
    "BTC": "XXBTZUSD",
    "ETH": "XETHZUSD",
    "SOL": "SOLUSD",
    "XRP": "XXRPZUSD",
    "ADA": "ADAUSD",
    "DOT": "DOTUSD",
    "ATOM": "ATOMUSD",
    "LTC": "XLTCZUSD",
    "DOGE": "XDGUSD",
}


class KrakenQuoter(BaseQuoter):
    """Kraken spot quoter, limited to the markets in KRAKEN_PAIRS."""

    def __init__(self, pairs: Iterable[str], fee: Optional[float] = None, **kwargs):
        config = EXCHANGE_CONFIG["kraken"]
        wanted = {p.upper() for p in pairs}
        super().__init__(
            exchange_type=ExchangeType.KRAKEN,
            name=config["name"],
            rest_base=config["rest_base"],
            fee=config["fee"] if fee is None else fee,
            symbols=SymbolMap({p: c for p, c in KRAKEN_PAIRS.items() if p in wanted}),
            **kwargs
        )

    def _price_request(self, code: str) -> Tuple[str, Optional[Dict[str, str]]]:
        return f"{self.rest_base}/0/public/Ticker", {"pair": code}

    def _extract_price(self, data: Any) -> Any:
        # {"error": [], "result": {"XXBTZUSD": {"c": ["67000.1", "0.01"], ...}}}
        # Errors come back as 200 with an empty result
        result = data["result"]
        ticker = result[next(iter(result))]
        return ticker["c"][0]
