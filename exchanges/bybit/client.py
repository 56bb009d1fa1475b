"""
Bybit Exchange Quoter.
Spot last price via the v5 market tickers endpoint.
"""
from typing import Any, Dict, Iterable, Optional, Tuple

from config.settings import EXCHANGE_CONFIG
from models.quote import ExchangeType
from exchanges.base import BaseQuoter
from exchanges.symbols import SymbolMap


class BybitQuoter(BaseQuoter):
    """Bybit spot quoter (BTCUSDT markets)."""

    def __init__(self, pairs: Iterable[str], fee: Optional[float] = None, **kwargs):
        config = EXCHANGE_CONFIG["bybit"]
        super().__init__(
            exchange_type=ExchangeType.BYBIT,
            name=config["name"],
            rest_base=config["rest_base"],
            fee=config["fee"] if fee is None else fee,
            symbols=SymbolMap.from_template(pairs, "{base}USDT"),
            **kwargs
        )

    def _price_request(self, code: str) -> Tuple[str, Optional[Dict[str, str]]]:
        return f"{self.rest_base}/v5/market/tickers", {"category": "spot", "symbol": code}

    def _extract_price(self, data: Any) -> Any:
        # {"retCode": 0, "result": {"list": [{"symbol": "BTCUSDT", "lastPrice": "..."}]}}
        return data["result"]["list"][0]["lastPrice"]
