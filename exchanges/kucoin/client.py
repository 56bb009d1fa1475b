"""
KuCoin Exchange Quoter.
Spot price via the level 1 order book endpoint.
"""
from typing import Any, Dict, Iterable, Optional, Tuple

from config.settings import EXCHANGE_CONFIG
from models.quote import ExchangeType
from exchanges.base import BaseQuoter
from exchanges.symbols import SymbolMap


class KuCoinQuoter(BaseQuoter):
    """KuCoin spot quoter (BTC-USDT markets)."""

    def __init__(self, pairs: Iterable[str], fee: Optional[float] = None, **kwargs):
        config = EXCHANGE_CONFIG["kucoin"]
        super().__init__(
            exchange_type=ExchangeType.KUCOIN,
            name=config["name"],
            rest_base=config["rest_base"],
            fee=config["fee"] if fee is None else fee,
            symbols=SymbolMap.from_template(pairs, "{base}-USDT"),
            **kwargs
        )

    def _price_request(self, code: str) -> Tuple[str, Optional[Dict[str, str]]]:
        return f"{self.rest_base}/api/v1/market/orderbook/level1", {"symbol": code}

    def _extract_price(self, data: Any) -> Any:
        # {"code": "200000", "data": {"price": "...", "bestBid": "...", ...}}
        # Unknown symbols come back as 200 with "data": null
        return data["data"]["price"]
