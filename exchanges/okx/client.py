"""
OKX Exchange Quoter.
Spot last price via the v5 market ticker endpoint.
"""
from typing import Any, Dict, Iterable, Optional, Tuple

from config.settings import EXCHANGE_CONFIG
from models.quote import ExchangeType
from exchanges.base import BaseQuoter
from exchanges.symbols import SymbolMap


class OKXQuoter(BaseQuoter):
    """OKX spot quoter (BTC-USDT instruments)."""

    def __init__(self, pairs: Iterable[str], fee: Optional[float] = None, **kwargs):
        config = EXCHANGE_CONFIG["okx"]
        super().__init__(
            exchange_type=ExchangeType.OKX,
            name=config["name"],
            rest_base=config["rest_base"],
            fee=config["fee"] if fee is None else fee,
            symbols=SymbolMap.from_template(pairs, "{base}-USDT"),
            **kwargs
        )

    def _price_request(self, code: str) -> Tuple[str, Optional[Dict[str, str]]]:
        return f"{self.rest_base}/api/v5/market/ticker", {"instId": code}

    def _extract_price(self, data: Any) -> Any:
        # {"code": "0", "data": [{"instId": "BTC-USDT", "last": "..."}]}
        return data["data"][0]["last"]
