"""
Coinbase Exchange Quoter.
Spot price via the v2 prices endpoint (USD quoted).
"""
from typing import Any, Dict, Iterable, Optional, Tuple

from config.settings import EXCHANGE_CONFIG
from models.quote import ExchangeType
from exchanges.base import BaseQuoter
from exchanges.symbols import SymbolMap


class CoinbaseQuoter(BaseQuoter):
    """Coinbase spot quoter (BTC-USD markets)."""

    def __init__(self, pairs: Iterable[str], fee: Optional[float] = None, **kwargs):
        config = EXCHANGE_CONFIG["coinbase"]
        super().__init__(
            exchange_type=ExchangeType.COINBASE,
            name=config["name"],
            rest_base=config["rest_base"],
            fee=config["fee"] if fee is None else fee,
            symbols=SymbolMap.from_template(pairs, "{base}-USD"),
            **kwargs
        )

    def _price_request(self, code: str) -> Tuple[str, Optional[Dict[str, str]]]:
        # Market code is part of the path
        return f"{self.rest_base}/v2/prices/{code}/spot", None

    def _extract_price(self, data: Any) -> Any:
        # {"data": {"base": "BTC", "currency": "USD", "amount": "67010.5"}}
        return data["data"]["amount"]
