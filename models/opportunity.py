"""
Arbitrage opportunity models.
"""
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
from typing import Any, Dict


class Opportunity(BaseModel):
    """
    Cross-exchange price discrepancy for one pair in one cycle.

    Serialized with the field names the HTTP API has always used
    (pair, buy, sell, buyPrice, sellPrice, spread, profit, timestamp).
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pair: str = Field(..., description="Base asset symbol")
    buy_exchange: str = Field(..., alias="buy", description="Cheapest exchange")
    sell_exchange: str = Field(..., alias="sell", description="Most expensive exchange")
    buy_price: float = Field(..., alias="buyPrice")
    sell_price: float = Field(..., alias="sellPrice")
    spread_percent: float = Field(..., alias="spread", description="Gross spread in percent")
    net_profit_percent: float = Field(..., alias="profit", description="Spread minus both fees")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_json(self) -> Dict[str, Any]:
        """JSON-ready dict with API field names and ISO-8601 timestamp."""
        return self.model_dump(mode="json", by_alias=True)
