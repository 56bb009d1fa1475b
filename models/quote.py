"""
Data models for exchange quotes.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class ExchangeType(str, Enum):
    """Supported exchanges."""
    BINANCE = "binance"
    COINBASE = "coinbase"
    BYBIT = "bybit"
    KUCOIN = "kucoin"
    OKX = "okx"
    KRAKEN = "kraken"


class QuoteStatus(str, Enum):
    """Outcome of a single price request."""
    OK = "ok"
    UNSUPPORTED = "unsupported"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    MALFORMED = "malformed"
    NETWORK_ERROR = "network_error"
    ERROR = "error"


class Quote(BaseModel):
    """Price observation for one pair on one exchange."""
    model_config = ConfigDict(frozen=True)

    source: str = Field(..., description="Exchange display name")
    price: float = Field(..., gt=0, allow_inf_nan=False, description="Last traded price")
    fee: float = Field(..., ge=0, description="Taker fee in percent")


class QuoteResult(BaseModel):
    """
    Result of asking one exchange for one pair.

    Every failure mode is a status value; only OK results carry a quote.
    """
    model_config = ConfigDict(frozen=True)

    source: str
    pair: str
    status: QuoteStatus
    quote: Optional[Quote] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == QuoteStatus.OK and self.quote is not None

    @classmethod
    def success(cls, pair: str, quote: Quote) -> "QuoteResult":
        return cls(source=quote.source, pair=pair, status=QuoteStatus.OK, quote=quote)

    @classmethod
    def failure(
        cls,
        source: str,
        pair: str,
        status: QuoteStatus,
        detail: Optional[str] = None
    ) -> "QuoteResult":
        return cls(source=source, pair=pair, status=status, detail=detail)
