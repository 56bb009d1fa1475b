"""
Base exchange quoter interface.
"""
import asyncio
import math
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple
import aiohttp
import orjson
import structlog

from models.quote import ExchangeType, Quote, QuoteResult, QuoteStatus
from exchanges.symbols import SymbolMap
from utils.decorators import RateLimiter

logger = structlog.get_logger()

DEFAULT_TIMEOUT = 5.0


class MalformedResponse(ValueError):
    """Response body does not contain a usable price."""


class BaseQuoter(ABC):
    """
    Abstract base class for exchange price sources.

    A quoter answers one question: the current price of a pair on its
    exchange. Every failure is reported as a QuoteResult status; fetch()
    never raises.
    """

    def __init__(
        self,
        exchange_type: ExchangeType,
        name: str,
        rest_base: str,
        fee: float,
        symbols: SymbolMap,
        timeout: float = DEFAULT_TIMEOUT,
        rate_limiter: Optional[RateLimiter] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize quoter.

        Args:
            exchange_type: Exchange type enum
            name: Display name used in quotes and opportunities
            rest_base: Base URL for the public REST API
            fee: Taker fee in percent
            symbols: Pair to market code table
            timeout: Per-request timeout in seconds
            rate_limiter: Optional token bucket shared by this exchange's requests
            session: Optional externally managed HTTP session
        """
        if fee < 0:
            raise ValueError(f"{name} fee must be non-negative")
        if timeout <= 0:
            raise ValueError("timeout must be positive")

        self.exchange_type = exchange_type
        self.name = name
        self.rest_base = rest_base
        self.fee = fee
        self.symbols = symbols
        self.timeout = timeout

        self._session = session
        self._owns_session = session is None
        self._rest_limiter = rate_limiter

        # Statistics
        self._stats: Dict[str, Any] = {
            "rest_requests": 0,
            "quotes": 0,
            "failures": {status.value: 0 for status in QuoteStatus if status != QuoteStatus.OK}
        }

    async def initialize(self):
        """Create the HTTP session if none was injected."""
        if self._session is None:
            connector = aiohttp.TCPConnector(
                limit=20,
                limit_per_host=10,
                keepalive_timeout=30,
                enable_cleanup_closed=True
            )
            self._session = aiohttp.ClientSession(
                connector=connector,
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            )
            self._owns_session = True

        logger.info(
            "Exchange quoter initialized",
            exchange=self.exchange_type.value,
            pairs=len(self.symbols),
            fee=self.fee
        )

    async def close(self):
        """Close the HTTP session if this quoter created it."""
        if self._session and self._owns_session:
            await self._session.close()
        self._session = None

        logger.info("Exchange quoter closed", exchange=self.exchange_type.value)

    @abstractmethod
    def _price_request(self, code: str) -> Tuple[str, Optional[Dict[str, str]]]:
        """URL and query params for the ticker endpoint of a market code."""

    @abstractmethod
    def _extract_price(self, data: Any) -> Any:
        """Pull the raw price field out of a decoded response body."""

    def parse_price(self, data: Any) -> float:
        """
        Convert a decoded response body into a positive finite price.

        Raises:
            MalformedResponse: body shape or value is unusable
        """
        try:
            raw = self._extract_price(data)
            if isinstance(raw, bool):
                raise TypeError("boolean is not a price")
            price = float(raw)
        except (KeyError, IndexError, TypeError, ValueError, AttributeError, StopIteration) as e:
            raise MalformedResponse(f"unexpected response shape: {e!r}") from e

        if not math.isfinite(price) or price <= 0:
            raise MalformedResponse(f"invalid price {raw!r}")
        return price

    async def fetch(self, pair: str) -> QuoteResult:
        """Get the current quote for a pair."""
        code = self.symbols.code_for(pair)
        if code is None:
            return self._fail(pair, QuoteStatus.UNSUPPORTED, "pair not listed")

        if self._session is None:
            await self.initialize()

        url, params = self._price_request(code)
        try:
            if self._rest_limiter is not None:
                await asyncio.wait_for(self._rest_limiter.acquire(), timeout=self.timeout)
            data = await self._rest_request(url, params=params)
            price = self.parse_price(data)
        except asyncio.TimeoutError:
            return self._fail(pair, QuoteStatus.TIMEOUT, f"no response within {self.timeout}s")
        except aiohttp.ClientResponseError as e:
            return self._fail(pair, QuoteStatus.HTTP_ERROR, f"status {e.status}")
        except MalformedResponse as e:
            return self._fail(pair, QuoteStatus.MALFORMED, str(e))
        except aiohttp.ClientError as e:
            return self._fail(pair, QuoteStatus.NETWORK_ERROR, str(e) or type(e).__name__)
        except Exception as e:
            logger.exception(
                "Unexpected quoter error",
                exchange=self.exchange_type.value,
                pair=pair
            )
            return self._fail(pair, QuoteStatus.ERROR, repr(e))

        self._stats["quotes"] += 1
        quote = Quote(source=self.name, price=price, fee=self.fee)
        return QuoteResult.success(pair, quote)

    async def _rest_request(
        self,
        url: str,
        params: Optional[Dict] = None
    ) -> Any:
        """
        GET a JSON document.

        Raises:
            aiohttp.ClientResponseError: non-2xx status
            MalformedResponse: body is not valid JSON
            asyncio.TimeoutError: request exceeded the timeout
        """
        self._stats["rest_requests"] += 1
        async with self._session.get(
            url,
            params=params,
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        ) as response:
            if not 200 <= response.status < 300:
                text = await response.text()
                logger.warning(
                    "REST API error",
                    exchange=self.exchange_type.value,
                    url=url,
                    status=response.status,
                    response=text[:200]
                )
                raise aiohttp.ClientResponseError(
                    response.request_info,
                    response.history,
                    status=response.status,
                    message=text[:200]
                )

            body = await response.read()
            try:
                return orjson.loads(body)
            except orjson.JSONDecodeError as e:
                raise MalformedResponse(f"invalid JSON: {e}") from e

    def _fail(self, pair: str, status: QuoteStatus, detail: str) -> QuoteResult:
        self._stats["failures"][status.value] += 1
        if status == QuoteStatus.UNSUPPORTED:
            log = logger.debug
        elif status == QuoteStatus.MALFORMED:
            log = logger.warning
        else:
            log = logger.info
        log(
            "Quote unavailable",
            exchange=self.exchange_type.value,
            pair=pair,
            status=status.value,
            detail=detail
        )
        return QuoteResult.failure(self.name, pair, status, detail)

    def get_stats(self) -> Dict:
        """Get quoter statistics."""
        return {
            "exchange": self.exchange_type.value,
            "fee": self.fee,
            "pairs": len(self.symbols),
            **self._stats,
            "failures": dict(self._stats["failures"])
        }
