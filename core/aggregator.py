"""
Per-pair price collection across exchanges.
"""
from typing import List, Sequence

import structlog

from models.quote import Quote, QuoteResult
from exchanges.base import BaseQuoter
from utils.tasks import gather_or_cancel

logger = structlog.get_logger()


class PriceAggregator:
    """
    Asks every registered quoter for a pair concurrently.

    Results keep quoter registration order regardless of which request
    finishes first, so price ties resolve the same way every cycle.
    """

    def __init__(self, quoters: Sequence[BaseQuoter]):
        self.quoters = list(quoters)

    async def collect(self, pair: str) -> List[QuoteResult]:
        """Raw outcome from every quoter, one slot per quoter."""
        return await gather_or_cancel(*(q.fetch(pair) for q in self.quoters))

    async def aggregate(self, pair: str) -> List[Quote]:
        """Successful quotes for a pair; failed sources are dropped."""
        results = await self.collect(pair)

        quotes = []
        for result in results:
            if result.ok:
                quotes.append(result.quote)
            else:
                logger.debug(
                    "Discarding source",
                    pair=pair,
                    exchange=result.source,
                    status=result.status.value
                )
        return quotes
