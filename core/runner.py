"""
Scan cycle: every configured pair through aggregation and evaluation.
"""
import asyncio
import time
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import structlog

from models.opportunity import Opportunity
from core.aggregator import PriceAggregator
from core.calculator import ArbitrageEvaluator
from core.history import HistoryLog
from core.policy import QualificationPolicy
from utils.tasks import gather_or_cancel

logger = structlog.get_logger()


class CycleRunner:
    """Runs one full pass over the configured pairs."""

    def __init__(
        self,
        pairs: Sequence[str],
        aggregator: PriceAggregator,
        evaluator: ArbitrageEvaluator,
        policy: QualificationPolicy,
        history: HistoryLog,
        max_concurrent_pairs: int = 4,
        cycle_timeout: Optional[float] = None
    ):
        """
        Initialize cycle runner.

        Args:
            pairs: Base assets in scan order
            aggregator: Price aggregator over all exchanges
            evaluator: Spread evaluator
            policy: Qualification policy
            history: History log receiving qualifying opportunities
            max_concurrent_pairs: Pairs scanned at the same time
            cycle_timeout: Optional deadline for the whole cycle in seconds
        """
        if max_concurrent_pairs < 1:
            raise ValueError("max_concurrent_pairs must be at least 1")

        self.pairs = list(pairs)
        self.aggregator = aggregator
        self.evaluator = evaluator
        self.policy = policy
        self.history = history
        self.max_concurrent_pairs = max_concurrent_pairs
        self.cycle_timeout = cycle_timeout

        self._stats = {
            "cycles": 0,
            "last_duration_ms": None,
            "last_opportunities": 0,
            "last_skipped": 0
        }

    async def _scan_pair(self, pair: str, semaphore: asyncio.Semaphore) -> Optional[Opportunity]:
        async with semaphore:
            quotes = await self.aggregator.aggregate(pair)

        if len(quotes) < 2:
            logger.debug("Not enough quotes, skipping pair", pair=pair, quotes=len(quotes))
            return None

        return self.evaluator.evaluate(pair, quotes, self.policy, now=datetime.now(timezone.utc))

    async def _scan_all(self) -> List[Optional[Opportunity]]:
        semaphore = asyncio.Semaphore(self.max_concurrent_pairs)
        return await gather_or_cancel(*(self._scan_pair(p, semaphore) for p in self.pairs))

    async def run(self) -> List[Opportunity]:
        """
        Execute one cycle.

        History receives qualifying opportunities in pair order only after
        every pair has been scanned; the returned list is sorted by net
        profit, highest first.
        """
        started = time.monotonic()

        if self.cycle_timeout is not None:
            slots = await asyncio.wait_for(self._scan_all(), timeout=self.cycle_timeout)
        else:
            slots = await self._scan_all()

        found = [opp for opp in slots if opp is not None]
        self.history.extend(found)

        opportunities = sorted(found, key=lambda o: o.net_profit_percent, reverse=True)

        duration_ms = (time.monotonic() - started) * 1000
        self._stats["cycles"] += 1
        self._stats["last_duration_ms"] = round(duration_ms, 1)
        self._stats["last_opportunities"] = len(opportunities)
        self._stats["last_skipped"] = len(self.pairs) - len(found)

        logger.info(
            "Cycle complete",
            pairs=len(self.pairs),
            opportunities=len(opportunities),
            best_profit=round(opportunities[0].net_profit_percent, 4) if opportunities else None,
            duration_ms=round(duration_ms, 1)
        )

        return opportunities

    def get_stats(self) -> dict:
        return {
            "pairs": len(self.pairs),
            "min_profit": self.policy.min_profit,
            "show_all": self.policy.show_all,
            **self._stats
        }
