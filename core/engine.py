"""
Arbitrage service.
Wires exchange quoters, the scan cycle, the result cache and history.
"""
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
import structlog

from config.settings import Settings, get_settings
from models.opportunity import Opportunity
from core.aggregator import PriceAggregator
from core.cache import OpportunityCache
from core.calculator import ArbitrageEvaluator
from core.history import HistoryLog
from core.policy import QualificationPolicy
from core.runner import CycleRunner
from exchanges import build_quoters
from exchanges.base import BaseQuoter

logger = structlog.get_logger()


class ArbitrageService:
    """
    Process-wide arbitrage scanner.

    Constructed once at startup and handed to the HTTP layer. Owns the
    only cache and history instances.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        quoters: Optional[Sequence[BaseQuoter]] = None
    ):
        """
        Initialize arbitrage service.

        Args:
            settings: Application settings, defaults to get_settings()
            quoters: Exchange quoters in tie-break order, built from settings if omitted
        """
        self.settings = settings or get_settings()

        self.quoters: List[BaseQuoter] = (
            list(quoters) if quoters is not None else build_quoters(self.settings)
        )

        self.policy = QualificationPolicy(
            min_profit=self.settings.MIN_PROFIT,
            show_all=self.settings.SHOW_ALL
        )
        self.history = HistoryLog(capacity=self.settings.HISTORY_SIZE)
        self.runner = CycleRunner(
            pairs=self.settings.PAIRS,
            aggregator=PriceAggregator(self.quoters),
            evaluator=ArbitrageEvaluator(),
            policy=self.policy,
            history=self.history,
            max_concurrent_pairs=self.settings.MAX_CONCURRENT_PAIRS,
            cycle_timeout=self.settings.CYCLE_TIMEOUT_SEC
        )
        self.cache = OpportunityCache(self.runner.run, ttl=self.settings.CACHE_TTL_SEC)

        self._started_at: Optional[datetime] = None

    async def initialize(self):
        """Open HTTP sessions for all quoters."""
        logger.info("Initializing arbitrage service")

        for quoter in self.quoters:
            await quoter.initialize()

        self._started_at = datetime.now(timezone.utc)

        logger.info(
            "Arbitrage service initialized",
            exchanges=[q.exchange_type.value for q in self.quoters],
            pairs=len(self.settings.PAIRS),
            min_profit=self.policy.min_profit,
            show_all=self.policy.show_all,
            cache_ttl=self.cache.ttl,
            history_size=self.history.capacity
        )

    async def close(self):
        """Close all quoter sessions."""
        for quoter in self.quoters:
            await quoter.close()

        logger.info("Arbitrage service stopped")

    async def get_opportunities(self) -> List[Opportunity]:
        """Current opportunities, highest net profit first."""
        return await self.cache.read()

    def get_history(self) -> List[Opportunity]:
        """Past opportunities, newest first."""
        return self.history.read()

    def get_stats(self) -> Dict:
        """Get service statistics."""
        return {
            "uptime_seconds": (
                datetime.now(timezone.utc) - self._started_at
            ).total_seconds() if self._started_at else 0,
            "cycle": self.runner.get_stats(),
            "cache": self.cache.get_stats(),
            "history": {
                "entries": len(self.history),
                "capacity": self.history.capacity
            },
            "exchanges": {
                q.exchange_type.value: q.get_stats() for q in self.quoters
            }
        }
