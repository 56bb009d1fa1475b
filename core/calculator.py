"""
Arbitrage evaluation.
"""
from datetime import datetime, timezone
from typing import Optional, Sequence
import structlog

from models.quote import Quote
from models.opportunity import Opportunity
from core.policy import QualificationPolicy

logger = structlog.get_logger()


class ArbitrageEvaluator:
    """
    Finds the best buy/sell pair among quotes for one asset and decides
    whether it qualifies as an opportunity.
    """

    def calculate_spread(self, buy_price: float, sell_price: float) -> float:
        """
        Calculate spread percentage.

        Formula: spread = ((sell_price - buy_price) / buy_price) * 100
        """
        if buy_price <= 0 or sell_price <= 0:
            return 0.0

        return ((sell_price - buy_price) / buy_price) * 100

    @staticmethod
    def select_buy(quotes: Sequence[Quote]) -> Quote:
        """Cheapest quote; the earliest one wins a tie."""
        return min(quotes, key=lambda q: q.price)

    @staticmethod
    def select_sell(quotes: Sequence[Quote]) -> Quote:
        """Most expensive quote; the earliest one wins a tie."""
        return max(quotes, key=lambda q: q.price)

    def evaluate(
        self,
        pair: str,
        quotes: Sequence[Quote],
        policy: QualificationPolicy,
        now: Optional[datetime] = None
    ) -> Optional[Opportunity]:
        """
        Evaluate quotes for one pair.

        Args:
            pair: Base asset symbol
            quotes: At least two quotes, in exchange registration order
            policy: Qualification policy
            now: Evaluation instant, defaults to current UTC time

        Returns:
            Opportunity if the policy accepts it, otherwise None
        """
        if len(quotes) < 2:
            raise ValueError(f"Need at least two quotes to evaluate {pair}, got {len(quotes)}")

        buy = self.select_buy(quotes)
        sell = self.select_sell(quotes)

        spread_percent = self.calculate_spread(buy.price, sell.price)
        net_profit = spread_percent - (buy.fee + sell.fee)

        if not policy.accepts(net_profit):
            logger.debug(
                "Spread below threshold",
                pair=pair,
                buy=buy.source,
                sell=sell.source,
                spread=round(spread_percent, 4),
                profit=round(net_profit, 4)
            )
            return None

        return Opportunity(
            pair=pair,
            buy_exchange=buy.source,
            sell_exchange=sell.source,
            buy_price=buy.price,
            sell_price=sell.price,
            spread_percent=spread_percent,
            net_profit_percent=net_profit,
            timestamp=now or datetime.now(timezone.utc)
        )
