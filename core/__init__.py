"""Core package."""
from core.engine import ArbitrageService
from core.aggregator import PriceAggregator
from core.cache import OpportunityCache
from core.calculator import ArbitrageEvaluator
from core.history import HistoryLog
from core.policy import QualificationPolicy
from core.runner import CycleRunner

__all__ = [
    "ArbitrageService",
    "PriceAggregator",
    "OpportunityCache",
    "ArbitrageEvaluator",
    "HistoryLog",
    "QualificationPolicy",
    "CycleRunner",
]
