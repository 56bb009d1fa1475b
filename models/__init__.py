"""
Models package.
"""
from models.quote import ExchangeType, Quote, QuoteResult, QuoteStatus
from models.opportunity import Opportunity

__all__ = [
    "ExchangeType",
    "Quote",
    "QuoteResult",
    "QuoteStatus",
    "Opportunity",
]
