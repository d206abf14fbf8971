"""
Rates Module

Hotel rate cards and the resolver that turns them, together with nightly
price overrides from the availability calendar, into stay prices.
"""

from .service import RateResolver
from .repository import RateCardRepository, InMemoryRateCardRepository, SqlRateCardRepository, pick_rate_card
from .schemas import RateCard, NightlyPrice, StayPriceBreakdown

__all__ = [
    "RateResolver",
    "RateCardRepository",
    "InMemoryRateCardRepository",
    "SqlRateCardRepository",
    "pick_rate_card",
    "RateCard",
    "NightlyPrice",
    "StayPriceBreakdown",
]
