"""Shared building blocks: calendar arithmetic, error taxonomy and logging setup."""

from .dates import DateRange, nights, parse_date, to_utc_date
from .errors import (
    PricingError, InvalidDateRange, InvalidParty, RateNotFound,
    CapacityConflict, MissingFlightSelection, ConcurrencyConflict, RoomNotFound
)

__all__ = [
    "DateRange",
    "nights",
    "parse_date",
    "to_utc_date",
    "PricingError",
    "InvalidDateRange",
    "InvalidParty",
    "RateNotFound",
    "CapacityConflict",
    "MissingFlightSelection",
    "ConcurrencyConflict",
    "RoomNotFound",
]
