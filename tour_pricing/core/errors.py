"""Errors raised by the pricing and availability services.

Every error is request-scoped. Routers translate them to HTTP responses;
services never retry or substitute a default price.
"""


class PricingError(Exception):
    """Base exception for pricing and availability errors"""
    code = "PRICING_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidDateRange(PricingError):
    code = "INVALID_DATE_RANGE"


class InvalidParty(PricingError):
    code = "INVALID_PARTY"


class RateNotFound(PricingError):
    code = "RATE_NOT_FOUND"


class CapacityConflict(PricingError):
    code = "CAPACITY_CONFLICT"


class MissingFlightSelection(PricingError):
    code = "MISSING_FLIGHT_SELECTION"


class ConcurrencyConflict(PricingError):
    code = "CONCURRENCY_CONFLICT"


class RoomNotFound(PricingError):
    code = "ROOM_NOT_FOUND"
