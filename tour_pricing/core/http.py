from fastapi import HTTPException, status

from tour_pricing.core.errors import (
    PricingError, InvalidDateRange, InvalidParty, MissingFlightSelection,
    RateNotFound, RoomNotFound, CapacityConflict, ConcurrencyConflict
)

STATUS_BY_ERROR = {
    InvalidDateRange: status.HTTP_400_BAD_REQUEST,
    InvalidParty: status.HTTP_400_BAD_REQUEST,
    MissingFlightSelection: status.HTTP_400_BAD_REQUEST,
    RateNotFound: status.HTTP_404_NOT_FOUND,
    RoomNotFound: status.HTTP_404_NOT_FOUND,
    CapacityConflict: status.HTTP_409_CONFLICT,
    ConcurrencyConflict: status.HTTP_409_CONFLICT,
}


def http_error(error: PricingError) -> HTTPException:
    """HTTP response for a pricing error"""
    return HTTPException(
        status_code=STATUS_BY_ERROR.get(type(error), status.HTTP_400_BAD_REQUEST),
        detail={
            "code": error.code,
            "message": error.message
        }
    )
