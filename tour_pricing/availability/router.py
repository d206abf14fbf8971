from fastapi import APIRouter, Depends, HTTPException, status, Query
from datetime import date

from tour_pricing.availability.repository import AvailabilityRepository
from tour_pricing.availability.schemas import (
    AvailabilityCalendarResponse, AvailabilityMutationRequest, MutationResult, RoomBookingRequest
)
from tour_pricing.availability.service import AvailabilityCalendarService
from tour_pricing.catalog.repository import CatalogRepository
from tour_pricing.core.errors import PricingError
from tour_pricing.core.http import http_error
from tour_pricing.dependencies import get_availability_repository, get_catalog

router = APIRouter()


def get_calendar_service(
    repository: AvailabilityRepository = Depends(get_availability_repository),
    catalog: CatalogRepository = Depends(get_catalog)
) -> AvailabilityCalendarService:
    return AvailabilityCalendarService(repository, catalog)


@router.get("", response_model=AvailabilityCalendarResponse)
def get_availability(
    room_id: str = Query(..., description="Room ID"),
    start_date: date = Query(..., description="First day (inclusive)"),
    end_date: date = Query(..., description="Last day (exclusive)"),
    service: AvailabilityCalendarService = Depends(get_calendar_service)
):
    """Availability calendar for a room over [start_date, end_date)"""

    try:
        calendar = service.get_calendar_entries(room_id, start_date, end_date)
    except PricingError as e:
        raise http_error(e)

    return AvailabilityCalendarResponse(
        room_id=room_id,
        start_date=start_date,
        end_date=end_date,
        calendar=calendar
    )


@router.post("", response_model=MutationResult)
def update_availability(
    request: AvailabilityMutationRequest,
    service: AvailabilityCalendarService = Depends(get_calendar_service)
):
    """Initialize, reprice or block a room over a date range"""

    try:
        if request.action == "initialize":
            days = service.initialize_availability(
                request.room_id, request.start_date, request.end_date, request.total_rooms
            )
        elif request.action == "updatePricing":
            days = service.update_pricing(
                request.room_id, request.start_date, request.end_date, request.price_override
            )
        elif request.action == "setBlocked":
            days = service.set_blocked_status(
                request.room_id, request.start_date, request.end_date, request.is_blocked
            )
        else:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid action"
            )
    except PricingError as e:
        raise http_error(e)

    return MutationResult(room_id=request.room_id, days_affected=days)


@router.post("/book", response_model=MutationResult)
def book_rooms(
    request: RoomBookingRequest,
    service: AvailabilityCalendarService = Depends(get_calendar_service)
):
    """Consume rooms for a confirmed booking"""

    try:
        days = service.book_rooms(request.room_id, request.start_date, request.end_date, request.rooms)
    except PricingError as e:
        raise http_error(e)

    return MutationResult(room_id=request.room_id, days_affected=days)


@router.post("/release", response_model=MutationResult)
def release_rooms(
    request: RoomBookingRequest,
    service: AvailabilityCalendarService = Depends(get_calendar_service)
):
    """Return rooms after a cancellation"""

    try:
        days = service.release_rooms(request.room_id, request.start_date, request.end_date, request.rooms)
    except PricingError as e:
        raise http_error(e)

    return MutationResult(room_id=request.room_id, days_affected=days)
