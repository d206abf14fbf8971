"""
Availability Module

Per-room, per-day inventory calendar for the booking back office:

- Range queries that report untouched days from room defaults
- Capacity initialization that never drops recorded bookings
- Nightly price overrides and blocking over date ranges
- Atomic booking and release of rooms across a stay

Key Components:
- repository.py: In-memory and SQLAlchemy calendar storage
- service.py: Range validation and calendar operations
- router.py: FastAPI endpoints for the admin calendar
- schemas.py: Pydantic models for calendar rows and requests
"""

from .router import router
from .service import AvailabilityCalendarService
from .repository import AvailabilityRepository, InMemoryAvailabilityRepository, SqlAvailabilityRepository
from .schemas import (
    AvailabilityDay, CalendarEntry, AvailabilityCalendarResponse,
    AvailabilityMutationRequest, RoomBookingRequest, MutationResult
)

__all__ = [
    "router",
    "AvailabilityCalendarService",
    "AvailabilityRepository",
    "InMemoryAvailabilityRepository",
    "SqlAvailabilityRepository",
    "AvailabilityDay",
    "CalendarEntry",
    "AvailabilityCalendarResponse",
    "AvailabilityMutationRequest",
    "RoomBookingRequest",
    "MutationResult",
]
