import logging
from datetime import date
from typing import List, Optional

from tour_pricing.availability.repository import AvailabilityRepository, default_day
from tour_pricing.availability.schemas import AvailabilityDay, CalendarEntry
from tour_pricing.catalog.repository import CatalogRepository
from tour_pricing.catalog.schemas import RoomInfo
from tour_pricing.core.dates import DateLike, DateRange
from tour_pricing.core.errors import CapacityConflict, ConcurrencyConflict, InvalidDateRange, PricingError, RoomNotFound

logger = logging.getLogger(__name__)


class AvailabilityCalendarService:
    """Service for reading and mutating room availability over date ranges.

    All ranges are half-open, [start, end). Days without a stored row are
    reported from the room's catalog defaults: absence means untouched, not
    unavailable.
    """

    def __init__(self, repository: AvailabilityRepository, catalog: CatalogRepository):
        self.repository = repository
        self.catalog = catalog

    def _range(self, start: DateLike, end: DateLike) -> DateRange:
        date_range = DateRange.from_values(start, end)
        if date_range.nights < 1:
            raise InvalidDateRange(
                f"Range {date_range.start.isoformat()} to {date_range.end.isoformat()} contains no days"
            )
        return date_range

    def _room(self, room_id: str) -> RoomInfo:
        room = self.catalog.get_room(room_id)
        if not room:
            raise RoomNotFound(f"Room {room_id} not found")
        return room

    def get_availability_calendar(self, room_id: str, start: DateLike, end: DateLike) -> List[AvailabilityDay]:
        """One row per day in [start, end), synthesizing untouched days"""
        date_range = self._range(start, end)
        room = self._room(room_id)
        stored = self.repository.get_days(room_id, date_range.start, date_range.end)
        return [stored.get(day) or default_day(room, day) for day in date_range.days()]

    def get_calendar_entries(self, room_id: str, start: DateLike, end: DateLike) -> List[CalendarEntry]:
        """Calendar in wire form, with the effective nightly price"""
        room = self._room(room_id)
        return [
            CalendarEntry(
                date=day.date,
                available_rooms=day.available_rooms,
                booked_rooms=day.booked_rooms,
                total_rooms=day.total_rooms,
                price=day.price_override if day.price_override is not None else room.base_price,
                price_override=day.price_override,
                is_blocked=day.is_blocked
            )
            for day in self.get_availability_calendar(room_id, start, end)
        ]

    def get_day(self, room_id: str, day: date) -> Optional[AvailabilityDay]:
        """Stored row for a single day, if any"""
        return self.repository.get_day(room_id, day)

    def initialize_availability(self, room_id: str, start: DateLike, end: DateLike, total_rooms: int) -> int:
        date_range = self._range(start, end)
        if total_rooms < 0:
            raise CapacityConflict("total_rooms cannot be negative")
        room = self._room(room_id)

        days = self.repository.initialize(room, list(date_range.days()), total_rooms)
        logger.info(
            "Initialized %d day(s) for room %s from %s with %d rooms",
            days, room_id, date_range.start, total_rooms
        )
        return days

    def update_pricing(self, room_id: str, start: DateLike, end: DateLike, price_override: Optional[int]) -> int:
        """Set (or clear, with None) the nightly price override across the range"""
        date_range = self._range(start, end)
        if price_override is not None and price_override < 0:
            raise PricingError("price_override cannot be negative")
        room = self._room(room_id)

        days = self.repository.set_price_override(room, list(date_range.days()), price_override)
        logger.info(
            "Price override for room %s from %s to %s set to %s",
            room_id, date_range.start, date_range.end, price_override
        )
        return days

    def set_blocked_status(self, room_id: str, start: DateLike, end: DateLike, is_blocked: bool) -> int:
        date_range = self._range(start, end)
        room = self._room(room_id)

        days = self.repository.set_blocked(room, list(date_range.days()), is_blocked)
        logger.info(
            "Room %s %s from %s to %s",
            room_id, "blocked" if is_blocked else "unblocked", date_range.start, date_range.end
        )
        return days

    def book_rooms(self, room_id: str, start: DateLike, end: DateLike, count: int = 1) -> int:
        """Consume rooms for a confirmed booking; all days or none"""
        date_range = self._range(start, end)
        if count < 1:
            raise CapacityConflict("At least one room must be booked")
        room = self._room(room_id)

        try:
            days = self.repository.book(room, list(date_range.days()), count)
        except ConcurrencyConflict as e:
            logger.warning("Booking refused for room %s: %s", room_id, e)
            raise
        logger.info("Booked %d room(s) of %s for %d night(s)", count, room_id, days)
        return days

    def release_rooms(self, room_id: str, start: DateLike, end: DateLike, count: int = 1) -> int:
        """Return rooms after a cancellation or an expired hold"""
        date_range = self._range(start, end)
        if count < 1:
            raise CapacityConflict("At least one room must be released")
        room = self._room(room_id)

        days = self.repository.release(room, list(date_range.days()), count)
        logger.info("Released %d room(s) of %s for %d night(s)", count, room_id, days)
        return days

    def check_availability(self, room_id: str, start: DateLike, end: DateLike, rooms_needed: int = 1) -> bool:
        """Whether every day in the range has ``rooms_needed`` rooms free"""
        return all(
            day.available_rooms >= rooms_needed
            for day in self.get_availability_calendar(room_id, start, end)
        )
