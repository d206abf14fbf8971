"""Storage for the per-room, per-day availability calendar.

Two implementations share one contract: an in-memory store used by tests
and single-process deployments, and a SQLAlchemy store for production.
Both apply every range operation atomically for the room: either every day
in the range is written or none is.
"""
import threading
from abc import ABC, abstractmethod
from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tour_pricing.availability.schemas import AvailabilityDay
from tour_pricing.catalog.schemas import RoomInfo
from tour_pricing.core.errors import CapacityConflict, ConcurrencyConflict
from tour_pricing.models import RoomAvailability


class AvailabilityRepository(ABC):
    """Per (room, day) availability rows"""

    @abstractmethod
    def get_days(self, room_id: str, start: date, end: date) -> Dict[date, AvailabilityDay]:
        """Stored rows for [start, end), keyed by date. Missing days are absent."""

    def get_day(self, room_id: str, day: date) -> Optional[AvailabilityDay]:
        return self.get_days(room_id, day, day + timedelta(days=1)).get(day)

    @abstractmethod
    def initialize(self, room: RoomInfo, days: List[date], total_rooms: int) -> int:
        """Set capacity on every day; CapacityConflict if below booked rooms."""

    @abstractmethod
    def set_price_override(self, room: RoomInfo, days: List[date], price_override: Optional[int]) -> int:
        ...

    @abstractmethod
    def set_blocked(self, room: RoomInfo, days: List[date], is_blocked: bool) -> int:
        ...

    @abstractmethod
    def book(self, room: RoomInfo, days: List[date], count: int) -> int:
        """Consume ``count`` rooms on every day; ConcurrencyConflict if any day lacks them."""

    @abstractmethod
    def release(self, room: RoomInfo, days: List[date], count: int) -> int:
        """Give back ``count`` rooms on every day; CapacityConflict if not booked."""


def default_day(room: RoomInfo, day: date) -> AvailabilityDay:
    """Row for a day nobody has touched yet"""
    return AvailabilityDay(date=day, room_id=room.room_id, total_rooms=room.total_rooms)


class InMemoryAvailabilityRepository(AvailabilityRepository):
    """Dict keyed by (room_id, date) with a lock per room"""

    def __init__(self):
        self._rows: Dict[Tuple[str, date], AvailabilityDay] = {}
        self._locks: Dict[str, threading.Lock] = defaultdict(threading.Lock)
        self._locks_guard = threading.Lock()

    def _lock(self, room_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks[room_id]

    def _current(self, room: RoomInfo, day: date) -> AvailabilityDay:
        return self._rows.get((room.room_id, day)) or default_day(room, day)

    def get_days(self, room_id: str, start: date, end: date) -> Dict[date, AvailabilityDay]:
        with self._lock(room_id):
            return {
                day: row for (row_room, day), row in self._rows.items()
                if row_room == room_id and start <= day < end
            }

    def initialize(self, room: RoomInfo, days: List[date], total_rooms: int) -> int:
        with self._lock(room.room_id):
            updated = {}
            for day in days:
                current = self._current(room, day)
                if current.booked_rooms > total_rooms:
                    raise CapacityConflict(
                        f"{day.isoformat()} has {current.booked_rooms} booked rooms, "
                        f"cannot reduce capacity to {total_rooms}"
                    )
                updated[(room.room_id, day)] = current.replace(total_rooms=total_rooms)
            self._rows.update(updated)
            return len(updated)

    def set_price_override(self, room: RoomInfo, days: List[date], price_override: Optional[int]) -> int:
        with self._lock(room.room_id):
            for day in days:
                self._rows[(room.room_id, day)] = self._current(room, day).replace(
                    price_override=price_override
                )
            return len(days)

    def set_blocked(self, room: RoomInfo, days: List[date], is_blocked: bool) -> int:
        with self._lock(room.room_id):
            for day in days:
                self._rows[(room.room_id, day)] = self._current(room, day).replace(
                    is_blocked=is_blocked
                )
            return len(days)

    def book(self, room: RoomInfo, days: List[date], count: int) -> int:
        with self._lock(room.room_id):
            updated = {}
            for day in days:
                current = self._current(room, day)
                if current.is_blocked:
                    raise ConcurrencyConflict(f"Room {room.room_id} is blocked on {day.isoformat()}")
                if current.available_rooms < count:
                    raise ConcurrencyConflict(
                        f"Room {room.room_id} has {current.available_rooms} rooms left on {day.isoformat()}"
                    )
                updated[(room.room_id, day)] = current.replace(
                    booked_rooms=current.booked_rooms + count
                )
            self._rows.update(updated)
            return len(updated)

    def release(self, room: RoomInfo, days: List[date], count: int) -> int:
        with self._lock(room.room_id):
            updated = {}
            for day in days:
                current = self._current(room, day)
                if current.booked_rooms < count:
                    raise CapacityConflict(
                        f"Cannot release {count} rooms on {day.isoformat()}, "
                        f"only {current.booked_rooms} booked"
                    )
                updated[(room.room_id, day)] = current.replace(
                    booked_rooms=current.booked_rooms - count
                )
            self._rows.update(updated)
            return len(updated)


class SqlAvailabilityRepository(AvailabilityRepository):
    """SQLAlchemy store; conditional updates guard the capacity invariant"""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _to_day(row: RoomAvailability) -> AvailabilityDay:
        return AvailabilityDay(
            date=row.date,
            room_id=row.room_id,
            total_rooms=row.total_rooms,
            booked_rooms=row.booked_rooms,
            price_override=row.price_override,
            is_blocked=row.is_blocked
        )

    def _range_query(self, room_id: str, days: List[date]):
        return self.db.query(RoomAvailability).filter(
            RoomAvailability.room_id == room_id,
            RoomAvailability.date >= min(days),
            RoomAvailability.date <= max(days)
        )

    def _ensure_rows(self, room: RoomInfo, days: List[date]):
        """Insert default rows for days that have none yet"""
        existing = {
            row.date for row in self._range_query(room.room_id, days).with_entities(RoomAvailability.date)
        }
        missing = [day for day in days if day not in existing]
        if not missing:
            return
        self.db.add_all([
            RoomAvailability(
                room_id=room.room_id,
                date=day,
                total_rooms=room.total_rooms,
                booked_rooms=0,
                is_blocked=False
            )
            for day in missing
        ])
        try:
            self.db.flush()
        except IntegrityError:
            raise ConcurrencyConflict(
                f"Availability for room {room.room_id} was created by a concurrent request"
            ) from None

    def get_days(self, room_id: str, start: date, end: date) -> Dict[date, AvailabilityDay]:
        rows = self.db.query(RoomAvailability).filter(
            RoomAvailability.room_id == room_id,
            RoomAvailability.date >= start,
            RoomAvailability.date < end
        ).order_by(RoomAvailability.date).all()
        return {row.date: self._to_day(row) for row in rows}

    def initialize(self, room: RoomInfo, days: List[date], total_rooms: int) -> int:
        try:
            self._ensure_rows(room, days)
            updated = self._range_query(room.room_id, days).filter(
                RoomAvailability.booked_rooms <= total_rooms
            ).update({RoomAvailability.total_rooms: total_rooms}, synchronize_session=False)
            if updated != len(days):
                raise CapacityConflict(
                    f"Booked rooms exceed {total_rooms} on {len(days) - updated} day(s)"
                )
            self.db.commit()
            return updated
        except Exception:
            self.db.rollback()
            raise

    def set_price_override(self, room: RoomInfo, days: List[date], price_override: Optional[int]) -> int:
        try:
            self._ensure_rows(room, days)
            updated = self._range_query(room.room_id, days).update(
                {RoomAvailability.price_override: price_override}, synchronize_session=False
            )
            self.db.commit()
            return updated
        except Exception:
            self.db.rollback()
            raise

    def set_blocked(self, room: RoomInfo, days: List[date], is_blocked: bool) -> int:
        try:
            self._ensure_rows(room, days)
            updated = self._range_query(room.room_id, days).update(
                {RoomAvailability.is_blocked: is_blocked}, synchronize_session=False
            )
            self.db.commit()
            return updated
        except Exception:
            self.db.rollback()
            raise

    def book(self, room: RoomInfo, days: List[date], count: int) -> int:
        try:
            self._ensure_rows(room, days)
            for day in days:
                updated = self.db.query(RoomAvailability).filter(
                    RoomAvailability.room_id == room.room_id,
                    RoomAvailability.date == day,
                    RoomAvailability.is_blocked == False,  # noqa: E712
                    RoomAvailability.booked_rooms + count <= RoomAvailability.total_rooms
                ).update(
                    {RoomAvailability.booked_rooms: RoomAvailability.booked_rooms + count},
                    synchronize_session=False
                )
                if updated != 1:
                    raise ConcurrencyConflict(
                        f"Room {room.room_id} has no capacity for {count} room(s) on {day.isoformat()}"
                    )
            self.db.commit()
            return len(days)
        except Exception:
            self.db.rollback()
            raise

    def release(self, room: RoomInfo, days: List[date], count: int) -> int:
        try:
            for day in days:
                updated = self.db.query(RoomAvailability).filter(
                    RoomAvailability.room_id == room.room_id,
                    RoomAvailability.date == day,
                    RoomAvailability.booked_rooms >= count
                ).update(
                    {RoomAvailability.booked_rooms: RoomAvailability.booked_rooms - count},
                    synchronize_session=False
                )
                if updated != 1:
                    raise CapacityConflict(
                        f"Cannot release {count} room(s) on {day.isoformat()}"
                    )
            self.db.commit()
            return len(days)
        except Exception:
            self.db.rollback()
            raise
