from __future__ import annotations

import threading
from datetime import date

import pytest

from tour_pricing.core.errors import (
    CapacityConflict, ConcurrencyConflict, InvalidDateRange, PricingError, RoomNotFound
)


def test_untouched_days_use_catalog_defaults(calendar):
    days = calendar.get_availability_calendar("room-std", "2024-06-01", "2024-06-04")

    assert [day.date for day in days] == [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 3)]
    assert all(day.total_rooms == 10 and day.booked_rooms == 0 for day in days)
    assert calendar.get_day("room-std", date(2024, 6, 1)) is None


def test_blocked_day_has_no_availability(calendar):
    calendar.set_blocked_status("room-std", "2024-06-02", "2024-06-03", True)
    days = calendar.get_availability_calendar("room-std", "2024-06-01", "2024-06-04")

    assert [day.available_rooms for day in days] == [10, 0, 10]
    assert not calendar.check_availability("room-std", "2024-06-01", "2024-06-04")
    assert calendar.check_availability("room-std", "2024-06-03", "2024-06-04")

    calendar.set_blocked_status("room-std", "2024-06-02", "2024-06-03", False)
    assert calendar.check_availability("room-std", "2024-06-01", "2024-06-04")


def test_initialize_is_idempotent(calendar):
    assert calendar.initialize_availability("room-std", "2024-06-01", "2024-06-08", 5) == 7
    first = calendar.get_availability_calendar("room-std", "2024-06-01", "2024-06-08")
    calendar.initialize_availability("room-std", "2024-06-01", "2024-06-08", 5)
    second = calendar.get_availability_calendar("room-std", "2024-06-01", "2024-06-08")

    assert first == second
    assert all(day.total_rooms == 5 for day in second)


def test_initialize_keeps_bookings_and_overrides(calendar):
    calendar.update_pricing("room-std", "2024-06-01", "2024-06-03", 12500)
    calendar.book_rooms("room-std", "2024-06-01", "2024-06-03", 2)
    calendar.initialize_availability("room-std", "2024-06-01", "2024-06-03", 4)

    day = calendar.get_day("room-std", date(2024, 6, 1))
    assert (day.total_rooms, day.booked_rooms, day.price_override) == (4, 2, 12500)
    assert day.available_rooms == 2


def test_initialize_below_bookings_changes_nothing(calendar):
    calendar.book_rooms("room-std", "2024-06-02", "2024-06-03", 3)

    with pytest.raises(CapacityConflict):
        calendar.initialize_availability("room-std", "2024-06-01", "2024-06-04", 2)

    days = calendar.get_availability_calendar("room-std", "2024-06-01", "2024-06-04")
    assert [day.total_rooms for day in days] == [10, 10, 10]


def test_booking_is_all_or_nothing(calendar):
    calendar.set_blocked_status("room-std", "2024-06-03", "2024-06-04", True)

    with pytest.raises(ConcurrencyConflict):
        calendar.book_rooms("room-std", "2024-06-01", "2024-06-05")

    days = calendar.get_availability_calendar("room-std", "2024-06-01", "2024-06-05")
    assert all(day.booked_rooms == 0 for day in days)


def test_booking_beyond_capacity_is_refused(calendar):
    calendar.book_rooms("room-sup", "2024-06-01", "2024-06-02", 2)
    with pytest.raises(ConcurrencyConflict):
        calendar.book_rooms("room-sup", "2024-06-01", "2024-06-02", 1)


def test_concurrent_bookings_for_last_room(calendar):
    calendar.initialize_availability("room-sup", "2024-06-01", "2024-06-04", 1)
    workers = 8
    barrier = threading.Barrier(workers)
    results = []
    results_lock = threading.Lock()

    def attempt():
        barrier.wait()
        try:
            calendar.book_rooms("room-sup", "2024-06-01", "2024-06-04")
            outcome = "booked"
        except ConcurrencyConflict:
            outcome = "conflict"
        with results_lock:
            results.append(outcome)

    threads = [threading.Thread(target=attempt) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results.count("booked") == 1
    assert results.count("conflict") == workers - 1
    days = calendar.get_availability_calendar("room-sup", "2024-06-01", "2024-06-04")
    assert all(day.booked_rooms == 1 and day.available_rooms == 0 for day in days)


def test_release_returns_rooms(calendar):
    calendar.book_rooms("room-std", "2024-06-01", "2024-06-03", 2)
    assert calendar.release_rooms("room-std", "2024-06-01", "2024-06-03", 1) == 2

    days = calendar.get_availability_calendar("room-std", "2024-06-01", "2024-06-03")
    assert [day.booked_rooms for day in days] == [1, 1]


def test_release_never_goes_negative(calendar):
    calendar.book_rooms("room-std", "2024-06-01", "2024-06-02")

    with pytest.raises(CapacityConflict):
        calendar.release_rooms("room-std", "2024-06-01", "2024-06-03")

    assert calendar.get_day("room-std", date(2024, 6, 1)).booked_rooms == 1


def test_calendar_entries_show_effective_price(calendar):
    calendar.update_pricing("room-std", "2024-12-24", "2024-12-25", 25000)
    entries = calendar.get_calendar_entries("room-std", "2024-12-23", "2024-12-26")

    assert [entry.price for entry in entries] == [10000, 25000, 10000]
    assert [entry.price_override for entry in entries] == [None, 25000, None]


@pytest.mark.parametrize(("start", "end"), [("2024-06-02", "2024-06-01"), ("2024-06-01", "2024-06-01")])
def test_empty_or_reversed_range_is_rejected(calendar, start, end):
    with pytest.raises(InvalidDateRange):
        calendar.get_availability_calendar("room-std", start, end)


def test_unknown_room(calendar):
    with pytest.raises(RoomNotFound):
        calendar.book_rooms("room-missing", "2024-06-01", "2024-06-02")


def test_invalid_mutation_values(calendar):
    with pytest.raises(PricingError):
        calendar.update_pricing("room-std", "2024-06-01", "2024-06-02", -1)
    with pytest.raises(CapacityConflict):
        calendar.initialize_availability("room-std", "2024-06-01", "2024-06-02", -1)
    with pytest.raises(CapacityConflict):
        calendar.book_rooms("room-std", "2024-06-01", "2024-06-02", 0)
