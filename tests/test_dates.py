from __future__ import annotations

import time
from datetime import date, datetime, timedelta, timezone

import pytest

from tour_pricing.core.dates import DateRange, nights, parse_date, to_utc_date
from tour_pricing.core.errors import InvalidDateRange


def test_nights_counts_calendar_days():
    assert nights("2024-06-01", "2024-06-08") == 7
    assert nights(date(2024, 12, 30), date(2025, 1, 2)) == 3


def test_nights_ignores_dst_transition():
    # Europe moves clocks forward overnight on 2024-03-31
    assert nights("2024-03-30", "2024-03-31") == 1
    assert nights("2024-10-26", "2024-10-28") == 2


def test_nights_with_aware_datetimes_uses_utc_dates():
    check_in = datetime(2024, 6, 1, 14, 30, tzinfo=timezone.utc)
    check_out = datetime(2024, 6, 8, 10, 0, tzinfo=timezone(timedelta(hours=2)))
    assert nights(check_in, check_out) == 7


def test_nights_missing_date_is_zero():
    assert nights(None, "2024-06-08") == 0
    assert nights("2024-06-01", None) == 0


@pytest.mark.parametrize("check_out", ["2024-06-01", "2024-05-30"])
def test_nights_rejects_empty_or_reversed_stay(check_out):
    with pytest.raises(InvalidDateRange):
        nights("2024-06-01", check_out)


def test_parse_date_normalizes_offsets_to_utc():
    assert parse_date("2024-06-01T01:00:00+03:00") == date(2024, 5, 31)
    assert parse_date("2024-06-01T23:00:00Z") == date(2024, 6, 1)
    assert parse_date(" 2024-06-01 ") == date(2024, 6, 1)


def test_to_utc_date_reads_naive_datetimes_as_utc():
    assert to_utc_date(datetime(2024, 6, 1, 23, 59)) == date(2024, 6, 1)
    assert to_utc_date(date(2024, 6, 1)) == date(2024, 6, 1)


@pytest.mark.parametrize("value", ["", "not-a-date", "2024-13-01", 20240601])
def test_parse_date_rejects_garbage(value):
    with pytest.raises(InvalidDateRange):
        parse_date(value)


def test_date_range_is_half_open():
    date_range = DateRange.from_values("2024-12-23", "2024-12-26")

    assert list(date_range.days()) == [date(2024, 12, 23), date(2024, 12, 24), date(2024, 12, 25)]
    assert date_range.nights == 3
    assert len(date_range) == 3
    assert date(2024, 12, 23) in date_range
    assert date(2024, 12, 26) not in date_range


def test_date_range_allows_empty_but_not_reversed():
    assert DateRange(date(2024, 1, 1), date(2024, 1, 1)).nights == 0
    with pytest.raises(InvalidDateRange):
        DateRange(date(2024, 1, 2), date(2024, 1, 1))


def test_stay_requires_one_night():
    assert DateRange.stay("2024-06-01", "2024-06-02").nights == 1
    with pytest.raises(InvalidDateRange):
        DateRange.stay("2024-06-01", "2024-06-01")


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="time.tzset is unavailable")
def test_nights_independent_of_host_timezone(monkeypatch):
    monkeypatch.setenv("TZ", "Europe/Berlin")
    time.tzset()
    try:
        assert nights("2024-03-30", "2024-03-31") == 1
        assert nights(datetime(2024, 3, 30, 23, 30), datetime(2024, 3, 31, 23, 30)) == 1
        spring = datetime(2024, 3, 31, 0, 30, tzinfo=timezone(timedelta(hours=1)))
        assert to_utc_date(spring) == date(2024, 3, 30)
        assert nights("2024-10-26", "2024-10-28") == 2
    finally:
        monkeypatch.undo()
        time.tzset()
