"""Calendar-date arithmetic for stays and availability ranges.

Dates are normalized once at the system boundary to plain ``date`` values
in UTC. Everything downstream works on those values, so night counts do not
depend on the host timezone or on DST transitions.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterator, Optional, Union

from tour_pricing.core.errors import InvalidDateRange

DateLike = Union[date, datetime, str]


def to_utc_date(value: Union[date, datetime]) -> date:
    """Calendar date of ``value`` in UTC; naive datetimes are read as UTC."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    return value


def parse_date(value: DateLike) -> date:
    """Parse an ISO date/datetime string (or pass a date through) to a UTC date."""
    if isinstance(value, (date, datetime)):
        return to_utc_date(value)
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateRange(f"Invalid date: {value!r}")
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return to_utc_date(datetime.fromisoformat(text))
    except ValueError:
        raise InvalidDateRange(f"Invalid date: {value!r}") from None


def nights(check_in: Optional[DateLike], check_out: Optional[DateLike]) -> int:
    """Number of nights between check-in and check-out.

    A missing date yields 0, which callers must read as "unknown stay
    length" rather than a free stay.
    """
    if check_in is None or check_out is None:
        return 0
    start = parse_date(check_in)
    end = parse_date(check_out)
    if end <= start:
        raise InvalidDateRange(
            f"Check-out {end.isoformat()} must be after check-in {start.isoformat()}"
        )
    return (end - start).days


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield each date in the half-open range [start, end)."""
    current = start
    while current < end:
        yield current
        current += timedelta(days=1)


@dataclass(frozen=True)
class DateRange:
    """Half-open range of calendar dates [start, end)."""
    start: date
    end: date

    def __post_init__(self):
        if self.end < self.start:
            raise InvalidDateRange(
                f"Range end {self.end.isoformat()} is before start {self.start.isoformat()}"
            )

    @classmethod
    def from_values(cls, start: DateLike, end: DateLike) -> "DateRange":
        return cls(parse_date(start), parse_date(end))

    @classmethod
    def stay(cls, check_in: DateLike, check_out: DateLike) -> "DateRange":
        """A stay of at least one night."""
        nights(check_in, check_out)
        return cls.from_values(check_in, check_out)

    @property
    def nights(self) -> int:
        return (self.end - self.start).days

    def days(self) -> Iterator[date]:
        return iter_days(self.start, self.end)

    def __contains__(self, day: date) -> bool:
        return self.start <= day < self.end

    def __len__(self) -> int:
        return self.nights
