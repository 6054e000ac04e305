"""Calendar date ranges used by the valuation timeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Iterator

from .errors import PreconditionViolation


class TimeRange(str, Enum):
    """Preset look-back windows offered by the history chart."""

    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    HALF_YEAR = "half_year"
    YEAR = "year"
    TWO_YEARS = "two_years"
    FIVE_YEARS = "five_years"

    @property
    def days(self) -> int:
        return _RANGE_DAYS[self]


_RANGE_DAYS = {
    TimeRange.WEEK: 7,
    TimeRange.MONTH: 30,
    TimeRange.QUARTER: 90,
    TimeRange.HALF_YEAR: 180,
    TimeRange.YEAR: 365,
    TimeRange.TWO_YEARS: 730,
    TimeRange.FIVE_YEARS: 1825,
}


@dataclass(frozen=True)
class DateRange:
    """Inclusive, ascending range of calendar days.

    Iterating yields fresh ``date`` objects each time, so a range can be
    walked any number of times.
    """

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise PreconditionViolation(
                f"start_date {self.start.isoformat()} is after end_date {self.end.isoformat()}"
            )

    def __iter__(self) -> Iterator[date]:
        for offset in range(len(self)):
            yield self.start + timedelta(days=offset)

    def __len__(self) -> int:
        return (self.end - self.start).days + 1

    def __contains__(self, item: object) -> bool:
        return isinstance(item, date) and self.start <= item <= self.end

    @classmethod
    def last(cls, days: int, *, end: date) -> "DateRange":
        """Return the ``days``-long window ending on ``end``."""

        if days <= 0:
            raise PreconditionViolation("days must be positive")
        return cls(end - timedelta(days=days - 1), end)

    @classmethod
    def for_time_range(cls, time_range: TimeRange, *, end: date) -> "DateRange":
        return cls.last(time_range.days, end=end)


__all__ = ["DateRange", "TimeRange"]
