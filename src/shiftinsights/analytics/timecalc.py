"""Time arithmetic helpers.

Durations, costs and calendar-bucket membership. Calendar fields (hour,
weekday, month) are read directly off the datetimes as supplied: naive
values are interpreted as local wall-clock time and aware values in their
own offset. No timezone conversion happens here, so bucket boundaries
match what the caller's records say.
"""

import calendar
import math
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union

from shiftinsights.domain.models import DateRange, usable_rate

SECONDS_PER_HOUR = 3600.0


class Granularity(Enum):
    """Calendar bucket sizes used for grouping."""

    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    WEEKDAY = "weekday"
    HOUR = "hour"


def duration_hours(start: datetime, end: datetime) -> float:
    """Hours between two instants, never negative."""
    if end <= start:
        return 0.0
    return (end - start).total_seconds() / SECONDS_PER_HOUR


def cost(start: datetime, end: datetime, hourly_rate: Optional[float]) -> float:
    """Labor cost of an interval at an hourly rate.

    A missing rate costs nothing; negative and non-finite rates count as 0.
    """
    rate = usable_rate(hourly_rate)
    if rate is None:
        return 0.0
    return duration_hours(start, end) * rate


def is_within(instant: datetime, date_range: Optional[DateRange]) -> bool:
    """Check if an instant falls in ``[start, end)``.

    A None range, or a None side of the range, is unbounded.
    """
    if date_range is None:
        return True
    return date_range.contains(instant)


def bucket_key(instant: datetime, granularity: Granularity) -> Union[str, int]:
    """Stable sortable grouping key for an instant.

    Returns:
        "YYYY-MM" for months, "YYYY-Www" for ISO weeks, "YYYY-MM-DD" for
        days, 0-6 (Monday = 0) for weekdays and 0-23 for hours.
    """
    if granularity is Granularity.MONTH:
        return f"{instant.year:04d}-{instant.month:02d}"
    if granularity is Granularity.WEEK:
        iso_year, iso_week, _ = instant.isocalendar()
        return f"{iso_year:04d}-W{iso_week:02d}"
    if granularity is Granularity.DAY:
        return f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"
    if granularity is Granularity.WEEKDAY:
        return instant.weekday()
    if granularity is Granularity.HOUR:
        return instant.hour
    raise ValueError(f"Unsupported granularity: {granularity}")


def month_start(instant: datetime) -> datetime:
    """First instant of the instant's calendar month (tzinfo kept)."""
    return instant.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def add_months(instant: datetime, months: int) -> datetime:
    """Shift an instant by whole calendar months.

    The day of month is clamped to the length of the target month.
    """
    month_index = instant.year * 12 + (instant.month - 1) + months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(instant.day, calendar.monthrange(year, month)[1])
    return instant.replace(year=year, month=month, day=day)


def month_range(instant: datetime) -> DateRange:
    """The calendar month containing an instant as ``[start, next start)``."""
    start = month_start(instant)
    return DateRange(start=start, end=add_months(start, 1))


def days_in_month(instant: datetime) -> int:
    return calendar.monthrange(instant.year, instant.month)[1]


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days between two instants, truncated toward zero."""
    seconds = (later - earlier).total_seconds()
    days = int(abs(seconds) // 86400)
    return days if seconds >= 0 else -days


def _calendar_fields(value: Union[date, datetime]) -> tuple:
    if isinstance(value, datetime):
        return (value.day, value.hour, value.minute, value.second, value.microsecond)
    return (value.day, 0, 0, 0, 0)


def months_between(later: Union[date, datetime], earlier: Union[date, datetime]) -> int:
    """Whole calendar months between two points in time.

    A month only counts once the same day and time of the following month
    is reached, so Jan 31 -> Feb 28 is 0 months. Plain dates are compared
    at midnight.
    """
    if isinstance(later, datetime) and not isinstance(earlier, datetime):
        later_fields = (later.day, 0, 0, 0, 0)
    else:
        later_fields = _calendar_fields(later)
    earlier_fields = _calendar_fields(earlier)

    months = (later.year - earlier.year) * 12 + (later.month - earlier.month)
    if months > 0 and later_fields < earlier_fields:
        months -= 1
    elif months < 0 and later_fields > earlier_fields:
        months += 1
    return months


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding toward +inf."""
    return math.floor(value + 0.5)
