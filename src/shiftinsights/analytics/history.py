"""Historical rollup reducer: per-month hours, earnings and headcount."""

from datetime import datetime
from typing import Optional, Sequence

from shiftinsights.analytics.base import MetricReducer
from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.analytics.timecalc import (
    Granularity,
    add_months,
    bucket_key,
    month_start,
)
from shiftinsights.domain.models import DateRange, HistoryOrder, ShiftRecord
from shiftinsights.domain.stats import HistoricalPoint

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def period_label(instant: datetime) -> str:
    """Month label such as "Jan 2024" (independent of locale)."""
    return f"{MONTH_ABBREVIATIONS[instant.month - 1]} {instant.year}"


class HistoryReducer(MetricReducer[tuple[HistoricalPoint, ...]]):
    """Rolls shifts up into trailing calendar months.

    Produces one point per month for the configured number of months,
    counting the current (partial) month as month 0. A shift belongs to
    the calendar month read off its own start (year and month in the
    start's own offset, as ``bucket_key`` does), never to a month
    boundary converted to the offset of ``now``. Canceled shifts are
    included, as in the monthly financial report. When a date range is
    given, shifts starting outside it are left out of every month.
    """

    def reduce(
        self,
        shifts: Sequence[ShiftRecord],
        index: RecordIndex,
        now: datetime,
        date_range: Optional[DateRange] = None,
        order: HistoryOrder = HistoryOrder.NEWEST_FIRST,
    ) -> tuple[HistoricalPoint, ...]:
        current = month_start(now)
        periods = [
            DateRange(start=add_months(current, -offset), end=add_months(current, 1 - offset))
            for offset in range(self.config.history_months)
        ]

        hours = [0.0] * len(periods)
        earnings = [0.0] * len(periods)
        employees: list[set[str]] = [set() for _ in periods]

        slot_by_month = {
            bucket_key(period.start, Granularity.MONTH): slot
            for slot, period in enumerate(periods)
        }
        for shift in shifts:
            slot = slot_by_month.get(bucket_key(shift.start, Granularity.MONTH))
            if slot is None:
                continue
            if date_range is not None and not date_range.contains(shift.start):
                continue
            entry = index.resolve(shift)
            hours[slot] += entry.hours
            earnings[slot] += entry.cost
            if entry.employee_id is not None:
                employees[slot].add(entry.employee_id)

        points = [
            HistoricalPoint(
                period_label=period_label(period.start),
                period_start=period.start,
                period_end=period.end,
                total_hours=hours[i],
                total_earnings=earnings[i],
                distinct_employee_count=len(employees[i]),
            )
            for i, period in enumerate(periods)
        ]
        if order is HistoryOrder.OLDEST_FIRST:
            points.reverse()
        return tuple(points)
