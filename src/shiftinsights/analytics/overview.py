"""Overview reducer: headline totals for a location."""

from datetime import datetime, timedelta
from typing import Optional, Sequence

from shiftinsights.analytics.base import MetricReducer
from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.analytics.timecalc import days_between
from shiftinsights.domain.models import DateRange, ShiftRecord
from shiftinsights.domain.stats import OverviewStats

# Window used for shifts-per-day when there are no shifts to date it from
DEFAULT_WINDOW_DAYS = 30


class OverviewReducer(MetricReducer[OverviewStats]):
    """Computes OverviewStats.

    - Completed shifts and earnings count shifts that ended before ``now``
      and were not canceled.
    - Total hours and total shift cost cover every shift, scheduled or
      canceled included.
    - Shifts per day averages over the days since the earliest shift
      start (at least 1).
    """

    def reduce(
        self,
        shifts: Sequence[ShiftRecord],
        index: RecordIndex,
        now: datetime,
        date_range: Optional[DateRange] = None,
    ) -> OverviewStats:
        in_scope = [
            shift for shift in shifts
            if date_range is None or date_range.contains(shift.start)
        ]

        completed = 0
        total_hours = 0.0
        total_earnings = 0.0
        total_shift_cost = 0.0
        for shift in in_scope:
            entry = index.resolve(shift)
            total_hours += entry.hours
            total_shift_cost += entry.cost
            if shift.end < now and not shift.is_canceled:
                completed += 1
                total_earnings += entry.cost

        if in_scope:
            first_start = min(shift.start for shift in in_scope)
        else:
            first_start = now - timedelta(days=DEFAULT_WINDOW_DAYS)
        days = max(1, days_between(now, first_start))

        employees = index.employee_by_id.values()
        average_rate = (
            sum(e.effective_rate for e in employees) / len(employees) if employees else 0.0
        )

        return OverviewStats(
            total_shifts=len(in_scope),
            completed_shifts=completed,
            total_hours=total_hours,
            total_earnings=total_earnings,
            total_shift_cost=total_shift_cost,
            average_shift_cost=total_shift_cost / len(in_scope) if in_scope else 0.0,
            average_shifts_per_day=len(in_scope) / days,
            average_hourly_rate=average_rate,
        )
