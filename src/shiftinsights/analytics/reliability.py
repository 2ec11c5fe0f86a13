"""Reliability reducer: completion and no-show rates."""

from datetime import datetime
from typing import Optional, Sequence

from shiftinsights.analytics.base import MetricReducer, clamp_percent, percent
from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.domain.models import DateRange, ShiftRecord
from shiftinsights.domain.stats import ReliabilityStats


class ReliabilityReducer(MetricReducer[ReliabilityStats]):
    """Counts completed, canceled and no-show shifts.

    - Past shifts are those that ended before ``now``.
    - Canceled shifts are counted whether or not they are past, and are
      never no-shows.
    - A no-show is a past shift that is neither completed nor canceled.

    When a date range is given, only shifts starting in it are counted.
    """

    def reduce(
        self,
        shifts: Sequence[ShiftRecord],
        index: RecordIndex,
        now: datetime,
        date_range: Optional[DateRange] = None,
    ) -> ReliabilityStats:
        past = 0
        completed = 0
        canceled = 0
        for shift in shifts:
            if date_range is not None and not date_range.contains(shift.start):
                continue
            if shift.is_canceled:
                canceled += 1
            if shift.end < now:
                past += 1
                if shift.is_completed:
                    completed += 1

        no_show = max(0, past - completed - canceled)

        return ReliabilityStats(
            past_count=past,
            completed_count=completed,
            canceled_count=canceled,
            no_show_count=no_show,
            completion_rate_percent=clamp_percent(percent(completed, past, default=100.0)),
            no_show_rate_percent=clamp_percent(percent(no_show, past)),
        )
