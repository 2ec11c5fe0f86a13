"""Distribution reducer: when shifts start and how long they last."""

from datetime import datetime
from typing import Optional, Sequence

from shiftinsights.analytics.base import MetricReducer
from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.analytics.timecalc import Granularity, bucket_key, round_half_up
from shiftinsights.domain.models import DateRange, ShiftRecord
from shiftinsights.domain.policies import DayPart
from shiftinsights.domain.stats import BusiestWindow, DistributionStats, TimeOfDayCounts

HOURS_PER_DAY = 24


def busiest_window(hour_counts: Sequence[int], window_hours: int = 8) -> BusiestWindow:
    """Find the rolling window of hours with the most shift starts.

    Every hour of the day is tried as a window start, with the window
    wrapping past midnight. Only a strictly larger sum replaces the current
    best, so ties go to the lowest start hour. With no starts at all the
    result is a zero-count window at hour 0.

    Args:
        hour_counts: Shift starts per hour, 24 entries.
        window_hours: Window length in hours.
    """
    best_start = 0
    best_count = 0
    for start in range(HOURS_PER_DAY):
        total = sum(
            hour_counts[(start + offset) % HOURS_PER_DAY]
            for offset in range(window_hours)
        )
        if total > best_count:
            best_count = total
            best_start = start
    return BusiestWindow(
        start_hour=best_start,
        end_hour=(best_start + window_hours) % HOURS_PER_DAY,
        count=best_count,
    )


def most_common_value(values: Sequence[int]) -> int:
    """Mode of the values; ties go to the value seen first. 0 when empty.

    The web dashboard walks its duration counts in ascending key order,
    so there a tie goes to the shortest duration instead. Both pick one of
    the tied modes; only which one differs.
    """
    counts: dict[int, int] = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1

    mode = 0
    highest = 0
    for value, count in counts.items():
        if count > highest:
            highest = count
            mode = value
    return mode


class DistributionReducer(MetricReducer[DistributionStats]):
    """Buckets shift starts by weekday, hour and part of day.

    All buckets are keyed on the start instant's own calendar fields.
    When a date range is given, only shifts starting in it are counted.
    """

    def reduce(
        self,
        shifts: Sequence[ShiftRecord],
        index: RecordIndex,
        now: datetime,
        date_range: Optional[DateRange] = None,
    ) -> DistributionStats:
        weekday_counts = [0] * 7
        hour_counts = [0] * HOURS_PER_DAY
        day_parts = {part: 0 for part in DayPart}
        rounded_durations = []
        total_hours = 0.0

        in_scope = [
            shift for shift in shifts
            if date_range is None or date_range.contains(shift.start)
        ]
        for shift in in_scope:
            hour = bucket_key(shift.start, Granularity.HOUR)
            weekday_counts[bucket_key(shift.start, Granularity.WEEKDAY)] += 1
            hour_counts[hour] += 1
            day_parts[self.config.day_part_policy.classify(hour)] += 1

            hours = index.resolve(shift).hours
            total_hours += hours
            rounded_durations.append(round_half_up(hours))

        return DistributionStats(
            counts_by_weekday=tuple(weekday_counts),
            counts_by_time_of_day=TimeOfDayCounts(
                morning=day_parts[DayPart.MORNING],
                afternoon=day_parts[DayPart.AFTERNOON],
                evening=day_parts[DayPart.EVENING],
                night=day_parts[DayPart.NIGHT],
            ),
            hour_counts=tuple(hour_counts),
            busiest_window=busiest_window(hour_counts, self.config.window_hours),
            most_common_duration_hours=most_common_value(rounded_durations),
            average_shift_length_hours=total_hours / len(in_scope) if in_scope else 0.0,
            total_shift_count=len(in_scope),
        )
