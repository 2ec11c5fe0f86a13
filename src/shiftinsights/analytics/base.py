"""Shared configuration and interface for metric reducers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Optional, Sequence, TypeVar

from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.domain.models import DateRange, ShiftRecord
from shiftinsights.domain.policies import (
    DayPartPolicy,
    DefaultDayPartPolicy,
    MarkupRevenuePolicy,
    RevenuePolicy,
)

StatsT = TypeVar("StatsT")


@dataclass
class InsightsConfig:
    """Configuration for the analytics engine.

    Attributes:
        markup_factor: Revenue multiple of labor used by the default
            revenue policy.
        window_hours: Length of the rolling busiest-window in hours.
        history_months: Trailing calendar months in the historical rollup.
        projection_days: Days in a projected month.
        top_performer_threshold: Reliability percent at or above which an
            employee counts as a top performer.
        top_employee_limit: Number of employees in the top-employees list.
        audit_inputs: If True, run the input validator on every call and
            report data issues as warnings.
        revenue_policy: Policy deriving revenue per hour from wages. Built
            from markup_factor when not given.
        day_part_policy: Policy mapping start hours to day parts.
    """

    markup_factor: float = 3.0
    window_hours: int = 8
    history_months: int = 6
    projection_days: int = 30
    top_performer_threshold: float = 90.0
    top_employee_limit: int = 5
    audit_inputs: bool = True
    revenue_policy: Optional[RevenuePolicy] = None
    day_part_policy: DayPartPolicy = field(default_factory=DefaultDayPartPolicy)

    def __post_init__(self) -> None:
        if not 1 <= self.window_hours <= 24:
            raise ValueError("window_hours must be between 1 and 24")
        if self.history_months < 1:
            raise ValueError("history_months must be at least 1")
        if self.projection_days < 1:
            raise ValueError("projection_days must be at least 1")
        if self.top_employee_limit < 0:
            raise ValueError("top_employee_limit must not be negative")
        if self.revenue_policy is None:
            self.revenue_policy = MarkupRevenuePolicy(markup_factor=self.markup_factor)


class MetricReducer(ABC, Generic[StatsT]):
    """Folds a shift array into one statistic family.

    Reducers never filter by location; scoping the shift array is the
    caller's job, so the same reducer works per location, per employee
    or org-wide.
    """

    def __init__(self, config: Optional[InsightsConfig] = None):
        self.config = config or InsightsConfig()

    @abstractmethod
    def reduce(
        self,
        shifts: Sequence[ShiftRecord],
        index: RecordIndex,
        now: datetime,
        date_range: Optional[DateRange] = None,
    ) -> StatsT:
        """Compute the statistic bundle.

        Args:
            shifts: Shifts in scope.
            index: Lookups built over the same shifts.
            now: Reference instant.
            date_range: Optional range scoping the computation.
        """
        pass


def percent(part: float, whole: float, default: float = 0.0) -> float:
    """``part / whole x 100``, or ``default`` when ``whole`` is 0."""
    if whole <= 0:
        return default
    return part / whole * 100.0


def clamp_percent(value: float) -> float:
    return min(100.0, max(0.0, value))
