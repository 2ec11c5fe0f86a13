"""Statistic bundles produced by the analytics engine.

All bundles are immutable value objects. Every field always carries a
well-defined value; sparse input yields the neutral defaults documented on
each reducer rather than missing fields or NaN.
"""

from dataclasses import asdict, dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from shiftinsights.domain.models import HistoryOrder

WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


def _to_plain(value: Any) -> Any:
    """Convert dataclass output to JSON-friendly values."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class FinancialStats:
    """Revenue, cost and projection figures for the scoped period.

    Attributes:
        total_revenue: Estimated revenue (markup model, not invoice data).
        labor_cost: Sum of hours x hourly rate over scoped shifts.
        profit_margin_percent: (revenue - labor) / revenue x 100, 0 without revenue.
        revenue_growth_percent: Change vs. the preceding period of equal length.
        average_shift_cost: Labor cost per scoped shift.
        cost_per_day: Labor cost spread over the days of the scoped period.
        average_hourly_wage: Mean hourly rate across employees.
        projected_monthly_earnings: Daily revenue average extrapolated to a month.
    """

    total_revenue: float = 0.0
    labor_cost: float = 0.0
    profit_margin_percent: float = 0.0
    revenue_growth_percent: float = 0.0
    average_shift_cost: float = 0.0
    cost_per_day: float = 0.0
    average_hourly_wage: float = 0.0
    projected_monthly_earnings: float = 0.0

    def to_dict(self) -> dict:
        return _to_plain(asdict(self))


@dataclass(frozen=True)
class ReliabilityStats:
    """Completion and no-show figures over past shifts."""

    past_count: int = 0
    completed_count: int = 0
    canceled_count: int = 0
    no_show_count: int = 0
    completion_rate_percent: float = 100.0
    no_show_rate_percent: float = 0.0

    def to_dict(self) -> dict:
        return _to_plain(asdict(self))


@dataclass(frozen=True)
class TimeOfDayCounts:
    """Shift starts per part of the day."""

    morning: int = 0
    afternoon: int = 0
    evening: int = 0
    night: int = 0

    @property
    def total(self) -> int:
        return self.morning + self.afternoon + self.evening + self.night


@dataclass(frozen=True)
class BusiestWindow:
    """The rolling window of hours with the most shift starts.

    Attributes:
        start_hour: First hour of the window (0-23).
        end_hour: Hour the window ends at, modulo 24.
        count: Shift starts within the window.
    """

    start_hour: int = 0
    end_hour: int = 0
    count: int = 0


@dataclass(frozen=True)
class DistributionStats:
    """When shifts happen and how long they last.

    Attributes:
        counts_by_weekday: Shift starts per weekday, Monday first.
        counts_by_time_of_day: Shift starts per day part.
        hour_counts: Shift starts per hour of day.
        busiest_window: Rolling window with the most starts.
        most_common_duration_hours: Mode of durations rounded to whole hours.
        average_shift_length_hours: Mean duration in hours.
        total_shift_count: Number of shifts considered.
    """

    counts_by_weekday: tuple[int, ...] = (0,) * 7
    counts_by_time_of_day: TimeOfDayCounts = field(default_factory=TimeOfDayCounts)
    hour_counts: tuple[int, ...] = (0,) * 24
    busiest_window: BusiestWindow = field(default_factory=BusiestWindow)
    most_common_duration_hours: int = 0
    average_shift_length_hours: float = 0.0
    total_shift_count: int = 0

    def to_dict(self) -> dict:
        return _to_plain(asdict(self))


@dataclass(frozen=True)
class EmployeeShiftSummary:
    """Per-employee totals for the top-employees breakdown."""

    employee_id: str
    name: str
    shift_count: int = 0
    total_hours: float = 0.0
    total_earnings: float = 0.0


@dataclass(frozen=True)
class UtilizationStats:
    """How much of the assigned workforce is used.

    Attributes:
        assigned_employee_count: Employees supplied to the engine.
        employees_with_at_least_one_shift: Assigned employees with a shift.
        utilization_percent: Share of assigned employees with a shift.
        average_tenure_months: Mean tenure over employees with a hire date.
        average_reliability_percent: Mean per-employee completion rate.
        top_performer_count: Employees at or above the performer threshold.
        top_employees: Employees with the most shifts, busiest first.
    """

    assigned_employee_count: int = 0
    employees_with_at_least_one_shift: int = 0
    utilization_percent: float = 0.0
    average_tenure_months: float = 0.0
    average_reliability_percent: float = 0.0
    top_performer_count: int = 0
    top_employees: tuple[EmployeeShiftSummary, ...] = ()

    def to_dict(self) -> dict:
        return _to_plain(asdict(self))


@dataclass(frozen=True)
class HistoricalPoint:
    """Totals for one calendar month.

    Attributes:
        period_label: Human-readable month, e.g. "Jan 2024".
        period_start: First instant of the month.
        period_end: First instant of the following month.
        total_hours: Hours of shifts starting in the month.
        total_earnings: Sum of hours x hourly rate.
        distinct_employee_count: Employees with a shift in the month.
    """

    period_label: str
    period_start: datetime
    period_end: datetime
    total_hours: float = 0.0
    total_earnings: float = 0.0
    distinct_employee_count: int = 0

    def to_dict(self) -> dict:
        return _to_plain(asdict(self))


@dataclass(frozen=True)
class OverviewStats:
    """Headline totals for a location.

    Attributes:
        total_shifts: Shifts in scope, whatever their status.
        completed_shifts: Past, non-canceled shifts.
        total_hours: Hours over every shift in scope.
        total_earnings: Labor cost of past, non-canceled shifts.
        total_shift_cost: Labor cost of every shift in scope.
        average_shift_cost: total_shift_cost per shift in scope.
        average_shifts_per_day: Shifts per day since the earliest start.
        average_hourly_rate: Mean hourly rate across employees.
    """

    total_shifts: int = 0
    completed_shifts: int = 0
    total_hours: float = 0.0
    total_earnings: float = 0.0
    total_shift_cost: float = 0.0
    average_shift_cost: float = 0.0
    average_shifts_per_day: float = 0.0
    average_hourly_rate: float = 0.0

    def to_dict(self) -> dict:
        return _to_plain(asdict(self))


@dataclass(frozen=True)
class InsightsBundle:
    """Composite result of one engine call."""

    generated_at: datetime
    location_id: Optional[str]
    financial: FinancialStats
    reliability: ReliabilityStats
    distribution: DistributionStats
    utilization: UtilizationStats
    overview: OverviewStats
    history: tuple[HistoricalPoint, ...] = ()
    history_order: HistoryOrder = HistoryOrder.NEWEST_FIRST
    warnings: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return _to_plain(asdict(self))
