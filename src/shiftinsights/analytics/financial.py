"""Financial reducer: revenue, labor cost, margin, growth and projection.

Revenue is a modeling assumption, not invoice data: every worked hour is
valued at the average employee wage times a markup (3x by default, see
``MarkupRevenuePolicy``). Labor cost uses each shift's own employee rate.
"""

from datetime import datetime
from typing import Optional, Sequence

from shiftinsights.analytics.base import MetricReducer, percent
from shiftinsights.analytics.record_index import IndexedShift, RecordIndex
from shiftinsights.analytics.timecalc import (
    add_months,
    days_between,
    days_in_month,
    is_within,
    month_range,
    month_start,
)
from shiftinsights.domain.models import DateRange, ShiftRecord
from shiftinsights.domain.stats import FinancialStats


class FinancialReducer(MetricReducer[FinancialStats]):
    """Computes FinancialStats for a period.

    The period is the given date range, or the calendar month containing
    ``now`` when no range is given. Canceled shifts never count.

    Example:
        >>> reducer = FinancialReducer()
        >>> stats = reducer.reduce(shifts, index, now)
        >>> stats.labor_cost, stats.profit_margin_percent
    """

    def reduce(
        self,
        shifts: Sequence[ShiftRecord],
        index: RecordIndex,
        now: datetime,
        date_range: Optional[DateRange] = None,
    ) -> FinancialStats:
        if date_range is None:
            scope = month_range(now)
            prior_scope: Optional[DateRange] = month_range(
                add_months(month_start(now), -1)
            )
        else:
            scope = date_range
            prior_scope = date_range.preceding()

        average_wage = self.average_hourly_wage(index)
        revenue_per_hour = self.config.revenue_policy.revenue_per_hour(average_wage)

        scoped = self._billable(shifts, index, scope)
        scoped_hours = sum(entry.hours for entry in scoped)
        labor_cost = sum(entry.cost for entry in scoped)
        total_revenue = scoped_hours * revenue_per_hour

        revenue_growth = 0.0
        if prior_scope is not None:
            prior_hours = sum(
                entry.hours for entry in self._billable(shifts, index, prior_scope)
            )
            prior_revenue = prior_hours * revenue_per_hour
            if prior_revenue > 0:
                revenue_growth = (total_revenue - prior_revenue) / prior_revenue * 100.0

        return FinancialStats(
            total_revenue=total_revenue,
            labor_cost=labor_cost,
            profit_margin_percent=percent(total_revenue - labor_cost, total_revenue),
            revenue_growth_percent=revenue_growth,
            average_shift_cost=labor_cost / len(scoped) if scoped else 0.0,
            cost_per_day=self.cost_per_day(labor_cost, scope, now, date_range is None),
            average_hourly_wage=average_wage,
            projected_monthly_earnings=self.project_monthly_earnings(
                shifts, index, now, revenue_per_hour
            ),
        )

    @staticmethod
    def cost_per_day(
        labor_cost: float,
        scope: DateRange,
        now: datetime,
        is_calendar_month: bool,
    ) -> float:
        """Labor cost per day of the scoped period.

        The calendar month counts all of its days, elapsed or not. A
        bounded range counts its whole days (at least 1); an unbounded
        range has no day count and yields 0.
        """
        if is_calendar_month:
            return labor_cost / days_in_month(now)
        if not scope.is_bounded:
            return 0.0
        return labor_cost / max(1, days_between(scope.end, scope.start))

    @staticmethod
    def average_hourly_wage(index: RecordIndex) -> float:
        """Mean rate over all employees; a missing rate counts as 0."""
        employees = index.employee_by_id.values()
        if not employees:
            return 0.0
        return sum(e.effective_rate for e in employees) / len(employees)

    def project_monthly_earnings(
        self,
        shifts: Sequence[ShiftRecord],
        index: RecordIndex,
        now: datetime,
        revenue_per_hour: float,
    ) -> float:
        """Project a month of revenue from the daily average so far.

        Uses every non-canceled shift that has already ended, averaged over
        the days since the earliest of them. Without such shifts, the
        current month's revenue is extrapolated over the full month.
        """
        worked = [
            index.resolve(shift)
            for shift in shifts
            if shift.end < now and not shift.is_canceled
        ]
        if worked:
            earliest = min(now, min(entry.shift.start for entry in worked))
            total_days = max(1, days_between(now, earliest))
            worked_revenue = sum(entry.hours for entry in worked) * revenue_per_hour
            return worked_revenue / total_days * self.config.projection_days

        month = month_range(now)
        month_hours = sum(entry.hours for entry in self._billable(shifts, index, month))
        month_revenue = month_hours * revenue_per_hour
        month_days = days_in_month(now)
        days_elapsed = min(max(1, days_between(now, month.start) + 1), month_days)
        return month_revenue / days_elapsed * month_days

    @staticmethod
    def _billable(
        shifts: Sequence[ShiftRecord],
        index: RecordIndex,
        scope: DateRange,
    ) -> list[IndexedShift]:
        return [
            index.resolve(shift)
            for shift in shifts
            if not shift.is_canceled and is_within(shift.start, scope)
        ]
