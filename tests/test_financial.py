"""Tests for the financial reducer."""

from datetime import datetime, timedelta

import pytest

from shiftinsights.analytics.base import InsightsConfig
from shiftinsights.analytics.financial import FinancialReducer
from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.domain.models import (
    DateRange,
    EmployeeRecord,
    ShiftRecord,
    ShiftStatus,
)

NOW = datetime(2024, 1, 15, 12, 0)


def make_shift(shift_id, start, hours=8, status=ShiftStatus.COMPLETED, employee_id="E1"):
    return ShiftRecord(
        id=shift_id,
        start=start,
        end=start + timedelta(hours=hours),
        status=status,
        location_id="L1",
        employee_id=employee_id,
    )


class TestFinancialReducer:
    """Tests for FinancialReducer."""

    @pytest.fixture
    def reducer(self):
        return FinancialReducer()

    @pytest.fixture
    def employees(self):
        return [EmployeeRecord("E1", "Alice", hourly_rate=20.0)]

    def reduce(self, reducer, shifts, employees, now=NOW, date_range=None):
        index = RecordIndex.build(shifts, employees, [])
        return reducer.reduce(shifts, index, now, date_range)

    def test_single_completed_shift(self, reducer, employees):
        """One 8h shift at $20 costs 160 and earns 3x in revenue."""
        shifts = [make_shift("S1", datetime(2024, 1, 1, 9, 0))]
        stats = self.reduce(reducer, shifts, employees)

        assert stats.labor_cost == pytest.approx(160.0)
        assert stats.total_revenue == pytest.approx(480.0)
        assert stats.profit_margin_percent == pytest.approx(200.0 / 3.0)
        assert stats.average_shift_cost == pytest.approx(160.0)
        assert stats.average_hourly_wage == pytest.approx(20.0)

    def test_no_shifts(self, reducer, employees):
        stats = self.reduce(reducer, [], employees)
        assert stats.total_revenue == 0.0
        assert stats.labor_cost == 0.0
        assert stats.profit_margin_percent == 0.0
        assert stats.revenue_growth_percent == 0.0
        assert stats.average_shift_cost == 0.0
        assert stats.projected_monthly_earnings == 0.0

    def test_canceled_shifts_excluded(self, reducer, employees):
        shifts = [
            make_shift("S1", datetime(2024, 1, 1, 9, 0)),
            make_shift("S2", datetime(2024, 1, 2, 9, 0), status=ShiftStatus.CANCELED),
        ]
        stats = self.reduce(reducer, shifts, employees)
        assert stats.labor_cost == pytest.approx(160.0)
        assert stats.average_shift_cost == pytest.approx(160.0)

    def test_shifts_outside_month_excluded(self, reducer, employees):
        shifts = [
            make_shift("S1", datetime(2024, 1, 1, 9, 0)),
            make_shift("S2", datetime(2024, 2, 1, 9, 0), status=ShiftStatus.SCHEDULED),
        ]
        stats = self.reduce(reducer, shifts, employees)
        assert stats.labor_cost == pytest.approx(160.0)

    def test_missing_rate_counts_as_zero_in_average_wage(self, reducer):
        employees = [
            EmployeeRecord("E1", "Alice", hourly_rate=20.0),
            EmployeeRecord("E2", "Bob"),
        ]
        stats = self.reduce(reducer, [], employees)
        assert stats.average_hourly_wage == pytest.approx(10.0)

    def test_zero_prior_revenue_gives_zero_growth(self, reducer, employees):
        shifts = [make_shift("S1", datetime(2024, 1, 1, 9, 0))]
        stats = self.reduce(reducer, shifts, employees)
        assert stats.revenue_growth_percent == 0.0

    def test_growth_against_previous_month(self, reducer, employees):
        shifts = [
            make_shift("S0", datetime(2023, 12, 10, 9, 0)),
            make_shift("S1", datetime(2024, 1, 1, 9, 0)),
            make_shift("S2", datetime(2024, 1, 2, 9, 0)),
        ]
        stats = self.reduce(reducer, shifts, employees)
        assert stats.revenue_growth_percent == pytest.approx(100.0)

    def test_growth_against_preceding_range(self, reducer, employees):
        shifts = [
            make_shift("S0", datetime(2024, 1, 1, 9, 0)),
            make_shift("S1", datetime(2024, 1, 10, 9, 0), hours=4),
        ]
        date_range = DateRange(datetime(2024, 1, 8), datetime(2024, 1, 15))
        stats = self.reduce(reducer, shifts, employees, date_range=date_range)

        assert stats.labor_cost == pytest.approx(80.0)
        assert stats.revenue_growth_percent == pytest.approx(-50.0)

    def test_unbounded_range_has_no_growth(self, reducer, employees):
        shifts = [
            make_shift("S0", datetime(2023, 12, 1, 9, 0)),
            make_shift("S1", datetime(2024, 1, 10, 9, 0)),
        ]
        date_range = DateRange(start=datetime(2024, 1, 1))
        stats = self.reduce(reducer, shifts, employees, date_range=date_range)
        assert stats.revenue_growth_percent == 0.0

    def test_projection_from_worked_shifts(self, reducer, employees):
        """Daily revenue since the first worked shift, times 30 days."""
        shifts = [make_shift("S1", datetime(2024, 1, 1, 9, 0))]
        stats = self.reduce(reducer, shifts, employees)
        # 480 revenue over 14 whole days
        assert stats.projected_monthly_earnings == pytest.approx(480.0 / 14 * 30)

    def test_projection_falls_back_to_current_month(self, reducer, employees):
        shifts = [
            make_shift("S1", datetime(2024, 1, 20, 9, 0), status=ShiftStatus.SCHEDULED),
        ]
        stats = self.reduce(reducer, shifts, employees)
        # 480 revenue over the 15 days elapsed, stretched to 31
        assert stats.projected_monthly_earnings == pytest.approx(480.0 / 15 * 31)

    def test_custom_markup(self, employees):
        reducer = FinancialReducer(InsightsConfig(markup_factor=2.0))
        shifts = [make_shift("S1", datetime(2024, 1, 1, 9, 0))]
        stats = self.reduce(reducer, shifts, employees)
        assert stats.total_revenue == pytest.approx(320.0)
        assert stats.profit_margin_percent == pytest.approx(50.0)

    def test_cost_per_day_spreads_month_cost(self, reducer, employees):
        shifts = [make_shift("S1", datetime(2024, 1, 1, 9, 0))]
        stats = self.reduce(reducer, shifts, employees)
        # January has 31 days, elapsed or not
        assert stats.cost_per_day == pytest.approx(160.0 / 31)

    def test_cost_per_day_over_range(self, reducer, employees):
        shifts = [make_shift("S1", datetime(2024, 1, 10, 9, 0))]
        date_range = DateRange(datetime(2024, 1, 8), datetime(2024, 1, 15))
        stats = self.reduce(reducer, shifts, employees, date_range=date_range)
        assert stats.cost_per_day == pytest.approx(160.0 / 7)

    def test_cost_per_day_unbounded_range(self, reducer, employees):
        shifts = [make_shift("S1", datetime(2024, 1, 10, 9, 0))]
        stats = self.reduce(
            reducer, shifts, employees, date_range=DateRange(start=datetime(2024, 1, 1))
        )
        assert stats.labor_cost == pytest.approx(160.0)
        assert stats.cost_per_day == 0.0

    def test_cost_per_day_short_range_counts_one_day(self, reducer, employees):
        shifts = [make_shift("S1", datetime(2024, 1, 10, 9, 0), hours=2)]
        date_range = DateRange(datetime(2024, 1, 10, 8), datetime(2024, 1, 10, 20))
        stats = self.reduce(reducer, shifts, employees, date_range=date_range)
        assert stats.cost_per_day == pytest.approx(40.0)
