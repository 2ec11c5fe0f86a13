"""Tests for the utilization reducer."""

from datetime import date, datetime, timedelta

import pytest

from shiftinsights.analytics.base import InsightsConfig
from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.analytics.utilization import UtilizationReducer
from shiftinsights.domain.models import (
    DateRange,
    EmployeeRecord,
    ShiftRecord,
    ShiftStatus,
)

NOW = datetime(2024, 7, 15, 12, 0)


def make_shift(shift_id, employee_id, start, status=ShiftStatus.COMPLETED, hours=8):
    return ShiftRecord(
        id=shift_id,
        start=start,
        end=start + timedelta(hours=hours),
        status=status,
        employee_id=employee_id,
    )


class TestUtilizationReducer:
    """Tests for UtilizationReducer."""

    @pytest.fixture
    def reducer(self):
        return UtilizationReducer()

    @pytest.fixture
    def employees(self):
        return [
            EmployeeRecord("E1", "Alice", hourly_rate=20.0, hire_date=date(2024, 1, 15)),
            EmployeeRecord("E2", "Bob", hourly_rate=15.0, hire_date=date(2023, 7, 15)),
            EmployeeRecord("E3", "Carol"),
            EmployeeRecord("E4", "Dan", hourly_rate=18.0),
        ]

    def reduce(self, reducer, shifts, employees, date_range=None):
        index = RecordIndex.build(shifts, employees, [])
        return reducer.reduce(shifts, index, NOW, date_range)

    def test_no_employees(self, reducer):
        stats = self.reduce(reducer, [], [])
        assert stats.assigned_employee_count == 0
        assert stats.utilization_percent == 0.0
        assert stats.average_tenure_months == 0.0
        assert stats.average_reliability_percent == 0.0
        assert stats.top_performer_count == 0
        assert stats.top_employees == ()

    def test_no_shifts(self, reducer, employees):
        stats = self.reduce(reducer, [], employees)
        assert stats.assigned_employee_count == 4
        assert stats.employees_with_at_least_one_shift == 0
        assert stats.utilization_percent == 0.0
        # Nobody has a past shift, so everyone is fully reliable
        assert stats.average_reliability_percent == 100.0
        assert stats.top_performer_count == 4

    def test_utilization_counts_employees_with_shifts(self, reducer, employees):
        shifts = [
            make_shift("S1", "E1", datetime(2024, 7, 1, 9)),
            make_shift("S2", "E1", datetime(2024, 7, 2, 9)),
            make_shift("S3", "E3", datetime(2024, 7, 3, 9)),
        ]
        stats = self.reduce(reducer, shifts, employees)
        assert stats.employees_with_at_least_one_shift == 2
        assert stats.utilization_percent == pytest.approx(50.0)

    def test_unknown_and_unassigned_shifts_ignored(self, reducer, employees):
        shifts = [
            make_shift("S1", "E999", datetime(2024, 7, 1, 9)),
            make_shift("S2", None, datetime(2024, 7, 2, 9)),
        ]
        stats = self.reduce(reducer, shifts, employees)
        assert stats.employees_with_at_least_one_shift == 0
        assert stats.utilization_percent == 0.0

    def test_utilization_never_exceeds_hundred(self, reducer, employees):
        shifts = [
            make_shift(f"S{i}", employee.id, datetime(2024, 7, 1 + i, 9))
            for i, employee in enumerate(employees)
        ]
        shifts.append(make_shift("SX", "E999", datetime(2024, 7, 9, 9)))
        stats = self.reduce(reducer, shifts, employees)
        assert stats.utilization_percent == pytest.approx(100.0)

    def test_average_tenure_skips_missing_hire_dates(self, reducer, employees):
        # E1: 6 months, E2: 12 months
        stats = self.reduce(reducer, [], employees)
        assert stats.average_tenure_months == pytest.approx(9.0)

    def test_future_hire_date_counts_as_zero(self):
        employees = [
            EmployeeRecord("E1", "Alice", hire_date=date(2024, 1, 15)),
            EmployeeRecord("E2", "Bob", hire_date=date(2025, 1, 1)),
        ]
        assert UtilizationReducer.average_tenure_months(employees, NOW) == pytest.approx(3.0)

    def test_reliability_and_top_performers(self, reducer, employees):
        shifts = [
            make_shift("S1", "E1", datetime(2024, 7, 1, 9)),
            make_shift("S2", "E1", datetime(2024, 7, 2, 9)),
            make_shift("S3", "E2", datetime(2024, 7, 3, 9)),
            make_shift("S4", "E2", datetime(2024, 7, 4, 9), status=None),
        ]
        stats = self.reduce(reducer, shifts, employees)
        # E1 100, E2 50, E3 and E4 default to 100
        assert stats.average_reliability_percent == pytest.approx(87.5)
        assert stats.top_performer_count == 3

    def test_custom_performer_threshold(self, employees):
        reducer = UtilizationReducer(InsightsConfig(top_performer_threshold=40.0))
        shifts = [
            make_shift("S1", "E2", datetime(2024, 7, 3, 9)),
            make_shift("S2", "E2", datetime(2024, 7, 4, 9), status=None),
        ]
        stats = self.reduce(reducer, shifts, employees)
        assert stats.top_performer_count == 4

    def test_top_employees_ranked_by_shift_count(self, reducer, employees):
        shifts = [
            make_shift("S1", "E2", datetime(2024, 7, 1, 9)),
            make_shift("S2", "E1", datetime(2024, 7, 2, 9)),
            make_shift("S3", "E1", datetime(2024, 7, 3, 9), hours=4),
            make_shift("S4", "E4", datetime(2024, 7, 4, 9)),
        ]
        top = self.reduce(reducer, shifts, employees).top_employees

        assert [summary.employee_id for summary in top] == ["E1", "E2", "E4"]
        assert top[0].name == "Alice"
        assert top[0].shift_count == 2
        assert top[0].total_hours == pytest.approx(12.0)
        assert top[0].total_earnings == pytest.approx(240.0)

    def test_top_employee_limit(self, employees):
        reducer = UtilizationReducer(InsightsConfig(top_employee_limit=1))
        shifts = [
            make_shift("S1", "E1", datetime(2024, 7, 1, 9)),
            make_shift("S2", "E2", datetime(2024, 7, 2, 9)),
        ]
        top = self.reduce(reducer, shifts, employees).top_employees
        assert len(top) == 1
        assert top[0].employee_id == "E1"

    def test_date_range_filters(self, reducer, employees):
        shifts = [
            make_shift("S1", "E1", datetime(2024, 6, 1, 9)),
            make_shift("S2", "E2", datetime(2024, 7, 2, 9)),
        ]
        stats = self.reduce(
            reducer, shifts, employees, DateRange(start=datetime(2024, 7, 1))
        )
        assert stats.employees_with_at_least_one_shift == 1
