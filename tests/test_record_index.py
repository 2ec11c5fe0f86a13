"""Tests for the shared record index."""

from datetime import datetime, timedelta

import pytest

from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.domain.models import EmployeeRecord, LocationRecord, ShiftRecord


def make_shift(shift_id, employee_id=None, location_id="L1", hours=8):
    start = datetime(2024, 1, 2, 9, 0)
    return ShiftRecord(
        id=shift_id,
        start=start,
        end=start + timedelta(hours=hours),
        location_id=location_id,
        employee_id=employee_id,
    )


class TestRecordIndex:
    """Tests for RecordIndex."""

    @pytest.fixture
    def employees(self):
        return [
            EmployeeRecord("E1", "Alice", hourly_rate=20.0),
            EmployeeRecord("E2", "Bob"),
        ]

    @pytest.fixture
    def locations(self):
        return [LocationRecord("L1", "Downtown")]

    def test_resolves_references(self, employees, locations):
        shift = make_shift("S1", employee_id="E1")
        index = RecordIndex.build([shift], employees, locations)

        entry = index.resolve(shift)
        assert entry.employee.name == "Alice"
        assert entry.location.name == "Downtown"
        assert entry.hourly_rate == 20.0
        assert entry.hours == 8.0
        assert entry.cost == 160.0

    def test_missing_references_resolve_to_none(self, employees, locations):
        shift = make_shift("S1", employee_id="E404", location_id="L404")
        index = RecordIndex.build([shift], employees, locations)

        entry = index.resolve(shift)
        assert entry.employee is None
        assert entry.employee_id is None
        assert entry.location is None
        assert entry.cost == 0.0

    def test_employee_without_rate_costs_nothing(self, employees, locations):
        shift = make_shift("S1", employee_id="E2")
        entry = RecordIndex.build([shift], employees, locations).resolve(shift)
        assert entry.hourly_rate is None
        assert entry.cost == 0.0
        assert entry.hours == 8.0

    def test_duplicate_employee_keeps_first(self, locations):
        employees = [
            EmployeeRecord("E1", "First", hourly_rate=10.0),
            EmployeeRecord("E1", "Second", hourly_rate=99.0),
        ]
        index = RecordIndex.build([], employees, locations)
        assert index.employee("E1").name == "First"
        assert len(index.employee_by_id) == 1

    def test_unseen_shift_resolved_on_the_fly(self, employees, locations):
        index = RecordIndex.build([], employees, locations)
        shift = make_shift("S9", employee_id="E1", hours=4)
        assert index.resolve(shift).cost == 80.0

    def test_reused_id_resolves_new_record(self, employees, locations):
        original = make_shift("S1", employee_id="E1", hours=8)
        index = RecordIndex.build([original], employees, locations)

        other = make_shift("S1", employee_id="E1", hours=2)
        assert index.resolve(other).hours == 2.0
        assert index.resolve(original).hours == 8.0

    def test_len_counts_distinct_shift_ids(self, employees, locations):
        shifts = [make_shift("S1"), make_shift("S2"), make_shift("S1")]
        assert len(RecordIndex.build(shifts, employees, locations)) == 2

    def test_none_lookups(self, employees, locations):
        index = RecordIndex.build([], employees, locations)
        assert index.employee(None) is None
        assert index.location(None) is None

    def test_non_finite_rate_costs_nothing(self, locations):
        employees = [EmployeeRecord("E1", "Alice", hourly_rate=float("nan"))]
        shift = make_shift("S1", employee_id="E1")
        entry = RecordIndex.build([shift], employees, locations).resolve(shift)
        assert entry.cost == 0.0
        assert entry.hours == 8.0
