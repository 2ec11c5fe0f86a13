"""Tests for domain records."""

from datetime import date, datetime, timedelta, timezone

import pytest

from shiftinsights.domain.models import (
    DateRange,
    EmployeeRecord,
    InvalidArgumentError,
    LocationRecord,
    ShiftRecord,
    ShiftStatus,
    parse_instant,
)


class TestShiftStatus:
    """Tests for status parsing."""

    def test_known_values(self):
        assert ShiftStatus.parse("completed") is ShiftStatus.COMPLETED
        assert ShiftStatus.parse("Scheduled") is ShiftStatus.SCHEDULED

    def test_british_spelling(self):
        assert ShiftStatus.parse("cancelled") is ShiftStatus.CANCELED

    def test_unknown_and_empty_are_unset(self):
        assert ShiftStatus.parse("pending") is None
        assert ShiftStatus.parse("") is None
        assert ShiftStatus.parse(None) is None


class TestParseInstant:
    """Tests for ISO-8601 parsing."""

    def test_trailing_z_is_utc(self):
        parsed = parse_instant("2024-01-01T09:00:00Z")
        assert parsed == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)

    def test_naive_string_stays_naive(self):
        assert parse_instant("2024-01-01T09:00:00").tzinfo is None

    def test_empty_is_none(self):
        assert parse_instant(None) is None
        assert parse_instant("") is None


class TestShiftRecord:
    """Tests for ShiftRecord."""

    def test_from_backend_row(self):
        shift = ShiftRecord.from_dict({
            "id": 42,
            "start_time": "2024-01-01T09:00:00Z",
            "end_time": "2024-01-01T17:00:00Z",
            "status": "completed",
            "location_id": 7,
            "user_id": "E1",
        })
        assert shift.id == "42"
        assert shift.location_id == "7"
        assert shift.employee_id == "E1"
        assert shift.is_completed
        assert not shift.is_canceled
        assert shift.end - shift.start == timedelta(hours=8)

    def test_from_attribute_names(self):
        shift = ShiftRecord.from_dict({
            "id": "S1",
            "start": "2024-01-01T09:00:00",
            "end": "2024-01-01T13:00:00",
        })
        assert shift.status is None
        assert shift.employee_id is None
        assert shift.location_id is None

    def test_missing_time_raises(self):
        with pytest.raises(ValueError):
            ShiftRecord.from_dict({"id": "S1", "start_time": "2024-01-01T09:00:00"})


class TestEmployeeRecord:
    """Tests for EmployeeRecord."""

    def test_from_camel_case_row(self):
        employee = EmployeeRecord.from_dict({
            "id": "E1",
            "name": "Alice",
            "hourlyRate": "18.50",
            "hireDate": "2023-03-01",
        })
        assert employee.hourly_rate == 18.5
        assert employee.hire_date == date(2023, 3, 1)

    def test_from_snake_case_row(self):
        employee = EmployeeRecord.from_dict({
            "id": "E1",
            "name": "Alice",
            "hourly_rate": 20,
            "hire_date": None,
        })
        assert employee.hourly_rate == 20.0
        assert employee.hire_date is None

    def test_effective_rate(self):
        assert EmployeeRecord("E1", "A").effective_rate == 0.0
        assert EmployeeRecord("E1", "A", hourly_rate=-3.0).effective_rate == 0.0
        assert EmployeeRecord("E1", "A", hourly_rate=12.0).effective_rate == 12.0

    def test_location_from_dict(self):
        location = LocationRecord.from_dict({"id": 3, "name": "Downtown"})
        assert location == LocationRecord(id="3", name="Downtown")


class TestDateRange:
    """Tests for DateRange."""

    def test_inverted_range_raises(self):
        with pytest.raises(InvalidArgumentError):
            DateRange(datetime(2024, 2, 1), datetime(2024, 1, 1))

    def test_mixed_awareness_raises(self):
        with pytest.raises(InvalidArgumentError):
            DateRange(datetime(2024, 1, 1, tzinfo=timezone.utc), datetime(2024, 2, 1))

    def test_empty_range_allowed(self):
        instant = datetime(2024, 1, 1)
        date_range = DateRange(instant, instant)
        assert not date_range.contains(instant)

    def test_half_open(self):
        date_range = DateRange(datetime(2024, 1, 1), datetime(2024, 1, 2))
        assert date_range.contains(datetime(2024, 1, 1))
        assert date_range.contains(datetime(2024, 1, 1, 23, 59))
        assert not date_range.contains(datetime(2024, 1, 2))

    def test_preceding(self):
        date_range = DateRange(datetime(2024, 1, 10), datetime(2024, 1, 17))
        prior = date_range.preceding()
        assert prior == DateRange(datetime(2024, 1, 3), datetime(2024, 1, 10))

    def test_unbounded_has_no_preceding(self):
        assert DateRange(start=datetime(2024, 1, 1)).preceding() is None
        assert DateRange().length is None


class TestHourlyRates:
    """Tests for rate parsing and effective rates."""

    @pytest.mark.parametrize("value", ["NaN", "nan", "inf", "-Infinity", float("nan")])
    def test_non_finite_rate_rejected_on_load(self, value):
        with pytest.raises(ValueError, match="finite"):
            EmployeeRecord.from_dict({"id": "E1", "name": "Alice", "hourlyRate": value})

    def test_non_finite_rate_counts_as_zero(self):
        assert EmployeeRecord("E1", "A", hourly_rate=float("nan")).effective_rate == 0.0
        assert EmployeeRecord("E1", "A", hourly_rate=float("inf")).effective_rate == 0.0
