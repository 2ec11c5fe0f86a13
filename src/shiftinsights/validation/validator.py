"""Input checks for the analytics engine.

Two kinds of problems are told apart here:

- Caller contract violations (a "now" that is not a datetime, records of
  the wrong type, datetimes that cannot be compared with each other).
  ``check_arguments`` raises ``InvalidArgumentError`` for these, once per
  engine call.
- Data-quality problems in otherwise usable records (inverted shifts,
  dangling ids, negative or non-finite rates). The engine degrades
  gracefully on these; ``InputValidator.validate`` only reports them.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Sequence

from shiftinsights.domain.models import (
    DateRange,
    EmployeeRecord,
    InvalidArgumentError,
    LocationRecord,
    ShiftRecord,
)


class DataIssueType(Enum):
    """Types of data-quality issues."""

    INVERTED_SHIFT = "inverted_shift"
    UNKNOWN_EMPLOYEE = "unknown_employee"
    UNKNOWN_LOCATION = "unknown_location"
    NEGATIVE_RATE = "negative_rate"
    NON_FINITE_RATE = "non_finite_rate"
    DUPLICATE_SHIFT_ID = "duplicate_shift_id"
    DUPLICATE_EMPLOYEE_ID = "duplicate_employee_id"
    FUTURE_HIRE_DATE = "future_hire_date"


@dataclass
class DataIssue:
    """A single data-quality issue."""

    issue_type: DataIssueType
    message: str
    record_id: Optional[str] = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        parts = [f"[{self.issue_type.value}]"]
        if self.record_id:
            parts.append(f"{self.record_id}:")
        parts.append(self.message)
        return " ".join(parts)


@dataclass
class ValidationResult:
    """Result of auditing engine inputs."""

    issues: list[DataIssue] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not self.issues

    def add_issue(self, issue: DataIssue) -> None:
        self.issues.append(issue)

    def messages(self) -> tuple[str, ...]:
        return tuple(str(issue) for issue in self.issues)

    def count(self, issue_type: DataIssueType) -> int:
        return sum(1 for issue in self.issues if issue.issue_type is issue_type)


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.tzinfo.utcoffset(value) is not None


def check_arguments(
    shifts: Sequence[ShiftRecord],
    employees: Sequence[EmployeeRecord],
    locations: Sequence[LocationRecord],
    now: datetime,
    date_range: Optional[DateRange] = None,
) -> None:
    """Raise InvalidArgumentError when the call itself is unusable.

    Checks that ``now`` is a datetime, that the range and records have the
    expected types, that employee rates are numbers and hire dates are
    dates, and that every compared datetime is either timezone
    aware or naive like ``now``.
    """
    if not isinstance(now, datetime):
        raise InvalidArgumentError(
            f"now must be a datetime, got {type(now).__name__}"
        )
    if date_range is not None and not isinstance(date_range, DateRange):
        raise InvalidArgumentError(
            f"date_range must be a DateRange, got {type(date_range).__name__}"
        )

    for records, expected in (
        (shifts, ShiftRecord),
        (employees, EmployeeRecord),
        (locations, LocationRecord),
    ):
        for record in records:
            if not isinstance(record, expected):
                raise InvalidArgumentError(
                    f"Expected {expected.__name__}, got {type(record).__name__}"
                )

    for employee in employees:
        rate = employee.hourly_rate
        if rate is not None and (isinstance(rate, bool) or not isinstance(rate, (int, float))):
            raise InvalidArgumentError(
                f"Employee {employee.id} hourly_rate must be a number or None, "
                f"got {type(rate).__name__}"
            )
        if employee.hire_date is not None and not isinstance(employee.hire_date, date):
            raise InvalidArgumentError(
                f"Employee {employee.id} hire_date must be a date or None, "
                f"got {type(employee.hire_date).__name__}"
            )

    aware = _is_aware(now)
    instants: list[tuple[str, datetime]] = []
    if date_range is not None:
        instants.extend(
            ("date range", value)
            for value in (date_range.start, date_range.end)
            if value is not None
        )
    for shift in shifts:
        if not isinstance(shift.start, datetime) or not isinstance(shift.end, datetime):
            raise InvalidArgumentError(f"Shift {shift.id} has non-datetime start or end")
        instants.append((f"shift {shift.id}", shift.start))
        instants.append((f"shift {shift.id}", shift.end))

    for owner, value in instants:
        if _is_aware(value) != aware:
            raise InvalidArgumentError(
                f"Cannot compare {owner} ({'aware' if _is_aware(value) else 'naive'}) "
                f"with now ({'aware' if aware else 'naive'}); "
                "use timezone-aware or naive datetimes throughout"
            )


class InputValidator:
    """Audits engine inputs for data-quality issues.

    Never raises for bad data; every issue is returned in the result.
    Dangling employee/location ids are only reported when the
    corresponding list was supplied at all.

    Example:
        >>> result = InputValidator().validate(shifts, employees, locations, now)
        >>> for issue in result.issues:
        ...     print(issue)
    """

    def validate(
        self,
        shifts: Sequence[ShiftRecord],
        employees: Sequence[EmployeeRecord],
        locations: Sequence[LocationRecord],
        now: Optional[datetime] = None,
    ) -> ValidationResult:
        result = ValidationResult()

        employee_ids = self._validate_employees(employees, now, result)
        location_ids = {location.id for location in locations}
        self._validate_shifts(shifts, employee_ids, location_ids, result)

        return result

    def _validate_employees(
        self,
        employees: Sequence[EmployeeRecord],
        now: Optional[datetime],
        result: ValidationResult,
    ) -> set[str]:
        seen: set[str] = set()
        for employee in employees:
            if employee.id in seen:
                result.add_issue(
                    DataIssue(
                        issue_type=DataIssueType.DUPLICATE_EMPLOYEE_ID,
                        message="Duplicate employee id; the first record is used",
                        record_id=employee.id,
                    )
                )
            seen.add(employee.id)

            if employee.hourly_rate is not None and not math.isfinite(employee.hourly_rate):
                result.add_issue(
                    DataIssue(
                        issue_type=DataIssueType.NON_FINITE_RATE,
                        message=f"Non-finite hourly rate {employee.hourly_rate} treated as 0",
                        record_id=employee.id,
                    )
                )
            elif employee.hourly_rate is not None and employee.hourly_rate < 0:
                result.add_issue(
                    DataIssue(
                        issue_type=DataIssueType.NEGATIVE_RATE,
                        message=f"Negative hourly rate {employee.hourly_rate} treated as 0",
                        record_id=employee.id,
                        details={"hourly_rate": employee.hourly_rate},
                    )
                )

            if now is not None and employee.hire_date is not None:
                hire_date = employee.hire_date
                if isinstance(hire_date, datetime):
                    hire_date = hire_date.date()
                if hire_date > now.date():
                    result.add_issue(
                        DataIssue(
                            issue_type=DataIssueType.FUTURE_HIRE_DATE,
                            message=f"Hire date {hire_date.isoformat()} is in the future",
                            record_id=employee.id,
                        )
                    )
        return seen

    def _validate_shifts(
        self,
        shifts: Sequence[ShiftRecord],
        employee_ids: set[str],
        location_ids: set[str],
        result: ValidationResult,
    ) -> None:
        seen: set[str] = set()
        for shift in shifts:
            if shift.id in seen:
                result.add_issue(
                    DataIssue(
                        issue_type=DataIssueType.DUPLICATE_SHIFT_ID,
                        message="Duplicate shift id",
                        record_id=shift.id,
                    )
                )
            seen.add(shift.id)

            if shift.end <= shift.start:
                result.add_issue(
                    DataIssue(
                        issue_type=DataIssueType.INVERTED_SHIFT,
                        message="Shift ends at or before its start; counted as 0 hours",
                        record_id=shift.id,
                        details={
                            "start": shift.start.isoformat(),
                            "end": shift.end.isoformat(),
                        },
                    )
                )

            if (
                employee_ids
                and shift.employee_id is not None
                and shift.employee_id not in employee_ids
            ):
                result.add_issue(
                    DataIssue(
                        issue_type=DataIssueType.UNKNOWN_EMPLOYEE,
                        message=f"Unknown employee id {shift.employee_id}",
                        record_id=shift.id,
                    )
                )

            if (
                location_ids
                and shift.location_id is not None
                and shift.location_id not in location_ids
            ):
                result.add_issue(
                    DataIssue(
                        issue_type=DataIssueType.UNKNOWN_LOCATION,
                        message=f"Unknown location id {shift.location_id}",
                        record_id=shift.id,
                    )
                )
