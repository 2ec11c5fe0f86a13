"""Lookup structures shared by the metric reducers.

The index is built once per engine call in a single pass over the input
arrays, so reducers resolve a shift's employee, location and rate with a
dict lookup instead of scanning the employee list for every shift.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from shiftinsights.analytics.timecalc import duration_hours
from shiftinsights.domain.models import (
    EmployeeRecord,
    LocationRecord,
    ShiftRecord,
    usable_rate,
)


@dataclass(frozen=True)
class IndexedShift:
    """A shift with its references resolved.

    Attributes:
        shift: The original record.
        employee: Assigned employee, or None when unassigned or unknown.
        location: Location, or None when missing or unknown.
        hourly_rate: Rate snapshot taken when the index was built (None
            when there is no employee or the employee has no rate).
        hours: Duration in hours (0 for inverted shifts).
    """

    shift: ShiftRecord
    employee: Optional[EmployeeRecord]
    location: Optional[LocationRecord]
    hourly_rate: Optional[float]
    hours: float

    @property
    def cost(self) -> float:
        """Hours x rate, 0 without a usable rate."""
        rate = usable_rate(self.hourly_rate)
        if rate is None:
            return 0.0
        return self.hours * rate

    @property
    def employee_id(self) -> Optional[str]:
        """Id of the resolved employee (None when it did not resolve)."""
        return self.employee.id if self.employee is not None else None


class RecordIndex:
    """Id-keyed lookups over shifts, employees and locations.

    Example:
        >>> index = RecordIndex.build(shifts, employees, locations)
        >>> entry = index.resolve(shifts[0])
        >>> entry.employee, entry.hours, entry.cost
    """

    def __init__(
        self,
        employee_by_id: dict[str, EmployeeRecord],
        location_by_id: dict[str, LocationRecord],
        entries: dict[str, IndexedShift],
    ):
        self.employee_by_id = employee_by_id
        self.location_by_id = location_by_id
        self._entries = entries

    @classmethod
    def build(
        cls,
        shifts: Iterable[ShiftRecord],
        employees: Iterable[EmployeeRecord],
        locations: Iterable[LocationRecord],
    ) -> "RecordIndex":
        """Build the index in one pass over each input.

        Duplicate ids keep the first record seen. Missing references
        resolve to None.
        """
        employee_by_id: dict[str, EmployeeRecord] = {}
        for employee in employees:
            employee_by_id.setdefault(employee.id, employee)

        location_by_id: dict[str, LocationRecord] = {}
        for location in locations:
            location_by_id.setdefault(location.id, location)

        index = cls(employee_by_id, location_by_id, {})
        for shift in shifts:
            if shift.id not in index._entries:
                index._entries[shift.id] = index._resolve(shift)
        return index

    def __len__(self) -> int:
        return len(self._entries)

    def employee(self, employee_id: Optional[str]) -> Optional[EmployeeRecord]:
        if employee_id is None:
            return None
        return self.employee_by_id.get(employee_id)

    def location(self, location_id: Optional[str]) -> Optional[LocationRecord]:
        if location_id is None:
            return None
        return self.location_by_id.get(location_id)

    def resolve(self, shift: ShiftRecord) -> IndexedShift:
        """Get the resolved entry for a shift.

        Shifts not seen at build time (or a different record reusing a
        known id) are resolved on the fly.
        """
        entry = self._entries.get(shift.id)
        if entry is not None and entry.shift == shift:
            return entry
        return self._resolve(shift)

    def _resolve(self, shift: ShiftRecord) -> IndexedShift:
        employee = self.employee(shift.employee_id)
        return IndexedShift(
            shift=shift,
            employee=employee,
            location=self.location(shift.location_id),
            hourly_rate=employee.hourly_rate if employee is not None else None,
            hours=duration_hours(shift.start, shift.end),
        )
