"""Domain models for the analytics engine.

This module contains the input records the engine consumes: shifts,
employees, locations, and the optional date range used to scope
current-period metrics and historical rollups. Records are read-only to
the engine; ownership stays with the caller.
"""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional, Union


class InvalidArgumentError(ValueError):
    """Raised when a caller passes arguments that violate the engine contract.

    Sparse or malformed record data never raises; only arguments the engine
    cannot interpret at all (a non-datetime "now", an inverted range,
    incomparable datetimes) do.
    """


class ShiftStatus(Enum):
    """Lifecycle status of a shift.

    A shift with no status is represented by ``None`` on the record; when it
    ends without being completed or canceled it counts as a no-show.
    """

    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELED = "canceled"

    @classmethod
    def parse(cls, value: Union[str, "ShiftStatus", None]) -> Optional["ShiftStatus"]:
        """Parse a backend status string.

        Unknown or empty values load as ``None`` (unset).
        """
        if value is None or isinstance(value, ShiftStatus):
            return value
        normalized = str(value).strip().lower()
        if normalized == "cancelled":
            normalized = "canceled"
        for status in cls:
            if status.value == normalized:
                return status
        return None


class HistoryOrder(Enum):
    """Ordering of historical rollup points."""

    NEWEST_FIRST = "newest_first"
    OLDEST_FIRST = "oldest_first"


def parse_instant(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as produced by the backend.

    A trailing ``Z`` is read as UTC. Calendar fields are kept exactly as
    written; no timezone conversion is applied.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def parse_calendar_date(value: Union[str, date, None]) -> Optional[Union[date, datetime]]:
    """Parse a hire date, keeping plain dates as ``date`` objects."""
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return value
    text = str(value).strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    return parse_instant(text)


def _parse_rate(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    rate = float(value)
    if not math.isfinite(rate):
        raise ValueError(f"Hourly rate must be a finite number, got {value!r}")
    return rate


def usable_rate(rate: Optional[float]) -> Optional[float]:
    """Rate as used in cost math: None stays None, bad values become 0."""
    if rate is None:
        return None
    if not math.isfinite(rate):
        return 0.0
    return max(rate, 0.0)


@dataclass(frozen=True)
class ShiftRecord:
    """A scheduled work interval.

    Attributes:
        id: Unique identifier of the shift.
        start: When the shift starts.
        end: When the shift ends. Values at or before ``start`` are
            treated as zero duration.
        status: Lifecycle status, or None when unset.
        location_id: Location the shift belongs to, if any.
        employee_id: Employee assigned to the shift, if any.
    """

    id: str
    start: datetime
    end: datetime
    status: Optional[ShiftStatus] = None
    location_id: Optional[str] = None
    employee_id: Optional[str] = None

    @property
    def is_canceled(self) -> bool:
        return self.status is ShiftStatus.CANCELED

    @property
    def is_completed(self) -> bool:
        return self.status is ShiftStatus.COMPLETED

    @classmethod
    def from_dict(cls, data: dict) -> "ShiftRecord":
        """Create a shift from a backend row.

        Accepts both the backend column names (``start_time``, ``end_time``,
        ``user_id``) and the attribute names of this class.
        """
        start = parse_instant(data.get("start_time", data.get("start")))
        end = parse_instant(data.get("end_time", data.get("end")))
        if start is None or end is None:
            raise ValueError(f"Shift {data.get('id')!r} is missing a start or end time")
        employee_id = data.get("user_id", data.get("employee_id"))
        location_id = data.get("location_id")
        return cls(
            id=str(data["id"]),
            start=start,
            end=end,
            status=ShiftStatus.parse(data.get("status")),
            location_id=str(location_id) if location_id is not None else None,
            employee_id=str(employee_id) if employee_id is not None else None,
        )


@dataclass(frozen=True)
class EmployeeRecord:
    """An employee who can be assigned to shifts.

    Attributes:
        id: Unique identifier of the employee.
        name: Display name.
        hourly_rate: Hourly wage, or None when not recorded.
        hire_date: Date the employee was hired, if known.
    """

    id: str
    name: str
    hourly_rate: Optional[float] = None
    hire_date: Optional[Union[date, datetime]] = None

    @property
    def effective_rate(self) -> float:
        """Hourly rate used for cost calculations.

        Missing, negative and non-finite rates all count as 0.
        """
        return usable_rate(self.hourly_rate) or 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "EmployeeRecord":
        rate = data.get("hourlyRate", data.get("hourly_rate"))
        hire_date = data.get("hireDate", data.get("hire_date"))
        return cls(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            hourly_rate=_parse_rate(rate),
            hire_date=parse_calendar_date(hire_date),
        )


@dataclass(frozen=True)
class LocationRecord:
    """A work location. Only used as a grouping key."""

    id: str
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "LocationRecord":
        return cls(id=str(data["id"]), name=str(data.get("name", "")))


@dataclass(frozen=True)
class DateRange:
    """Half-open time range ``[start, end)``.

    Either side may be None, meaning the range is unbounded on that side.

    Attributes:
        start: First instant included in the range.
        end: First instant after the range.
    """

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def __post_init__(self) -> None:
        if self.start is not None and self.end is not None:
            try:
                inverted = self.start > self.end
            except TypeError as exc:
                raise InvalidArgumentError(
                    "Date range mixes timezone-aware and naive datetimes"
                ) from exc
            if inverted:
                raise InvalidArgumentError(
                    f"Date range start {self.start.isoformat()} is after end "
                    f"{self.end.isoformat()}"
                )

    @property
    def is_bounded(self) -> bool:
        """True when both sides of the range are set."""
        return self.start is not None and self.end is not None

    @property
    def length(self) -> Optional[timedelta]:
        if not self.is_bounded:
            return None
        return self.end - self.start

    def contains(self, instant: datetime) -> bool:
        """Check if an instant falls within the range."""
        if self.start is not None and instant < self.start:
            return False
        if self.end is not None and instant >= self.end:
            return False
        return True

    def preceding(self) -> Optional["DateRange"]:
        """The range of equal length that ends where this one starts."""
        if not self.is_bounded:
            return None
        return DateRange(start=self.start - self.length, end=self.start)
