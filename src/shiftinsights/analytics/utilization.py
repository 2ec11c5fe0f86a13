"""Utilization reducer: workforce usage, tenure and per-employee reliability."""

from datetime import datetime
from typing import Optional, Sequence

from shiftinsights.analytics.base import MetricReducer, clamp_percent, percent
from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.analytics.timecalc import months_between
from shiftinsights.domain.models import DateRange, EmployeeRecord, ShiftRecord
from shiftinsights.domain.stats import EmployeeShiftSummary, UtilizationStats


class UtilizationReducer(MetricReducer[UtilizationStats]):
    """Computes UtilizationStats.

    The employees given to the index are the assigned workforce. Only
    shifts whose employee resolves to one of them feed the employee-keyed
    figures; unassigned shifts and unknown employee ids are skipped.
    Employees without a rate still count toward utilization and tenure.
    """

    def reduce(
        self,
        shifts: Sequence[ShiftRecord],
        index: RecordIndex,
        now: datetime,
        date_range: Optional[DateRange] = None,
    ) -> UtilizationStats:
        assigned = list(index.employee_by_id.values())

        summaries: dict[str, dict] = {}
        past_by_employee: dict[str, int] = {}
        completed_by_employee: dict[str, int] = {}
        for shift in shifts:
            if date_range is not None and not date_range.contains(shift.start):
                continue
            entry = index.resolve(shift)
            employee_id = entry.employee_id
            if employee_id is None:
                continue

            summary = summaries.setdefault(
                employee_id,
                {"shift_count": 0, "total_hours": 0.0, "total_earnings": 0.0},
            )
            summary["shift_count"] += 1
            summary["total_hours"] += entry.hours
            summary["total_earnings"] += entry.cost

            if shift.end < now:
                past_by_employee[employee_id] = past_by_employee.get(employee_id, 0) + 1
                if shift.is_completed:
                    completed_by_employee[employee_id] = (
                        completed_by_employee.get(employee_id, 0) + 1
                    )

        reliabilities = [
            clamp_percent(
                percent(
                    completed_by_employee.get(employee.id, 0),
                    past_by_employee.get(employee.id, 0),
                    default=100.0,
                )
            )
            for employee in assigned
        ]
        threshold = self.config.top_performer_threshold

        return UtilizationStats(
            assigned_employee_count=len(assigned),
            employees_with_at_least_one_shift=len(summaries),
            utilization_percent=percent(len(summaries), len(assigned)),
            average_tenure_months=self.average_tenure_months(assigned, now),
            average_reliability_percent=(
                sum(reliabilities) / len(reliabilities) if reliabilities else 0.0
            ),
            top_performer_count=sum(1 for r in reliabilities if r >= threshold),
            top_employees=self._top_employees(summaries, index),
        )

    @staticmethod
    def average_tenure_months(
        employees: Sequence[EmployeeRecord],
        now: datetime,
    ) -> float:
        """Mean whole months since hire over employees with a hire date.

        Employees without a hire date are left out entirely. A hire date
        after ``now`` counts as 0 months.
        """
        tenures = [
            max(0, months_between(now, employee.hire_date))
            for employee in employees
            if employee.hire_date is not None
        ]
        if not tenures:
            return 0.0
        return sum(tenures) / len(tenures)

    def _top_employees(
        self,
        summaries: dict[str, dict],
        index: RecordIndex,
    ) -> tuple[EmployeeShiftSummary, ...]:
        # sorted() is stable, so equal counts keep first-seen order
        ranked = sorted(
            summaries.items(),
            key=lambda item: item[1]["shift_count"],
            reverse=True,
        )
        return tuple(
            EmployeeShiftSummary(
                employee_id=employee_id,
                name=index.employee_by_id[employee_id].name,
                shift_count=summary["shift_count"],
                total_hours=summary["total_hours"],
                total_earnings=summary["total_earnings"],
            )
            for employee_id, summary in ranked[: self.config.top_employee_limit]
        )
