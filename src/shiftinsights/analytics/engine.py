"""Main analytics interface.

This module provides the InsightsEngine that scopes shifts to a location,
builds the shared record index and runs every metric reducer once to
assemble an InsightsBundle.
"""

import logging
from datetime import datetime
from typing import Iterable, Optional

from shiftinsights.analytics.base import InsightsConfig
from shiftinsights.analytics.distribution import DistributionReducer
from shiftinsights.analytics.financial import FinancialReducer
from shiftinsights.analytics.history import HistoryReducer
from shiftinsights.analytics.overview import OverviewReducer
from shiftinsights.analytics.record_index import RecordIndex
from shiftinsights.analytics.reliability import ReliabilityReducer
from shiftinsights.analytics.utilization import UtilizationReducer
from shiftinsights.domain.models import (
    DateRange,
    EmployeeRecord,
    HistoryOrder,
    InvalidArgumentError,
    LocationRecord,
    ShiftRecord,
)
from shiftinsights.domain.stats import InsightsBundle
from shiftinsights.validation.validator import InputValidator, check_arguments

logger = logging.getLogger(__name__)


class InsightsEngine:
    """High-level engine for location insights.

    The engine is stateless between calls: every call works from the
    arrays it is given, never mutates them and never reads the system
    clock. Identical inputs always give equal bundles.

    Example:
        >>> engine = InsightsEngine()
        >>> bundle = engine.compute_location_insights(
        ...     shifts, employees, locations,
        ...     location_id="loc-1",
        ...     now=datetime(2024, 3, 15, 12, 0),
        ... )
        >>> bundle.reliability.completion_rate_percent
    """

    def __init__(self, config: Optional[InsightsConfig] = None):
        """Initialize the engine and its reducers.

        Args:
            config: Engine configuration. Defaults are used when omitted.
        """
        self.config = config or InsightsConfig()
        self.validator = InputValidator()

        self.financial_reducer = FinancialReducer(self.config)
        self.reliability_reducer = ReliabilityReducer(self.config)
        self.distribution_reducer = DistributionReducer(self.config)
        self.utilization_reducer = UtilizationReducer(self.config)
        self.history_reducer = HistoryReducer(self.config)
        self.overview_reducer = OverviewReducer(self.config)

    def compute_location_insights(
        self,
        shifts: Iterable[ShiftRecord],
        employees: Iterable[EmployeeRecord],
        locations: Iterable[LocationRecord],
        location_id: Optional[str],
        now: datetime,
        date_range: Optional[DateRange] = None,
        history_order: HistoryOrder = HistoryOrder.NEWEST_FIRST,
    ) -> InsightsBundle:
        """Compute every statistic family for one location.

        Args:
            shifts: All shifts available to the caller.
            employees: Employees assigned to the scope being analyzed.
            locations: Known locations.
            location_id: Location to scope shifts to, or None for all shifts.
            now: Reference instant for "past", "current month" and tenure.
            date_range: Optional range scoping current-period metrics and
                the historical rollup. Defaults to the month of ``now``
                for financial figures.
            history_order: Ordering of the historical points.

        Returns:
            InsightsBundle with every field populated.

        Raises:
            InvalidArgumentError: If the arguments themselves are unusable
                (see ``check_arguments``). Bad record data never raises.
        """
        shift_list = tuple(shifts)
        employee_list = tuple(employees)
        location_list = tuple(locations)
        if not isinstance(history_order, HistoryOrder):
            raise InvalidArgumentError(
                f"history_order must be a HistoryOrder, got {history_order!r}"
            )
        check_arguments(shift_list, employee_list, location_list, now, date_range)

        scoped = self._filter_by_location(shift_list, location_id)
        logger.debug(
            "Computing insights for location %s: %d of %d shifts, %d employees",
            location_id or "<all>",
            len(scoped),
            len(shift_list),
            len(employee_list),
        )

        warnings: tuple[str, ...] = ()
        if self.config.audit_inputs:
            audit = self.validator.validate(scoped, employee_list, location_list, now)
            warnings = audit.messages()
            for message in warnings:
                logger.warning("Input data issue: %s", message)

        index = RecordIndex.build(scoped, employee_list, location_list)

        return InsightsBundle(
            generated_at=now,
            location_id=location_id,
            financial=self.financial_reducer.reduce(scoped, index, now, date_range),
            reliability=self.reliability_reducer.reduce(scoped, index, now, date_range),
            distribution=self.distribution_reducer.reduce(scoped, index, now, date_range),
            utilization=self.utilization_reducer.reduce(scoped, index, now, date_range),
            overview=self.overview_reducer.reduce(scoped, index, now, date_range),
            history=self.history_reducer.reduce(
                scoped, index, now, date_range, order=history_order
            ),
            history_order=history_order,
            warnings=warnings,
        )

    @staticmethod
    def _filter_by_location(
        shifts: tuple[ShiftRecord, ...],
        location_id: Optional[str],
    ) -> tuple[ShiftRecord, ...]:
        if location_id is None:
            return shifts
        return tuple(shift for shift in shifts if shift.location_id == location_id)


def compute_location_insights(
    shifts: Iterable[ShiftRecord],
    employees: Iterable[EmployeeRecord],
    locations: Iterable[LocationRecord],
    location_id: Optional[str],
    now: datetime,
    date_range: Optional[DateRange] = None,
    history_order: HistoryOrder = HistoryOrder.NEWEST_FIRST,
    config: Optional[InsightsConfig] = None,
) -> InsightsBundle:
    """Compute location insights with a one-off engine.

    See ``InsightsEngine.compute_location_insights`` for the arguments.
    """
    engine = InsightsEngine(config)
    return engine.compute_location_insights(
        shifts,
        employees,
        locations,
        location_id,
        now,
        date_range=date_range,
        history_order=history_order,
    )
