"""Domain models, statistic bundles and analytics policies."""

from shiftinsights.domain.models import (
    DateRange,
    EmployeeRecord,
    HistoryOrder,
    InvalidArgumentError,
    LocationRecord,
    ShiftRecord,
    ShiftStatus,
)
from shiftinsights.domain.policies import (
    DayPart,
    DayPartPolicy,
    DefaultDayPartPolicy,
    MarkupRevenuePolicy,
    RevenuePolicy,
)
from shiftinsights.domain.stats import (
    BusiestWindow,
    DistributionStats,
    EmployeeShiftSummary,
    FinancialStats,
    HistoricalPoint,
    InsightsBundle,
    OverviewStats,
    ReliabilityStats,
    TimeOfDayCounts,
    UtilizationStats,
)

__all__ = [
    # Records
    "DateRange",
    "EmployeeRecord",
    "HistoryOrder",
    "InvalidArgumentError",
    "LocationRecord",
    "ShiftRecord",
    "ShiftStatus",
    # Statistics
    "BusiestWindow",
    "DistributionStats",
    "EmployeeShiftSummary",
    "FinancialStats",
    "HistoricalPoint",
    "InsightsBundle",
    "OverviewStats",
    "ReliabilityStats",
    "TimeOfDayCounts",
    "UtilizationStats",
    # Policies
    "DayPart",
    "DayPartPolicy",
    "DefaultDayPartPolicy",
    "MarkupRevenuePolicy",
    "RevenuePolicy",
]
