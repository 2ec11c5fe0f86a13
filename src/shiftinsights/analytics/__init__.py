"""Analytics engine turning shift records into insight statistics."""

from shiftinsights.analytics.base import InsightsConfig, MetricReducer
from shiftinsights.analytics.distribution import DistributionReducer, busiest_window
from shiftinsights.analytics.engine import InsightsEngine, compute_location_insights
from shiftinsights.analytics.financial import FinancialReducer
from shiftinsights.analytics.history import HistoryReducer
from shiftinsights.analytics.overview import OverviewReducer
from shiftinsights.analytics.record_index import IndexedShift, RecordIndex
from shiftinsights.analytics.reliability import ReliabilityReducer
from shiftinsights.analytics.utilization import UtilizationReducer

__all__ = [
    # Engine
    "InsightsEngine",
    "InsightsConfig",
    "compute_location_insights",
    # Index
    "IndexedShift",
    "RecordIndex",
    # Reducers
    "MetricReducer",
    "DistributionReducer",
    "FinancialReducer",
    "HistoryReducer",
    "OverviewReducer",
    "ReliabilityReducer",
    "UtilizationReducer",
    "busiest_window",
]
