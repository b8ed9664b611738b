"""Analytics over streamed records."""

from .stats import StatisticsAggregator, StatsSnapshot

__all__ = ["StatisticsAggregator", "StatsSnapshot"]
