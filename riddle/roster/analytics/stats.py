"""Incremental statistics over streamed records.

The aggregator folds records into per-value counters and keeps running
call/latency totals. Records themselves are never retained, so it is safe
to feed it an unbounded stream of pages.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..core.exceptions import PreconditionError
from ..models import Record


@dataclass(frozen=True)
class StatsSnapshot:
    """Point-in-time view of the aggregator.

    Attributes:
        total_calls: Number of fetches recorded
        total_latency_ms: Cumulative fetch latency
        average_latency_ms: Mean latency, None when no calls were recorded
        by_role: (role, count) pairs, descending count, first-seen on ties
        by_timezone: (timezone, count) pairs, same ordering
        records_observed: Number of records folded in since the last reset
    """

    total_calls: int
    total_latency_ms: float
    average_latency_ms: float | None
    by_role: tuple[tuple[str, int], ...] = ()
    by_timezone: tuple[tuple[str, int], ...] = ()
    records_observed: int = 0


@dataclass
class StatisticsAggregator:
    """Running counters for call latency and categorical attributes."""

    total_calls: int = 0
    total_latency_ms: float = 0.0
    records_observed: int = 0
    _roles: dict[str, int] = field(default_factory=dict)
    _timezones: dict[str, int] = field(default_factory=dict)

    def observe(self, records: Iterable[Record]) -> None:
        """Fold a batch of records into the category counters."""
        for record in records:
            self.records_observed += 1
            if record.role is not None:
                self._roles[record.role] = self._roles.get(record.role, 0) + 1
            if record.timezone is not None:
                self._timezones[record.timezone] = self._timezones.get(record.timezone, 0) + 1

    def record_call(self, latency_ms: float) -> None:
        """Account for one remote call."""
        self.total_calls += 1
        self.total_latency_ms += latency_ms

    def reset_categories(self) -> None:
        """Clear category counters, keeping call totals."""
        self._roles.clear()
        self._timezones.clear()
        self.records_observed = 0

    @property
    def average_latency_ms(self) -> float | None:
        if self.total_calls == 0:
            return None
        return self.total_latency_ms / self.total_calls

    def snapshot(self, top_n: int | None = None) -> StatsSnapshot:
        """Build a snapshot, optionally keeping only the ``top_n`` values per category."""
        if top_n is not None and top_n < 0:
            raise PreconditionError("top_n cannot be negative")
        return StatsSnapshot(
            total_calls=self.total_calls,
            total_latency_ms=self.total_latency_ms,
            average_latency_ms=self.average_latency_ms,
            by_role=_ranked(self._roles, top_n),
            by_timezone=_ranked(self._timezones, top_n),
            records_observed=self.records_observed,
        )


def _ranked(counts: dict[str, int], top_n: int | None) -> tuple[tuple[str, int], ...]:
    # sorted() is stable, so equal counts keep dict insertion (first-seen) order
    ranked = sorted(counts.items(), key=lambda item: -item[1])
    if top_n is not None:
        ranked = ranked[:top_n]
    return tuple(ranked)
