from typing import ClassVar

from supabase_query_advisor.domain import (
    Alert,
    AlertKind,
    Clock,
    IdGenerator,
    QueryLog,
    new_id,
    utc_now,
)
from supabase_query_advisor.metrics.estimator import round2


class AlertPolicy:
    """Threshold checks on a successful log; at most one alert per kind."""

    _default_thresholds: ClassVar[dict[AlertKind, float]] = {
        AlertKind.SLOW_QUERY: 1000.0,
        AlertKind.HIGH_MEMORY: 100.0,
    }

    def __init__(
        self,
        slow_query_threshold_ms: float | None = None,
        high_memory_threshold_mb: float | None = None,
    ) -> None:
        self.thresholds: dict[AlertKind, float] = dict(self._default_thresholds)
        if slow_query_threshold_ms is not None:
            self.thresholds[AlertKind.SLOW_QUERY] = slow_query_threshold_ms
        if high_memory_threshold_mb is not None:
            self.thresholds[AlertKind.HIGH_MEMORY] = high_memory_threshold_mb

    def evaluate(
        self,
        log: QueryLog,
        id_generator: IdGenerator = new_id,
        clock: Clock = utc_now,
    ) -> list[Alert]:
        if not log.succeeded:
            return []

        observed = {
            AlertKind.SLOW_QUERY: log.execution_time_ms,
            AlertKind.HIGH_MEMORY: log.memory_usage_mb,
        }

        alerts: list[Alert] = []
        for kind, threshold in self.thresholds.items():
            actual = observed[kind]
            if actual > threshold:
                alerts.append(
                    Alert(
                        id=id_generator(),
                        query_log_id=log.id,
                        kind=kind,
                        threshold_value=threshold,
                        actual_value=round2(actual),
                        created_at=clock(),
                    )
                )
        return alerts
