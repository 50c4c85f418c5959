from collections.abc import Sequence
from dataclasses import dataclass

from supabase_query_advisor.domain import QueryLog


@dataclass(frozen=True, slots=True)
class PerformanceSummary:
    """Aggregate figures over a batch of query logs."""

    total_queries: int
    successful_queries: int
    average_execution_time_ms: float
    success_rate: float
    execution_time_trend: tuple[float, ...] = ()


def summarize(logs: Sequence[QueryLog], trend_size: int = 10) -> PerformanceSummary:
    """Summarize logs in chronological order.

    The average only covers successful logs; the trend holds the execution
    times of the last ``trend_size`` successful logs.
    """
    successful = [log for log in logs if log.succeeded]
    total = len(logs)

    average = (
        sum(log.execution_time_ms for log in successful) / len(successful) if successful else 0.0
    )
    success_rate = (len(successful) / total) * 100 if total else 0.0
    trend = tuple(log.execution_time_ms for log in successful[-trend_size:]) if trend_size > 0 else ()

    return PerformanceSummary(
        total_queries=total,
        successful_queries=len(successful),
        average_execution_time_ms=average,
        success_rate=success_rate,
        execution_time_trend=trend,
    )
