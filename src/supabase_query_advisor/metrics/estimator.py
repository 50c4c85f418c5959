"""Heuristic CPU and memory estimation from planner telemetry.

The figures are a surrogate derived from EXPLAIN ANALYZE statistics, not a
measurement of the database host. They grow monotonically with execution
time, rows, buffers and planner cost, and fall back to flat values when no
planner report is available.
"""

import math

from supabase_query_advisor.domain import (
    EstimatedMetrics,
    ExecutionPayload,
    PlanReport,
    QueryStatus,
    RawTelemetry,
)

PAGE_SIZE_KB = 8
MB_PER_ROW = 0.001
FALLBACK_BASE_MEMORY_MB = 5.0
FALLBACK_SLOW_MS = 500.0
FALLBACK_CPU_SLOW = 45.0
FALLBACK_CPU_FAST = 25.0


def round2(value: float) -> float:
    """Round half away from zero to two decimal places."""
    return math.copysign(math.floor(abs(value) * 100 + 0.5) / 100, value)


def cpu_from_execution_time(execution_time_ms: float) -> float:
    # fast < 100ms: 10-30%, medium < 500ms: 30-60%, slow: 60-90% (capped)
    if execution_time_ms < 100:
        return 10 + (execution_time_ms / 100) * 20
    if execution_time_ms < 500:
        return 30 + ((execution_time_ms - 100) / 400) * 30
    return 60 + min(((execution_time_ms - 500) / 1000) * 30, 30)


def memory_from_plan(row_count: int, plan: PlanReport) -> float:
    blocks = (plan.shared_hit_blocks or 0) + (plan.shared_read_blocks or 0)
    buffer_mb = (blocks * PAGE_SIZE_KB) / 1024
    return row_count * MB_PER_ROW + buffer_mb + (plan.total_cost or 0) / 1000


class MetricsEstimator:
    def estimate(self, telemetry: RawTelemetry) -> EstimatedMetrics:
        error_message = self._first_error(telemetry)
        if error_message is not None:
            return EstimatedMetrics(
                execution_time_ms=0.0,
                row_count=0,
                cpu_usage_percent=0.0,
                memory_usage_mb=0.0,
                status=QueryStatus.ERROR,
                error_message=error_message,
            )

        execution = telemetry.execution
        payload_rows = (execution.row_count if execution is not None else None) or 0

        if telemetry.plan is not None:
            plan = telemetry.plan
            execution_time = plan.execution_time_ms or telemetry.client_elapsed_ms
            row_count = int(plan.actual_rows or payload_rows)
            cpu = cpu_from_execution_time(execution_time)
            memory = memory_from_plan(row_count, plan)
        elif execution is not None:
            execution_time = telemetry.client_elapsed_ms
            row_count = payload_rows
            cpu = FALLBACK_CPU_SLOW if execution_time > FALLBACK_SLOW_MS else FALLBACK_CPU_FAST
            memory = row_count * MB_PER_ROW + FALLBACK_BASE_MEMORY_MB
        else:
            execution_time = telemetry.client_elapsed_ms
            row_count = 0
            cpu = 0.0
            memory = 0.0

        return EstimatedMetrics(
            execution_time_ms=round2(execution_time),
            row_count=row_count,
            cpu_usage_percent=round2(cpu),
            memory_usage_mb=round2(memory),
            status=QueryStatus.SUCCESS,
        )

    @staticmethod
    def _first_error(telemetry: RawTelemetry) -> str | None:
        execution: ExecutionPayload | None = telemetry.execution
        embedded = execution.error if execution is not None else None
        for candidate in (telemetry.plan_error, telemetry.execution_error, embedded):
            if candidate:
                return candidate
        if telemetry.plan_error is not None or telemetry.execution_error is not None:
            return "Query failed"
        return None


def estimate(telemetry: RawTelemetry) -> EstimatedMetrics:
    return MetricsEstimator().estimate(telemetry)
