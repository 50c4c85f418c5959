import pytest

from supabase_query_advisor.domain import (
    ExecutionPayload,
    PlanReport,
    QueryStatus,
    RawTelemetry,
)
from supabase_query_advisor.metrics import (
    MetricsEstimator,
    cpu_from_execution_time,
    estimate,
    memory_from_plan,
    round2,
)


class TestErrorSignals:
    def test_embedded_error_zeroes_metrics(self) -> None:
        telemetry = RawTelemetry(
            client_elapsed_ms=250.0,
            plan=PlanReport(execution_time_ms=40.0, actual_rows=10, total_cost=500),
            execution=ExecutionPayload(row_count=10, error="syntax error"),
        )

        metrics = estimate(telemetry)

        assert metrics.status == QueryStatus.ERROR
        assert metrics.error_message == "syntax error"
        assert metrics.execution_time_ms == 0
        assert metrics.row_count == 0
        assert metrics.cpu_usage_percent == 0
        assert metrics.memory_usage_mb == 0

    def test_plan_error_takes_precedence(self) -> None:
        telemetry = RawTelemetry(
            client_elapsed_ms=10.0,
            plan_error="explain failed",
            execution_error="execute failed",
            execution=ExecutionPayload(error="embedded"),
        )
        assert estimate(telemetry).error_message == "explain failed"

    def test_execution_error_before_embedded_error(self) -> None:
        telemetry = RawTelemetry(
            client_elapsed_ms=10.0,
            execution_error="execute failed",
            execution=ExecutionPayload(error="embedded"),
        )
        assert estimate(telemetry).error_message == "execute failed"

    def test_execution_error_alone(self) -> None:
        telemetry = RawTelemetry(
            client_elapsed_ms=10.0,
            plan=PlanReport(execution_time_ms=5.0),
            execution_error='relation "nope" does not exist',
        )
        metrics = estimate(telemetry)
        assert metrics.status == QueryStatus.ERROR
        assert metrics.error_message == 'relation "nope" does not exist'

    def test_empty_error_message_still_fails(self) -> None:
        metrics = estimate(RawTelemetry(client_elapsed_ms=10.0, plan_error=""))
        assert metrics.status == QueryStatus.ERROR
        assert metrics.error_message == "Query failed"


class TestPlannerBranch:
    def test_fast_query_without_other_stats(self) -> None:
        metrics = estimate(
            RawTelemetry(client_elapsed_ms=300.0, plan=PlanReport(execution_time_ms=50.0))
        )

        assert metrics.status == QueryStatus.SUCCESS
        assert metrics.execution_time_ms == 50.0
        assert metrics.cpu_usage_percent == 20.0
        assert metrics.memory_usage_mb == 0.0
        assert metrics.row_count == 0

    def test_slow_query_cpu_is_capped(self) -> None:
        metrics = estimate(
            RawTelemetry(
                client_elapsed_ms=1.0,
                plan=PlanReport(execution_time_ms=1500.0, total_cost=2000.0),
            )
        )

        assert metrics.cpu_usage_percent == 90.0
        assert metrics.memory_usage_mb == 2.0

    def test_falls_back_to_client_time_when_planner_time_missing(self) -> None:
        metrics = estimate(RawTelemetry(client_elapsed_ms=123.456, plan=PlanReport()))

        assert metrics.execution_time_ms == 123.46
        assert metrics.cpu_usage_percent == round2(30 + (23.456 / 400) * 30)

    def test_row_count_prefers_planner_rows(self) -> None:
        metrics = estimate(
            RawTelemetry(
                client_elapsed_ms=1.0,
                plan=PlanReport(execution_time_ms=10.0, actual_rows=500),
                execution=ExecutionPayload(row_count=3),
            )
        )
        assert metrics.row_count == 500

    def test_returned_rows_without_row_count_are_not_counted(self) -> None:
        rows = tuple({"id": i} for i in range(1000))
        metrics = estimate(
            RawTelemetry(
                client_elapsed_ms=1.0,
                plan=PlanReport(execution_time_ms=5.0),
                execution=ExecutionPayload(rows=rows),
            )
        )

        assert metrics.row_count == 0
        assert metrics.memory_usage_mb == 0.0

    def test_row_count_falls_back_to_payload(self) -> None:
        metrics = estimate(
            RawTelemetry(
                client_elapsed_ms=1.0,
                plan=PlanReport(execution_time_ms=10.0),
                execution=ExecutionPayload(row_count=3),
            )
        )
        assert metrics.row_count == 3

    def test_memory_combines_rows_buffers_and_cost(self) -> None:
        plan = PlanReport(
            execution_time_ms=10.0,
            actual_rows=2000,
            total_cost=1500.0,
            shared_hit_blocks=100,
            shared_read_blocks=28,
        )
        metrics = estimate(RawTelemetry(client_elapsed_ms=1.0, plan=plan))

        # 2000 * 0.001 + (128 * 8 / 1024) + 1500 / 1000
        assert metrics.memory_usage_mb == 4.5


class TestFallbackBranch:
    def test_fast_query_without_plan(self) -> None:
        metrics = estimate(
            RawTelemetry(client_elapsed_ms=120.0, execution=ExecutionPayload(row_count=1000))
        )

        assert metrics.status == QueryStatus.SUCCESS
        assert metrics.execution_time_ms == 120.0
        assert metrics.cpu_usage_percent == 25.0
        assert metrics.memory_usage_mb == 6.0
        assert metrics.row_count == 1000

    def test_fallback_ignores_rows_without_row_count(self) -> None:
        rows = tuple({"id": i} for i in range(1000))
        metrics = estimate(RawTelemetry(client_elapsed_ms=10.0, execution=ExecutionPayload(rows=rows)))

        assert metrics.row_count == 0
        assert metrics.memory_usage_mb == 5.0

    def test_slow_query_without_plan(self) -> None:
        metrics = estimate(RawTelemetry(client_elapsed_ms=700.0, execution=ExecutionPayload()))

        assert metrics.cpu_usage_percent == 45.0
        assert metrics.memory_usage_mb == 5.0
        assert metrics.row_count == 0

    def test_no_plan_and_no_payload(self) -> None:
        metrics = MetricsEstimator().estimate(RawTelemetry(client_elapsed_ms=12.346))

        assert metrics.status == QueryStatus.SUCCESS
        assert metrics.execution_time_ms == 12.35
        assert metrics.cpu_usage_percent == 0.0
        assert metrics.memory_usage_mb == 0.0


class TestCpuCurve:
    @pytest.mark.parametrize(
        ("execution_time", "expected"),
        [
            (0, 10.0),
            (99.99, 29.998),
            (100, 30.0),
            (300, 45.0),
            (500, 60.0),
            (1000, 75.0),
            (1500, 90.0),
            (60_000, 90.0),
        ],
    )
    def test_piecewise_values(self, execution_time: float, expected: float) -> None:
        assert cpu_from_execution_time(execution_time) == pytest.approx(expected)

    def test_monotonic(self) -> None:
        samples = [cpu_from_execution_time(t) for t in range(0, 3000, 7)]
        assert samples == sorted(samples)


class TestHelpers:
    def test_memory_defaults_missing_fields_to_zero(self) -> None:
        assert memory_from_plan(0, PlanReport()) == 0

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.125, 0.13), (1.234, 1.23), (0.004, 0.0), (-0.125, -0.13), (42.0, 42.0)],
    )
    def test_round2_half_away_from_zero(self, value: float, expected: float) -> None:
        assert round2(value) == expected
