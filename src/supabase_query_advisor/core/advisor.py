import asyncio
import logging
import time
from collections.abc import Callable, Sequence

from supabase_query_advisor.analyzers import RuleScanner
from supabase_query_advisor.domain import (
    AdvisoryResult,
    Alert,
    Clock,
    ExecutionPayload,
    IdGenerator,
    PlanReport,
    QueryExecutionError,
    QueryLog,
    RawTelemetry,
    Suggestion,
    new_id,
    utc_now,
)
from supabase_query_advisor.execution import ExecutionBackend
from supabase_query_advisor.metrics import AlertPolicy, MetricsEstimator
from supabase_query_advisor.storage import AdvisoryStore

logger = logging.getLogger(__name__)


class QueryAdvisor:
    """Runs one query end to end: execute, estimate, scan, alert, persist.

    Execution errors end up in an error-status log, never raised. Storage
    failures are logged and ignored; the in-memory result is always returned.
    """

    def __init__(
        self,
        backend: ExecutionBackend,
        store: AdvisoryStore,
        scanner: RuleScanner | None = None,
        estimator: MetricsEstimator | None = None,
        alert_policy: AlertPolicy | None = None,
        id_generator: IdGenerator = new_id,
        clock: Clock = utc_now,
        timer: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._backend = backend
        self._store = store
        self._id_generator = id_generator
        self._clock = clock
        self._timer = timer
        self._scanner = scanner or RuleScanner(id_generator=id_generator, clock=clock)
        self._estimator = estimator or MetricsEstimator()
        self._alert_policy = alert_policy or AlertPolicy()

    async def run(self, query_text: str) -> AdvisoryResult:
        try:
            log = await self._execute(query_text)
        except Exception as exc:
            logger.error("Query pipeline failed: %s", exc)
            log = QueryLog.failed(
                log_id=self._id_generator(),
                query_text=query_text,
                error_message=str(exc) or type(exc).__name__,
                created_at=self._clock(),
            )
            await self._persist_log(log)
            return AdvisoryResult(log=log)

        log = await self._persist_log(log)

        suggestions: list[Suggestion] = []
        if log.succeeded:
            suggestions = [s.with_log_id(log.id) for s in self._scanner.scan(query_text)]
        alerts = self._alert_policy.evaluate(log, self._id_generator, self._clock)

        await asyncio.gather(
            self._persist_suggestions(suggestions),
            self._persist_alerts(alerts),
        )
        return AdvisoryResult(log=log, suggestions=tuple(suggestions), alerts=tuple(alerts))

    def review(self, log: QueryLog) -> AdvisoryResult:
        """Re-derive suggestions and alerts for an already stored log."""
        if not log.succeeded:
            return AdvisoryResult(log=log)
        suggestions = self._scanner.scan(log.query_text, query_log_id=log.id)
        alerts = self._alert_policy.evaluate(log, self._id_generator, self._clock)
        return AdvisoryResult(log=log, suggestions=tuple(suggestions), alerts=tuple(alerts))

    async def _execute(self, query_text: str) -> QueryLog:
        started = self._timer()

        plan: PlanReport | None = None
        plan_error: str | None = None
        try:
            plan = await self._backend.explain(query_text)
        except QueryExecutionError as exc:
            logger.warning("EXPLAIN failed: %s", exc.message)
            plan_error = exc.message

        execution: ExecutionPayload | None = None
        execution_error: str | None = None
        try:
            execution = await self._backend.execute(query_text)
        except QueryExecutionError as exc:
            logger.warning("Query execution failed: %s", exc.message)
            execution_error = exc.message

        elapsed_ms = (self._timer() - started) * 1000
        metrics = self._estimator.estimate(
            RawTelemetry(
                client_elapsed_ms=elapsed_ms,
                plan=plan,
                plan_error=plan_error,
                execution=execution,
                execution_error=execution_error,
            )
        )

        return QueryLog(
            id=self._id_generator(),
            query_text=query_text,
            execution_time_ms=metrics.execution_time_ms,
            cpu_usage_percent=metrics.cpu_usage_percent,
            memory_usage_mb=metrics.memory_usage_mb,
            row_count=metrics.row_count,
            status=metrics.status,
            error_message=metrics.error_message,
            created_at=self._clock(),
            execution_plan=plan.raw if plan is not None else None,
        )

    async def _persist_log(self, log: QueryLog) -> QueryLog:
        try:
            assigned_id = await self._store.insert_log(log)
        except Exception:
            logger.exception("Failed to persist query log %s", log.id)
            return log
        if assigned_id and assigned_id != log.id:
            return log.with_id(assigned_id)
        return log

    async def _persist_suggestions(self, suggestions: Sequence[Suggestion]) -> None:
        if not suggestions:
            return
        try:
            await self._store.insert_suggestions(suggestions)
        except Exception:
            logger.exception("Failed to persist %d suggestion(s)", len(suggestions))

    async def _persist_alerts(self, alerts: Sequence[Alert]) -> None:
        if not alerts:
            return
        try:
            await self._store.insert_alerts(alerts)
        except Exception:
            logger.exception("Failed to persist %d alert(s)", len(alerts))
