"""Core domain models for query advisory and metrics estimation."""

import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from enum import Enum, IntEnum
from typing import Any

IdGenerator = Callable[[], str]
Clock = Callable[[], datetime]


def new_id() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    return datetime.now(UTC)


class Severity(IntEnum):
    """Suggestion severity levels, ordered for comparison (higher value = higher severity)."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @property
    def label(self) -> str:
        return self.name.lower()


class SuggestionKind(str, Enum):
    SELECT_STAR = "SELECT_STAR"
    MISSING_WHERE = "MISSING_WHERE"
    OR_CONDITION = "OR_CONDITION"
    LEADING_WILDCARD = "LEADING_WILDCARD"
    MISSING_LIMIT = "MISSING_LIMIT"
    MULTIPLE_JOINS = "MULTIPLE_JOINS"
    ORDER_WITHOUT_LIMIT = "ORDER_WITHOUT_LIMIT"
    DISTINCT_USAGE = "DISTINCT_USAGE"
    NOT_EQUAL_OPERATOR = "NOT_EQUAL_OPERATOR"
    OFFSET_PAGINATION = "OFFSET_PAGINATION"
    SUBQUERY_IN_WHERE = "SUBQUERY_IN_WHERE"


class AlertKind(str, Enum):
    SLOW_QUERY = "SLOW_QUERY"
    HIGH_MEMORY = "HIGH_MEMORY"


class QueryStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Query:
    """A SQL statement submitted for advice."""

    sql: str
    source: str | None = None


@dataclass(frozen=True, slots=True)
class Suggestion:
    """A graded advisory message produced by an anti-pattern rule."""

    id: str
    query_log_id: str
    kind: SuggestionKind
    description: str
    severity: Severity
    created_at: datetime = field(default_factory=utc_now)
    ai_generated: bool = False

    def with_log_id(self, query_log_id: str) -> "Suggestion":
        return replace(self, query_log_id=query_log_id)


@dataclass(frozen=True, slots=True)
class Alert:
    """A threshold breach observed on a successful execution."""

    id: str
    query_log_id: str
    kind: AlertKind
    threshold_value: float
    actual_value: float
    created_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True, slots=True)
class QueryLog:
    """The terminal record of one execution cycle."""

    id: str
    query_text: str
    execution_time_ms: float
    cpu_usage_percent: float
    memory_usage_mb: float
    row_count: int
    status: QueryStatus
    error_message: str | None = None
    created_at: datetime = field(default_factory=utc_now)
    execution_plan: Mapping[str, Any] | None = None

    @property
    def succeeded(self) -> bool:
        return self.status is QueryStatus.SUCCESS

    def with_id(self, log_id: str) -> "QueryLog":
        return replace(self, id=log_id)

    @classmethod
    def failed(
        cls,
        log_id: str,
        query_text: str,
        error_message: str,
        created_at: datetime | None = None,
    ) -> "QueryLog":
        """Build an error log with every metric zeroed."""
        return cls(
            id=log_id,
            query_text=query_text,
            execution_time_ms=0.0,
            cpu_usage_percent=0.0,
            memory_usage_mb=0.0,
            row_count=0,
            status=QueryStatus.ERROR,
            error_message=error_message,
            created_at=created_at or utc_now(),
        )


def _optional_float(value: Any) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True, slots=True)
class PlanReport:
    """Planner statistics reported by EXPLAIN ANALYZE."""

    execution_time_ms: float | None = None
    actual_rows: float | None = None
    total_cost: float | None = None
    shared_hit_blocks: float | None = None
    shared_read_blocks: float | None = None
    raw: Mapping[str, Any] | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "PlanReport":
        return cls(
            execution_time_ms=_optional_float(payload.get("execution_time_ms")),
            actual_rows=_optional_float(payload.get("actual_rows")),
            total_cost=_optional_float(payload.get("total_cost")),
            shared_hit_blocks=_optional_float(payload.get("shared_hit_blocks")),
            shared_read_blocks=_optional_float(payload.get("shared_read_blocks")),
            raw=dict(payload),
        )


@dataclass(frozen=True, slots=True)
class ExecutionPayload:
    """Result of executing a statement: the rows plus an optional embedded error."""

    rows: tuple[Mapping[str, Any], ...] = ()
    row_count: int | None = None
    error: str | None = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "ExecutionPayload":
        if not payload:
            return cls()
        rows = payload.get("rows") or ()
        row_count = payload.get("row_count")
        error = payload.get("error")
        return cls(
            rows=tuple(rows),
            row_count=int(row_count) if row_count is not None else None,
            error=str(error) if error else None,
        )


@dataclass(frozen=True, slots=True)
class RawTelemetry:
    """Everything observed about one run, consumed once by the estimator."""

    client_elapsed_ms: float
    plan: PlanReport | None = None
    plan_error: str | None = None
    execution: ExecutionPayload | None = None
    execution_error: str | None = None


@dataclass(frozen=True, slots=True)
class EstimatedMetrics:
    execution_time_ms: float
    row_count: int
    cpu_usage_percent: float
    memory_usage_mb: float
    status: QueryStatus
    error_message: str | None = None


@dataclass(frozen=True, slots=True)
class AdvisoryResult:
    """What the caller receives for one submitted query."""

    log: QueryLog
    suggestions: tuple[Suggestion, ...] = ()
    alerts: tuple[Alert, ...] = ()

    @property
    def looks_good(self) -> bool:
        return self.log.succeeded and not self.suggestions

    @property
    def severity(self) -> Severity | None:
        """Return the highest severity among all suggestions."""
        if not self.suggestions:
            return None
        return max(suggestion.severity for suggestion in self.suggestions)
