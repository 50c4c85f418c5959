"""Domain models for query advisory and metrics estimation."""

from supabase_query_advisor.domain.errors import (
    AdvisorError,
    ConfigurationError,
    QueryExecutionError,
)
from supabase_query_advisor.domain.models import (
    AdvisoryResult,
    Alert,
    AlertKind,
    Clock,
    EstimatedMetrics,
    ExecutionPayload,
    IdGenerator,
    PlanReport,
    Query,
    QueryLog,
    QueryStatus,
    RawTelemetry,
    Severity,
    Suggestion,
    SuggestionKind,
    new_id,
    utc_now,
)

__all__ = [
    "AdvisorError",
    "AdvisoryResult",
    "Alert",
    "AlertKind",
    "Clock",
    "ConfigurationError",
    "EstimatedMetrics",
    "ExecutionPayload",
    "IdGenerator",
    "PlanReport",
    "Query",
    "QueryExecutionError",
    "QueryLog",
    "QueryStatus",
    "RawTelemetry",
    "Severity",
    "Suggestion",
    "SuggestionKind",
    "new_id",
    "utc_now",
]
