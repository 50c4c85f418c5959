__version__ = "0.1.0"

from supabase_query_advisor.analyzers import AntiPatternRule, RuleScanner, scan
from supabase_query_advisor.core import (
    AdvisoryPipeline,
    PerformanceSummary,
    QueryAdvisor,
    summarize,
)
from supabase_query_advisor.domain import (
    AdvisoryResult,
    Alert,
    AlertKind,
    PlanReport,
    Query,
    QueryLog,
    QueryStatus,
    RawTelemetry,
    Severity,
    Suggestion,
    SuggestionKind,
)
from supabase_query_advisor.execution import ExecutionBackend, SupabaseExecutionBackend
from supabase_query_advisor.input import ManualInput, QueryInput, SqlFileInput
from supabase_query_advisor.metrics import AlertPolicy, MetricsEstimator, estimate
from supabase_query_advisor.output import AdvisoryOutput, ConsoleAdvisoryOutput
from supabase_query_advisor.storage import (
    AdvisoryStore,
    InMemoryAdvisoryStore,
    SupabaseAdvisoryStore,
)

__all__ = [
    "__version__",
    "QueryAdvisor",
    "AdvisoryPipeline",
    "AdvisoryResult",
    "PerformanceSummary",
    "summarize",
    "Query",
    "QueryLog",
    "QueryStatus",
    "Suggestion",
    "SuggestionKind",
    "Severity",
    "Alert",
    "AlertKind",
    "PlanReport",
    "RawTelemetry",
    "AntiPatternRule",
    "RuleScanner",
    "scan",
    "MetricsEstimator",
    "AlertPolicy",
    "estimate",
    "ExecutionBackend",
    "SupabaseExecutionBackend",
    "AdvisoryStore",
    "InMemoryAdvisoryStore",
    "SupabaseAdvisoryStore",
    "QueryInput",
    "ManualInput",
    "SqlFileInput",
    "AdvisoryOutput",
    "ConsoleAdvisoryOutput",
]
