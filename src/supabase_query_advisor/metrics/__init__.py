from supabase_query_advisor.metrics.alerts import AlertPolicy
from supabase_query_advisor.metrics.estimator import (
    MetricsEstimator,
    cpu_from_execution_time,
    estimate,
    memory_from_plan,
    round2,
)

__all__ = [
    "AlertPolicy",
    "MetricsEstimator",
    "cpu_from_execution_time",
    "estimate",
    "memory_from_plan",
    "round2",
]
