from supabase_query_advisor.core.advisor import QueryAdvisor
from supabase_query_advisor.core.pipeline import AdvisoryPipeline
from supabase_query_advisor.core.summary import PerformanceSummary, summarize

__all__ = [
    "AdvisoryPipeline",
    "PerformanceSummary",
    "QueryAdvisor",
    "summarize",
]
