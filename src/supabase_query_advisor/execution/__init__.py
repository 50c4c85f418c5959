from supabase_query_advisor.execution.base import ExecutionBackend
from supabase_query_advisor.execution.supabase import SupabaseExecutionBackend

__all__ = ["ExecutionBackend", "SupabaseExecutionBackend"]
