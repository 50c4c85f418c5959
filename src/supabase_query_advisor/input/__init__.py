from supabase_query_advisor.input.base import QueryInput
from supabase_query_advisor.input.manual import ManualInput
from supabase_query_advisor.input.sqlfile import SqlFileInput, split_statements

__all__ = [
    "QueryInput",
    "ManualInput",
    "SqlFileInput",
    "split_statements",
]
