from supabase_query_advisor.output.base import AdvisoryOutput
from supabase_query_advisor.output.console import ConsoleAdvisoryOutput, format_duration
from supabase_query_advisor.output.sqs import SqsAdvisoryOutput

__all__ = ["AdvisoryOutput", "ConsoleAdvisoryOutput", "SqsAdvisoryOutput", "format_duration"]
