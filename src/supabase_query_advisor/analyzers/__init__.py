from supabase_query_advisor.analyzers.base import AntiPatternRule
from supabase_query_advisor.analyzers.rules import DEFAULT_RULES
from supabase_query_advisor.analyzers.scanner import RuleScanner, scan

__all__ = [
    "AntiPatternRule",
    "DEFAULT_RULES",
    "RuleScanner",
    "scan",
]
