from supabase_query_advisor.storage.base import AdvisoryStore
from supabase_query_advisor.storage.memory import InMemoryAdvisoryStore
from supabase_query_advisor.storage.supabase import SupabaseAdvisoryStore

__all__ = ["AdvisoryStore", "InMemoryAdvisoryStore", "SupabaseAdvisoryStore"]
