from supabase_query_advisor.api.client import SupabaseRestClient
from supabase_query_advisor.api.exceptions import (
    AuthenticationError,
    NotFoundError,
    RateLimitError,
    SupabaseAPIError,
)

__all__ = [
    "SupabaseRestClient",
    "SupabaseAPIError",
    "RateLimitError",
    "AuthenticationError",
    "NotFoundError",
]
