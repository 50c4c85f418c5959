from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from supabase_query_advisor.domain import Alert, QueryLog, Suggestion


@runtime_checkable
class AdvisoryStore(Protocol):
    """Protocol for persisting query logs and their child records."""

    async def insert_log(self, log: QueryLog) -> str | None:
        """Persist a log and return the store-assigned id, if any."""
        ...

    async def insert_suggestions(self, suggestions: Sequence[Suggestion]) -> None:
        ...

    async def insert_alerts(self, alerts: Sequence[Alert]) -> None:
        ...
