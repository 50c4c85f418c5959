from collections.abc import Sequence

from supabase_query_advisor.api import SupabaseRestClient
from supabase_query_advisor.domain import Alert, QueryLog, Suggestion
from supabase_query_advisor.storage.rows import (
    alert_to_row,
    log_from_row,
    log_to_row,
    suggestion_to_row,
)


class SupabaseAdvisoryStore:
    """AdvisoryStore writing to the dashboard's three Supabase tables."""

    LOGS_TABLE = "query_logs"
    SUGGESTIONS_TABLE = "optimization_suggestions"
    ALERTS_TABLE = "query_alerts"

    # Sentinel used to express "every row" through a PostgREST filter.
    _NIL_UUID = "00000000-0000-0000-0000-000000000000"

    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    async def insert_log(self, log: QueryLog) -> str | None:
        saved = await self._client.insert(self.LOGS_TABLE, [log_to_row(log)])
        if not saved or saved[0].get("id") is None:
            return None
        return str(saved[0]["id"])

    async def insert_suggestions(self, suggestions: Sequence[Suggestion]) -> None:
        if not suggestions:
            return
        await self._client.insert(
            self.SUGGESTIONS_TABLE,
            [suggestion_to_row(s) for s in suggestions],
            returning=False,
        )

    async def insert_alerts(self, alerts: Sequence[Alert]) -> None:
        if not alerts:
            return
        await self._client.insert(
            self.ALERTS_TABLE,
            [alert_to_row(a) for a in alerts],
            returning=False,
        )

    async def recent_logs(self, limit: int = 20) -> list[QueryLog]:
        rows = await self._client.select(
            self.LOGS_TABLE, order="created_at.desc", limit=limit
        )
        return [log_from_row(row) for row in rows]

    async def delete_log(self, log_id: str) -> None:
        await self._client.delete(self.LOGS_TABLE, {"id": f"eq.{log_id}"})

    async def clear_logs(self) -> None:
        await self._client.delete(self.LOGS_TABLE, {"id": f"neq.{self._NIL_UUID}"})
