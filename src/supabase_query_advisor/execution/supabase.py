from typing import Any

from supabase_query_advisor.api import SupabaseAPIError, SupabaseRestClient
from supabase_query_advisor.domain import ExecutionPayload, PlanReport, QueryExecutionError


class SupabaseExecutionBackend:
    """ExecutionBackend backed by two Postgres functions exposed over PostgREST.

    ``execute_explain_analyze(query_sql)`` returns a JSON object with
    execution_time_ms, actual_rows, total_cost, shared_hit_blocks and
    shared_read_blocks. ``execute_dynamic_query(query_sql)`` returns
    ``{"rows": [...], "row_count": n}`` or ``{"error": "..."}``.
    """

    EXPLAIN_FUNCTION = "execute_explain_analyze"
    EXECUTE_FUNCTION = "execute_dynamic_query"

    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    async def explain(self, sql: str) -> PlanReport | None:
        data = await self._call(self.EXPLAIN_FUNCTION, sql)
        if isinstance(data, list):
            data = data[0] if data else None
        if not isinstance(data, dict):
            return None
        if data.get("error"):
            raise QueryExecutionError(str(data["error"]))
        return PlanReport.from_payload(data)

    async def execute(self, sql: str) -> ExecutionPayload:
        data = await self._call(self.EXECUTE_FUNCTION, sql)
        if isinstance(data, list):
            return ExecutionPayload(rows=tuple(data))
        return ExecutionPayload.from_payload(data if isinstance(data, dict) else None)

    async def _call(self, function: str, sql: str) -> Any:
        try:
            return await self._client.rpc(function, {"query_sql": sql})
        except SupabaseAPIError as exc:
            raise QueryExecutionError(exc.message, code=exc.code) from exc
