from typing import Protocol, runtime_checkable

from supabase_query_advisor.domain import ExecutionPayload, PlanReport


@runtime_checkable
class ExecutionBackend(Protocol):
    """Protocol for the service that plans and runs SQL.

    Failures reported by the database raise ``QueryExecutionError``; anything
    else (unreachable host, timeouts) propagates as-is.
    """

    async def explain(self, sql: str) -> PlanReport | None:
        ...

    async def execute(self, sql: str) -> ExecutionPayload:
        ...
