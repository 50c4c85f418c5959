from typing import Protocol, Self, runtime_checkable

from supabase_query_advisor.domain import Query


@runtime_checkable
class QueryInput(Protocol):
    """Protocol for async sources of SQL statements to advise on."""

    def __aiter__(self) -> Self:
        ...

    async def __anext__(self) -> Query:
        ...
