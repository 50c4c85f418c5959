from collections.abc import Sequence

from supabase_query_advisor.domain import Query


class ManualInput:
    """Feeds a fixed sequence of statements; plain strings are wrapped in Query."""

    def __init__(self, queries: Sequence[Query | str]) -> None:
        self._queries: tuple[Query, ...] = tuple(
            q if isinstance(q, Query) else Query(sql=q, source="manual") for q in queries
        )
        self._index: int = 0

    def __aiter__(self) -> "ManualInput":
        return self

    async def __anext__(self) -> Query:
        if self._index >= len(self._queries):
            raise StopAsyncIteration
        query = self._queries[self._index]
        self._index += 1
        return query
