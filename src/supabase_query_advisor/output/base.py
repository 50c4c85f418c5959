from typing import Protocol, runtime_checkable

from supabase_query_advisor.domain import AdvisoryResult


@runtime_checkable
class AdvisoryOutput(Protocol):
    """Protocol for advisory result destinations."""

    @property
    def name(self) -> str:
        ...

    async def send(self, result: AdvisoryResult) -> None:
        ...
