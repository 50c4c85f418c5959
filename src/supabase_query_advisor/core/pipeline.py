from collections.abc import Sequence

from supabase_query_advisor.core.advisor import QueryAdvisor
from supabase_query_advisor.domain import AdvisoryResult
from supabase_query_advisor.input.base import QueryInput
from supabase_query_advisor.output.base import AdvisoryOutput


class AdvisoryPipeline:
    def __init__(
        self,
        input_source: QueryInput,
        advisor: QueryAdvisor,
        outputs: Sequence[AdvisoryOutput],
    ) -> None:
        self._input = input_source
        self._advisor = advisor
        self._outputs = tuple(outputs)

    async def run(self) -> list[AdvisoryResult]:
        results: list[AdvisoryResult] = []
        async for query in self._input:
            result = await self._advisor.run(query.sql)
            results.append(result)
            for output in self._outputs:
                await output.send(result)
        return results
