import pytest

from supabase_query_advisor import (
    AdvisoryPipeline,
    AdvisoryResult,
    InMemoryAdvisoryStore,
    ManualInput,
    Query,
    QueryAdvisor,
    QueryStatus,
    SqlFileInput,
    SuggestionKind,
)
from supabase_query_advisor.domain import ExecutionPayload, PlanReport, QueryExecutionError
from supabase_query_advisor.output import AdvisoryOutput


class MockAdvisoryOutput:
    name: str = "mock"

    def __init__(self) -> None:
        self.results: list[AdvisoryResult] = []

    async def send(self, result: AdvisoryResult) -> None:
        self.results.append(result)


class TableBackend:
    """Fails for any statement touching the ``missing`` table."""

    async def explain(self, sql: str) -> PlanReport | None:
        if "missing" in sql:
            raise QueryExecutionError('relation "missing" does not exist')
        return PlanReport(execution_time_ms=12.0, actual_rows=3)

    async def execute(self, sql: str) -> ExecutionPayload:
        return ExecutionPayload(rows=({"id": 1}, {"id": 2}, {"id": 3}), row_count=3)


def make_advisor(store: InMemoryAdvisoryStore) -> QueryAdvisor:
    return QueryAdvisor(backend=TableBackend(), store=store)


def test_mock_implements_protocol():
    assert isinstance(MockAdvisoryOutput(), AdvisoryOutput)


@pytest.mark.asyncio
async def test_pipeline_with_clean_queries():
    store = InMemoryAdvisoryStore()
    output = MockAdvisoryOutput()
    queries = [
        Query(sql="SELECT id, name FROM products WHERE price > 10 LIMIT 5"),
        Query(sql="INSERT INTO audit (message) VALUES ('hi')"),
    ]

    results = await AdvisoryPipeline(ManualInput(queries), make_advisor(store), [output]).run()

    assert len(results) == 2
    assert all(result.looks_good for result in results)
    assert output.results == results
    assert len(store.logs) == 2


@pytest.mark.asyncio
async def test_pipeline_reports_anti_patterns():
    output = MockAdvisoryOutput()

    results = await AdvisoryPipeline(
        ManualInput(["SELECT * FROM items"]), make_advisor(InMemoryAdvisoryStore()), [output]
    ).run()

    assert [s.kind for s in results[0].suggestions] == [
        SuggestionKind.SELECT_STAR,
        SuggestionKind.MISSING_WHERE,
        SuggestionKind.MISSING_LIMIT,
    ]
    assert results[0].log.row_count == 3


@pytest.mark.asyncio
async def test_pipeline_continues_after_failed_query():
    store = InMemoryAdvisoryStore()
    output = MockAdvisoryOutput()
    source = SqlFileInput.from_text(
        "select * from missing; select id from t where id = 1 limit 1;", name="batch.sql"
    )

    results = await AdvisoryPipeline(source, make_advisor(store), [output]).run()

    assert [r.log.status for r in results] == [QueryStatus.ERROR, QueryStatus.SUCCESS]
    assert results[0].log.error_message == 'relation "missing" does not exist'
    assert results[0].suggestions == ()
    assert len(output.results) == 2
    assert len(store.logs) == 2


@pytest.mark.asyncio
async def test_pipeline_fans_out_to_every_output():
    first, second = MockAdvisoryOutput(), MockAdvisoryOutput()

    await AdvisoryPipeline(
        ManualInput(["select 1"]), make_advisor(InMemoryAdvisoryStore()), [first, second]
    ).run()

    assert len(first.results) == 1
    assert first.results == second.results


@pytest.mark.asyncio
async def test_pipeline_with_no_queries():
    output = MockAdvisoryOutput()

    results = await AdvisoryPipeline(
        ManualInput([]), make_advisor(InMemoryAdvisoryStore()), [output]
    ).run()

    assert results == []
    assert output.results == []
