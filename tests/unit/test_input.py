from pathlib import Path

import pytest

from supabase_query_advisor.domain import Query
from supabase_query_advisor.input import ManualInput, QueryInput, SqlFileInput, split_statements


async def collect(source: QueryInput) -> list[Query]:
    return [query async for query in source]


class TestQueryInputProtocol:
    def test_non_conforming_class_fails_isinstance(self) -> None:
        class NotAnInput:
            pass

        assert not isinstance(NotAnInput(), QueryInput)

    def test_adapters_implement_protocol(self) -> None:
        assert isinstance(ManualInput([]), QueryInput)
        assert isinstance(SqlFileInput.from_text(""), QueryInput)


class TestManualInput:
    @pytest.mark.asyncio
    async def test_iterates_over_queries(self) -> None:
        queries = [Query(sql="SELECT 1"), Query(sql="SELECT 2")]

        assert await collect(ManualInput(queries)) == queries

    @pytest.mark.asyncio
    async def test_wraps_plain_strings(self) -> None:
        collected = await collect(ManualInput(["SELECT 1"]))

        assert collected == [Query(sql="SELECT 1", source="manual")]

    @pytest.mark.asyncio
    async def test_empty_input(self) -> None:
        assert await collect(ManualInput([])) == []

    @pytest.mark.asyncio
    async def test_exhausted_after_one_pass(self) -> None:
        manual = ManualInput(["SELECT 1"])
        await collect(manual)

        assert await collect(manual) == []


class TestSplitStatements:
    def test_splits_on_semicolons(self) -> None:
        assert split_statements("select 1; select 2;") == ["select 1", "select 2"]

    def test_keeps_semicolons_inside_quotes(self) -> None:
        script = "select ';' as a; select \"x;y\" from t"
        assert split_statements(script) == ["select ';' as a", 'select "x;y" from t']

    def test_drops_line_comments(self) -> None:
        script = "-- header; ignored\nselect 1; -- trailing\nselect 2"
        assert split_statements(script) == ["select 1", "select 2"]

    def test_blank_script(self) -> None:
        assert split_statements("  ;\n;  ") == []

    def test_single_dash_is_kept(self) -> None:
        assert split_statements("select 3 - 1") == ["select 3 - 1"]

    def test_drops_block_comments(self) -> None:
        script = "select 1 /* first; second */; select 2"
        assert split_statements(script) == ["select 1", "select 2"]

    def test_keeps_dollar_quoted_function_body(self) -> None:
        script = (
            "create function f() returns int as $$ begin return 1; end; $$ language plpgsql;\n"
            "select f();"
        )
        assert split_statements(script) == [
            "create function f() returns int as $$ begin return 1; end; $$ language plpgsql",
            "select f()",
        ]

    def test_keeps_tagged_dollar_quotes(self) -> None:
        script = "do $body$ begin perform 1; end $body$; select 1"
        assert split_statements(script) == ["do $body$ begin perform 1; end $body$", "select 1"]

    def test_positional_parameters_are_not_quotes(self) -> None:
        script = "select * from t where id = $1; select 2"
        assert split_statements(script) == ["select * from t where id = $1", "select 2"]


class TestSqlFileInput:
    @pytest.mark.asyncio
    async def test_reads_statements_from_file(self, tmp_path: Path) -> None:
        script = tmp_path / "slow.sql"
        script.write_text("select * from orders;\nselect id from users limit 5;\n")

        collected = await collect(SqlFileInput(script))

        assert [q.sql for q in collected] == ["select * from orders", "select id from users limit 5"]
        assert [q.source for q in collected] == ["file:slow.sql:1", "file:slow.sql:2"]

    @pytest.mark.asyncio
    async def test_from_text(self) -> None:
        collected = await collect(SqlFileInput.from_text("select 1", name="inline.sql"))

        assert collected == [Query(sql="select 1", source="file:inline.sql:1")]

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path: Path) -> None:
        source = SqlFileInput(tmp_path / "missing.sql")

        with pytest.raises(FileNotFoundError, match="missing.sql"):
            await collect(source)
