"""Command-line interface for the query advisor."""

import asyncio
from pathlib import Path

import click

from supabase_query_advisor import __version__
from supabase_query_advisor.analyzers import RuleScanner
from supabase_query_advisor.config import (
    build_advisor,
    build_client,
    configure_logging,
    get_settings,
)
from supabase_query_advisor.core import AdvisoryPipeline, summarize
from supabase_query_advisor.domain import AdvisoryResult, ConfigurationError
from supabase_query_advisor.input import ManualInput, SqlFileInput
from supabase_query_advisor.output import (
    AdvisoryOutput,
    ConsoleAdvisoryOutput,
    SqsAdvisoryOutput,
    format_duration,
)
from supabase_query_advisor.storage import SupabaseAdvisoryStore


@click.group()
@click.version_option(version=__version__)
def cli():
    """Supabase query advisor - anti-pattern checks and performance estimates for SQL."""


@cli.command()
@click.argument("sql")
def scan(sql: str):
    """Check SQL for anti-patterns without running it."""
    suggestions = RuleScanner().scan(sql)
    if not suggestions:
        click.echo("Query looks good")
        return
    for suggestion in suggestions:
        click.echo(f"[{suggestion.severity.label}] {suggestion.kind.value}: {suggestion.description}")


@cli.command()
@click.argument("sql", required=False)
@click.option(
    "-f",
    "--file",
    "sql_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Run every statement in a .sql file",
)
def run(sql: str | None, sql_file: Path | None):
    """Execute SQL against the configured project and report on it."""
    if not sql and not sql_file:
        raise click.UsageError("Provide SQL or --file")
    configure_logging(get_settings().LOG_LEVEL)
    try:
        results = asyncio.run(_run(sql, sql_file))
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    if any(not result.log.succeeded for result in results):
        raise SystemExit(1)


async def _run(sql: str | None, sql_file: Path | None) -> list[AdvisoryResult]:
    settings = get_settings()
    input_source = SqlFileInput(sql_file) if sql_file else ManualInput([sql or ""])
    outputs: list[AdvisoryOutput] = [ConsoleAdvisoryOutput()]
    if settings.SQS_QUEUE_URL:
        outputs.append(SqsAdvisoryOutput(settings.SQS_QUEUE_URL, region=settings.AWS_REGION))

    async with build_client(settings) as client:
        pipeline = AdvisoryPipeline(input_source, build_advisor(settings, client), outputs)
        return await pipeline.run()


@cli.command()
@click.option("-n", "--limit", default=20, show_default=True, help="Number of recent logs")
def history(limit: int):
    """Summarize recent query logs."""
    configure_logging(get_settings().LOG_LEVEL)
    try:
        logs = asyncio.run(_recent_logs(limit))
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc

    summary = summarize(list(reversed(logs)))
    click.echo(f"Total queries: {summary.total_queries}")
    click.echo(f"Avg execution time: {format_duration(summary.average_execution_time_ms)}")
    click.echo(f"Success rate: {summary.success_rate:.1f}%")
    for log in logs:
        click.echo(f"  {log.created_at:%Y-%m-%d %H:%M:%S} {format_duration(log.execution_time_ms):>8} {log.query_text[:60]}")


async def _recent_logs(limit: int):
    settings = get_settings()
    async with build_client(settings) as client:
        return await SupabaseAdvisoryStore(client).recent_logs(limit=limit)


def main():
    cli()


if __name__ == "__main__":
    main()
