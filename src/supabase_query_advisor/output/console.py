from supabase_query_advisor.domain import AdvisoryResult


def format_duration(ms: float) -> str:
    if ms < 1000:
        return f"{ms:.0f}ms"
    return f"{ms / 1000:.2f}s"


class ConsoleAdvisoryOutput:
    """Console output adapter for advisory results."""

    def __init__(self, prefix: str = "[ADVISOR]") -> None:
        self._prefix = prefix

    @property
    def name(self) -> str:
        return "console"

    async def send(self, result: AdvisoryResult) -> None:
        log = result.log
        sql_preview = log.query_text[:50]
        if len(log.query_text) > 50:
            sql_preview += "..."

        if not log.succeeded:
            print(f"{self._prefix} [ERROR] {sql_preview} - {log.error_message}")
            return

        print(
            f"{self._prefix} [OK] {sql_preview} - {format_duration(log.execution_time_ms)}, "
            f"{log.row_count} row(s), cpu {log.cpu_usage_percent:.2f}%, "
            f"mem {log.memory_usage_mb:.2f}MB"
        )

        for alert in result.alerts:
            print(
                f"  ! {alert.kind.value}: {alert.actual_value} "
                f"(threshold {alert.threshold_value})"
            )

        if result.looks_good:
            print("  Query looks good")
            return

        for suggestion in result.suggestions:
            print(f"  - [{suggestion.severity.label}] {suggestion.kind.value}: {suggestion.description}")
