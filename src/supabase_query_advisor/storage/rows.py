from datetime import datetime
from typing import Any

from supabase_query_advisor.domain import Alert, QueryLog, QueryStatus, Suggestion


def log_to_row(log: QueryLog) -> dict[str, Any]:
    """Columns written to ``query_logs``; the table assigns id and created_at."""
    return {
        "query_text": log.query_text,
        "execution_time_ms": log.execution_time_ms,
        "cpu_usage_percent": log.cpu_usage_percent,
        "memory_usage_mb": log.memory_usage_mb,
        "row_count": log.row_count,
        "status": log.status.value,
        "error_message": log.error_message,
        "execution_plan": dict(log.execution_plan) if log.execution_plan else None,
    }


def suggestion_to_row(suggestion: Suggestion) -> dict[str, Any]:
    return {
        "query_log_id": suggestion.query_log_id,
        "suggestion_type": suggestion.kind.value,
        "description": suggestion.description,
        "severity": suggestion.severity.label,
        "ai_generated": suggestion.ai_generated,
    }


def alert_to_row(alert: Alert) -> dict[str, Any]:
    return {
        "query_log_id": alert.query_log_id,
        "alert_type": alert.kind.value,
        "threshold_value": alert.threshold_value,
        "actual_value": alert.actual_value,
    }


def _parse_timestamp(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _parse_status(value: Any) -> QueryStatus:
    if value is None:
        return QueryStatus.SUCCESS
    try:
        return QueryStatus(value)
    except ValueError:
        return QueryStatus.ERROR


def log_from_row(row: dict[str, Any]) -> QueryLog:
    extra: dict[str, Any] = {}
    created_at = _parse_timestamp(row.get("created_at"))
    if created_at is not None:
        extra["created_at"] = created_at

    return QueryLog(
        id=str(row["id"]),
        query_text=row.get("query_text") or "",
        execution_time_ms=float(row.get("execution_time_ms") or 0),
        cpu_usage_percent=float(row.get("cpu_usage_percent") or 0),
        memory_usage_mb=float(row.get("memory_usage_mb") or 0),
        row_count=int(row.get("row_count") or 0),
        status=_parse_status(row.get("status")),
        error_message=row.get("error_message"),
        execution_plan=row.get("execution_plan"),
        **extra,
    )
