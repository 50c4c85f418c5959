from collections.abc import Sequence

from supabase_query_advisor.domain import Alert, IdGenerator, QueryLog, Suggestion


class InMemoryAdvisoryStore:
    """In-memory AdvisoryStore for tests and offline runs.

    With an ``id_generator`` the store assigns its own log ids, the way a
    database would; without one it keeps the caller's id.
    """

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self._id_generator = id_generator
        self.logs: list[QueryLog] = []
        self.suggestions: list[Suggestion] = []
        self.alerts: list[Alert] = []

    async def insert_log(self, log: QueryLog) -> str | None:
        if self._id_generator is not None:
            log = log.with_id(self._id_generator())
        self.logs.append(log)
        return log.id

    async def insert_suggestions(self, suggestions: Sequence[Suggestion]) -> None:
        self.suggestions.extend(suggestions)

    async def insert_alerts(self, alerts: Sequence[Alert]) -> None:
        self.alerts.extend(alerts)

    async def recent_logs(self, limit: int = 20) -> list[QueryLog]:
        return sorted(self.logs, key=lambda log: log.created_at, reverse=True)[:limit]

    async def delete_log(self, log_id: str) -> None:
        # cascades like the foreign keys on the dashboard tables
        self.logs = [log for log in self.logs if log.id != log_id]
        self.suggestions = [s for s in self.suggestions if s.query_log_id != log_id]
        self.alerts = [a for a in self.alerts if a.query_log_id != log_id]

    async def clear_logs(self) -> None:
        self.logs.clear()
        self.suggestions.clear()
        self.alerts.clear()
