from collections.abc import Iterable

from supabase_query_advisor.analyzers.base import AntiPatternRule
from supabase_query_advisor.analyzers.rules import DEFAULT_RULES
from supabase_query_advisor.domain import (
    Clock,
    IdGenerator,
    Suggestion,
    new_id,
    utc_now,
)


class RuleScanner:
    """Scans SQL text against an ordered anti-pattern catalogue.

    Every rule is evaluated; output order is catalogue order. When no owning
    log id is supplied, suggestions carry a placeholder id that the caller is
    expected to rebind once the canonical log id is known.
    """

    def __init__(
        self,
        rules: Iterable[AntiPatternRule] | None = None,
        id_generator: IdGenerator = new_id,
        clock: Clock = utc_now,
    ) -> None:
        self._rules: list[AntiPatternRule] = list(DEFAULT_RULES if rules is None else rules)
        self._id_generator = id_generator
        self._clock = clock

    def register(self, rule: AntiPatternRule) -> None:
        self._rules.append(rule)

    @property
    def rules(self) -> tuple[AntiPatternRule, ...]:
        return tuple(self._rules)

    def scan(self, query_text: str, query_log_id: str | None = None) -> list[Suggestion]:
        normalized = query_text.lower().strip()
        if not normalized:
            return []

        log_id = query_log_id or self._id_generator()
        suggestions: list[Suggestion] = []
        for rule in self._rules:
            if rule.matches(normalized):
                suggestions.append(
                    Suggestion(
                        id=self._id_generator(),
                        query_log_id=log_id,
                        kind=rule.kind,
                        description=rule.describe(normalized),
                        severity=rule.severity,
                        created_at=self._clock(),
                    )
                )
        return suggestions


def scan(query_text: str) -> list[Suggestion]:
    return RuleScanner().scan(query_text)
