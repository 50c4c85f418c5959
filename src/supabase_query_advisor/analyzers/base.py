from collections.abc import Callable
from dataclasses import dataclass

from supabase_query_advisor.domain import Severity, SuggestionKind


@dataclass(frozen=True, slots=True)
class AntiPatternRule:
    """A text predicate over normalized SQL paired with its advisory template.

    ``predicate`` and ``template`` both receive the lower-cased, trimmed query.
    """

    kind: SuggestionKind
    severity: Severity
    predicate: Callable[[str], bool]
    template: Callable[[str], str]

    def matches(self, normalized_sql: str) -> bool:
        return self.predicate(normalized_sql)

    def describe(self, normalized_sql: str) -> str:
        return self.template(normalized_sql)
