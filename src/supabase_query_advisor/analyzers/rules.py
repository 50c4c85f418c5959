import re
from collections.abc import Callable

from supabase_query_advisor.analyzers.base import AntiPatternRule
from supabase_query_advisor.domain import Severity, SuggestionKind

LEADING_WILDCARD_PATTERN = re.compile(r"like\s+['\"]%")
SUBQUERY_IN_WHERE_PATTERN = re.compile(r"where.*\([^)]*select")


def _is_select(sql: str) -> bool:
    return "select" in sql


def _is_data_statement(sql: str) -> bool:
    return "select" in sql or "update" in sql or "delete" in sql


def _join_count(sql: str) -> int:
    return sql.count("join")


def _static(text: str) -> Callable[[str], str]:
    return lambda sql: text


SELECT_STAR = AntiPatternRule(
    kind=SuggestionKind.SELECT_STAR,
    severity=Severity.MEDIUM,
    predicate=lambda sql: "select *" in sql,
    template=_static(
        "Avoid SELECT *. Explicitly list columns to: 1) Reduce network transfer, "
        "2) Enable better indexing, 3) Make queries maintainable, "
        "4) Prevent breaking changes when schema evolves."
    ),
)

MISSING_WHERE = AntiPatternRule(
    kind=SuggestionKind.MISSING_WHERE,
    severity=Severity.HIGH,
    predicate=lambda sql: "where" not in sql and _is_data_statement(sql),
    template=_static(
        "Missing WHERE clause causes full table scan! This reads EVERY row which can: "
        "1) Lock tables for minutes on large datasets, 2) Consume excessive memory, "
        "3) Impact other queries. Add WHERE conditions or use pagination."
    ),
)

# Raw substring test, so ORDER and FOR match as well.
OR_CONDITION = AntiPatternRule(
    kind=SuggestionKind.OR_CONDITION,
    severity=Severity.MEDIUM,
    predicate=lambda sql: "or" in sql,
    template=_static(
        "OR conditions often prevent index usage. Alternative: Use IN clause for same "
        "column (WHERE col IN (1,2,3)), or use UNION for different columns. "
        "This can improve query speed by 10-100x."
    ),
)

LEADING_WILDCARD = AntiPatternRule(
    kind=SuggestionKind.LEADING_WILDCARD,
    severity=Severity.HIGH,
    predicate=lambda sql: LEADING_WILDCARD_PATTERN.search(sql) is not None,
    template=_static(
        "Leading wildcard LIKE '%text%' forces full table scan! Alternatives: "
        "1) Use full-text search (PostgreSQL: to_tsvector), 2) Use trigram indexes "
        "(pg_trgm), 3) Consider ElasticSearch for complex searches."
    ),
)

MISSING_LIMIT = AntiPatternRule(
    kind=SuggestionKind.MISSING_LIMIT,
    severity=Severity.MEDIUM,
    predicate=lambda sql: "limit" not in sql and _is_select(sql),
    template=_static(
        "Add LIMIT to prevent accidentally loading millions of rows. Best practices: "
        "Use LIMIT 100-1000 for UI, implement cursor-based pagination for large "
        "datasets, consider OFFSET alternatives."
    ),
)

MULTIPLE_JOINS = AntiPatternRule(
    kind=SuggestionKind.MULTIPLE_JOINS,
    severity=Severity.HIGH,
    predicate=lambda sql: _join_count(sql) > 3,
    template=lambda sql: (
        f"{_join_count(sql)} JOINs detected! Solutions: 1) Create materialized views "
        "for read-heavy queries, 2) Denormalize frequently accessed data, "
        "3) Add covering indexes, 4) Split into multiple queries with "
        "application-level joins."
    ),
)

ORDER_WITHOUT_LIMIT = AntiPatternRule(
    kind=SuggestionKind.ORDER_WITHOUT_LIMIT,
    severity=Severity.HIGH,
    predicate=lambda sql: "order by" in sql and "limit" not in sql,
    template=_static(
        "ORDER BY without LIMIT sorts ALL rows in memory! Solutions: 1) Add LIMIT if "
        "you only need top N results, 2) Create index on ORDER BY columns, "
        "3) Use OFFSET-LIMIT for pagination (or better: cursor-based)."
    ),
)

DISTINCT_USAGE = AntiPatternRule(
    kind=SuggestionKind.DISTINCT_USAGE,
    severity=Severity.LOW,
    predicate=lambda sql: "distinct" in sql,
    template=_static(
        "DISTINCT can be expensive on large datasets. Alternatives: 1) Use GROUP BY "
        "if aggregating, 2) Fix data model to prevent duplicates, 3) Add unique "
        "constraints, 4) Use window functions for complex cases."
    ),
)

NOT_EQUAL_OPERATOR = AntiPatternRule(
    kind=SuggestionKind.NOT_EQUAL_OPERATOR,
    severity=Severity.LOW,
    predicate=lambda sql: "!=" in sql or "<>" in sql,
    template=_static(
        "NOT EQUAL (!=, <>) often prevents index usage. Better: Use positive conditions "
        "(= IN) combined with NOT EXISTS subquery for complex exclusions, or add "
        "partial indexes for specific values."
    ),
)

OFFSET_PAGINATION = AntiPatternRule(
    kind=SuggestionKind.OFFSET_PAGINATION,
    severity=Severity.MEDIUM,
    predicate=lambda sql: "offset" in sql,
    template=_static(
        "OFFSET pagination becomes slower on deep pages! For page 1000, database still "
        "scans 1000*limit rows. Solution: Use cursor-based pagination with "
        "WHERE id > last_id LIMIT N for consistent performance."
    ),
)

SUBQUERY_IN_WHERE = AntiPatternRule(
    kind=SuggestionKind.SUBQUERY_IN_WHERE,
    severity=Severity.HIGH,
    predicate=lambda sql: SUBQUERY_IN_WHERE_PATTERN.search(sql) is not None,
    template=_static(
        "Subquery in WHERE can execute for each row! Optimizations: 1) Convert to JOIN "
        "when possible, 2) Use EXISTS instead of IN for large subqueries, 3) Create "
        "temporary table for complex subqueries, 4) Add indexes on subquery columns."
    ),
)

# Evaluation order determines output order.
DEFAULT_RULES: tuple[AntiPatternRule, ...] = (
    SELECT_STAR,
    MISSING_WHERE,
    OR_CONDITION,
    LEADING_WILDCARD,
    MISSING_LIMIT,
    MULTIPLE_JOINS,
    ORDER_WITHOUT_LIMIT,
    DISTINCT_USAGE,
    NOT_EQUAL_OPERATOR,
    OFFSET_PAGINATION,
    SUBQUERY_IN_WHERE,
)

_missing = set(SuggestionKind) - {rule.kind for rule in DEFAULT_RULES}
if _missing or len(DEFAULT_RULES) != len(SuggestionKind):
    raise RuntimeError(f"Rule catalogue out of sync with SuggestionKind: {sorted(_missing)}")
