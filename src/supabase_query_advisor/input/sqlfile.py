import re
from pathlib import Path

from supabase_query_advisor.domain import Query

DOLLAR_QUOTE_PATTERN = re.compile(r"\$[A-Za-z_]*\$")


def split_statements(script: str) -> list[str]:
    """Split a SQL script on top-level semicolons.

    Semicolons inside quoted strings, ``$$``/``$tag$`` dollar-quoted bodies,
    ``--`` line comments and ``/* */`` block comments do not end a statement.
    Comments are dropped from the returned statements.
    """
    statements: list[str] = []
    current: list[str] = []
    index = 0
    length = len(script)

    while index < length:
        char = script[index]

        if char in ("'", '"'):
            end = script.find(char, index + 1)
            end = length if end == -1 else end + 1
            current.append(script[index:end])
            index = end
            continue

        if script.startswith("--", index):
            end = script.find("\n", index)
            index = length if end == -1 else end
            continue

        if script.startswith("/*", index):
            end = script.find("*/", index + 2)
            index = length if end == -1 else end + 2
            current.append(" ")
            continue

        if char == "$":
            match = DOLLAR_QUOTE_PATTERN.match(script, index)
            if match:
                tag = match.group()
                end = script.find(tag, match.end())
                end = length if end == -1 else end + len(tag)
                current.append(script[index:end])
                index = end
                continue

        if char == ";":
            statements.append("".join(current))
            current = []
        else:
            current.append(char)
        index += 1

    statements.append("".join(current))
    return [s.strip() for s in statements if s.strip()]


class SqlFileInput:
    """Input adapter that reads statements from a ``.sql`` script."""

    def __init__(self, file_path: str | Path) -> None:
        self._file_path = Path(file_path)
        self._statements: list[str] | None = None
        self._index: int = 0

    @classmethod
    def from_text(cls, script: str, name: str = "<script>") -> "SqlFileInput":
        """Create adapter from an in-memory script (for testing)."""
        instance = cls(name)
        instance._statements = split_statements(script)
        return instance

    def __aiter__(self) -> "SqlFileInput":
        return self

    async def __anext__(self) -> Query:
        if self._statements is None:
            self._load()

        if self._index >= len(self._statements):  # type: ignore[arg-type]
            raise StopAsyncIteration

        sql = self._statements[self._index]  # type: ignore[index]
        self._index += 1
        return Query(sql=sql, source=f"file:{self._file_path.name}:{self._index}")

    def _load(self) -> None:
        if not self._file_path.exists():
            raise FileNotFoundError(f"SQL file not found: {self._file_path}")
        self._statements = split_statements(self._file_path.read_text(encoding="utf-8"))
