"""In-memory stand-in for the Supabase query builder used by the pipeline.

Supports the subset of the PostgREST builder the stores call: select,
insert, update, eq, neq, gt, gte, lt, lte, in_, order, limit and execute.
Rows are stored as plain dicts so tests can seed and inspect tables directly.
"""

import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


def _comparable(value: Any) -> Any:
    """Compare ISO timestamps as datetimes, everything else as-is."""
    if isinstance(value, str) and len(value) >= 19 and value[4] == "-" and value[10] == "T":
        try:
            parsed = date_parser.isoparse(value)
        except ValueError:
            return value
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed
    return value


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self._db = db
        self._table = table
        self._op = "select"
        self._columns = "*"
        self._payload: Any = None
        self._filters: List[Any] = []
        self._order: Optional[tuple] = None
        self._limit: Optional[int] = None

    # Operations
    def select(self, columns: str = "*"):
        self._op = "select"
        self._columns = columns
        return self

    def insert(self, rows, returning: str = "representation"):
        self._op = "insert"
        self._payload = rows
        return self

    def update(self, values: Dict[str, Any]):
        self._op = "update"
        self._payload = values
        return self

    # Filters
    def eq(self, column: str, value: Any):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def neq(self, column: str, value: Any):
        self._filters.append(lambda row: row.get(column) != value)
        return self

    def _compare(self, column: str, value: Any, op):
        def check(row):
            current = row.get(column)
            if current is None:
                return False
            return op(_comparable(current), _comparable(value))

        self._filters.append(check)
        return self

    def gt(self, column: str, value: Any):
        return self._compare(column, value, lambda a, b: a > b)

    def gte(self, column: str, value: Any):
        return self._compare(column, value, lambda a, b: a >= b)

    def lt(self, column: str, value: Any):
        return self._compare(column, value, lambda a, b: a < b)

    def lte(self, column: str, value: Any):
        return self._compare(column, value, lambda a, b: a <= b)

    def in_(self, column: str, values: List[Any]):
        allowed = list(values)
        self._filters.append(lambda row: row.get(column) in allowed)
        return self

    # Modifiers
    def order(self, column: str, desc: bool = False):
        self._order = (column, desc)
        return self

    def limit(self, count: int):
        self._limit = count
        return self

    def execute(self) -> FakeResponse:
        self._db.calls.append((self._table, self._op))
        if (self._table, self._op) in self._db.failures:
            raise Exception(f"simulated {self._op} failure on {self._table}")

        rows = self._db.tables.setdefault(self._table, [])

        if self._op == "insert":
            new_rows = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for row in new_rows:
                stored = copy.deepcopy(row)
                stored.setdefault("id", str(uuid.uuid4()))
                stored.setdefault("created_at", datetime.now(timezone.utc).isoformat())
                rows.append(stored)
                inserted.append(copy.deepcopy(stored))
            return FakeResponse(inserted)

        matched = [row for row in rows if all(check(row) for check in self._filters)]

        if self._op == "update":
            for row in matched:
                row.update(copy.deepcopy(self._payload))
            return FakeResponse([copy.deepcopy(row) for row in matched])

        if self._order:
            column, desc = self._order
            present = [row for row in matched if row.get(column) is not None]
            missing = [row for row in matched if row.get(column) is None]
            present = sorted(present, key=lambda row: _comparable(row[column]), reverse=desc)
            matched = present + missing

        if self._limit is not None:
            matched = matched[: self._limit]

        if self._columns.strip() == "*":
            return FakeResponse([copy.deepcopy(row) for row in matched])

        columns = [c.strip() for c in self._columns.split(",")]
        return FakeResponse([{c: copy.deepcopy(row.get(c)) for c in columns} for row in matched])


class FakeSupabase:
    """Minimal Supabase client double backed by dict rows."""

    def __init__(self, tables: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.tables: Dict[str, List[Dict[str, Any]]] = copy.deepcopy(tables or {})
        self.failures: set = set()
        self.calls: List[tuple] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> List[Dict[str, Any]]:
        return self.tables.get(name, [])

    def fail_on(self, table: str, op: str) -> None:
        """Make every `op` ('select', 'insert', 'update') on `table` raise."""
        self.failures.add((table, op))
