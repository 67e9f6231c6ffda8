# Ensure execution/ is at sys.path[0] so modules import by bare name, as the scripts do
import sys
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

_tests_dir = Path(__file__).resolve().parent
_execution = _tests_dir.parent / "execution"
if str(_execution) not in sys.path:
    sys.path.insert(0, str(_execution))

import httpx
import pytest
from postgrest.exceptions import APIError

from schemas import Settings


def _parse(value):
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class FakeQuery:
    """One table() chain: select/insert/delete plus lt, order and limit."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.action = None
        self.payload = None
        self.filters = []
        self.order_by = None
        self.max_rows = None

    def select(self, columns="*"):
        self.action = "select"
        return self

    def insert(self, row):
        self.action = "insert"
        self.payload = row if isinstance(row, list) else [row]
        return self

    def delete(self):
        self.action = "delete"
        return self

    def lt(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, size):
        self.max_rows = size
        return self

    def _matches(self, row):
        return all(_parse(row[column]) < _parse(value) for column, value in self.filters)

    def execute(self):
        self.db.calls.append((self.table, self.action))

        if self.action in self.db.failures:
            message, code = self.db.failures[self.action]
            raise APIError({"message": message, "code": code, "hint": None, "details": None})
        if self.table not in self.db.tables:
            raise APIError({
                "message": f'relation "public.{self.table}" does not exist',
                "code": "42P01",
                "hint": None,
                "details": None,
            })
        rows = self.db.tables[self.table]

        if self.action == "select":
            data = list(rows)
            if self.order_by:
                column, desc = self.order_by
                data.sort(key=lambda r: r[column], reverse=desc)
            if self.max_rows is not None:
                data = data[:self.max_rows]
        elif self.action == "insert":
            data = []
            for row in self.payload:
                row = dict(row, id=self.db.next_id())
                rows.append(row)
                data.append(row)
        else:
            data = [r for r in rows if self._matches(r)]
            self.db.tables[self.table] = [r for r in rows if r not in data]

        return SimpleNamespace(data=data, count=None)


class FakeSupabase:
    """
    In-memory stand-in for the supabase client's table() query builder.

    Failures can be injected per action (select, insert, delete).
    """

    def __init__(self, tables=None):
        self.tables = {name: list(rows) for name, rows in (tables or {}).items()}
        self.calls = []
        self.failures = {}
        self._last_id = max(
            (row.get("id", 0) for rows in self.tables.values() for row in rows),
            default=0,
        )

    def table(self, name):
        return FakeQuery(self, name)

    def fail(self, action, message, code="42501"):
        self.failures[action] = (message, code)

    def next_id(self):
        self._last_id += 1
        return self._last_id

    @property
    def actions(self):
        return [action for _, action in self.calls]


@pytest.fixture
def settings():
    return Settings(
        gemini_api_key="test-gemini-key-123",
        supabase_url="https://example.supabase.co",
        supabase_anon_key="anon-key",
    )


@pytest.fixture
def fake_db():
    return FakeSupabase({"score_snapshots": []})


def gemini_envelope(text):
    """Build a generateContent response body around one text part."""
    return {
        "candidates": [
            {
                "content": {"parts": [{"text": text}], "role": "model"},
                "finishReason": "STOP",
            }
        ]
    }


def gemini_http(handler):
    """httpx client whose requests are answered by handler."""
    return httpx.Client(transport=httpx.MockTransport(handler))
