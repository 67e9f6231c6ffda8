"""
Supabase access for score snapshots and the export tables.

Tables:
    score_snapshots - One normalized results block per successful run
    players         - Read by the export tool
    matches         - Read by the export tool

All calls go through the supabase client's table() query builder.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from schemas import ScoreSnapshot, Settings

SNAPSHOTS_TABLE = "score_snapshots"
RETENTION_DAYS = 7

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS score_snapshots (
  id SERIAL PRIMARY KEY,
  content TEXT NOT NULL,
  fetched_at TIMESTAMPTZ DEFAULT NOW()
);

-- Enable RLS for public read
ALTER TABLE score_snapshots ENABLE ROW LEVEL SECURITY;

CREATE POLICY "Allow public read" ON score_snapshots FOR SELECT USING (true);
CREATE POLICY "Allow insert" ON score_snapshots FOR INSERT WITH CHECK (true);
"""


class SupabaseError(Exception):
    """The datastore rejected a request."""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(f"Supabase error: {message}")
        self.message = message
        self.code = code

    @property
    def table_missing(self) -> bool:
        return (
            self.code in ("42P01", "PGRST205")
            or "does not exist" in self.message
            or "Could not find the table" in self.message
        )


def get_client(settings: Settings) -> Client:
    """Get a supabase client for the configured project."""
    return create_client(settings.supabase_url, settings.supabase_anon_key)


def _timestamp(value: datetime) -> str:
    """UTC ISO-8601 with a Z suffix."""
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _execute(query: Any, action: str) -> List[Dict[str, Any]]:
    """Run a query builder and return its rows, mapping client errors to SupabaseError."""
    try:
        response = query.execute()
    except APIError as e:
        raise SupabaseError(e.message or str(e), code=e.code) from None
    except httpx.HTTPError as e:
        raise SupabaseError(f"{action} failed: {e}") from None
    return response.data or []


# --- Score snapshots ---

def insert_snapshot(
    client: Client,
    content: str,
    fetched_at: Optional[datetime] = None,
) -> ScoreSnapshot:
    """
    Insert one snapshot row and return it with its assigned id.

    Raises:
        SupabaseError: If the insert is rejected
    """
    if fetched_at is None:
        fetched_at = datetime.now(timezone.utc)

    rows = _execute(
        client.table(SNAPSHOTS_TABLE).insert({
            "content": content,
            "fetched_at": _timestamp(fetched_at),
        }),
        "insert",
    )
    if not rows:
        raise SupabaseError("insert returned no rows")
    return ScoreSnapshot(**rows[0])


def delete_snapshots_before(client: Client, cutoff: datetime) -> int:
    """Delete snapshots fetched strictly before cutoff. Returns the number removed."""
    rows = _execute(
        client.table(SNAPSHOTS_TABLE).delete().lt("fetched_at", _timestamp(cutoff)),
        "delete",
    )
    return len(rows)


def cleanup_old_snapshots(
    client: Client,
    now: Optional[datetime] = None,
    retention_days: int = RETENTION_DAYS,
) -> int:
    """Delete snapshots older than the retention window relative to now."""
    if now is None:
        now = datetime.now(timezone.utc)
    return delete_snapshots_before(client, now - timedelta(days=retention_days))


def list_recent_snapshots(client: Client, limit: int = 5) -> List[ScoreSnapshot]:
    """List the newest snapshots, newest first."""
    rows = _execute(
        client.table(SNAPSHOTS_TABLE).select("*").order("fetched_at", desc=True).limit(limit),
        "select",
    )
    return [ScoreSnapshot(**row) for row in rows]


# --- Generic reads ---

def select_rows(client: Client, table: str) -> List[Dict[str, Any]]:
    """Read every row of a table."""
    return _execute(client.table(table).select("*"), "select")
