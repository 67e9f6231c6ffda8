#!/usr/bin/env python3
"""
Fetch today's tennis scores from Gemini and store them in Supabase.

Run once per trigger (hourly in CI):
    python fetch_scores.py

Required environment variables:
    GEMINI_API_KEY, SUPABASE_URL, SUPABASE_ANON_KEY

Exit codes:
    0 - snapshot stored, or no valid scores in the response (skipped)
    1 - configuration, fetch or insert failure
"""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import httpx
from supabase import Client

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent))

from utils import load_settings
from schemas import PipelineResult, RunStatus, Settings
from prompts import build_scores_prompt, get_active_tournaments
from gemini_client import GeminiError, query_gemini
from validator import normalize_content, validate_content
from score_store import RETENTION_DAYS, SupabaseError, cleanup_old_snapshots, get_client, insert_snapshot

PREVIEW_CHARS = 500


def run_pipeline(
    settings: Settings,
    now: Optional[datetime] = None,
    gemini_http: Optional[httpx.Client] = None,
    store_client: Optional[Client] = None,
) -> PipelineResult:
    """
    Run one fetch, normalize, validate and store pass.

    Args:
        settings: Process settings
        now: Clock for the run (UTC); defaults to the current time
        gemini_http: Optional httpx client for the Gemini call
        store_client: Optional supabase client, built from settings when omitted

    Returns:
        PipelineResult with status inserted, skipped or failed
    """
    if now is None:
        now = datetime.now(timezone.utc)

    print(f"Time: {now.isoformat()}")
    print(f"Active tournaments: {get_active_tournaments(now.date())}")

    # Step 1: Build prompt and query Gemini
    print("\n1. Querying Gemini...")
    prompt = build_scores_prompt(now.date())
    try:
        raw = query_gemini(prompt, settings, client=gemini_http)
    except GeminiError as e:
        print(f"   Error: {e}")
        return PipelineResult(status=RunStatus.FAILED, reason=str(e))

    print("   ---")
    print(f"   {raw[:PREVIEW_CHARS]}...")
    print("   ---")

    # Step 2: Clean and validate
    print("\n2. Validating content...")
    content = normalize_content(raw)
    validation = validate_content(content)
    if not validation.is_valid:
        reason = "; ".join(validation.errors)
        print("   No valid tennis scores in response. Skipping save.")
        print(f"   Reason: {reason}")
        print(f"   Raw content length: {len(raw)}")
        print(f"   Clean content length: {len(content)}")
        return PipelineResult(status=RunStatus.SKIPPED, reason=reason)
    print(f"   Content OK ({len(content)} characters)")

    client = store_client if store_client is not None else get_client(settings)

    # Step 3: Save snapshot
    print("\n3. Saving to Supabase...")
    try:
        snapshot = insert_snapshot(client, content, fetched_at=now)
    except SupabaseError as e:
        print(f"   Error: {e}")
        return PipelineResult(status=RunStatus.FAILED, reason=str(e))
    print(f"   Saved! Record ID: {snapshot.id}")

    # Step 4: Retention sweep, failure only warns
    print("\n4. Cleaning up old records...")
    try:
        removed = cleanup_old_snapshots(client, now=now)
    except SupabaseError as e:
        warning = f"Cleanup warning: {e}"
        print(f"   Warning: {warning}")
        return PipelineResult(status=RunStatus.INSERTED, snapshot=snapshot, warnings=[warning])
    print(f"   Cleaned up {removed} record(s) older than {RETENTION_DAYS} days")

    return PipelineResult(status=RunStatus.INSERTED, snapshot=snapshot, rows_removed=removed)


def main():
    print("Tennis Score Fetcher")
    print("=" * 24)

    try:
        settings = load_settings()
    except ValueError as e:
        print(f"Error: {e}")
        print("Required: GEMINI_API_KEY, SUPABASE_URL, SUPABASE_ANON_KEY")
        sys.exit(1)

    result = run_pipeline(settings)

    if result.status == RunStatus.INSERTED:
        print("\nDone!")
    elif result.status == RunStatus.SKIPPED:
        print("\nSkipped: no snapshot stored.")
    else:
        print(f"\nError: {result.reason}")

    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()
