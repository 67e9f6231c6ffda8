#!/usr/bin/env python3
"""
Seed the score_snapshots table with test data.

Usage:
    python seed_snapshots.py          Check existing data (seeds if empty)
    python seed_snapshots.py --seed   Insert test data
    python seed_snapshots.py --sql    Show CREATE TABLE SQL

Create the table first by running the --sql output in the Supabase
dashboard SQL editor.
"""

import argparse
import sys
from pathlib import Path

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent))

from utils import load_settings
from score_store import (
    CREATE_TABLE_SQL,
    SupabaseError,
    get_client,
    insert_snapshot,
    list_recent_snapshots,
)

PREVIEW_CHARS = 100

# Based on a real January 9, 2026 response
TEST_CONTENT = """## 🏆 United Cup - Quarter-Finals

### USA 2 - 1 Greece ✓
- Coco Gauff def. Maria Sakkari: 6-3, 6-2
- Taylor Fritz def. Stefanos Tsitsipas: 6-4, 7-5
- Gauff/Harrison def. Sakkari/Tsitsipas: 4-6, 6-4, 10-8

### Switzerland 2 - 1 Argentina ✓
- Belinda Bencic def. Solana Sierra: 6-2, 6-2
- Stan Wawrinka def. Sebastian Baez: 7-5, 6-4
- Bencic/Paul def. Carle/Andreozzi: 6-3, 6-3

### Belgium 2 - 1 Czechia ✓
- Zizou Bergs def. Jakub Mensik: 6-2, 7-6(4)
- Elise Mertens def. Barbora Krejcikova: 5-7, 6-1, 7-5

### Australia vs Poland 🔴 LIVE
- Maya Joint vs Iga Swiatek - not started
- Alex de Minaur vs Hubert Hurkacz - not started

## 🇭🇰 ATP Hong Kong Open

- Michael Mmoh def. Karen Khachanov: 7-6(2), 7-6(4) ✓
- Shang Juncheng def. Lorenzo Sonego: 6-3, 6-4 ✓
- Alexander Bublik def. Botic van de Zandschulp: 6-3, 6-3 ✓
- Marcos Giron def. Alexandre Muller: 6-4, 7-6(4) ✓
- Andrey Rublev def. Yibing Wu: 3-6, 6-2, 6-1 ✓
- Nuno Borges def. Marin Cilic: 7-5, 6-3 ✓

## 🇳🇿 ASB Classic Auckland (WTA)

- Alex Eala def. Petra Marcinko: 6-0, 6-2 ✓
- Elina Svitolina def. Katie Boulter: 7-5, 6-4 ✓
- Magda Linette def. Elisabetta Cocciaretto: 7-5, 2-6, 6-3 ✓

**Next:** Eala vs Linette (QF), Eala/Jovic vs Xu/Yang (SF doubles)"""


def cmd_sql(args=None):
    """Print the table DDL."""
    print("SQL to create table (run in Supabase Dashboard -> SQL Editor):")
    print(CREATE_TABLE_SQL)


def _explain_missing_table(e: SupabaseError) -> bool:
    if not e.table_missing:
        return False
    print("  Error: Table does not exist yet!")
    print()
    cmd_sql()
    print("Run the SQL above in Supabase Dashboard first, then run this script again.")
    return True


def cmd_seed(client) -> bool:
    """Insert the test snapshot."""
    print("\nInserting test data...\n")
    try:
        snapshot = insert_snapshot(client, TEST_CONTENT)
    except SupabaseError as e:
        if not _explain_missing_table(e):
            print(f"  Error: {e}")
        return False

    print("  Test data inserted successfully!")
    print(f"  Record ID:  {snapshot.id}")
    print(f"  Fetched at: {snapshot.fetched_at.isoformat()}")
    print()
    print("  Now refresh the app and check the News tab!")
    return True


def cmd_check(client) -> bool:
    """Show recent snapshots, seeding the table when it is empty."""
    print("Checking existing data...\n")
    try:
        snapshots = list_recent_snapshots(client, limit=5)
    except SupabaseError as e:
        if not _explain_missing_table(e):
            print(f"  Error: {e}")
        return False

    if not snapshots:
        print("  No records found. Inserting test data...")
        return cmd_seed(client)

    print(f"  Found {len(snapshots)} record(s):\n")
    for i, snapshot in enumerate(snapshots, 1):
        print(f"--- Record {i} ---")
        print(f"ID:      {snapshot.id}")
        print(f"Fetched: {snapshot.fetched_at.astimezone():%Y-%m-%d %H:%M:%S}")
        print(f"Preview: {snapshot.content[:PREVIEW_CHARS]}...")
        print()
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(description="Tennis News Seeder")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--seed", "-s", action="store_true", help="Insert test data")
    group.add_argument("--sql", action="store_true", help="Show CREATE TABLE SQL")
    args = parser.parse_args(argv)

    if args.sql:
        cmd_sql(args)
        return

    try:
        settings = load_settings(require_gemini=False)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    client = get_client(settings)
    ok = cmd_seed(client) if args.seed else cmd_check(client)

    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
