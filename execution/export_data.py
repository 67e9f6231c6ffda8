#!/usr/bin/env python3
"""
Export players and matches from Supabase for backup.

Usage:
    python export_data.py                    # Write files to the current directory
    python export_data.py --output-dir out   # Write files to ./out

Writes backup.json, players.csv and matches.csv, then reports matches that
appear twice between the same two players. Duplicates are only reported.
"""

import argparse
import json
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent))

from utils import load_settings
from schemas import DuplicateMatch
from score_store import SupabaseError, get_client, select_rows

PLAYER_COLUMNS = ["ID", "Name", "Joined"]
MATCH_COLUMNS = ["ID", "Player 1", "Player 2", "Set 1", "Set 2", "Set 3", "Played At"]


def _format_set(sets: List[Any], index: int) -> str:
    """Render one set as 'a-b', blank when missing or not played."""
    if index >= len(sets) or not sets[index]:
        return ""
    score = sets[index]
    if len(score) < 2 or None in score:
        return ""
    return f"{score[0]}-{score[1]}"


def build_player_map(players: List[Dict[str, Any]]) -> Dict[Any, str]:
    return {p["id"]: p.get("name") for p in players}


def players_frame(players: List[Dict[str, Any]]) -> pd.DataFrame:
    rows = [[p.get("id"), p.get("name"), p.get("created_at")] for p in players]
    return pd.DataFrame(rows, columns=PLAYER_COLUMNS)


def matches_frame(matches: List[Dict[str, Any]], player_map: Dict[Any, str]) -> pd.DataFrame:
    rows = []
    for m in matches:
        sets = m.get("sets") or []
        rows.append([
            m.get("id"),
            player_map.get(m.get("player1_id")) or m.get("player1_id"),
            player_map.get(m.get("player2_id")) or m.get("player2_id"),
            _format_set(sets, 0),
            _format_set(sets, 1),
            _format_set(sets, 2),
            m.get("created_at"),
        ])
    return pd.DataFrame(rows, columns=MATCH_COLUMNS)


def _same_players(m1: Dict[str, Any], m2: Dict[str, Any]) -> bool:
    a1, b1 = m1.get("player1_id"), m1.get("player2_id")
    a2, b2 = m2.get("player1_id"), m2.get("player2_id")
    return (a1 == a2 and b1 == b2) or (a1 == b2 and b1 == a2)


def find_duplicate_matches(
    matches: List[Dict[str, Any]],
    player_map: Optional[Dict[Any, str]] = None,
) -> List[DuplicateMatch]:
    """
    Find pairs of matches played between the same two players.

    Player order does not matter. Every pair is compared, so three matches
    between the same players yield three duplicate pairs.
    """
    player_map = player_map or {}

    def label(m):
        return f"{player_map.get(m.get('player1_id'))} vs {player_map.get(m.get('player2_id'))}"

    duplicates = []
    for i in range(len(matches)):
        for j in range(i + 1, len(matches)):
            m1, m2 = matches[i], matches[j]
            if _same_players(m1, m2):
                duplicates.append(DuplicateMatch(
                    first_id=m1["id"],
                    first_players=label(m1),
                    first_time=m1.get("created_at"),
                    second_id=m2["id"],
                    second_players=label(m2),
                    second_time=m2.get("created_at"),
                ))
    return duplicates


def write_exports(
    players: List[Dict[str, Any]],
    matches: List[Dict[str, Any]],
    output_dir: Path,
    exported_at: Optional[datetime] = None,
) -> Dict[str, Path]:
    """
    Write backup.json, players.csv and matches.csv.

    Returns:
        Dict of artifact name to written path
    """
    if exported_at is None:
        exported_at = datetime.now(timezone.utc)
    output_dir.mkdir(parents=True, exist_ok=True)
    player_map = build_player_map(players)

    backup = {
        "exported_at": exported_at.isoformat(),
        "players": players,
        "matches": matches,
    }
    paths = {
        "backup": output_dir / "backup.json",
        "players": output_dir / "players.csv",
        "matches": output_dir / "matches.csv",
    }

    paths["backup"].write_text(json.dumps(backup, indent=2, ensure_ascii=False), encoding="utf-8")
    print("  backup.json - full backup")

    players_frame(players).to_csv(paths["players"], index=False, encoding="utf-8")
    print(f"  players.csv - {len(players)} player(s)")

    matches_frame(matches, player_map).to_csv(paths["matches"], index=False, encoding="utf-8")
    print(f"  matches.csv - {len(matches)} match(es)")

    return paths


def report_duplicates(duplicates: List[DuplicateMatch]):
    if not duplicates:
        print("\nNo duplicate matches found")
        return

    print("\nDuplicate matches found:")
    for d in duplicates:
        print(f"   ID {d.first_id}: {d.first_players} ({d.first_time})")
        print(f"   ID {d.second_id}: {d.second_players} ({d.second_time})")
        print()
    print("Hint: the record with the larger ID is the newer one, usually the one to delete")


def export_data(settings, output_dir: Path, client=None) -> int:
    """Fetch both tables, write the artifacts and print the report."""
    print("Exporting data...\n")

    if client is None:
        client = get_client(settings)
    players = select_rows(client, "players")
    matches = select_rows(client, "matches")

    write_exports(players, matches, output_dir)

    duplicates = find_duplicate_matches(matches, build_player_map(players))
    report_duplicates(duplicates)

    print("\nStats:")
    print(f"   Players: {len(players)}")
    print(f"   Matches: {len(matches)}")

    return len(duplicates)


def main():
    parser = argparse.ArgumentParser(description="Export players and matches to JSON/CSV")
    parser.add_argument("--output-dir", default=".", help="Directory for backup.json and CSV files")
    args = parser.parse_args()

    try:
        settings = load_settings(require_gemini=False)
    except ValueError as e:
        print(f"Error: {e}")
        print()
        print("Run locally with:")
        print("  SUPABASE_URL=https://xxx.supabase.co SUPABASE_ANON_KEY=xxx python export_data.py")
        sys.exit(1)

    try:
        export_data(settings, Path(args.output_dir))
    except SupabaseError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
