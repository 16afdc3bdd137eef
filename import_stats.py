#!/usr/bin/env python3
"""
OOTP Tournament Stats Importer CLI

Merges exported batting or pitching CSVs into a tournament roster in the
JSON document store, optionally exporting the merged rosters to Excel.

Usage:
    python import_stats.py --tournament "Bronze Open" --create --password secret batting.csv
    python import_stats.py --tournament "Bronze Open" --password secret --type pitching pitching.csv
    python import_stats.py --tournament "Bronze Open" --export bronze.xlsx
"""

import argparse
import sys
from pathlib import Path

from ootpstats import AuthError, JsonFileStore, TournamentService, UploadRejected, authenticate, load_settings
from ootpstats.constants import STAT_TYPES
from ootpstats.export import export_tournament_xlsx
from ootpstats.logging_config import setup_logging


def find_tournament(service: TournamentService, name_or_id: str):
    """Look a tournament up by id, then by exact name."""
    for tournament in service.list_tournaments():
        if tournament.id == name_or_id or tournament.name == name_or_id:
            return tournament
    return None


def main():
    parser = argparse.ArgumentParser(description="Import OOTP tournament stat CSVs")
    parser.add_argument(
        "files",
        nargs="*",
        help="CSV files to upload, in order",
    )
    parser.add_argument(
        "--tournament", "-t",
        required=True,
        help="Tournament name or id",
    )
    parser.add_argument(
        "--type",
        choices=STAT_TYPES,
        default=None,
        help="Stat type of the files (detected from headers by default)",
    )
    parser.add_argument(
        "--password", "-p",
        default="",
        help="Upload or master password",
    )
    parser.add_argument(
        "--create",
        action="store_true",
        help="Create the tournament if it does not exist",
    )
    parser.add_argument(
        "--export", "-e",
        default=None,
        help="Write the merged rosters to this .xlsx file",
    )
    parser.add_argument(
        "--data-dir", "-d",
        default=None,
        help="Path to data directory (defaults to the configured data_dir)",
    )

    args = parser.parse_args()
    setup_logging()

    settings = load_settings()
    store = JsonFileStore(Path(args.data_dir or settings.data_dir) / "store")
    service = TournamentService(store, settings)

    tournament = find_tournament(service, args.tournament)

    if args.files or (tournament is None and args.create):
        try:
            session = authenticate(store, args.password, 'upload')
        except AuthError as e:
            print(f"❌ {e}")
            sys.exit(1)

        if tournament is None:
            if not args.create:
                print(f"❌ Tournament not found: {args.tournament}")
                sys.exit(1)
            tournament = service.create_tournament(session, args.tournament)
            print(f"Created tournament {tournament.name} ({tournament.id})")

        failures = 0
        for file_arg in args.files:
            path = Path(file_arg)
            try:
                result = service.upload_stats(session, tournament.id, path.name, path.read_bytes(), args.type)
            except UploadRejected as e:
                failures += 1
                print(f"❌ {path.name}: {e.message}")
                for error in e.errors[1:]:
                    print(f"   {error}")
                continue
            except OSError as e:
                failures += 1
                print(f"❌ {path.name}: {e}")
                continue

            print(
                f"✓ {path.name} ({result.stat_type}): {result.added} added, "
                f"{result.updated} updated, {result.total} total"
            )
            if result.skipped_rows:
                print(f"   {result.skipped_rows} rows without a player name skipped")

        tournament = service.get_tournament(tournament.id)
        if failures:
            print(f"⚠️  {failures} file(s) rejected")

    if tournament is None:
        print(f"❌ Tournament not found: {args.tournament}")
        sys.exit(1)

    if args.export:
        path = export_tournament_xlsx(tournament, args.export)
        print(f"Exported {tournament.name} to {path}")


if __name__ == "__main__":
    main()
