#!/usr/bin/env python3
"""
OOTP Draft Leaderboard Updater CLI

Fetches the current competitive draft dump, scores the daily and weekly
leaderboards for this week and writes them to the JSON document store.

Usage:
    python update_leaderboard.py
    python update_leaderboard.py --dry-run
    python update_leaderboard.py --data-dir data --log-file
"""

import argparse
import logging
import sys
from pathlib import Path

from ootpstats import FetchError, JsonFileStore, MemoryStore, StoreError, load_settings, run_leaderboard_update
from ootpstats.constants import LEADERBOARD_MODES
from ootpstats.logging_config import get_logger, setup_logging

logger = get_logger('cli.update_leaderboard')


def main():
    parser = argparse.ArgumentParser(description="Update the OOTP draft leaderboards from the latest dump")
    parser.add_argument(
        "--data-dir", "-d",
        default=None,
        help="Path to data directory (defaults to the configured data_dir)",
    )
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to a settings JSON file",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Score the dump without writing leaderboard tables",
    )
    parser.add_argument(
        "--log-file",
        action="store_true",
        help="Also write a timestamped log file under logs/",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress detailed output",
    )

    args = parser.parse_args()

    setup_logging(
        level=logging.WARNING if args.quiet else logging.INFO,
        log_to_file=args.log_file,
    )

    settings = load_settings(args.config)
    data_dir = Path(args.data_dir or settings.data_dir)
    store = MemoryStore() if args.dry_run else JsonFileStore(data_dir / "store")

    try:
        summary = run_leaderboard_update(settings, store, dry_run=args.dry_run)
    except (FetchError, StoreError) as e:
        logger.error(f"Leaderboard update failed: {e}")
        sys.exit(1)

    print(f"\nWeek of {summary['week_of']} (dump {summary['dump_date']})")
    for mode in LEADERBOARD_MODES:
        print("\n" + "=" * 40)
        print(f"{mode.upper()} - {summary[mode]['total_users']} users")
        print("=" * 40)
        for rank, user in enumerate(summary[mode]['top5'], 1):
            print(f"  {rank}. {user['username']}: {user['stars']} stars")


if __name__ == "__main__":
    main()
