"""Weekly draft leaderboard job.

One run fetches the current draft dump, scores the daily and weekly
leaderboards, replaces this scoring period's leaderboard rows and adds
the top 20 of each leaderboard to the all-time points tables.

Replacing the period rows makes reruns safe for the leaderboard tables,
but all-time points are not tagged by period: rerunning a period awards
its points again.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from .constants import LEADERBOARD_MODES, LEADERBOARD_TABLES
from .csv_parser import parse_csv, strip_metadata_line
from .data_fetcher import DraftDumpFetcher, dump_date_from_url
from .points import replace_period_rows, update_alltime_points
from .schemas import AppSettings
from .scoring import leaderboard_rows, score_leaderboard
from .store import DocumentStore

logger = logging.getLogger('ootpstats.leaderboard')

TUESDAY = 1  # date.weekday()


def scoring_period_key(today: Optional[date] = None) -> str:
    """
    ISO date of the Tuesday on or before today.

    Examples:
        scoring_period_key(date(2025, 10, 7))   # '2025-10-07' (a Tuesday)
        scoring_period_key(date(2025, 10, 13))  # '2025-10-07' (Monday)
    """
    today = today or date.today()
    days_back = (today.weekday() - TUESDAY) % 7
    return (today - timedelta(days=days_back)).isoformat()


def compute_leaderboards(csv_text: str, min_start_time: int) -> dict:
    """
    Parse dump text and score both modes independently.

    Returns:
        Dict mapping mode ('daily', 'weekly') to ranked UserStars lists
    """
    rows = parse_csv(strip_metadata_line(csv_text))
    logger.info(f'Parsed rows: {len(rows)}')

    recent = leaderboard_rows(rows, min_start_time)
    logger.info(f'Filtered rows (recent): {len(recent)}')

    results = {}
    for mode in LEADERBOARD_MODES:
        results[mode] = score_leaderboard(recent, mode)
        logger.info(f'{mode.capitalize()} users with stars: {len(results[mode])}')
    return results


def save_leaderboards(
    store: DocumentStore,
    week_of: str,
    results: dict,
    batch_size: int,
    now: Optional[datetime] = None,
) -> None:
    """Write period rows, then all-time points, for each mode in turn."""
    for mode in LEADERBOARD_MODES:
        period_table, alltime_table = LEADERBOARD_TABLES[mode]
        replace_period_rows(store, period_table, week_of, results[mode], batch_size)
        update_alltime_points(store, alltime_table, results[mode], now=now)


def summarize(results: dict, week_of: str, dump_date: str) -> dict:
    summary = {'success': True, 'week_of': week_of, 'dump_date': dump_date}
    for mode in LEADERBOARD_MODES:
        users = results[mode]
        summary[mode] = {
            'total_users': len(users),
            'top5': [u.to_dict() for u in users[:5]],
        }
    return summary


def run_leaderboard_update(
    settings: AppSettings,
    store: DocumentStore,
    fetcher: Optional[DraftDumpFetcher] = None,
    today: Optional[date] = None,
    now: Optional[datetime] = None,
    dry_run: bool = False,
) -> dict:
    """
    Run the full leaderboard update.

    Any fetch or store failure propagates; writes already made are not
    rolled back.

    Args:
        settings: Application settings
        store: Document store for leaderboard and all-time tables
        fetcher: Draft dump fetcher (default: built from settings)
        today: Date used for the scoring period key (default: today)
        now: Timestamp for all-time records (default: current UTC time)
        dry_run: Score without writing to the store

    Returns:
        JSON-serializable summary with per-mode user counts and top 5
    """
    logger.info('Starting leaderboard update...')
    fetcher = fetcher or DraftDumpFetcher.from_settings(settings)
    now = now or datetime.now(timezone.utc)

    dump_url = fetcher.dump_url
    dump_date = dump_date_from_url(dump_url, today)
    logger.info(f'Dump date: {dump_date}')

    results = compute_leaderboards(fetcher.fetch_csv(), settings.min_start_time)

    week_of = scoring_period_key(today)
    logger.info(f'Week of: {week_of}')

    if dry_run:
        logger.info('Dry run: skipping store writes')
    else:
        save_leaderboards(store, week_of, results, settings.batch_size, now=now)

    return summarize(results, week_of, dump_date)
