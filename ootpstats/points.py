"""Persist period leaderboards and accumulate all-time drafter points."""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from .constants import ALLTIME_TOP_N, BATCH_SIZE
from .models import UserStars
from .schemas import AllTimePoints, LeaderboardEntry
from .store import DocumentStore
from .utils import chunked

logger = logging.getLogger('ootpstats.points')


def points_for_rank(rank: int, top_n: int = ALLTIME_TOP_N) -> int:
    """Rank 1 earns top_n points, rank top_n earns 1, lower ranks 0."""
    if rank < 1 or rank > top_n:
        return 0
    return top_n + 1 - rank


def replace_period_rows(
    store: DocumentStore,
    table: str,
    week_of: str,
    users: Sequence[UserStars],
    batch_size: int = BATCH_SIZE,
) -> int:
    """
    Replace a scoring period's leaderboard rows.

    Rows tagged with week_of are deleted first, then the ranked users are
    inserted in batches. A failing batch propagates its error; batches
    already written stay written.

    Args:
        store: Document store
        table: Leaderboard table for the mode
        week_of: Scoring period key (ISO date of the period's Tuesday)
        users: Ranked users, best first
        batch_size: Rows per insert

    Returns:
        Number of rows inserted
    """
    removed = store.delete_where(table, week_of=week_of)
    if removed:
        logger.info(f'Deleted {removed} existing rows in {table} for week {week_of}')

    entries = [
        LeaderboardEntry(week_of=week_of, username=user.username, stars=user.stars, rank=idx).model_dump()
        for idx, user in enumerate(users, 1)
    ]

    inserted = 0
    for batch in chunked(entries, batch_size):
        store.insert(table, batch)
        inserted += len(batch)

    logger.info(f'Inserted {inserted} leaderboard rows into {table}')
    return inserted


def update_alltime_points(
    store: DocumentStore,
    table: str,
    users: Sequence[UserStars],
    now: Optional[datetime] = None,
    top_n: int = ALLTIME_TOP_N,
) -> list[AllTimePoints]:
    """
    Add this period's points to each top-N user's all-time record.

    Each record is read and then written back with no lock in between, so
    two runs racing on the same user can lose an update. Running this twice
    for one period awards the points twice.

    Args:
        store: Document store
        table: All-time points table for the mode
        users: Ranked users, best first (only the first top_n are used)
        now: Timestamp for last_updated (default: current UTC time)
        top_n: Number of paying places

    Returns:
        The updated or created records, in rank order
    """
    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    records = []

    for rank, user in enumerate(users[:top_n], 1):
        points = points_for_rank(rank, top_n)
        existing = store.get(table, user.username)

        if existing:
            current = AllTimePoints.model_validate(existing)
            best = min(current.best_finish, rank) if current.best_finish else rank
            record = current.model_copy(update={
                'total_points': current.total_points + points,
                'weeks_participated': current.weeks_participated + 1,
                'best_finish': best,
                'last_updated': timestamp,
            })
        else:
            record = AllTimePoints(
                id=user.username,
                username=user.username,
                total_points=points,
                weeks_participated=1,
                best_finish=rank,
                last_updated=timestamp,
            )

        store.upsert(table, record.model_dump())
        records.append(record)

    logger.info(f'Updated all-time points in {table} for {len(records)} users')
    return records
