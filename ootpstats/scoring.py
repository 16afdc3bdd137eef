"""Star scoring for draft tournament leaderboards.

Each tournament title keeps its most recent instances (7 for daily
drafts, 1 for weekly ones). Placements earn stars from a table keyed by
bracket size and finishing position; stars are totalled per user.
"""

from typing import Iterable, Optional

from .constants import (
    EXCLUDED_DAILY_TOURNAMENTS,
    INSTANCES_PER_MODE,
    LEADERBOARD_MODES,
    MIN_START_TIME,
    STAR_TABLES,
)
from .models import CsvRow, LeaderboardRow, TournamentGroup, UserStars
from .normalizer import to_number


def stars_for_position(size: int, idx: int, mode: str = 'daily') -> int:
    """
    Stars for finishing at 0-based position idx in a bracket of size players.

    Brackets whose size is not in the table, and positions past the last
    paying band, earn 0.

    Examples:
        stars_for_position(32, 0)             # 70
        stars_for_position(128, 20)           # 10
        stars_for_position(256, 40, 'weekly') # 10
    """
    for first, last, stars in STAR_TABLES[mode].get(size, ()):
        if first <= idx <= last:
            return stars
    return 0


def is_daily_title(title: str) -> bool:
    return 'daily' in title.lower()


def leaderboard_rows(rows: Iterable[CsvRow], min_start_time: int = MIN_START_TIME) -> list[LeaderboardRow]:
    """
    Convert parsed dump rows into leaderboard rows.

    Rows without a numeric starttime, or that started before min_start_time,
    are dropped.
    """
    result = []
    for row in rows:
        starttime = row.get('starttime')
        if isinstance(starttime, bool) or not isinstance(starttime, (int, float)):
            continue
        if starttime < min_start_time:
            continue

        title = row.get('title')
        num = to_number(row.get('num'))
        result.append(LeaderboardRow(
            title=str(title).strip() if title is not None else '',
            num=int(num) if num is not None else 0,
            starttime=starttime,
            placements=list(row.placements),
        ))
    return result


def group_tournaments(rows: Iterable[LeaderboardRow], mode: str) -> list[TournamentGroup]:
    """
    Group rows of one mode by title and keep each title's latest instances.

    Args:
        rows: Leaderboard rows (already limited to the recency window)
        mode: 'daily' or 'weekly'

    Returns:
        TournamentGroup list in first-seen title order
    """
    if mode not in LEADERBOARD_MODES:
        raise ValueError(f'Unknown leaderboard mode: {mode}')
    want_daily = mode == 'daily'

    grouped: dict[str, list[LeaderboardRow]] = {}
    for row in rows:
        title = (row.title or '').strip()
        if not title:
            continue
        if is_daily_title(title) != want_daily:
            continue
        if want_daily and title in EXCLUDED_DAILY_TOURNAMENTS:
            continue
        grouped.setdefault(title, []).append(row)

    keep = INSTANCES_PER_MODE[mode]
    groups = []
    for title, instances in grouped.items():
        chosen = sorted(instances, key=lambda r: r.num or 0, reverse=True)[:keep]
        size = max((len(r.placements) for r in chosen), default=0)
        groups.append(TournamentGroup(title=title, size=size, instances=chosen))

    return groups


def accumulate_stars(groups: Iterable[TournamentGroup], mode: str) -> dict[str, int]:
    """Total stars per username; dict order is order of first award."""
    totals: dict[str, int] = {}

    for group in groups:
        for instance in group.instances:
            for idx, user in enumerate(instance.placements):
                username = str(user).strip() if user is not None else ''
                if not username:
                    continue
                stars = stars_for_position(group.size, idx, mode)
                if stars == 0:
                    continue
                totals[username] = totals.get(username, 0) + stars

    return totals


def score_leaderboard(
    rows: Iterable[LeaderboardRow],
    mode: str,
    groups: Optional[list[TournamentGroup]] = None,
) -> list[UserStars]:
    """
    Rank users by stars earned in one mode.

    Ties keep the order in which users first earned stars.

    Args:
        rows: Leaderboard rows inside the recency window
        mode: 'daily' or 'weekly'
        groups: Pre-computed groups (skips grouping rows when given)

    Returns:
        UserStars list sorted by stars, highest first
    """
    if groups is None:
        groups = group_tournaments(rows, mode)
    totals = accumulate_stars(groups, mode)

    ranked = [UserStars(username=name, stars=stars) for name, stars in totals.items()]
    ranked.sort(key=lambda u: u.stars, reverse=True)
    return ranked
