"""Data models for parsing and leaderboard scoring."""

from dataclasses import dataclass, field
from typing import Dict, List, Union

CsvValue = Union[str, int, float]


@dataclass
class CsvRow:
    """One parsed CSV line: header -> value, plus placement usernames."""
    values: Dict[str, CsvValue] = field(default_factory=dict)
    placements: List[str] = field(default_factory=list)

    def get(self, key: str, default=None):
        return self.values.get(key, default)

    def __getitem__(self, key: str) -> CsvValue:
        return self.values[key]

    def __contains__(self, key: str) -> bool:
        return key in self.values


@dataclass
class LeaderboardRow:
    """One occurrence of a draft tournament from the dump."""
    title: str
    num: int = 0
    starttime: float = 0
    placements: List[str] = field(default_factory=list)  # index 0 = winner


@dataclass
class TournamentGroup:
    """Most recent instances of one tournament title."""
    title: str
    size: int = 0  # bracket width = longest placement list
    instances: List[LeaderboardRow] = field(default_factory=list)


@dataclass
class UserStars:
    """Accumulated stars for one user in a scoring period."""
    username: str
    stars: int = 0

    def to_dict(self) -> dict:
        return {'username': self.username, 'stars': self.stars}


@dataclass
class UploadResult:
    """Outcome of merging one uploaded CSV into a tournament."""
    stat_type: str
    added: int = 0
    updated: int = 0
    total: int = 0
    skipped_rows: int = 0

    def to_dict(self) -> dict:
        return {
            'stat_type': self.stat_type,
            'added': self.added,
            'updated': self.updated,
            'total': self.total,
            'skipped_rows': self.skipped_rows,
        }
