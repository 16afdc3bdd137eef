"""Shared fixtures and CSV builders for ootpstats tests."""

import pytest

from ootpstats.auth import configure_passwords
from ootpstats.constants import BATTING_HEADERS, PITCHING_HEADERS
from ootpstats.store import MemoryStore

MASTER_PASSWORD = 'master-pw'
UPLOAD_PASSWORD = 'upload-pw'


def make_csv(headers: list[str], rows: list[dict]) -> str:
    """CSV text with the given header row; missing cells are left blank."""
    lines = [','.join(headers)]
    for row in rows:
        cells = []
        for header in headers:
            value = str(row.get(header, ''))
            cells.append(f'"{value}"' if ',' in value else value)
        lines.append(','.join(cells))
    return '\n'.join(lines) + '\n'


def batting_csv(rows: list[dict]) -> str:
    return make_csv(BATTING_HEADERS, rows)


def pitching_csv(rows: list[dict]) -> str:
    return make_csv(PITCHING_HEADERS, rows)


def dump_csv(tournaments: list[tuple], metadata: str = 'Draft dump generated 2025-10-08') -> str:
    """
    Draft dump text: a metadata line, a header, then one line per tournament.

    Each tournament is (title, num, starttime, [usernames in finishing order]).
    Usernames past the named placement columns land in overflow columns.
    """
    lines = [metadata, 'title,num,starttime,1st,2nd,3rd,...']
    for title, num, starttime, players in tournaments:
        lines.append(','.join([title, str(num), str(starttime)] + list(players)))
    return '\n'.join(lines) + '\n'


@pytest.fixture
def store():
    """Memory store with master and upload passwords configured."""
    store = MemoryStore()
    configure_passwords(store, MASTER_PASSWORD, UPLOAD_PASSWORD)
    return store


@pytest.fixture
def smith_batting():
    """Two batting lines for Smith, 3-for-10 and 5-for-10."""
    first = {
        'POS': 'CF', 'Name': 'Smith', 'B': 'L', 'OVR': 85, 'VAR': 'Base',
        'G': 3, 'GS': 3, 'PA': 11, 'AB': 10, 'H': 3, '2B': 1, '3B': 0, 'HR': 0,
        'BB%': '9.1', 'SO': 2, 'GIDP': 0, 'AVG': '.300', 'OBP': '.364', 'SLG': '.400',
        'wOBA': '.340', 'OPS': '.764', 'OPS+': 110, 'BABIP': '.375', 'wRC+': 108,
        'wRAA': '0.5', 'WAR': '0.2', 'SB%': '100.0', 'BsR': '0.1',
    }
    second = dict(first, PA=11, AB=10, H=5, **{'2B': 1, '3B': 1, 'HR': 1, 'SO': 3, 'WAR': '0.4'})
    return first, second
