"""Constants and lookup tables for OOTP tournament stats and draft leaderboards."""

# Required CSV header shapes (order matters for a strict match)
PITCHING_HEADERS = [
    'POS', 'Name', 'T', 'OVR', 'VAR', 'G', 'GS', 'IP', 'BF', 'ERA', 'AVG', 'OBP',
    'BABIP', 'WHIP', 'BRA/9', 'HR/9', 'H/9', 'BB/9', 'K/9', 'LOB%', 'ERA+', 'FIP',
    'FIP-', 'WAR', 'SIERA',
]

BATTING_HEADERS = [
    'POS', 'Name', 'B', 'OVR', 'VAR', 'G', 'GS', 'PA', 'AB', 'H', '2B', '3B', 'HR',
    'BB%', 'SO', 'GIDP', 'AVG', 'OBP', 'SLG', 'wOBA', 'OPS', 'OPS+', 'BABIP', 'wRC+',
    'wRAA', 'WAR', 'SB%', 'BsR',
]

REQUIRED_HEADERS = {
    'batting': BATTING_HEADERS,
    'pitching': PITCHING_HEADERS,
}

STAT_TYPES = ('batting', 'pitching')

# Upload limits
MAX_UPLOAD_BYTES = 1024 * 1024
UPLOAD_SUFFIX = '.csv'

# Default display strings, keyed by decimal places
DEFAULT_FORMATTED = {
    1: '0.0',
    2: '0.00',
    3: '.000',
}

# Draft dump source
SITE_ORIGIN = 'https://pt26.ootpdevelopments.com'
COMPETITIVE_URL = f'{SITE_ORIGIN}/competitive/'

# Rows that started before this epoch second are ignored
MIN_START_TIME = 1759169668

LEADERBOARD_MODES = ('daily', 'weekly')

# Most recent instances kept per tournament title
INSTANCES_PER_MODE = {
    'daily': 7,
    'weekly': 1,
}

# Number of leaderboard places that earn all-time points
ALLTIME_TOP_N = 20

# Store write chunk size
BATCH_SIZE = 100

# Titles excluded from daily scoring
EXCLUDED_DAILY_TOURNAMENTS = frozenset({
    '*1*Daily Low Iron',
    '*3*Daily Low Diamond',
    '*3*Daily Open Low Cap',
    '*3*Daily Open High Cap',
    '*3*Daily Wide Open',
    '*2*Daily Super Silver Supper',
    'Monday Up and At Them Bronze',
    'Thursday Live-Plus Cap',
    'Thursday Time Machine Cap',
    'Saturday Low Gold Power to Live Plus',
    'Sunday High Gold Century Cap',
    'Tuesday Time Machine Cap',
    'Daily Jerk Store - Speed',
    'Daily Rocking Chair Lunch',
    'Daily Get in Line Orderly',
    'Daily Hitters First',
    'Daily Evening Rocking Chair',
    'Daily Low of Lows Evening',
    'Daily Mixed Bag Evening',
    'Daily Up Late with Diamond and Gold',
    'Tuesday Rocking Chair',
})

# Star awards: bracket size -> [(first_idx, last_idx, stars), ...], idx is 0-based
_SMALL_BRACKET_STARS = [
    (0, 0, 70),
    (1, 1, 40),
    (2, 3, 10),
    (4, 7, 5),
]

DAILY_STAR_TABLE = {
    128: [
        (0, 0, 130),
        (1, 1, 90),
        (2, 3, 60),
        (4, 7, 30),
        (8, 15, 15),
        (16, 31, 10),
    ],
    64: [
        (0, 0, 100),
        (1, 1, 60),
        (2, 3, 30),
        (4, 7, 15),
        (8, 15, 10),
    ],
    32: _SMALL_BRACKET_STARS,
}

WEEKLY_STAR_TABLE = {
    256: [
        (0, 0, 550),
        (1, 1, 350),
        (2, 3, 200),
        (4, 7, 100),
        (8, 15, 50),
        (16, 31, 25),
        (32, 63, 10),
    ],
    128: [
        (0, 0, 400),
        (1, 1, 300),
        (2, 3, 150),
        (4, 7, 75),
        (8, 15, 25),
        (16, 31, 10),
    ],
    64: [
        (0, 0, 250),
        (1, 1, 150),
        (2, 3, 75),
        (4, 7, 25),
        (8, 15, 10),
    ],
    32: _SMALL_BRACKET_STARS,
}

STAR_TABLES = {
    'daily': DAILY_STAR_TABLE,
    'weekly': WEEKLY_STAR_TABLE,
}

# Store tables
TOURNAMENTS_TABLE = 'tournaments'
SITE_CONTENT_TABLE = 'site_content'

# mode -> (per-period leaderboard table, all-time points table)
LEADERBOARD_TABLES = {
    'daily': ('weekly_draft_leaderboard', 'alltime_drafter_points'),
    'weekly': ('weekly_draft_leaderboard_weekly', 'alltime_drafter_points_weekly'),
}

# Auth levels in increasing order of privilege
AUTH_LEVELS = ('none', 'upload', 'master')

# Per-field handling, keyed by CSV header: (kind, decimal places)
#   text     identity string, kept from the first upload
#   rating   identity integer, kept from the first upload
#   count    summed integer
#   innings  summed in thirds-of-an-inning notation
#   rate     workload-weighted average, fixed decimals
#   index    workload-weighted average, rounded to an integer
#   value    summed run/win contribution, fixed decimals
#   ratio    recomputed from summed counts, fixed decimals
BATTING_FIELD_KINDS = {
    'POS': ('text', 0),
    'Name': ('text', 0),
    'B': ('text', 0),
    'OVR': ('rating', 0),
    'VAR': ('text', 0),
    'G': ('count', 0),
    'GS': ('count', 0),
    'PA': ('count', 0),
    'AB': ('count', 0),
    'H': ('count', 0),
    '2B': ('count', 0),
    '3B': ('count', 0),
    'HR': ('count', 0),
    'BB%': ('rate', 1),
    'SO': ('count', 0),
    'GIDP': ('count', 0),
    'AVG': ('ratio', 3),
    'OBP': ('rate', 3),
    'SLG': ('ratio', 3),
    'wOBA': ('rate', 3),
    'OPS': ('rate', 3),
    'OPS+': ('index', 0),
    'BABIP': ('ratio', 3),
    'wRC+': ('index', 0),
    'wRAA': ('value', 1),
    'WAR': ('value', 1),
    'SB%': ('rate', 1),
    'BsR': ('value', 1),
}

PITCHING_FIELD_KINDS = {
    'POS': ('text', 0),
    'Name': ('text', 0),
    'T': ('text', 0),
    'OVR': ('rating', 0),
    'VAR': ('text', 0),
    'G': ('count', 0),
    'GS': ('count', 0),
    'IP': ('innings', 1),
    'BF': ('count', 0),
    'ERA': ('rate', 2),
    'AVG': ('rate', 3),
    'OBP': ('rate', 3),
    'BABIP': ('rate', 3),
    'WHIP': ('rate', 2),
    'BRA/9': ('rate', 2),
    'HR/9': ('rate', 2),
    'H/9': ('rate', 2),
    'BB/9': ('rate', 2),
    'K/9': ('rate', 2),
    'LOB%': ('rate', 1),
    'ERA+': ('index', 0),
    'FIP': ('rate', 2),
    'FIP-': ('index', 0),
    'WAR': ('value', 1),
    'SIERA': ('rate', 2),
}

FIELD_KINDS = {
    'batting': BATTING_FIELD_KINDS,
    'pitching': PITCHING_FIELD_KINDS,
}
