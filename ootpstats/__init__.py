from .models import CsvRow, LeaderboardRow, TournamentGroup, UserStars, UploadResult
from .schemas import (
    AllTimePoints,
    AppSettings,
    BattingStats,
    LeaderboardEntry,
    PitchingStats,
    Tournament,
)
from .config import get_settings, load_settings
from .csv_parser import parse_csv, read_headers, strip_metadata_line
from .normalizer import normalize_row
from .innings import add_ip, ip_to_decimal, ip_to_outs, outs_to_ip
from .merger import merge_batting, merge_pitching, merge_roster
from .validators import UploadRejected, detect_stat_type, validate_headers, validate_upload_file
from .scoring import group_tournaments, leaderboard_rows, score_leaderboard, stars_for_position
from .points import points_for_rank, replace_period_rows, update_alltime_points
from .data_fetcher import DraftDumpFetcher, FetchError
from .leaderboard import run_leaderboard_update, scoring_period_key
from .store import DocumentStore, JsonFileStore, MemoryStore, StoreError
from .auth import AuthError, Session, authenticate
from .tournaments import TournamentService

__all__ = [
    # Models
    'CsvRow',
    'LeaderboardRow',
    'TournamentGroup',
    'UserStars',
    'UploadResult',
    'AllTimePoints',
    'AppSettings',
    'BattingStats',
    'LeaderboardEntry',
    'PitchingStats',
    'Tournament',
    # Config
    'get_settings',
    'load_settings',
    # Tournament stats pipeline
    'parse_csv',
    'read_headers',
    'strip_metadata_line',
    'normalize_row',
    'add_ip',
    'ip_to_decimal',
    'ip_to_outs',
    'outs_to_ip',
    'merge_batting',
    'merge_pitching',
    'merge_roster',
    'UploadRejected',
    'detect_stat_type',
    'validate_headers',
    'validate_upload_file',
    'TournamentService',
    # Leaderboard pipeline
    'group_tournaments',
    'leaderboard_rows',
    'score_leaderboard',
    'stars_for_position',
    'points_for_rank',
    'replace_period_rows',
    'update_alltime_points',
    'DraftDumpFetcher',
    'FetchError',
    'run_leaderboard_update',
    'scoring_period_key',
    # Storage and access
    'DocumentStore',
    'JsonFileStore',
    'MemoryStore',
    'StoreError',
    'AuthError',
    'Session',
    'authenticate',
]
