"""Pydantic schemas for player stat records, tournaments, leaderboards and settings."""

import uuid
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .constants import (
    BATCH_SIZE,
    COMPETITIVE_URL,
    MAX_UPLOAD_BYTES,
    MIN_START_TIME,
    SITE_ORIGIN,
)


def new_id() -> str:
    """Fresh identifier for list keying (never a merge key)."""
    return uuid.uuid4().hex


class BattingStats(BaseModel):
    """Canonical batting line for one player in a tournament."""

    id: str = Field(default_factory=new_id)
    stat_type: Literal['batting'] = 'batting'
    position: str = Field('', alias='POS')
    name: str = Field('Unknown', alias='Name', min_length=1)
    bats: str = Field('', alias='B')
    overall: int = Field(0, alias='OVR')
    variant: str = Field('', alias='VAR')
    games: int = Field(0, alias='G')
    games_started: int = Field(0, alias='GS')
    plate_appearances: int = Field(0, alias='PA')
    at_bats: int = Field(0, alias='AB')
    hits: int = Field(0, alias='H')
    doubles: int = Field(0, alias='2B')
    triples: int = Field(0, alias='3B')
    home_runs: int = Field(0, alias='HR')
    walk_pct: str = Field('0.0', alias='BB%')
    strikeouts: int = Field(0, alias='SO')
    gidp: int = Field(0, alias='GIDP')
    avg: str = Field('.000', alias='AVG')
    obp: str = Field('.000', alias='OBP')
    slg: str = Field('.000', alias='SLG')
    woba: str = Field('.000', alias='wOBA')
    ops: str = Field('.000', alias='OPS')
    ops_plus: int = Field(0, alias='OPS+')
    babip: str = Field('.000', alias='BABIP')
    wrc_plus: int = Field(0, alias='wRC+')
    wraa: str = Field('0.0', alias='wRAA')
    war: str = Field('0.0', alias='WAR')
    stolen_base_pct: str = Field('0.0', alias='SB%')
    base_running: str = Field('0.0', alias='BsR')

    class Config:
        populate_by_name = True
        extra = 'forbid'


class PitchingStats(BaseModel):
    """Canonical pitching line for one player in a tournament."""

    id: str = Field(default_factory=new_id)
    stat_type: Literal['pitching'] = 'pitching'
    position: str = Field('', alias='POS')
    name: str = Field('Unknown', alias='Name', min_length=1)
    throws: str = Field('', alias='T')
    overall: int = Field(0, alias='OVR')
    variant: str = Field('', alias='VAR')
    games: int = Field(0, alias='G')
    games_started: int = Field(0, alias='GS')
    innings_pitched: str = Field('0.0', alias='IP', pattern=r'^\d+\.[012]$')
    batters_faced: int = Field(0, alias='BF')
    era: str = Field('0.00', alias='ERA')
    avg: str = Field('.000', alias='AVG')
    obp: str = Field('.000', alias='OBP')
    babip: str = Field('.000', alias='BABIP')
    whip: str = Field('0.00', alias='WHIP')
    baserunners_per_9: str = Field('0.00', alias='BRA/9')
    hr_per_9: str = Field('0.00', alias='HR/9')
    hits_per_9: str = Field('0.00', alias='H/9')
    bb_per_9: str = Field('0.00', alias='BB/9')
    k_per_9: str = Field('0.00', alias='K/9')
    lob_pct: str = Field('0.0', alias='LOB%')
    era_plus: int = Field(0, alias='ERA+')
    fip: str = Field('0.00', alias='FIP')
    fip_minus: int = Field(0, alias='FIP-')
    war: str = Field('0.0', alias='WAR')
    siera: str = Field('0.00', alias='SIERA')

    class Config:
        populate_by_name = True
        extra = 'forbid'


StatRecord = Union[BattingStats, PitchingStats]


class Tournament(BaseModel):
    """A named tournament owning a batting and a pitching roster."""

    id: str = Field(default_factory=new_id)
    name: str = Field(..., min_length=1)
    created_at: str
    batting: list[BattingStats] = Field(default_factory=list)
    pitching: list[PitchingStats] = Field(default_factory=list)
    file_hashes: list[str] = Field(default_factory=list)

    def roster(self, stat_type: str) -> list:
        """Return the roster list for 'batting' or 'pitching'."""
        if stat_type == 'batting':
            return self.batting
        if stat_type == 'pitching':
            return self.pitching
        raise ValueError(f'Unknown stat type: {stat_type}')

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)

    class Config:
        extra = 'forbid'


class LeaderboardEntry(BaseModel):
    """One user's placement on a scoring period's star leaderboard."""

    id: str = Field(default_factory=new_id)
    week_of: str = Field(..., pattern=r'^\d{4}-\d{2}-\d{2}$')
    username: str = Field(..., min_length=1)
    stars: int = Field(..., ge=0)
    rank: int = Field(..., ge=1)

    class Config:
        extra = 'forbid'


class AllTimePoints(BaseModel):
    """Accumulated all-time points for one drafter (id == username)."""

    id: str
    username: str = Field(..., min_length=1)
    total_points: int = Field(0, ge=0)
    weeks_participated: int = Field(0, ge=0)
    best_finish: Optional[int] = Field(None, ge=1)
    last_updated: str

    class Config:
        extra = 'forbid'


class Video(BaseModel):
    """Embedded video link shown on the videos page."""

    id: str = Field(default_factory=new_id)
    title: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)


class InfoSection(BaseModel):
    """Markdown section on the info page."""

    title: str = ''
    content: str = ''


class AppSettings(BaseModel):
    """Runtime settings passed explicitly to services and pipelines."""

    environment: str = 'development'
    cron_secret: Optional[str] = None
    data_dir: str = 'data'
    competitive_url: str = COMPETITIVE_URL
    site_origin: str = SITE_ORIGIN
    min_start_time: int = Field(MIN_START_TIME, ge=0)
    batch_size: int = Field(BATCH_SIZE, ge=1, le=1000)
    max_upload_bytes: int = Field(MAX_UPLOAD_BYTES, ge=1)
    request_timeout: float = Field(30.0, gt=0)

    @field_validator('site_origin')
    @classmethod
    def strip_trailing_slash(cls, v):
        """Origins are joined with absolute paths."""
        return v.rstrip('/')

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'

    class Config:
        extra = 'forbid'
