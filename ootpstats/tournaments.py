"""Tournament rosters: create, delete, and merge uploaded stat CSVs."""

import logging
from typing import Optional

from .auth import Session, require_access
from .constants import STAT_TYPES, TOURNAMENTS_TABLE
from .csv_parser import parse_csv, read_headers
from .merger import merge_roster
from .models import UploadResult
from .normalizer import normalize_row
from .schemas import AppSettings, Tournament
from .store import DocumentStore
from .utils import content_hash, utc_now_iso
from .validators import (
    UploadRejected,
    detect_stat_type,
    validate_headers,
    validate_row_names,
    validate_upload_file,
)

logger = logging.getLogger('ootpstats.tournaments')


class TournamentService:
    """
    Tournament CRUD and stat uploads against a document store.

    Each upload reads the tournament, merges and writes it back whole;
    two concurrent uploads to one tournament can overwrite each other.
    """

    def __init__(self, store: DocumentStore, settings: Optional[AppSettings] = None):
        self.store = store
        self.settings = settings or AppSettings()

    def list_tournaments(self) -> list[Tournament]:
        """All tournaments, oldest first."""
        docs = self.store.select(TOURNAMENTS_TABLE)
        tournaments = [Tournament.model_validate(doc) for doc in docs]
        return sorted(tournaments, key=lambda t: t.created_at)

    def get_tournament(self, tournament_id: str) -> Tournament:
        """
        Raises:
            KeyError: If no tournament has this id
        """
        doc = self.store.get(TOURNAMENTS_TABLE, tournament_id)
        if doc is None:
            raise KeyError(f'Tournament not found: {tournament_id}')
        return Tournament.model_validate(doc)

    def save_tournament(self, tournament: Tournament) -> None:
        self.store.upsert(TOURNAMENTS_TABLE, tournament.to_document())

    def create_tournament(self, session: Session, name: str) -> Tournament:
        require_access(session, 'upload')
        name = (name or '').strip()
        if not name:
            raise ValueError('Tournament name is required')

        tournament = Tournament(name=name, created_at=utc_now_iso())
        self.save_tournament(tournament)
        logger.info(f'Created tournament {tournament.name} ({tournament.id})')
        return tournament

    def delete_tournament(self, session: Session, tournament_id: str) -> bool:
        require_access(session, 'master')
        deleted = self.store.delete(TOURNAMENTS_TABLE, tournament_id)
        if deleted:
            logger.info(f'Deleted tournament {tournament_id}')
        return deleted

    def upload_stats(
        self,
        session: Session,
        tournament_id: str,
        filename: str,
        content: bytes,
        stat_type: Optional[str] = None,
    ) -> UploadResult:
        """
        Validate a stat CSV and merge it into a tournament roster.

        The file is rejected before anything is merged if its name, size,
        header row or content hash is unacceptable, or if it has no rows
        with a player name.

        Args:
            session: Caller's access (upload level required)
            tournament_id: Target tournament
            filename: Original file name (must end in .csv)
            content: Raw file bytes
            stat_type: 'batting' or 'pitching'; detected from headers if None

        Returns:
            UploadResult with added/updated/total counts

        Raises:
            AuthError: If session lacks upload access
            KeyError: If the tournament does not exist
            UploadRejected: If validation fails (see .category)
            StoreError: If saving fails
        """
        require_access(session, 'upload')

        validate_upload_file(filename, len(content), self.settings.max_upload_bytes)

        tournament = self.get_tournament(tournament_id)

        digest = content_hash(content)
        if digest in tournament.file_hashes:
            raise UploadRejected('duplicate', f'{filename} has already been uploaded to {tournament.name}')

        try:
            text = content.decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise UploadRejected('file_type', f'{filename} is not UTF-8 text') from e

        headers = read_headers(text)
        rows = parse_csv(text)
        if not headers or not rows:
            raise UploadRejected('empty', f'{filename} needs a header row and at least one data row')

        if stat_type is None:
            stat_type = detect_stat_type(headers)
            if stat_type is None:
                raise UploadRejected('header', f'{filename} does not match the batting or pitching export')
        elif stat_type not in STAT_TYPES:
            raise ValueError(f'Unknown stat type: {stat_type}')

        header_errors = validate_headers(headers, stat_type)
        if header_errors:
            raise UploadRejected('header', header_errors[0], header_errors)

        rows, skipped = validate_row_names(rows)
        if not rows:
            raise UploadRejected('empty', f'{filename} has no rows with a player name')

        batch = [normalize_row(row, stat_type) for row in rows]
        counts: dict = {}
        merged = merge_roster(tournament.roster(stat_type), batch, stats=counts)

        setattr(tournament, stat_type, merged)
        tournament.file_hashes.append(digest)
        self.save_tournament(tournament)

        logger.info(
            f'Uploaded {filename} to {tournament.name}: {counts["added"]} added, '
            f'{counts["updated"]} updated ({stat_type})'
        )
        return UploadResult(
            stat_type=stat_type,
            added=counts['added'],
            updated=counts['updated'],
            total=len(merged),
            skipped_rows=skipped,
        )
