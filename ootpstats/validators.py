"""Validation for uploaded stat CSV files."""

from pathlib import PurePath
from typing import Optional

from .constants import MAX_UPLOAD_BYTES, REQUIRED_HEADERS, UPLOAD_SUFFIX

UPLOAD_ERROR_CATEGORIES = ('file_type', 'file_size', 'empty', 'header', 'duplicate')


class UploadRejected(ValueError):
    """An upload failed validation; nothing was merged or saved."""

    def __init__(self, category: str, message: str, errors: Optional[list[str]] = None):
        super().__init__(message)
        self.category = category
        self.message = message
        self.errors = errors or [message]

    def to_dict(self) -> dict:
        return {'error': self.message, 'category': self.category, 'details': self.errors}


def validate_file_type(filename: str) -> list[str]:
    """Uploads must be .csv files (suffix compared case-insensitively)."""
    if PurePath(filename or '').suffix.lower() != UPLOAD_SUFFIX:
        return [f'{filename or "File"} is not a CSV file']
    return []


def validate_file_size(size: int, max_bytes: int = MAX_UPLOAD_BYTES) -> list[str]:
    if size > max_bytes:
        return [f'File is {size / 1024:.0f} KB (max {max_bytes // 1024} KB)']
    return []


def validate_upload_file(filename: str, size: int, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """
    Check the file name and size of an upload.

    Args:
        filename: Original file name
        size: Content length in bytes
        max_bytes: Largest accepted file (default 1 MiB)

    Raises:
        UploadRejected: Categorized by the first failing check ('file_type'
            before 'file_size'), with every error in .errors
    """
    type_errors = validate_file_type(filename)
    size_errors = validate_file_size(size, max_bytes)
    errors = type_errors + size_errors
    if errors:
        category = 'file_type' if type_errors else 'file_size'
        raise UploadRejected(category, errors[0], errors)


def validate_headers(headers: list[str], stat_type: str) -> list[str]:
    """
    Check a CSV header row against the required shape for stat_type.

    An exact ordered match passes immediately. Otherwise the columns may
    appear in any order as long as every required one is present; each
    missing column is reported separately.

    Args:
        headers: Trimmed header names from the file
        stat_type: 'batting' or 'pitching'

    Returns:
        List of validation error messages (empty if valid)
    """
    if stat_type not in REQUIRED_HEADERS:
        return [f'Unknown stat type: {stat_type}']

    required = REQUIRED_HEADERS[stat_type]
    if headers == required:
        return []

    present = set(headers)
    return [f'Missing required column: {col}' for col in required if col not in present]


def detect_stat_type(headers: list[str]) -> Optional[str]:
    """
    Guess whether headers belong to a pitching or a batting export.

    A complete shape wins; otherwise the shape-specific columns decide
    (IP for pitching, PA for batting) so validate_headers can name what
    is missing. Returns None when neither applies.
    """
    present = set(headers)
    for stat_type in ('pitching', 'batting'):
        if all(col in present for col in REQUIRED_HEADERS[stat_type]):
            return stat_type
    if 'IP' in present:
        return 'pitching'
    if 'PA' in present:
        return 'batting'
    return None


def validate_row_names(rows: list, name_field: str = 'Name') -> tuple[list, int]:
    """
    Split rows into those with a non-blank name and a count of the rest.

    Returns:
        Tuple of (accepted_rows, skipped_count)
    """
    accepted = []
    skipped = 0
    for row in rows:
        name = row.get(name_field)
        if name is None or not str(name).strip():
            skipped += 1
            continue
        accepted.append(row)
    return accepted, skipped
