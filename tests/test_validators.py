"""Unit tests for upload validation functions."""

import pytest

from ootpstats.constants import BATTING_HEADERS, PITCHING_HEADERS
from ootpstats.validators import (
    UploadRejected,
    detect_stat_type,
    validate_file_size,
    validate_file_type,
    validate_headers,
    validate_row_names,
    validate_upload_file,
)


class TestHeaderValidation:
    """Tests for CSV header shape checks."""

    def test_exact_match(self):
        assert validate_headers(list(PITCHING_HEADERS), 'pitching') == []
        assert validate_headers(list(BATTING_HEADERS), 'batting') == []

    def test_permutation_accepted(self):
        assert validate_headers(list(reversed(BATTING_HEADERS)), 'batting') == []

    def test_permutation_missing_one_column(self):
        """A reordered pitching header without ERA reports only ERA."""
        headers = [h for h in reversed(PITCHING_HEADERS) if h != 'ERA']
        assert validate_headers(headers, 'pitching') == ['Missing required column: ERA']

    def test_each_missing_column_reported(self):
        headers = [h for h in BATTING_HEADERS if h not in ('PA', 'wOBA')]
        errors = validate_headers(headers, 'batting')
        assert errors == ['Missing required column: PA', 'Missing required column: wOBA']

    def test_extra_columns_allowed(self):
        assert validate_headers(list(BATTING_HEADERS) + ['Team'], 'batting') == []

    def test_unknown_stat_type(self):
        assert validate_headers(list(BATTING_HEADERS), 'fielding') == ['Unknown stat type: fielding']


class TestDetectStatType:
    """Tests for guessing the stat type from headers."""

    def test_complete_shapes(self):
        assert detect_stat_type(list(BATTING_HEADERS)) == 'batting'
        assert detect_stat_type(list(PITCHING_HEADERS)) == 'pitching'

    def test_partial_shapes(self):
        assert detect_stat_type(['Name', 'IP', 'ERA']) == 'pitching'
        assert detect_stat_type(['Name', 'PA', 'AVG']) == 'batting'

    def test_unrecognized(self):
        assert detect_stat_type(['Name', 'Team']) is None


class TestFileValidation:
    """Tests for file name and size checks."""

    def test_csv_suffix_case_insensitive(self):
        assert validate_file_type('stats.csv') == []
        assert validate_file_type('STATS.CSV') == []

    def test_other_suffix_rejected(self):
        assert validate_file_type('stats.xlsx') == ['stats.xlsx is not a CSV file']
        assert len(validate_file_type('')) == 1

    def test_size_limit(self):
        assert validate_file_size(1024 * 1024) == []
        assert len(validate_file_size(1024 * 1024 + 1)) == 1
        assert validate_file_size(600, max_bytes=500) == ['File is 1 KB (max 0 KB)']

    def test_combined(self):
        with pytest.raises(UploadRejected) as excinfo:
            validate_upload_file('stats.txt', 10, max_bytes=5)
        assert excinfo.value.category == 'file_type'
        assert len(excinfo.value.errors) == 2

        with pytest.raises(UploadRejected) as excinfo:
            validate_upload_file('stats.csv', 10, max_bytes=5)
        assert excinfo.value.category == 'file_size'

        assert validate_upload_file('stats.csv', 5, max_bytes=5) is None


class TestRowNames:
    """Tests for skipping rows without a player name."""

    def test_blank_names_skipped(self):
        rows = [{'Name': 'Smith'}, {'Name': ''}, {'Name': '  '}, {'AB': 3}]
        accepted, skipped = validate_row_names(rows)
        assert accepted == [{'Name': 'Smith'}]
        assert skipped == 3


class TestUploadRejected:
    """Tests for the rejection error."""

    def test_to_dict(self):
        error = UploadRejected('header', 'Missing required column: ERA')
        assert error.to_dict() == {
            'error': 'Missing required column: ERA',
            'category': 'header',
            'details': ['Missing required column: ERA'],
        }

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            raise UploadRejected('empty', 'nothing to merge')
