"""Unit tests for roster table filtering and sorting."""

import pytest

from ootpstats.normalizer import normalize_row
from ootpstats.tables import filter_roster, handedness_counts, positions, roster_frame, sort_roster


@pytest.fixture
def hitters():
    return [
        normalize_row({'Name': 'Smith', 'POS': 'CF', 'B': 'L', 'AVG': '.250', 'HR': 4}, 'batting'),
        normalize_row({'Name': 'Jones', 'POS': 'SS', 'B': 'R', 'AVG': '.400', 'HR': 12}, 'batting'),
        normalize_row({'Name': 'Smithers', 'POS': 'CF', 'B': 'S', 'AVG': '.300', 'HR': 9}, 'batting'),
    ]


@pytest.fixture
def frame(hitters):
    return roster_frame(hitters)


def names(df):
    return df.get_column('Name').to_list()


class TestFilterRoster:
    """Tests for name, position and stat filters."""

    def test_search_is_case_insensitive(self, frame):
        assert names(filter_roster(frame, search='SMITH')) == ['Smith', 'Smithers']

    def test_position(self, frame):
        assert names(filter_roster(frame, position='CF')) == ['Smith', 'Smithers']
        assert len(filter_roster(frame, position='All')) == 3

    def test_stat_threshold(self, frame):
        filters = {'AVG': {'enabled': True, 'operator': '>=', 'value': '.300'}}
        assert names(filter_roster(frame, filters=filters)) == ['Jones', 'Smithers']

    def test_equality_tolerance(self, frame):
        filters = {'AVG': {'enabled': True, 'operator': '=', 'value': '0.305'}}
        assert names(filter_roster(frame, filters=filters)) == ['Smithers']

    def test_disabled_and_non_numeric_filters_ignored(self, frame):
        filters = {
            'AVG': {'enabled': False, 'operator': '>', 'value': '.500'},
            'HR': {'enabled': True, 'operator': '>', 'value': 'lots'},
        }
        assert len(filter_roster(frame, filters=filters)) == 3

    def test_unknown_operator(self, frame):
        with pytest.raises(ValueError, match='Unknown filter operator'):
            filter_roster(frame, filters={'HR': {'enabled': True, 'operator': '!=', 'value': '3'}})


class TestSortRoster:
    """Tests for numeric and text sorting."""

    def test_numeric_strings_sort_as_numbers(self, frame):
        assert names(sort_roster(frame, 'AVG', 'desc')) == ['Jones', 'Smithers', 'Smith']

    def test_integers(self, frame):
        assert names(sort_roster(frame, 'HR')) == ['Smith', 'Smithers', 'Jones']

    def test_text(self, frame):
        assert names(sort_roster(frame, 'Name')) == ['Jones', 'Smith', 'Smithers']

    def test_unknown_key_leaves_order(self, frame):
        assert names(sort_roster(frame, 'Nope')) == names(frame)


class TestRosterSummaries:
    """Tests for position lists and handedness counts."""

    def test_positions(self, hitters):
        assert positions(hitters) == ['CF', 'SS']

    def test_handedness(self, hitters):
        pitchers = [
            normalize_row({'Name': 'Ace', 'T': 'L'}, 'pitching'),
            normalize_row({'Name': 'Deuce', 'T': 'R'}, 'pitching'),
            normalize_row({'Name': 'Trey', 'T': 'R'}, 'pitching'),
        ]
        assert handedness_counts(hitters, pitchers) == {'LHH': 1, 'RHH': 1, 'LHP': 1, 'RHP': 2}
