"""Unit tests for row normalization and IP arithmetic."""

import pytest

from ootpstats.innings import add_ip, ip_to_decimal, ip_to_outs, normalize_ip, outs_to_ip
from ootpstats.normalizer import format_decimal, format_index, normalize_row, safe_ratio, to_number
from ootpstats.schemas import BattingStats, PitchingStats


class TestToNumber:
    """Tests for reading numbers from cells."""

    @pytest.mark.parametrize('value,expected', [
        (12, 12.0),
        ('.312', 0.312),
        ('12.5%', 12.5),
        ('1,234', 1234.0),
        ('+3', 3.0),
    ])
    def test_numeric_inputs(self, value, expected):
        assert to_number(value) == pytest.approx(expected)

    @pytest.mark.parametrize('value', [None, '', 'abc', True, float('nan')])
    def test_non_numeric_inputs(self, value):
        assert to_number(value) is None


class TestFormatting:
    """Tests for stat display formatting."""

    def test_three_decimals_drop_leading_zero(self):
        assert format_decimal(0.4, 3) == '.400'
        assert format_decimal(1.045, 3) == '1.045'
        assert format_decimal(0, 3) == '.000'

    def test_other_precisions_keep_leading_zero(self):
        assert format_decimal(3.5, 2) == '3.50'
        assert format_decimal(-0.0, 1) == '0.0'

    def test_index_rounds_half_up(self):
        assert format_index(104.5) == 105
        assert format_index(104.49) == 104

    def test_safe_ratio(self):
        assert safe_ratio(8, 20) == '.400'
        assert safe_ratio(5, 0) == '.000'
        assert safe_ratio(5, -2) == '.000'


class TestNormalizeRow:
    """Tests for mapping raw rows to records."""

    def test_batting_defaults(self):
        record = normalize_row({'Name': 'Smith'}, 'batting')
        assert isinstance(record, BattingStats)
        assert record.name == 'Smith'
        assert record.overall == 0
        assert record.at_bats == 0
        assert record.avg == '.000'
        assert record.walk_pct == '0.0'
        assert record.war == '0.0'

    def test_pitching_defaults(self):
        record = normalize_row({'Name': 'Jones'}, 'pitching')
        assert isinstance(record, PitchingStats)
        assert record.innings_pitched == '0.0'
        assert record.era == '0.00'
        assert record.avg == '.000'

    def test_blank_name_becomes_unknown(self):
        assert normalize_row({'Name': '  '}, 'batting').name == 'Unknown'
        assert normalize_row({}, 'pitching').name == 'Unknown'

    def test_blank_ratios_computed_from_counts(self):
        record = normalize_row(
            {'Name': 'X', 'AB': 10, 'H': 3, '2B': 1, 'HR': 1, 'SO': 2, 'AVG': '', 'SLG': '', 'BABIP': ''},
            'batting',
        )
        assert record.avg == '.300'
        assert record.slg == '.700'
        assert record.babip == '.286'

    def test_supplied_ratios_kept(self):
        record = normalize_row({'Name': 'X', 'AB': 10, 'H': 3, 'AVG': '.310'}, 'batting')
        assert record.avg == '.310'

    def test_values_formatted(self):
        record = normalize_row(
            {'Name': 'Smith', 'AVG': 0.312, 'BB%': '12.5%', 'OPS': 1.045, 'OPS+': 104.6, 'AB': '10'},
            'batting',
        )
        assert record.avg == '.312'
        assert record.walk_pct == '12.5'
        assert record.ops == '1.045'
        assert record.ops_plus == 105
        assert record.at_bats == 10

    def test_innings_normalized(self):
        assert normalize_row({'Name': 'Jones', 'IP': 6}, 'pitching').innings_pitched == '6.0'
        assert normalize_row({'Name': 'Jones', 'IP': '4.3'}, 'pitching').innings_pitched == '5.0'

    def test_each_record_gets_own_id(self):
        a = normalize_row({'Name': 'Smith'}, 'batting')
        b = normalize_row({'Name': 'Smith'}, 'batting')
        assert a.id != b.id

    def test_unknown_stat_type(self):
        with pytest.raises(ValueError, match='Unknown stat type'):
            normalize_row({'Name': 'Smith'}, 'fielding')


class TestInnings:
    """Tests for innings-pitched notation."""

    def test_ip_to_outs(self):
        assert ip_to_outs('5.1') == 16
        assert ip_to_outs('6.2') == 20
        assert ip_to_outs('') == 0
        assert ip_to_outs(None) == 0
        assert ip_to_outs('abc') == 0

    def test_outs_to_ip(self):
        assert outs_to_ip(36) == '12.0'
        assert outs_to_ip(23) == '7.2'

    def test_add_ip_sums_thirds(self):
        assert add_ip('5.1', '6.2') == '12.0'
        assert add_ip('0.1', '0.1', '0.1') == '1.0'

    def test_decimal_and_normalize(self):
        assert ip_to_decimal('5.1') == pytest.approx(16 / 3)
        assert normalize_ip(7) == '7.0'
