"""Tests for the Excel export."""

import openpyxl

from ootpstats.constants import BATTING_HEADERS, PITCHING_HEADERS
from ootpstats.export import export_tournament_xlsx
from ootpstats.normalizer import normalize_row
from ootpstats.schemas import Tournament


def test_export_writes_both_sheets(tmp_path):
    """Each sheet has the CSV header row and one row per player."""
    tournament = Tournament(
        name='Bronze Open',
        created_at='2025-10-08T00:00:00+00:00',
        batting=[
            normalize_row({'Name': 'Smith', 'POS': 'CF', 'AB': 10, 'H': 4, 'AVG': '.400'}, 'batting'),
            normalize_row({'Name': 'Jones', 'POS': 'SS', 'AB': 8}, 'batting'),
        ],
        pitching=[normalize_row({'Name': 'Ace', 'IP': '6.2'}, 'pitching')],
    )

    path = export_tournament_xlsx(tournament, tmp_path / 'out' / 'bronze.xlsx')

    wb = openpyxl.load_workbook(path)
    assert wb.sheetnames == ['Batting', 'Pitching']

    batting = wb['Batting']
    assert [c.value for c in batting[1]] == BATTING_HEADERS
    assert batting.cell(row=2, column=2).value == 'Smith'
    assert batting.cell(row=2, column=BATTING_HEADERS.index('AVG') + 1).value == '.400'
    assert batting.cell(row=3, column=2).value == 'Jones'
    assert batting.max_row == 3
    assert batting.freeze_panes == 'C2'

    pitching = wb['Pitching']
    assert [c.value for c in pitching[1]] == PITCHING_HEADERS
    assert pitching.cell(row=2, column=PITCHING_HEADERS.index('IP') + 1).value == '6.2'


def test_export_empty_tournament(tmp_path):
    tournament = Tournament(name='Empty', created_at='2025-10-08T00:00:00+00:00')
    path = export_tournament_xlsx(tournament, tmp_path / 'empty.xlsx')

    wb = openpyxl.load_workbook(path)
    assert wb['Batting'].max_row == 1
    assert wb['Pitching'].max_row == 1
