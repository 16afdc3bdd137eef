"""Excel export of a tournament's merged rosters."""

import logging
from pathlib import Path

import openpyxl

from .constants import REQUIRED_HEADERS
from .schemas import Tournament

logger = logging.getLogger('ootpstats.export')

SHEET_NAMES = {
    'batting': 'Batting',
    'pitching': 'Pitching',
}


def export_tournament_xlsx(tournament: Tournament, excel_path: str | Path) -> Path:
    """Write Batting and Pitching sheets for a tournament.

    Each sheet starts with the CSV header row, followed by one row per
    player in roster order, so a sheet saved as CSV can be uploaded again.

    Args:
        tournament: Tournament to export
        excel_path: Destination .xlsx path (parent directories are created)

    Returns:
        Path of the written workbook
    """
    excel_path = Path(excel_path)
    excel_path.parent.mkdir(parents=True, exist_ok=True)

    wb = openpyxl.Workbook()
    wb.remove(wb.active)

    for stat_type, sheet_name in SHEET_NAMES.items():
        ws = wb.create_sheet(sheet_name)
        headers = REQUIRED_HEADERS[stat_type]

        for col_idx, header in enumerate(headers, start=1):
            ws.cell(row=1, column=col_idx, value=header)

        for row_idx, record in enumerate(tournament.roster(stat_type), start=2):
            values = record.model_dump(by_alias=True)
            for col_idx, header in enumerate(headers, start=1):
                ws.cell(row=row_idx, column=col_idx, value=values.get(header))

        ws.freeze_panes = 'C2'

    wb.save(str(excel_path))
    wb.close()

    logger.info(f'Exported {tournament.name} to {excel_path}')
    return excel_path
