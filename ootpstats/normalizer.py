"""Convert raw CSV rows into canonical batting/pitching records."""

import math
from typing import Any, Mapping, Optional

from .constants import DEFAULT_FORMATTED, FIELD_KINDS
from .innings import normalize_ip
from .schemas import BattingStats, PitchingStats, StatRecord

RECORD_TYPES = {
    'batting': BattingStats,
    'pitching': PitchingStats,
}


def to_number(value: Any) -> Optional[float]:
    """
    Read a numeric value from a CSV cell.

    Accepts numbers and strings such as '.312', '12.5%', '1,234' or '+3'.
    Returns None for blanks and non-numeric text.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None

    text = str(value).strip().replace(',', '').rstrip('%').strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def format_decimal(value: float, decimals: int) -> str:
    """
    Format a stat to its display convention.

    Three-decimal stats drop the leading zero like a box score (".312",
    "1.045"); other precisions keep it ("3.45", "12.5").
    """
    if value == 0:
        value = 0.0  # avoid "-0.0"
    text = f'{value:.{decimals}f}'
    if decimals == 3:
        if text.startswith('0.'):
            text = text[1:]
        elif text.startswith('-0.'):
            text = '-' + text[2:]
    return text


def format_index(value: float) -> int:
    """Round a +/- index stat (OPS+, ERA+, FIP-) to a whole number."""
    return int(math.floor(value + 0.5))


def safe_ratio(numerator: float, denominator: float, decimals: int = 3) -> str:
    """Format numerator/denominator, or the zero display value when denominator <= 0."""
    if denominator <= 0:
        return DEFAULT_FORMATTED[decimals]
    return format_decimal(numerator / denominator, decimals)


def batting_ratios(fields: Mapping[str, Any]) -> dict:
    """AVG, SLG and BABIP computed from the counting stats in fields."""
    def count(header):
        return to_number(fields.get(header)) or 0.0

    at_bats = count('AB')
    hits = count('H')
    home_runs = count('HR')
    total_bases = hits + count('2B') + 2 * count('3B') + 3 * home_runs

    return {
        'AVG': safe_ratio(hits, at_bats),
        'SLG': safe_ratio(total_bases, at_bats),
        'BABIP': safe_ratio(hits - home_runs, at_bats - count('SO') - home_runs),
    }


def _text(value: Any) -> str:
    if value is None:
        return ''
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def normalize_value(value: Any, kind: str, decimals: int) -> Any:
    """Normalize a single cell for a field of the given kind."""
    if kind == 'text':
        return _text(value)
    if kind == 'innings':
        return normalize_ip(value)

    number = to_number(value)
    if kind in ('rating', 'count'):
        return int(round(number)) if number is not None else 0
    if kind == 'index':
        return format_index(number) if number is not None else 0
    # rate, value, ratio
    if number is None:
        return DEFAULT_FORMATTED[decimals]
    return format_decimal(number, decimals)


def normalize_row(row: Mapping[str, Any], stat_type: str) -> StatRecord:
    """
    Map a raw CSV row to a canonical record.

    Missing name becomes "Unknown", missing numbers 0, missing formatted
    stats their zero display value ("0.00", ".000", "0.0"). Blank batting
    AVG, SLG and BABIP are computed from AB, H, 2B, 3B, HR and SO instead.
    Each record gets a fresh id.

    Args:
        row: Header -> value mapping (a CsvRow or plain dict)
        stat_type: 'batting' or 'pitching'

    Returns:
        BattingStats or PitchingStats

    Raises:
        ValueError: If stat_type is unknown
    """
    if stat_type not in RECORD_TYPES:
        raise ValueError(f'Unknown stat type: {stat_type}')

    fields = {}
    for header, (kind, decimals) in FIELD_KINDS[stat_type].items():
        fields[header] = normalize_value(row.get(header), kind, decimals)

    fields['Name'] = fields['Name'] or 'Unknown'

    if stat_type == 'batting':
        # blank ratio cells are filled from the counting stats
        for header, value in batting_ratios(fields).items():
            if _text(row.get(header)) == '':
                fields[header] = value

    return RECORD_TYPES[stat_type].model_validate(fields)
