"""Sortable, filterable roster tables backed by polars DataFrames."""

from typing import Iterable, Optional

import polars as pl

from .normalizer import to_number
from .schemas import BattingStats, PitchingStats, StatRecord

FILTER_OPERATORS = ('>', '<', '>=', '<=', '=')
EQUALITY_TOLERANCE = 0.01


def roster_frame(records: Iterable[StatRecord]) -> pl.DataFrame:
    """One row per player, columns named by CSV header."""
    rows = [record.model_dump(by_alias=True) for record in records]
    return pl.DataFrame(rows)


def _numeric(column: str) -> pl.Expr:
    """Column as Float64, with stat strings like '.312' parsed and junk as null."""
    return pl.col(column).map_elements(to_number, return_dtype=pl.Float64)


def _filter_expr(column: str, operator: str, threshold: float) -> pl.Expr:
    value = _numeric(column)
    if operator == '>':
        condition = value > threshold
    elif operator == '<':
        condition = value < threshold
    elif operator == '>=':
        condition = value >= threshold
    elif operator == '<=':
        condition = value <= threshold
    elif operator == '=':
        condition = (value - threshold).abs() < EQUALITY_TOLERANCE
    else:
        raise ValueError(f'Unknown filter operator: {operator}')
    # rows without a numeric value are not filtered out
    return value.is_null() | condition


def filter_roster(
    df: pl.DataFrame,
    search: str = '',
    position: str = 'All',
    filters: Optional[dict[str, dict]] = None,
) -> pl.DataFrame:
    """
    Filter a roster frame.

    Args:
        df: Frame from roster_frame()
        search: Case-insensitive substring of the player name
        position: Exact POS value, or 'All'
        filters: Stat -> {'enabled': bool, 'operator': '>', 'value': '.300'};
            disabled filters and non-numeric thresholds are ignored

    Returns:
        Filtered frame (same columns)

    Example:
        hot = filter_roster(df, filters={'AVG': {'enabled': True, 'operator': '>=', 'value': '.300'}})
    """
    if df.is_empty():
        return df

    if search and 'Name' in df.columns:
        df = df.filter(
            pl.col('Name').str.to_lowercase().str.contains(search.lower(), literal=True)
        )

    if position and position != 'All' and 'POS' in df.columns:
        df = df.filter(pl.col('POS') == position)

    for stat, spec in (filters or {}).items():
        if not spec.get('enabled') or stat not in df.columns:
            continue
        threshold = to_number(spec.get('value'))
        if threshold is None:
            continue
        df = df.filter(_filter_expr(stat, spec.get('operator', '>'), threshold))

    return df


def sort_roster(df: pl.DataFrame, key: Optional[str], direction: str = 'asc') -> pl.DataFrame:
    """
    Sort by one column, numerically when every value in it is a number.

    Unknown columns leave the frame unchanged.
    """
    if not key or key not in df.columns or df.is_empty():
        return df

    descending = direction == 'desc'
    text = df.get_column(key).cast(pl.Utf8).str.strip_chars()
    numbers = df.get_column(key).map_elements(to_number, return_dtype=pl.Float64)
    non_blank = text.filter(text.is_not_null() & (text != ''))

    if numbers.null_count() == text.len() - non_blank.len():
        sort_key = numbers
    else:
        sort_key = text

    return (
        df.with_columns(sort_key.alias('__sort_key'))
        .sort('__sort_key', descending=descending, nulls_last=True, maintain_order=True)
        .drop('__sort_key')
    )


def positions(records: Iterable[StatRecord]) -> list[str]:
    """Distinct positions for the position filter."""
    return sorted({r.position for r in records if r.position})


def handedness_counts(
    batting: Iterable[BattingStats],
    pitching: Iterable[PitchingStats],
) -> dict[str, int]:
    """Left/right-handed hitter and pitcher counts."""
    counts = {'LHH': 0, 'RHH': 0, 'LHP': 0, 'RHP': 0}
    for hitter in batting:
        if hitter.bats == 'L':
            counts['LHH'] += 1
        elif hitter.bats == 'R':
            counts['RHH'] += 1
    for pitcher in pitching:
        if pitcher.throws == 'L':
            counts['LHP'] += 1
        elif pitcher.throws == 'R':
            counts['RHP'] += 1
    return counts
