"""Merge newly uploaded stat lines into a tournament roster.

Counting stats are summed. Rate stats are combined as a weighted average
of the two lines, weighted by plate appearances (batting) or innings
pitched (pitching); the CSV exports only carry the finished rates, not
their components, so they cannot be recomputed from totals. AVG, SLG and
BABIP are the exception: their components are in the export, so they are
recomputed from the summed counts.
"""

import logging
from typing import Iterable, Optional

from .constants import FIELD_KINDS
from .innings import add_ip, ip_to_decimal
from .normalizer import batting_ratios, format_decimal, format_index, to_number
from .schemas import BattingStats, PitchingStats, StatRecord

logger = logging.getLogger('ootpstats.merger')


def weighted_average(value_a: float, weight_a: float, value_b: float, weight_b: float) -> float:
    """(a*wa + b*wb) / (wa + wb), or 0 when both weights are 0."""
    total_weight = weight_a + weight_b
    if total_weight == 0:
        return 0.0
    return (value_a * weight_a + value_b * weight_b) / total_weight


def _num(value) -> float:
    number = to_number(value)
    return number if number is not None else 0.0


def batting_weight(fields: dict) -> float:
    return _num(fields.get('PA'))


def pitching_weight(fields: dict) -> float:
    return ip_to_decimal(fields.get('IP'))


def _merge_fields(
    current: dict,
    incoming: dict,
    kinds: dict,
    weight_current: float,
    weight_incoming: float,
) -> dict:
    merged = dict(current)

    for header, (kind, decimals) in kinds.items():
        a, b = current.get(header), incoming.get(header)

        if kind in ('text', 'rating'):
            # identity fields come from the first upload, unless it lacked them
            if a in (None, '', 0):
                merged[header] = b
        elif kind == 'count':
            merged[header] = int(_num(a) + _num(b))
        elif kind == 'innings':
            merged[header] = add_ip(a, b)
        elif kind == 'value':
            merged[header] = format_decimal(_num(a) + _num(b), decimals)
        elif kind == 'rate':
            value = weighted_average(_num(a), weight_current, _num(b), weight_incoming)
            merged[header] = format_decimal(value, decimals)
        elif kind == 'index':
            value = weighted_average(_num(a), weight_current, _num(b), weight_incoming)
            merged[header] = format_index(value)
        # 'ratio' fields are recomputed by the caller

    return merged


def recompute_batting_ratios(fields: dict) -> dict:
    """Set AVG, SLG and BABIP from the counting stats in fields."""
    fields.update(batting_ratios(fields))
    return fields


def merge_batting(existing: BattingStats, incoming: BattingStats) -> BattingStats:
    """
    Combine two batting lines for the same player.

    Example:
        merged = merge_batting(smith_3_for_10, smith_5_for_10)
        merged.at_bats, merged.hits, merged.avg  # 20, 8, '.400'
    """
    current = existing.model_dump(by_alias=True)
    new = incoming.model_dump(by_alias=True)

    merged = _merge_fields(
        current,
        new,
        FIELD_KINDS['batting'],
        batting_weight(current),
        batting_weight(new),
    )
    recompute_batting_ratios(merged)
    return BattingStats.model_validate(merged)


def merge_pitching(existing: PitchingStats, incoming: PitchingStats) -> PitchingStats:
    """
    Combine two pitching lines for the same player.

    Rates are weighted by innings pitched; IP itself is summed in thirds
    ('5.1' + '6.2' = '12.0').
    """
    current = existing.model_dump(by_alias=True)
    new = incoming.model_dump(by_alias=True)

    merged = _merge_fields(
        current,
        new,
        FIELD_KINDS['pitching'],
        pitching_weight(current),
        pitching_weight(new),
    )
    return PitchingStats.model_validate(merged)


def merge_records(existing: StatRecord, incoming: StatRecord) -> StatRecord:
    if existing.stat_type != incoming.stat_type:
        raise ValueError(
            f'Cannot merge {incoming.stat_type} line into {existing.stat_type} line '
            f'for {existing.name}'
        )
    if isinstance(existing, BattingStats):
        return merge_batting(existing, incoming)
    return merge_pitching(existing, incoming)


def player_key(record: StatRecord) -> str:
    """Roster key: exact, case-sensitive, trimmed player name."""
    return record.name.strip()


def merge_roster(
    roster: Iterable[StatRecord],
    batch: Iterable[StatRecord],
    stats: Optional[dict] = None,
) -> list[StatRecord]:
    """
    Merge a normalized batch into an existing roster.

    Existing players keep their place and id; new players are appended in
    batch order. Several lines for one name in the batch merge in order.
    The input lists are not modified.

    Args:
        roster: Current roster records
        batch: Newly normalized records of the same stat type
        stats: Optional dict that receives 'added' and 'updated' counts

    Returns:
        New roster list
    """
    merged: dict[str, StatRecord] = {}
    for record in roster:
        key = player_key(record)
        merged[key] = merge_records(merged[key], record) if key in merged else record

    existing_keys = set(merged)
    added = 0
    updated_keys = set()

    for record in batch:
        key = player_key(record)
        if key in merged:
            merged[key] = merge_records(merged[key], record)
            if key in existing_keys:
                updated_keys.add(key)
        else:
            merged[key] = record
            added += 1

    logger.debug(f'Merged batch: {added} added, {len(updated_keys)} updated')
    if stats is not None:
        stats['added'] = added
        stats['updated'] = len(updated_keys)

    return list(merged.values())
