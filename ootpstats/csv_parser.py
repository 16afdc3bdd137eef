"""Lenient CSV parsing for stat exports and the draft dump.

Rows wider than the header are kept: the draft dump lists placements in
trailing columns whose count varies by bracket size.
"""

import math
import re

from .models import CsvRow, CsvValue

PLACEMENT_HEADER_RE = re.compile(r'^\d+(st|nd|rd|th)$')
INT_RE = re.compile(r'^[+-]?\d+$')
OVERFLOW_HEADER = '...'


def _split_lines(text: str) -> list[str]:
    lines = [line.rstrip('\r') for line in text.strip().split('\n')]
    return [line for line in lines if line.strip()]


def split_fields(line: str) -> list[str]:
    """
    Split one CSV line on commas, honouring double-quoted regions.

    Quote characters toggle the quoted state and are dropped from the
    output. Every field is trimmed.
    """
    fields = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append(''.join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append(''.join(current).strip())

    return fields


def coerce_value(text: str) -> CsvValue:
    """Return text as int or float when it is a numeric literal, else unchanged."""
    if not text:
        return text
    if INT_RE.match(text):
        return int(text)
    try:
        number = float(text)
    except ValueError:
        return text
    if not math.isfinite(number):
        return text
    return number


def read_headers(text: str) -> list[str]:
    """Header names from the first non-blank line."""
    lines = _split_lines(text)
    if not lines:
        return []
    return [h.strip() for h in lines[0].split(',')]


def is_placement_header(header: str) -> bool:
    return header == OVERFLOW_HEADER or bool(PLACEMENT_HEADER_RE.match(header))


def extract_placements(headers: list[str], raw_fields: list[str]) -> list[str]:
    """
    Ordered placement usernames for a leaderboard row.

    Ordinal columns (1st, 2nd, ...) and the '...' column come first in
    header order, followed by any fields past the header width. Usernames
    are taken as written, so '007' stays '007'.
    """
    placements = [
        raw_fields[idx]
        for idx, header in enumerate(headers)
        if idx < len(raw_fields) and is_placement_header(header)
    ]
    placements.extend(raw_fields[len(headers):])
    return [text for text in (p.strip() for p in placements) if text]


def parse_csv(text: str) -> list[CsvRow]:
    """
    Parse CSV text into rows.

    Returns an empty list when there is no header plus at least one data
    line. Missing trailing fields become ''.

    Example:
        rows = parse_csv('Name,AB\\n"Smith, J",10\\n')
        rows[0]['Name']  # 'Smith, J'
        rows[0]['AB']    # 10
    """
    lines = _split_lines(text)
    if len(lines) < 2:
        return []

    headers = [h.strip() for h in lines[0].split(',')]
    rows = []

    for line in lines[1:]:
        raw_fields = split_fields(line)
        values = {}
        for idx, header in enumerate(headers):
            raw = raw_fields[idx] if idx < len(raw_fields) else ''
            values[header] = coerce_value(raw)

        rows.append(CsvRow(
            values=values,
            placements=extract_placements(headers, raw_fields),
        ))

    return rows


def strip_metadata_line(text: str) -> str:
    """Drop the first line unless it looks like the header row."""
    first_newline = text.find('\n')
    if first_newline == -1:
        return text
    first_line = text[:first_newline]
    if 'title' in first_line or 'starttime' in first_line:
        return text
    return text[first_newline + 1:]
