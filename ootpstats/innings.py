"""Innings-pitched notation: whole innings plus 0, 1 or 2 thirds ("6.2" = 6 2/3)."""

from typing import Union

OUTS_PER_INNING = 3


def ip_to_outs(ip: Union[str, int, float, None]) -> int:
    """
    Convert innings-pitched notation to a count of outs.

    A thirds digit of 3 or more carries into whole innings, so malformed
    values such as "4.3" read as 5.0.

    Examples:
        ip_to_outs('5.1')  # 16
        ip_to_outs('6.2')  # 20
        ip_to_outs('')     # 0
    """
    if ip is None:
        return 0
    text = str(ip).strip()
    if not text:
        return 0

    whole, _, fraction = text.partition('.')
    try:
        innings = int(whole or 0)
        thirds = int(fraction[:1] or 0)
    except ValueError:
        return 0

    return max(innings * OUTS_PER_INNING + thirds, 0)


def outs_to_ip(outs: int) -> str:
    """Format an out count as innings-pitched notation ("12.0", "7.2")."""
    innings, thirds = divmod(max(int(outs), 0), OUTS_PER_INNING)
    return f'{innings}.{thirds}'


def ip_to_decimal(ip: Union[str, int, float, None]) -> float:
    """Innings as a real number, e.g. '5.1' -> 5.333..."""
    return ip_to_outs(ip) / OUTS_PER_INNING


def normalize_ip(ip: Union[str, int, float, None]) -> str:
    return outs_to_ip(ip_to_outs(ip))


def add_ip(*values: Union[str, int, float, None]) -> str:
    """Sum innings-pitched values exactly in thirds."""
    return outs_to_ip(sum(ip_to_outs(v) for v in values))
