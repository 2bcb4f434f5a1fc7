from datetime import date, timedelta
from typing import Iterator


def overlaps(start: date, end: date, other_start: date, other_end: date) -> bool:
    """Half-open interval intersection: [start, end) against [other_start, other_end)."""
    return other_start < end and other_end > start


def count_nights(check_in: date, check_out: date) -> int:
    return max((check_out - check_in).days, 0)


def iter_nights(check_in: date, check_out: date) -> Iterator[date]:
    night = check_in
    while night < check_out:
        yield night
        night += timedelta(days=1)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return [first day of month, first day of next month)."""
    start = date(year, month, 1)
    if month == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)
