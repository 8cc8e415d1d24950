# File: habit_tracker/models/common.py
"""
Calendar helpers shared by the habit models.

All arithmetic is done on plain calendar dates, which carry no timezone,
so an ISO string always maps to the same UTC day regardless of where the
process runs.
"""

from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

ISO_DATE_FORMAT = "%Y-%m-%d"

DateLike = Union[str, date]


def parse_iso_date(value: Optional[DateLike]) -> Optional[date]:
    """
    Parse a strict YYYY-MM-DD string (or pass a date through).

    Unpadded or padded-with-whitespace strings return None, so they never
    stand in for a real calendar day.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        parsed = datetime.strptime(value, ISO_DATE_FORMAT).date()
    except (ValueError, TypeError):
        return None
    return parsed if parsed.isoformat() == value else None


def to_iso_date(value: DateLike) -> str:
    """Render a date as YYYY-MM-DD. Strings are returned untouched."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def weekday_index(day: date) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7
