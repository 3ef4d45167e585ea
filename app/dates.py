# app/dates.py
import calendar
from datetime import datetime
from typing import NamedTuple, Optional

from .config import settings

# "january" -> 1, "jan" -> 1, ..., plus the common "sept"
_MONTHS = {}
for _index in range(1, 13):
    _MONTHS[calendar.month_name[_index].lower()] = _index
    _MONTHS[calendar.month_abbr[_index].lower()] = _index
_MONTHS["sept"] = 9


class MonthRange(NamedTuple):
    """Half-open interval: start is included, end is not."""
    start: datetime
    end: datetime


def resolve_month(month: Optional[str]) -> Optional[int]:
    """Returns the 1-based month index for a month name or abbreviation, or None if unrecognized."""
    if not month:
        return None
    return _MONTHS.get(month.strip().lower())


def month_range(month: Optional[str], year: Optional[int] = None) -> Optional[MonthRange]:
    """
    Resolves a month name to [first day of month, first day of next month) in the query year.

    December's "next month" is month 13, which rolls over to January of the following year.
    Returns None for an unrecognized month; callers treat that as a filter matching nothing.
    """
    index = resolve_month(month)
    if index is None:
        return None

    year = year if year is not None else settings.QUERY_YEAR
    next_index = index + 1
    next_year = year
    if next_index > 12:
        next_index -= 12
        next_year += 1

    return MonthRange(datetime(year, index, 1), datetime(next_year, next_index, 1))
