"""
Calendar Dates as Fractional Years.

Magnetic models are parameterized by time in fractional years, e.g.
2025.62 for mid-August 2025. The fraction is the elapsed part of the
calendar year: 1 January 00:00 maps to the integer year, and the days
of a leap year are each 1/366 of a year.
"""

from datetime import date, datetime
from typing import Union

DateLike = Union[float, int, date, datetime, str]


def fractional_year(when: DateLike) -> float:
    """Convert a date to a fractional year.

    Parameters
    ----------
    when : float, int, datetime.date, datetime.datetime or str
        A number is returned unchanged. A string is read as an ISO 8601
        date or date-time.

    Returns
    -------
    float
        Year plus the elapsed fraction of that year.

    Examples
    --------
    >>> round(fractional_year(date(2025, 8, 16)), 4)
    2025.6219
    >>> fractional_year(date(2024, 1, 1))
    2024.0
    >>> fractional_year(2025.5)
    2025.5
    """
    if isinstance(when, (int, float)):
        return float(when)
    if isinstance(when, str):
        when = datetime.fromisoformat(when)
    if isinstance(when, datetime):
        start = datetime(when.year, 1, 1, tzinfo=when.tzinfo)
        end = datetime(when.year + 1, 1, 1, tzinfo=when.tzinfo)
        return when.year + (when - start).total_seconds() / (end - start).total_seconds()
    start = date(when.year, 1, 1)
    days = (date(when.year + 1, 1, 1) - start).days
    return when.year + (when - start).days / days
