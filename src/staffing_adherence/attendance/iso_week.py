"""
ISO-8601 week numbering (Thursday rule).

The week that holds a date's Thursday decides the year, so late-December
dates can fall in week 1 and early-January dates in week 52/53.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta


def as_date(value: str | datetime | date) -> date:
    if isinstance(value, str):
        return datetime.strptime(value, "%Y-%m-%d").date()
    if isinstance(value, datetime):
        return value.date()
    return value


def iso_weekday(value: str | datetime | date) -> int:
    """Monday=1 .. Sunday=7."""
    return as_date(value).weekday() + 1


def iso_week_number(value: str | datetime | date) -> int:
    d = as_date(value)
    thursday = d + timedelta(days=4 - iso_weekday(d))
    year_start = date(thursday.year, 1, 1)
    return math.ceil(((thursday - year_start).days + 1) / 7)
