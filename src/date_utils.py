"""Shared date and weekday utilities used across the project."""

import math
from collections.abc import Callable
from datetime import date, datetime

# A clock returns "now"; functions that read the host clock accept one
Clock = Callable[[], datetime]

# Swedish weekday names in calendar order (Monday to Friday)
SWEDISH_WEEKDAYS = ("måndag", "tisdag", "onsdag", "torsdag", "fredag")

# Shorthand spellings seen on menu pages
SWEDISH_WEEKDAY_ABBREVIATIONS = {
    "mån": "måndag",
    "tis": "tisdag",
    "ons": "onsdag",
    "tor": "torsdag",
    "tors": "torsdag",
    "fre": "fredag",
}

# Lower-case variant -> canonical name (every name is its own alias)
WEEKDAY_ALIASES = {
    **{name: name for name in SWEDISH_WEEKDAYS},
    **SWEDISH_WEEKDAY_ABBREVIATIONS,
}

EN_TO_SV_WEEKDAYS = {
    "monday": "måndag",
    "tuesday": "tisdag",
    "wednesday": "onsdag",
    "thursday": "torsdag",
    "friday": "fredag",
}

SV_TO_EN_WEEKDAYS = {sv: en for en, sv in EN_TO_SV_WEEKDAYS.items()}

DAYS_PER_WEEK = 7


def system_clock() -> datetime:
    """Return the current local time."""
    return datetime.now()


def sunday_based_day_index(day: date) -> int:
    """Day of week with 0 = Sunday, 6 = Saturday."""
    return (day.weekday() + 1) % DAYS_PER_WEEK


def compute_week_number(day: date) -> int:
    """
    Compute the menu-page week number for a date.

    week = ceil((days since Jan 1 + Jan 1 day index + 1) / 7), where the day
    index counts from Sunday. This is not ISO-8601 week numbering and can
    yield 54 for the last days of some years.

    Args:
        day: Date (or datetime) to compute the week for

    Returns:
        Week number, not range-checked
    """
    if isinstance(day, datetime):
        start = datetime(day.year, 1, 1, tzinfo=day.tzinfo)
    else:
        start = date(day.year, 1, 1)
    days_since_start = (day - start).days
    offset = sunday_based_day_index(start)
    return math.ceil((days_since_start + offset + 1) / DAYS_PER_WEEK)
