"""Swedish weekday validation, normalization and lookup."""

import logging
import re

from src.date_utils import (
    EN_TO_SV_WEEKDAYS,
    SV_TO_EN_WEEKDAYS,
    SWEDISH_WEEKDAY_ABBREVIATIONS,
    SWEDISH_WEEKDAYS,
    WEEKDAY_ALIASES,
    Clock,
    sunday_based_day_index,
    system_clock,
)
from src.models import WeekdayValidationResult

logger = logging.getLogger(__name__)

# Day index of måndag (0 = Sunday)
FIRST_WEEKDAY_INDEX = 1

_WORD_PATTERN = re.compile(r"\w+")
_TRAILING_PUNCTUATION = re.compile(r"[^\w]+$")


def is_valid_weekday(value) -> bool:
    """Return True if value is a canonical Swedish weekday in any letter case."""
    if not isinstance(value, str):
        return False
    return value.lower() in SWEDISH_WEEKDAYS


def normalize_weekday(value) -> str | None:
    """
    Resolve a weekday string to its canonical Swedish name.

    Examples: "MÅNDAG", "  onsdag ", "mån", "Fredag!", "Tisdagen"

    Args:
        value: Candidate weekday; non-strings are rejected

    Returns:
        Canonical weekday name or None if nothing matches
    """
    if not isinstance(value, str):
        return None

    cleaned = _TRAILING_PUNCTUATION.sub("", value.strip()).lower()
    if not cleaned:
        return None

    if cleaned in WEEKDAY_ALIASES:
        return WEEKDAY_ALIASES[cleaned]

    # Inflected forms such as "måndagen" or "fredags"
    for weekday in SWEDISH_WEEKDAYS:
        if cleaned.startswith(weekday):
            return weekday

    return None


def extract_weekday_from_text(text) -> str | None:
    """
    Find the first weekday mentioned in free text.

    Words are scanned left to right. A word matches if it starts with a full
    weekday name ("Torsdagsmys" -> "torsdag") or is a known abbreviation
    ("Ons lunch" -> "onsdag").

    Args:
        text: Text to scan; non-strings other than None are converted with str()

    Returns:
        Canonical weekday name or None
    """
    if text is None:
        return None
    if not isinstance(text, str):
        text = str(text)

    for match in _WORD_PATTERN.finditer(text.lower()):
        word = match.group()
        for weekday in SWEDISH_WEEKDAYS:
            if word.startswith(weekday):
                return weekday
        if word in SWEDISH_WEEKDAY_ABBREVIATIONS:
            return SWEDISH_WEEKDAY_ABBREVIATIONS[word]

    return None


def day_index_to_weekday(day_index) -> str | None:
    """Map a day index (0 = Sunday) to a weekday name; weekends give None."""
    if not isinstance(day_index, int) or isinstance(day_index, bool):
        return None
    position = day_index - FIRST_WEEKDAY_INDEX
    if 0 <= position < len(SWEDISH_WEEKDAYS):
        return SWEDISH_WEEKDAYS[position]
    return None


def weekday_to_day_index(weekday) -> int:
    """Map a weekday to its day index (måndag = 1), or -1 if unrecognised."""
    normalized = normalize_weekday(weekday)
    if normalized is None:
        return -1
    return SWEDISH_WEEKDAYS.index(normalized) + FIRST_WEEKDAY_INDEX


def get_next_weekday(weekday) -> str | None:
    """Return the following weekday, wrapping fredag -> måndag."""
    return _shift_weekday(weekday, 1)


def get_previous_weekday(weekday) -> str | None:
    """Return the preceding weekday, wrapping måndag -> fredag."""
    return _shift_weekday(weekday, -1)


def _shift_weekday(weekday, step: int) -> str | None:
    normalized = normalize_weekday(weekday)
    if normalized is None:
        logger.debug("Cannot step from unrecognised weekday: %r", weekday)
        return None
    position = SWEDISH_WEEKDAYS.index(normalized)
    return SWEDISH_WEEKDAYS[(position + step) % len(SWEDISH_WEEKDAYS)]


def get_current_swedish_weekday(clock: Clock | None = None) -> str | None:
    """Today's weekday name, or None on Saturday and Sunday."""
    now = (clock or system_clock)()
    return day_index_to_weekday(sunday_based_day_index(now))


def is_today(weekday, clock: Clock | None = None) -> bool:
    """Check whether the given weekday is the clock's current day."""
    day_index = weekday_to_day_index(weekday)
    if day_index == -1:
        return False
    now = (clock or system_clock)()
    return day_index == sunday_based_day_index(now)


def get_all_swedish_weekdays() -> list[str]:
    """Return a fresh list of the five weekday names."""
    return list(SWEDISH_WEEKDAYS)


def english_to_swedish_weekday(weekday) -> str | None:
    """Translate "Monday" etc. to the Swedish name."""
    if not isinstance(weekday, str):
        return None
    return EN_TO_SV_WEEKDAYS.get(weekday.strip().lower())


def swedish_to_english_weekday(weekday) -> str | None:
    """Translate a Swedish weekday (or alias) to the lower-case English name."""
    normalized = normalize_weekday(weekday)
    if normalized is None:
        return None
    return SV_TO_EN_WEEKDAYS[normalized]


def validate_weekday_array(weekdays) -> WeekdayValidationResult:
    """
    Check that a collection of weekday strings covers måndag to fredag.

    Args:
        weekdays: Iterable of candidate weekday values. None counts as empty
            and a single string as a one-element collection.

    Returns:
        WeekdayValidationResult with missing names in calendar order,
        invalid entries in input order and the de-duplicated normalized names
    """
    if weekdays is None:
        entries = []
    elif isinstance(weekdays, str):
        entries = [weekdays]
    else:
        try:
            entries = list(weekdays)
        except TypeError:
            logger.warning("Weekday collection is not iterable: %r", weekdays)
            entries = [weekdays]

    normalized = []
    invalid = []
    for entry in entries:
        weekday = normalize_weekday(entry)
        if weekday is None:
            invalid.append(entry)
        elif weekday not in normalized:
            normalized.append(weekday)

    missing = [weekday for weekday in SWEDISH_WEEKDAYS if weekday not in normalized]

    return WeekdayValidationResult(
        is_valid=not missing and not invalid,
        missing=tuple(missing),
        invalid=tuple(invalid),
        normalized=tuple(normalized),
    )
