"""Week number extraction from menu headings like "Vecka 25" or "Vecka 20250714"."""

import logging
import re
from datetime import date

from src.date_utils import Clock, compute_week_number, system_clock
from src.models import WeekTextInspection

logger = logging.getLogger(__name__)

# Constants
WEEK_PREFIX = "Vecka "
MIN_WEEK = 1
MAX_WEEK = 53
MIN_YEAR = 1900
MAX_YEAR = 2100

# The date pattern must run before the week pattern; the week pattern also
# refuses a third digit so "Vecka 20250714" is never read as week 20
_DATE_TOKEN_PATTERN = re.compile(re.escape(WEEK_PREFIX) + r"(\d{8})(?!\d)")
_WEEK_TOKEN_PATTERN = re.compile(re.escape(WEEK_PREFIX) + r"(\d{1,2})(?!\d)")


def _match_date_token(text: str) -> str | None:
    match = _DATE_TOKEN_PATTERN.search(text)
    return match.group(1) if match else None


def _match_week_token(text: str) -> str | None:
    match = _WEEK_TOKEN_PATTERN.search(text)
    return match.group(1) if match else None


def _week_from_date_token(token: str) -> int | None:
    """
    Convert a "YYYYMMDD" token to a week number.

    Args:
        token: Eight-digit date string

    Returns:
        Week number in 1-53, or None if the date or week is out of range
    """
    year, month, day = int(token[:4]), int(token[4:6]), int(token[6:8])

    if not (MIN_YEAR <= year <= MAX_YEAR):
        logger.warning("Year out of reasonable range: %d", year)
        return None

    try:
        parsed = date(year, month, day)
    except ValueError:
        logger.warning("Invalid date in week token: %s", token)
        return None

    week = compute_week_number(parsed)
    if not (MIN_WEEK <= week <= MAX_WEEK):
        logger.warning("Calculated week out of valid range: %d", week)
        return None
    return week


def _week_from_week_token(token: str) -> int | None:
    week = int(token)
    if not (MIN_WEEK <= week <= MAX_WEEK):
        logger.warning("Week number out of valid range: %d", week)
        return None
    return week


# Evaluated in order; the first matcher whose token converts to a week wins
WEEK_MATCHERS = (
    ("date", _match_date_token, _week_from_date_token),
    ("week", _match_week_token, _week_from_week_token),
)


def has_week_token(text) -> bool:
    """True if text contains "Vecka" followed by a date or week number."""
    if not isinstance(text, str):
        return False
    return any(matcher(text) is not None for _, matcher, _ in WEEK_MATCHERS)


def get_current_week(clock: Clock | None = None) -> int:
    """
    Week number of the clock's current date.

    Returns:
        Week number, or 1 if the formula lands outside 1-53
    """
    now = (clock or system_clock)()
    week = compute_week_number(now)
    if not (MIN_WEEK <= week <= MAX_WEEK):
        logger.warning(
            "Current week calculation out of range: %d, using week 1", week
        )
        return MIN_WEEK
    return week


def extract_week_number(text, clock: Clock | None = None) -> int:
    """
    Read the week number from a menu heading's text.

    Tries "Vecka YYYYMMDD" (week computed from the date), then "Vecka NN",
    then falls back to the current week.

    Args:
        text: Text content of the week element
        clock: Optional clock used for the fallback

    Returns:
        Week number in 1-53
    """
    if not isinstance(text, str) or not text.strip():
        logger.warning("No week text provided, using current week")
        return get_current_week(clock)

    for name, matcher, to_week in WEEK_MATCHERS:
        token = matcher(text)
        if token is None:
            continue
        week = to_week(token)
        if week is not None:
            logger.debug("Found week %d using %s pattern in %r", week, name, text)
            return week

    logger.warning(
        "No valid week found in %r - all week detection methods failed, "
        "using current week fallback",
        text,
    )
    return get_current_week(clock)


def inspect_week_text(text) -> WeekTextInspection:
    """
    Report which week tokens appear in text and what would be extracted.

    Unlike extract_week_number this never falls back to the current week.
    """
    if not isinstance(text, str):
        return WeekTextInspection(text="" if text is None else str(text))

    date_token = _match_date_token(text)
    week_token = _match_week_token(text)

    extracted = None
    if date_token is not None:
        extracted = _week_from_date_token(date_token)
    if extracted is None and week_token is not None:
        extracted = _week_from_week_token(week_token)

    return WeekTextInspection(
        text=text,
        date_token=date_token,
        week_token=week_token,
        extracted=extracted,
    )
