"""Locate week headings and weekday sections in lunch menu HTML."""

import logging

import requests
from bs4 import BeautifulSoup, Tag

from src.date_utils import SWEDISH_WEEKDAYS, Clock
from src.models import MenuWeek
from src.week_extractor import (
    extract_week_number,
    get_current_week,
    has_week_token,
)
from src.weekday_mapper import normalize_weekday

logger = logging.getLogger(__name__)

# Constants
WEEK_MARKER = "Vecka"
PRIMARY_WEEK_SELECTOR = "h3, h2, .week-header"
FALLBACK_WEEK_SELECTORS = (
    "h1",
    "h4",
    "h5",
    "h6",
    ".header",
    ".title",
    "[class*='week']",
    "[id*='week']",
)
DAY_HEADING_SELECTOR = "h3, h4, .day-header, .tab-header"
DAY_PANEL_SELECTOR = "[data-day], [data-weekday]"
MENU_ITEM_SELECTOR = ".lunch-item, .menu-item, .meal, tr, .food-item, .dish, li"
MAX_SIBLING_SEARCH = 10  # Siblings inspected after a day heading
MIN_SECTION_TEXT_LENGTH = 10  # Shorter blocks are labels, not menus

REQUEST_TIMEOUT = 10
USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"


def _as_soup(container) -> Tag | None:
    if isinstance(container, Tag):
        return container
    if isinstance(container, str) and container.strip():
        return BeautifulSoup(container, "html.parser")
    return None


def _section_text(element: Tag) -> str:
    items = element.select(MENU_ITEM_SELECTOR)
    if items:
        return "\n".join(item.get_text(" ", strip=True) for item in items)
    return element.get_text(" ", strip=True)


def _first_child_with_week_token(element: Tag) -> Tag | None:
    for child in element.find_all(True, recursive=False):
        if has_week_token(child.get_text()):
            return child
    return None


def find_week_element(container) -> Tag | None:
    """
    Find the element holding the "Vecka ..." heading.

    Args:
        container: HTML string or BeautifulSoup element

    Returns:
        Matching element or None
    """
    soup = _as_soup(container)
    if soup is None:
        return None

    element = soup.select_one(PRIMARY_WEEK_SELECTOR)
    if element is not None:
        return element

    logger.warning("No week element found with primary selectors, trying fallbacks")
    for selector in FALLBACK_WEEK_SELECTORS:
        for candidate in soup.select(selector):
            if WEEK_MARKER in candidate.get_text():
                logger.info(
                    "Found week information using fallback selector: %s", selector
                )
                return candidate

    # Last resort, in page order: the first week token, narrowed to the
    # innermost element holding it; else the first "Vecka" mention
    candidates = [c for c in soup.find_all(True) if WEEK_MARKER in c.get_text()]
    for candidate in candidates:
        if not has_week_token(candidate.get_text()):
            continue
        child = _first_child_with_week_token(candidate)
        while child is not None:
            candidate = child
            child = _first_child_with_week_token(candidate)
        logger.info("Found week token in <%s> text content", candidate.name)
        return candidate

    if candidates:
        logger.info("Found week information in <%s> text", candidates[0].name)
        return candidates[0]
    return None


def extract_week_number_from_html(container, clock: Clock | None = None) -> int:
    """Read the week number from a menu page, falling back to the current week."""
    element = find_week_element(container)
    if element is None:
        logger.warning("No week element found, using current week")
        return get_current_week(clock)
    return extract_week_number(element.get_text(), clock)


def _find_section_after_heading(soup: Tag, weekday: str) -> str | None:
    headings = soup.select(DAY_HEADING_SELECTOR)
    for heading in headings:
        heading_text = heading.get_text(strip=True).lower()
        if not heading_text or weekday not in heading_text:
            continue

        logger.debug("Found matching heading for %s: %r", weekday, heading_text)
        siblings = [s for s in heading.next_siblings if isinstance(s, Tag)]
        for sibling in siblings[:MAX_SIBLING_SEARCH]:
            if sibling in headings:
                break  # Next day starts
            if sibling.select(MENU_ITEM_SELECTOR):
                return _section_text(sibling)
            if len(sibling.get_text(strip=True)) > MIN_SECTION_TEXT_LENGTH:
                return _section_text(sibling)

        logger.debug("Heading for %s has no usable sibling content", weekday)
    return None


def _find_section_in_panels(soup: Tag, weekday: str) -> str | None:
    for panel in soup.select(DAY_PANEL_SELECTOR):
        panel_days = (panel.get("data-day"), panel.get("data-weekday"))
        if weekday not in {normalize_weekday(day) for day in panel_days}:
            continue
        text = _section_text(panel)
        if text:
            return text
        logger.warning("Tab panel for %s found but it has no text", weekday)
    return None


def _find_section_by_name(soup: Tag, weekday: str) -> str | None:
    selectors = (f".{weekday}", f".day-{weekday}", f"#{weekday}", f"#day-{weekday}")
    for selector in selectors:
        section = soup.select_one(selector)
        if section is not None and section.get_text(strip=True):
            logger.debug(
                "Found day section for %s using selector: %s", weekday, selector
            )
            return _section_text(section)
    return None


def find_weekday_section(container, weekday) -> str | None:
    """
    Find the menu text for one weekday.

    Tries, in order: a day heading followed by content, a tab panel tagged
    with data-day/data-weekday, and an element whose class or id is the
    weekday name.

    Args:
        container: HTML string or BeautifulSoup element
        weekday: Weekday name or alias

    Returns:
        Section text or None
    """
    soup = _as_soup(container)
    normalized = normalize_weekday(weekday)
    if soup is None or normalized is None:
        logger.warning("Invalid container or weekday provided: %r", weekday)
        return None

    for finder in (
        _find_section_after_heading,
        _find_section_in_panels,
        _find_section_by_name,
    ):
        text = finder(soup, normalized)
        if text:
            return text

    logger.warning("No content found for weekday: %s", normalized)
    return None


def parse_menu_html(html, clock: Clock | None = None) -> MenuWeek:
    """
    Parse a lunch menu page into its week number and weekday sections.

    Args:
        html: Page HTML (or an already parsed BeautifulSoup object)
        clock: Optional clock for the week fallback

    Returns:
        MenuWeek with one entry per weekday (None where no section was found)
    """
    soup = _as_soup(html)
    if soup is None:
        logger.warning("Empty menu page, using current week")
        return MenuWeek(
            week=get_current_week(clock),
            sections=dict.fromkeys(SWEDISH_WEEKDAYS),
        )

    week = extract_week_number_from_html(soup, clock)
    sections = {
        weekday: find_weekday_section(soup, weekday) for weekday in SWEDISH_WEEKDAYS
    }
    found = sum(1 for text in sections.values() if text)
    logger.info(
        "Parsed week %d with %d/%d weekday sections", week, found, len(sections)
    )
    return MenuWeek(week=week, sections=sections)


def fetch_menu_page(url: str) -> str | None:
    """
    Fetch a lunch menu page.

    Args:
        url: Page URL

    Returns:
        HTML content as string, or None if request fails
    """
    headers = {"User-Agent": USER_AGENT}

    try:
        response = requests.get(url, headers=headers, timeout=REQUEST_TIMEOUT)

        if response.status_code == 404:
            logger.info("Menu page not found: %s", url)
            return None

        response.raise_for_status()
        return response.text

    except requests.Timeout:
        logger.warning("Timeout fetching menu page: %s", url)
        return None
    except requests.RequestException as e:
        logger.error("Error fetching menu page %s: %s", url, e)
        return None
