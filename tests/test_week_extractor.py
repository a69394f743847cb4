"""Tests for week number extraction."""

import logging
from datetime import date, datetime, timezone

import pytest

from src.date_utils import compute_week_number, sunday_based_day_index
from src.week_extractor import (
    extract_week_number,
    get_current_week,
    has_week_token,
    inspect_week_text,
)

# Wednesday 2025-07-16, week 29
NOW = datetime(2025, 7, 16, 12, 0)


def fixed_clock():
    return NOW


class TestComputeWeekNumber:
    """Tests for compute_week_number function."""

    def test_known_dates(self):
        """Test dates checked by hand against the formula."""
        assert compute_week_number(date(2025, 7, 14)) == 29
        assert compute_week_number(date(2024, 12, 25)) == 52
        assert compute_week_number(date(2024, 1, 1)) == 1
        assert compute_week_number(date(2025, 1, 1)) == 1

    def test_weeks_start_on_sunday(self):
        """Test that the week number changes between Saturday and Sunday."""
        assert compute_week_number(date(2025, 1, 4)) == 1  # Saturday
        assert compute_week_number(date(2025, 1, 5)) == 2  # Sunday

    def test_not_iso_numbering(self):
        """Test that the formula can exceed ISO week 53."""
        # 2000 started on a Saturday and was a leap year
        assert compute_week_number(date(2000, 12, 31)) == 54

    def test_datetime_input(self):
        """Test naive and aware datetimes."""
        assert compute_week_number(NOW) == 29
        assert compute_week_number(datetime(2025, 7, 14, 23, 59, tzinfo=timezone.utc)) == 29

    def test_sunday_based_day_index(self):
        """Test the Sunday = 0 convention."""
        assert sunday_based_day_index(date(2025, 7, 13)) == 0  # Sunday
        assert sunday_based_day_index(date(2025, 7, 14)) == 1  # Monday
        assert sunday_based_day_index(date(2025, 7, 19)) == 6  # Saturday


class TestExtractWeekNumber:
    """Tests for extract_week_number function."""

    def test_date_format(self):
        """Test "Vecka YYYYMMDD"."""
        assert extract_week_number("Vecka 20250714", clock=fixed_clock) == 29
        assert extract_week_number("Vecka 20241225", clock=fixed_clock) == 52
        assert extract_week_number("Vecka 20240101", clock=fixed_clock) == 1

    def test_week_format(self):
        """Test "Vecka NN"."""
        assert extract_week_number("Vecka 25", clock=fixed_clock) == 25
        assert extract_week_number("Vecka 1", clock=fixed_clock) == 1
        assert extract_week_number("Vecka 52", clock=fixed_clock) == 52

    def test_surrounding_text(self):
        """Test tokens embedded in a longer heading."""
        assert extract_week_number("Vår lunchmeny Vecka 30", clock=fixed_clock) == 30
        assert extract_week_number("Meny - Vecka 20250714 (v.29)", clock=fixed_clock) == 29

    def test_date_is_not_read_as_week(self):
        """Test that an invalid date never falls through to its first two digits."""
        # Month 13 is invalid, "20" must not be used as the week
        assert extract_week_number("Vecka 20251301", clock=fixed_clock) == 29

    def test_three_digit_number_is_ignored(self):
        """Test that neither pattern accepts a three-digit number."""
        assert extract_week_number("Vecka 123", clock=fixed_clock) == 29

    def test_week_out_of_range(self):
        """Test that week numbers outside 1-53 use the fallback."""
        assert extract_week_number("Vecka 0", clock=fixed_clock) == 29
        assert extract_week_number("Vecka 60", clock=fixed_clock) == 29

    def test_year_out_of_range(self):
        """Test that implausible years use the fallback."""
        assert extract_week_number("Vecka 18990101", clock=fixed_clock) == 29

    def test_date_week_out_of_range(self):
        """Test that a computed week 54 is rejected."""
        assert extract_week_number("Vecka 20001231", clock=fixed_clock) == 29

    def test_fallback_matches_formula(self):
        """Test that text without a week uses the formula on the clock."""
        expected = compute_week_number(fixed_clock())
        assert extract_week_number("Dagens lunch", clock=fixed_clock) == expected
        assert extract_week_number("vecka 25", clock=fixed_clock) == expected

    @pytest.mark.parametrize("text", [None, "", "   ", 25, ["Vecka 25"]])
    def test_empty_or_non_string(self, text):
        """Test that missing text uses the fallback."""
        assert extract_week_number(text, clock=fixed_clock) == 29

    def test_fallback_logs_warning(self, caplog):
        """Test that the fallback is reported."""
        with caplog.at_level(logging.WARNING, logger="src.week_extractor"):
            extract_week_number("Ingen vecka här", clock=fixed_clock)
        assert "using current week fallback" in caplog.text


class TestHasWeekToken:
    """Tests for has_week_token function."""

    def test_tokens(self):
        """Test date and week tokens."""
        assert has_week_token("Vecka 20250714") is True
        assert has_week_token("Meny Vecka 12") is True

    def test_no_token(self):
        """Test mentions without a usable number."""
        assert has_week_token("Vecka-erbjudande: kaffe") is False
        assert has_week_token("Vecka 123") is False
        assert has_week_token(None) is False


class TestGetCurrentWeek:
    """Tests for get_current_week function."""

    def test_uses_clock(self):
        """Test the injected clock."""
        assert get_current_week(fixed_clock) == 29
        assert get_current_week(lambda: datetime(2024, 1, 1, 8, 0)) == 1

    def test_out_of_range_becomes_week_one(self):
        """Test the week-54 edge case."""
        assert get_current_week(lambda: datetime(2000, 12, 31, 12, 0)) == 1

    def test_default_clock(self):
        """Test that the system clock yields a valid week."""
        assert 1 <= get_current_week() <= 53


class TestInspectWeekText:
    """Tests for inspect_week_text function."""

    def test_date_format(self):
        """Test the date token report."""
        result = inspect_week_text("Vecka 20250714")
        assert result.date_token == "20250714"
        assert result.week_token is None
        assert result.extracted == 29

    def test_week_format(self):
        """Test the week token report."""
        result = inspect_week_text("Vecka 25")
        assert result.date_token is None
        assert result.week_token == "25"
        assert result.extracted == 25

    def test_no_match(self):
        """Test that no fallback value is filled in."""
        result = inspect_week_text("Lunchmeny")
        assert result.date_token is None
        assert result.week_token is None
        assert result.extracted is None

    def test_non_string(self):
        """Test None input."""
        result = inspect_week_text(None)
        assert result.text == ""
        assert result.extracted is None
