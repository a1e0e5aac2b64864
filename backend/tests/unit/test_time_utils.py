"""
Unit tests for time and calendar utilities.
"""

import pytest

from models import GameTime, TimePreference
from utils.time_utils import (
    TimeComparison,
    compare_time,
    format_hour,
    format_time_range,
    matches_time_preference,
    validate_not_in_past,
    weekday_of,
)


class TestCompareTime:
    """Test lexicographic game time comparison."""

    def test_earlier_day_is_before(self):
        assert compare_time(GameTime(day=1, hour=16), GameTime(day=2, hour=8)) == TimeComparison.BEFORE

    def test_minutes_break_ties(self):
        assert compare_time(GameTime(day=3, hour=9, minute=30), GameTime(day=3, hour=9)) == TimeComparison.AFTER

    def test_identical_times_are_same(self):
        t = GameTime(day=2, hour=10, minute=5)
        assert compare_time(t, GameTime(day=2, hour=10, minute=5)) == TimeComparison.SAME


class TestValidateNotInPast:
    """Test the not-in-past rule, including the in-progress hour."""

    def test_previous_day_is_invalid(self):
        result = validate_not_in_past(GameTime(day=5, hour=8), 4, 16)
        assert result.valid is False
        assert result.reason == "Cannot schedule for a previous day"

    def test_earlier_hour_same_day_is_invalid(self):
        result = validate_not_in_past(GameTime(day=5, hour=10), 5, 9)
        assert result.valid is False
        assert result.reason == "Cannot schedule for a past hour"

    def test_current_hour_at_minute_zero_is_valid(self):
        """The current hour is bookable while the clock reads minute 0."""
        assert validate_not_in_past(GameTime(day=5, hour=10, minute=0), 5, 10).valid is True

    def test_current_hour_after_minute_zero_is_invalid(self):
        """Once time has elapsed in the hour it is in progress."""
        result = validate_not_in_past(GameTime(day=5, hour=10, minute=1), 5, 10)
        assert result.valid is False
        assert result.reason == "Cannot schedule for an hour already in progress"

    def test_next_hour_is_valid_mid_hour(self):
        assert validate_not_in_past(GameTime(day=5, hour=10, minute=45), 5, 11).valid is True

    def test_future_day_is_valid_even_for_early_hour(self):
        result = validate_not_in_past(GameTime(day=5, hour=16, minute=59), 6, 8)
        assert result.valid is True
        assert result.reason is None


class TestWeekdayOf:
    """Test the five-day repeating calendar."""

    @pytest.mark.parametrize("day,expected", [
        (1, "monday"),
        (2, "tuesday"),
        (5, "friday"),
        (6, "monday"),
        (12, "tuesday"),
    ])
    def test_weekday_cycle(self, day, expected):
        assert weekday_of(day) == expected


class TestMatchesTimePreference:
    """Test inclusive time-of-day windows."""

    @pytest.mark.parametrize("hour,expected", [(7, False), (8, True), (11, True), (12, False)])
    def test_morning_window(self, hour, expected):
        assert matches_time_preference(hour, TimePreference.MORNING) is expected

    @pytest.mark.parametrize("hour,expected", [(11, False), (12, True), (15, True), (16, False)])
    def test_afternoon_window(self, hour, expected):
        assert matches_time_preference(hour, TimePreference.AFTERNOON) is expected

    @pytest.mark.parametrize("hour,expected", [(15, False), (16, True), (17, True), (18, False)])
    def test_evening_window(self, hour, expected):
        assert matches_time_preference(hour, TimePreference.EVENING) is expected

    def test_any_always_matches(self):
        assert all(matches_time_preference(h, TimePreference.ANY) for h in range(0, 24))

    def test_plain_string_preference(self):
        assert matches_time_preference(9, "morning") is True
        assert matches_time_preference(9, "evening") is False


class TestFormatting:
    """Test display formatting of grid hours and session spans."""

    @pytest.mark.parametrize("hour,expected", [
        (0, "12:00 AM"),
        (9, "9:00 AM"),
        (12, "12:00 PM"),
        (13, "1:00 PM"),
    ])
    def test_format_hour(self, hour, expected):
        assert format_hour(hour) == expected

    def test_format_time_range_uses_true_minutes(self):
        assert format_time_range(9, 50) == "9:00 AM - 9:50 AM"
        assert format_time_range(9, 80) == "9:00 AM - 10:20 AM"
        assert format_time_range(11, 180) == "11:00 AM - 2:00 PM"
